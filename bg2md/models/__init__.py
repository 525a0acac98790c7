"""Data models for passage extraction and rendering."""

from bg2md.models.document import PassageDocument
from bg2md.models.passage import PassageRecord, RawFootnote

__all__ = [
    "PassageDocument",
    "PassageRecord",
    "RawFootnote",
]
