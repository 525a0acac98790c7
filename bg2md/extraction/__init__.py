"""Passage extraction: isolation, reflow, field extraction and rewriting."""

from bg2md.extraction.assembler import assemble_document, assemble_lines
from bg2md.extraction.fields import FieldExtractor
from bg2md.extraction.isolator import isolate_fragment
from bg2md.extraction.pipeline import PassageConverter
from bg2md.extraction.reflow import reflow_lines
from bg2md.extraction.transforms import transform_footnote, transform_passage

__all__ = [
    "FieldExtractor",
    "PassageConverter",
    "assemble_document",
    "assemble_lines",
    "isolate_fragment",
    "reflow_lines",
    "transform_footnote",
    "transform_passage",
]
