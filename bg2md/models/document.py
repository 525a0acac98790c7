"""Rendered passage data model."""

from pydantic import BaseModel, Field


class PassageDocument(BaseModel):
    """A passage with its text and footnotes already rewritten to Markdown."""

    reference: str = ""
    version: str = ""
    passage: str
    footnotes: list[str] = Field(default_factory=list)
    copyright: str = ""
