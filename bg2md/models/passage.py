"""Raw fields pulled out of the passage fragment."""

from pydantic import BaseModel, Field


class RawFootnote(BaseModel):
    """One footnote list entry, still in markup.

    ``anchor`` is the entry's element id (e.g. "fen-NET-26112a"), which the
    passage's footnote markers point at.
    """

    anchor: str = ""
    markup: str


class PassageRecord(BaseModel):
    """The result of scanning working lines for passage fields.

    ``reference``, ``version``, ``passage_markup`` and ``copyright_markup``
    hold the last match seen. ``footnotes`` keeps every match in the order
    encountered.
    """

    reference: str = ""
    version: str = ""  # translation name, e.g. "New English Translation (NET Bible)"
    passage_markup: str = ""
    copyright_markup: str = ""
    footnotes: list[RawFootnote] = Field(default_factory=list)

    @property
    def footnote_anchors(self) -> list[str]:
        return [footnote.anchor for footnote in self.footnotes]
