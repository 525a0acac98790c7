"""Field extraction from reflowed working lines."""

import logging
import re

from bg2md.errors import PassageNotFoundError
from bg2md.models.passage import PassageRecord, RawFootnote

logger = logging.getLogger(__name__)

# One pattern per field. Each captures the field's content in group 1,
# except "footnote": its label, separator and body are joined, and the
# list item's id is kept as the anchor markers point at.
FIELD_PATTERNS: dict[str, re.Pattern[str]] = {
    "reference": re.compile(r'<span class="passage-display-bcv">(.*?)</span>'),
    "version": re.compile(r'<span class="passage-display-version">(.*?)</span>'),
    # Greedy up to the last closing boundary, but never into the publisher block
    "passage": re.compile(
        r'<h1 class="passage-display">'
        r'((?:(?!<div class="publisher-info).)*)'
        r'(?:</p>\s*</div>|</p>\s*<div class="footnotes">)'
    ),
    "copyright": re.compile(r'<div class="publisher-info[^"]*"[^>]*>.*?<p>(.*?)</p>'),
    "footnote": re.compile(
        r'(?:<li\b[^>]*?\bid="(?P<anchor>[^"]*)"[^>]*>\s*)?'
        r'<a\s[^>]*?\btitle="[^"]*"[^>]*>(?P<label>.*?)</a>(?P<separator>\s+)'
        r"<span class=['\"]footnote-text['\"]>(?P<body>.*?)</span></li>"
    ),
}


class LastMatchWins:
    """Accumulator for single-valued fields: every capture overwrites."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.value = ""

    def offer(self, captured: str) -> None:
        if not captured:
            logger.debug("Empty %s capture ignored", self.name)
            return
        self.value = captured


class AppendInOrder:
    """Accumulator for repeated fields: every capture is kept, in order."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.values: list[RawFootnote] = []

    def offer(self, captured: str, anchor: str = "") -> None:
        if not captured:
            logger.debug("Empty %s capture ignored", self.name)
            return
        self.values.append(RawFootnote(anchor=anchor, markup=captured))


class FieldExtractor:
    """Scans working lines and builds a PassageRecord.

    All field patterns are tried against every working line. Reference,
    version, passage and copyright keep the last capture; footnotes are
    appended in the order they are met.
    """

    def extract(self, working_lines: list[str]) -> PassageRecord:
        """Extract every field from the working lines.

        Args:
            working_lines: Output of the line reflow stage.

        Returns:
            The populated PassageRecord.

        Raises:
            PassageNotFoundError: If no passage text was captured.
        """
        singles = {
            name: LastMatchWins(name)
            for name in ("reference", "version", "passage", "copyright")
        }
        footnotes = AppendInOrder("footnote")

        for line in working_lines:
            for name, accumulator in singles.items():
                for match in FIELD_PATTERNS[name].finditer(line):
                    accumulator.offer(match.group(1))
            for match in FIELD_PATTERNS["footnote"].finditer(line):
                footnotes.offer(
                    match["label"] + match["separator"] + match["body"],
                    anchor=match["anchor"] or "",
                )

        record = PassageRecord(
            reference=singles["reference"].value,
            version=singles["version"].value,
            passage_markup=singles["passage"].value,
            copyright_markup=singles["copyright"].value,
            footnotes=footnotes.values,
        )

        if not record.passage_markup.strip():
            raise PassageNotFoundError("Cannot parse passage text, so stopping.")

        logger.debug(
            "Extracted %s (%s) with %d footnotes",
            record.reference,
            record.version,
            len(record.footnotes),
        )
        return record
