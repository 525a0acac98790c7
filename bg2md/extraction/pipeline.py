"""Page-to-document conversion pipeline."""

import logging

from bg2md.config import MarkerConfig, OutputConfig
from bg2md.errors import FragmentNotFoundError
from bg2md.extraction.assembler import assemble_document
from bg2md.extraction.fields import FieldExtractor
from bg2md.extraction.isolator import isolate_fragment
from bg2md.extraction.reflow import reflow_lines
from bg2md.extraction.transforms import transform_footnote, transform_passage
from bg2md.models.document import PassageDocument

logger = logging.getLogger(__name__)


class PassageConverter:
    """Converts a passage lookup page into a Markdown document.

    Stages run strictly in order: isolate the fragment, reflow it into
    working lines, extract the fields, rewrite passage and footnotes.

    Args:
        markers: Patterns bounding the passage fragment.
        options: Output options applied by the transformers and assembler.
    """

    def __init__(self, markers: MarkerConfig, options: OutputConfig) -> None:
        self._markers = markers
        self._options = options
        self._extractor = FieldExtractor()

    def convert(self, page_text: str) -> PassageDocument:
        """Extract and rewrite the passage held in ``page_text``.

        Args:
            page_text: The full HTML page.

        Returns:
            The rendered PassageDocument.

        Raises:
            FragmentNotFoundError: If the page has no passage fragment.
            PassageNotFoundError: If the fragment has no passage text.
        """
        if not page_text.strip():
            raise FragmentNotFoundError("Page is empty")

        fragment = isolate_fragment(page_text.splitlines(), self._markers)
        if not fragment:
            raise FragmentNotFoundError(
                f"No passage fragment starting with {self._markers.start!r} found"
            )

        record = self._extractor.extract(reflow_lines(fragment))

        footnotes: list[str] = []
        if self._options.footnotes:
            footnotes = [transform_footnote(raw.markup) for raw in record.footnotes]

        logger.debug("Rendering %s with options %s", record.reference, self._options.model_dump())
        return PassageDocument(
            reference=record.reference,
            version=record.version,
            passage=transform_passage(
                record.passage_markup, self._options, record.footnote_anchors
            ),
            footnotes=footnotes,
            copyright=record.copyright_markup,
        )

    def render(self, page_text: str) -> str:
        """Convert ``page_text`` and assemble the Markdown document."""
        return assemble_document(self.convert(page_text), self._options)
