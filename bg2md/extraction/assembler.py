"""Assemble the final Markdown document."""

from bg2md.config import OutputConfig
from bg2md.models.document import PassageDocument


def assemble_lines(document: PassageDocument, options: OutputConfig) -> list[str]:
    """Lay out the document as output lines.

    Header, blank, passage; then the footnote list (when there are
    footnotes and they are wanted) and the copyright text (when wanted and
    found), each preceded by a blank line. A skipped block leaves no trace.

    Args:
        document: The rendered passage.
        options: Output options (footnotes, copyright).

    Returns:
        Output lines without trailing newlines.
    """
    lines = [f"# Passage: {document.reference} ({document.version})", "", document.passage]

    if document.footnotes and options.footnotes:
        lines.append("")
        lines.extend(
            f"[^{number}]: {text}"
            for number, text in enumerate(document.footnotes, start=1)
        )

    if options.copyright and document.copyright:
        lines.append("")
        lines.append(document.copyright)

    return lines


def assemble_document(document: PassageDocument, options: OutputConfig) -> str:
    """Join the assembled lines into one newline-terminated string."""
    return "\n".join(assemble_lines(document, options)) + "\n"
