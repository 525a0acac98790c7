"""Ordered rewrite rules turning passage and footnote markup into Markdown.

Each rule is a pure text-to-text function. The order of ``PASSAGE_RULES``
and ``FOOTNOTE_RULES`` matters: later rules rely on the markup left behind
by earlier ones (numeral spans lose their closing tag to the span rule,
footnote markers must be gone before anchors become brackets). Footnote
markers are numbered last, against the ids of the footnote list entries.
"""

import html
import logging
import re
from collections.abc import Callable, Sequence

from bg2md.config import OutputConfig

logger = logging.getLogger(__name__)

PassageRule = Callable[[str, OutputConfig], str]
FootnoteRule = Callable[[str], str]

DISPLAY_HEADING_REMNANT = re.compile(r"^(?:(?!<h1).)*?</h1>", re.DOTALL)
DISPLAY_HEADING = re.compile(r"<h1[^>]*>.*?</h1>", re.DOTALL)
BOOK_HEADING = re.compile(r"<h2[^>]*>.*?</h2>", re.DOTALL)
EDITORIAL_HEADING = re.compile(r"<h3[^>]*>(.*?)</h3>", re.DOTALL)

# Every span except the chapter-number one, which rule 4 consumes
STRUCTURAL_SPAN_OPEN = re.compile(r'<span(?![^>]*\bclass="chapternum")[^>]*>')
SPAN_CLOSE = re.compile(r"</span>")

VERSE_NUMBER = re.compile(r'<sup class="versenum">\s*([^<]*?)\s*</sup>')
# The closing </span> is already gone, so the numeral ends at whitespace
CHAPTER_NUMBER = re.compile(r'<span class="chapternum">\s*([^<\s]+)\s*(?:</span>)?')

FOOTNOTE_MARKER = re.compile(
    r"<sup(?P<attrs>[^>]*\bclass=['\"]footnote['\"][^>]*)>.*?</sup>", re.DOTALL
)
FOOTNOTE_TARGET = re.compile(r"\bdata-fn=['\"]#?([^'\"]+)['\"]")
FOOTNOTE_REFERENCE = re.compile(r"\[\^([^\]\s]+)\]")
CROSS_REFERENCE = re.compile(
    r"<sup[^>]*\bclass=['\"]crossreference['\"][^>]*>.*?</sup>", re.DOTALL
)

ANCHOR_OPEN = re.compile(r"<a\s[^>]*>|<a>")
ANCHOR_CLOSE = re.compile(r"</a>")

PARAGRAPH_BREAK = re.compile(r"</p>\s*<p(?:\s[^>]*)?>")
PARAGRAPH_TAG = re.compile(r"</?p(?:\s[^>]*)?>")
LINE_BREAK = re.compile(r"<br\s*/?>")
ANY_TAG = re.compile(r"<[^>]+>")

ANY_SPAN_OPEN = re.compile(r"<span[^>]*>")


# ── Passage rules ────────────────────────────────────────────────────────────


def remove_headings(text: str, options: OutputConfig) -> str:
    """Drop the passage-display heading and book headings."""
    text = DISPLAY_HEADING_REMNANT.sub("", text, count=1)
    text = DISPLAY_HEADING.sub("", text)
    return BOOK_HEADING.sub("", text)


def render_editorial_headings(text: str, options: OutputConfig) -> str:
    """Turn editorial sub-headings into ``###`` lines, or drop them."""
    if options.headers:
        return EDITORIAL_HEADING.sub(r"\n\n### \1\n\n", text)
    return EDITORIAL_HEADING.sub("", text)


def strip_structural_spans(text: str, options: OutputConfig) -> str:
    """Remove verse-grouping span tags, keeping their text."""
    text = STRUCTURAL_SPAN_OPEN.sub("", text)
    return SPAN_CLOSE.sub("", text)


def replace_nbsp(text: str, options: OutputConfig) -> str:
    return text.replace("&nbsp;", " ")


def render_numbers(text: str, options: OutputConfig) -> str:
    """Keep verse and chapter numerals as plain text, or remove them."""
    replacement = r"\1 " if options.numbering else ""
    text = CHAPTER_NUMBER.sub(replacement, text)
    return VERSE_NUMBER.sub(replacement, text)


def _footnote_placeholder(match: re.Match[str]) -> str:
    target = FOOTNOTE_TARGET.search(match["attrs"])
    return f"[^{target.group(1)}]" if target else ""


def render_footnote_markers(text: str, options: OutputConfig) -> str:
    """Replace footnote markers with ``[^anchor]`` placeholders, or remove them.

    The anchor is the id of the footnote list entry the marker points at;
    number_footnote_references later turns it into the entry's number.
    """
    if not options.footnotes:
        return FOOTNOTE_MARKER.sub("", text)
    return FOOTNOTE_MARKER.sub(_footnote_placeholder, text)


def remove_cross_references(text: str, options: OutputConfig) -> str:
    return CROSS_REFERENCE.sub("", text)


def simplify_links(text: str, options: OutputConfig | None = None) -> str:
    """Replace ``<a ...>`` with ``[`` and ``</a>`` with ``]``."""
    text = ANCHOR_OPEN.sub("[", text)
    return ANCHOR_CLOSE.sub("]", text)


def strip_residual_tags(text: str, options: OutputConfig) -> str:
    """Paragraphs become blank lines, ``<br>`` a newline; other tags go."""
    text = PARAGRAPH_BREAK.sub("\n\n", text)
    text = PARAGRAPH_TAG.sub("", text)
    text = LINE_BREAK.sub("\n", text)
    return ANY_TAG.sub("", text)


def decode_entities(text: str, options: OutputConfig | None = None) -> str:
    return html.unescape(text)


def tidy_whitespace(text: str, options: OutputConfig | None = None) -> str:
    """Collapse spaces, trim lines and allow at most one blank line."""
    text = re.sub(r"[ \t\u00a0]+", " ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


PASSAGE_RULES: list[PassageRule] = [
    remove_headings,
    render_editorial_headings,
    strip_structural_spans,
    replace_nbsp,
    render_numbers,
    render_footnote_markers,
    remove_cross_references,
    simplify_links,
    strip_residual_tags,
    decode_entities,
    tidy_whitespace,
]


def number_footnote_references(text: str, anchors: Sequence[str]) -> str:
    """Turn ``[^anchor]`` placeholders into ``[^N]`` references.

    N is the 1-based position of the anchor in ``anchors``, i.e. in the
    footnote list, so markers lost with a removed heading do not shift
    the others. Placeholders with no list entry are dropped.
    """
    numbers = {anchor: number for number, anchor in enumerate(anchors, start=1) if anchor}

    def replace(match: re.Match[str]) -> str:
        number = numbers.get(match.group(1))
        if number is None:
            logger.debug("No footnote entry for marker %s", match.group(1))
            return ""
        return f"[^{number}]"

    return FOOTNOTE_REFERENCE.sub(replace, text)


def transform_passage(
    markup: str, options: OutputConfig, footnote_anchors: Sequence[str] = ()
) -> str:
    """Apply every passage rule in order, then number footnote references.

    Args:
        markup: Raw passage markup from the field extractor.
        options: Output options (numbering, footnotes, headers).
        footnote_anchors: Ids of the footnote list entries, in list order.

    Returns:
        Plain Markdown passage text.
    """
    for rule in PASSAGE_RULES:
        markup = rule(markup, options)
    if options.footnotes:
        markup = number_footnote_references(markup, footnote_anchors)
    return markup


# ── Footnote rules ───────────────────────────────────────────────────────────


def bold_to_asterisks(text: str) -> str:
    return text.replace("<b>", "*").replace("</b>", "*")


def italics_to_underscores(text: str) -> str:
    return text.replace("<i>", "_").replace("</i>", "_")


def strip_language_spans(text: str) -> str:
    """Remove spans wrapping Greek or Hebrew words, keeping the words."""
    text = ANY_SPAN_OPEN.sub("", text)
    return SPAN_CLOSE.sub("", text)


FOOTNOTE_RULES: list[FootnoteRule] = [
    bold_to_asterisks,
    italics_to_underscores,
    simplify_links,
    strip_language_spans,
    decode_entities,
    tidy_whitespace,
]


def transform_footnote(markup: str) -> str:
    """Apply every footnote rule in order to one raw footnote."""
    for rule in FOOTNOTE_RULES:
        markup = rule(markup)
    return markup
