"""End-to-end tests for the passage converter."""

import re
from pathlib import Path

import pytest

from bg2md.config import MarkerConfig, OutputConfig
from bg2md.errors import FragmentNotFoundError, PassageNotFoundError
from bg2md.extraction.pipeline import PassageConverter

FIXTURES_DIR = Path(__file__).parent / "fixtures"
JOHN_3_PAGE = FIXTURES_DIR / "john_3_1-3_net.html"

HEADER = "# Passage: John 3:1-3 (New English Translation (NET Bible))"
PASSAGE = (
    "3 Now a certain man, a Pharisee[^1] named Nicodemus,[^2] who was a member of the "
    "Jewish ruling council,[^3] 2 came to Jesus at night[^4] and said to him, “Rabbi, we "
    "know that you are a teacher who has come from God. For no one could perform the "
    "miraculous signs that you do unless God is with him.” 3 Jesus replied,[^5] “I tell "
    "you the solemn truth,[^6] unless a person is born from above,[^7] he cannot see the "
    "kingdom of God.”[^8]"
)
FOOTNOTES = [
    "[^1]: John 3:1 *tn* Grk “a man of the Pharisees.”",
    "[^2]: John 3:1 *sn* _Nicodemus_ is only mentioned in John’s gospel (see also [John 7:50]).",
    "[^3]: John 3:1 *tn* Grk “a ruler of the Jews.”",
    "[^4]: John 3:2 *sn* _At night_. Nicodemus may have come at night for fear of being seen.",
    "[^5]: John 3:3 *tn* Grk “answered and said to him.”",
    "[^6]: John 3:3 *tn* Grk “Truly, truly, I say to you.”",
    "[^7]: John 3:3 *tn* The Greek word ἄνωθεν (_anōthen_) can mean both “again” and “from above.”",
    "[^8]: John 3:3 *sn* See [Matt 18:3].",
]
COPYRIGHT = (
    "NET Bible® copyright ©1996-2017 by Biblical Studies Press, L.L.C. "
    "http://netbible.com All rights reserved."
)

HEADING_MARKER = (
    "<sup data-fn='#fen-NET-26112z' class='footnote'>"
    '[<a href="#fen-NET-26112z" title="See footnote z">z</a>]</sup>'
)
HEADING_NOTE = (
    '<li id="fen-NET-26112z"><a href="#en-NET-26112" title="Go to John 3:1">John 3:1</a> '
    "<span class='footnote-text'>Heading note.</span></li>\n    "
)


@pytest.fixture
def page() -> str:
    return JOHN_3_PAGE.read_text(encoding="utf-8")


@pytest.fixture
def page_with_heading_note(page: str) -> str:
    """The John 3 page with a footnote on its editorial heading."""
    page = page.replace(
        "Conversation with Nicodemus</span></h3>",
        f"Conversation with Nicodemus{HEADING_MARKER}</span></h3>",
    )
    return page.replace('<li id="fen-NET-26112a">', HEADING_NOTE + '<li id="fen-NET-26112a">')


def _shift_references(text: str) -> str:
    return re.sub(r"\[\^(\d+)\]", lambda m: f"[^{int(m[1]) + 1}]", text)


def _converter(**options: bool) -> PassageConverter:
    return PassageConverter(MarkerConfig(), OutputConfig(**options))


class TestPassageConverterFixture:
    """Conversion of the saved John 3:1-3 NET page."""

    def test_default_document(self, page: str) -> None:
        expected = "\n".join(
            [
                HEADER,
                "",
                "### Conversation with Nicodemus",
                "",
                PASSAGE,
                "",
                *FOOTNOTES,
                "",
                COPYRIGHT,
            ]
        ) + "\n"
        assert _converter().render(page) == expected

    def test_convert_fields(self, page: str) -> None:
        document = _converter().convert(page)
        assert document.reference == "John 3:1-3"
        assert document.version == "New English Translation (NET Bible)"
        assert len(document.footnotes) == 8
        assert "NET Bible" in document.copyright
        assert "<" not in document.passage

    def test_copyright_disabled(self, page: str) -> None:
        default = _converter().render(page)
        without = _converter(copyright=False).render(page)
        assert without.endswith(FOOTNOTES[-1] + "\n")
        assert default == without + "\n" + COPYRIGHT + "\n"

    def test_copyright_and_footnotes_disabled(self, page: str) -> None:
        text = _converter(copyright=False, footnotes=False).render(page)
        assert "[^" not in text
        assert text.endswith("kingdom of God.”\n")

    def test_footnotes_disabled(self, page: str) -> None:
        document = _converter(footnotes=False).convert(page)
        assert document.footnotes == []
        assert "Pharisee named Nicodemus, who" in document.passage
        assert "council, 2 came" in document.passage

    def test_numbering_disabled(self, page: str) -> None:
        document = _converter(numbering=False).convert(page)
        assert document.passage.startswith("### Conversation with Nicodemus\n\nNow a certain man")
        assert "council,[^3] came to Jesus" in document.passage
        assert "God.” Jesus replied" in document.passage

    def test_headers_disabled(self, page: str) -> None:
        document = _converter(headers=False).convert(page)
        assert document.passage == PASSAGE


    def test_heading_footnote_kept_with_headers(self, page_with_heading_note: str) -> None:
        document = _converter().convert(page_with_heading_note)
        assert document.passage.startswith("### Conversation with Nicodemus[^1]\n\n3 Now")
        assert "Pharisee[^2] named" in document.passage
        assert document.footnotes[0] == "John 3:1 Heading note."

    def test_removed_heading_does_not_shift_footnotes(self, page_with_heading_note: str) -> None:
        document = _converter(headers=False).convert(page_with_heading_note)
        assert document.passage == _shift_references(PASSAGE)
        assert "Pharisee[^2] named Nicodemus,[^3]" in document.passage
        assert "[^1]" not in document.passage
        assert len(document.footnotes) == 9
        assert document.footnotes[1] == "John 3:1 *tn* Grk “a man of the Pharisees.”"

class TestPassageConverterErrors:
    def test_empty_page(self) -> None:
        with pytest.raises(FragmentNotFoundError):
            _converter().render("   \n\n")

    def test_page_without_fragment(self) -> None:
        with pytest.raises(FragmentNotFoundError):
            _converter().render("<html><body><p>Sorry, no results.</p></body></html>")

    def test_fragment_without_passage_heading(self, page: str) -> None:
        broken = page.replace('<h1 class="passage-display">', "<h2>")
        with pytest.raises(PassageNotFoundError):
            _converter().render(broken)

    def test_custom_markers(self) -> None:
        page = "\n".join(
            [
                "<main>",
                '<h1 class="passage-display"><span class="passage-display-bcv">Ps 23:1</span></h1>',
                '<p><sup class="versenum">1&nbsp;</sup>The Lord is my shepherd.</p></div>',
                "</main>",
            ]
        )
        converter = PassageConverter(
            MarkerConfig(start="<main>", end="</main>$"),
            OutputConfig(copyright=False),
        )
        assert converter.render(page) == "# Passage: Ps 23:1 ()\n\n1 The Lord is my shepherd.\n"
