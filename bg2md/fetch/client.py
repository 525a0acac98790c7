"""Passage page retrieval over HTTP or from a saved file."""

import logging
import re
from pathlib import Path
from urllib.parse import quote_plus

import chardet
import requests

from bg2md.config import LookupConfig
from bg2md.errors import FetchError

logger = logging.getLogger(__name__)

VERSION_CODE = re.compile(r"^[A-Za-z0-9-]+$")
META_CHARSET = re.compile(rb"""<meta[^>]+charset=["']?([A-Za-z0-9_.:-]+)""", re.IGNORECASE)
CHARSET_SCAN_BYTES = 4096


def build_lookup_url(reference: str, version: str, template: str) -> str:
    """Fill the lookup URL template with an escaped reference and version.

    Args:
        reference: Passage reference, e.g. "John 3:1-3".
        version: Translation code, e.g. "NET".
        template: URL with ``{version}`` and ``{reference}`` placeholders.

    Returns:
        The lookup URL.

    Raises:
        ValueError: If the reference is empty or the version code is invalid.
    """
    reference = reference.strip()
    if not reference:
        raise ValueError("No reference given")
    if not VERSION_CODE.match(version):
        raise ValueError(f"Invalid version code: '{version}'")
    return template.format(version=version, reference=quote_plus(reference))


def fetch_page(url: str, lookup: LookupConfig) -> str:
    """Download a lookup page.

    Args:
        url: Lookup URL from build_lookup_url.
        lookup: Supplies the User-Agent and timeout.

    Returns:
        The page HTML.

    Raises:
        FetchError: On any connection or HTTP error.
    """
    logger.debug("Fetching %s", url)
    try:
        response = requests.get(
            url,
            headers={"User-Agent": lookup.user_agent},
            timeout=lookup.timeout_seconds,
        )
        response.raise_for_status()
    except requests.RequestException as exc:
        raise FetchError(url, exc) from exc
    return response.text


def declared_charset(raw_bytes: bytes) -> str | None:
    """Return the charset a page declares in its ``<meta>`` tags, if any."""
    match = META_CHARSET.search(raw_bytes[:CHARSET_SCAN_BYTES])
    return match.group(1).decode("ascii") if match else None


def load_page(file_path: str | Path) -> str:
    """Read a saved lookup page, honouring its declared charset.

    The charset from ``<meta charset>`` (or the http-equiv Content-Type)
    is tried first, then UTF-8; chardet decides when neither decodes.

    Args:
        file_path: Path to the saved HTML page.

    Returns:
        The page HTML.

    Raises:
        FileNotFoundError: If file_path does not exist.
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    raw_bytes = path.read_bytes()
    for encoding in (declared_charset(raw_bytes), "utf-8"):
        if not encoding:
            continue
        try:
            return raw_bytes.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            logger.debug("%s does not decode as %s", path, encoding)

    encoding = chardet.detect(raw_bytes).get("encoding") or "utf-8"
    logger.debug("Decoding %s as detected %s", path, encoding)
    return raw_bytes.decode(encoding, errors="replace")
