"""Cut the passage fragment out of a full page."""

import logging
import re
from collections.abc import Iterable

from bg2md.config import MarkerConfig

logger = logging.getLogger(__name__)

LEADING_WHITESPACE = re.compile(r"^\s*")


def isolate_fragment(lines: Iterable[str], markers: MarkerConfig) -> list[str]:
    """Keep only the lines between the start and end markers.

    The leading whitespace of the line carrying the start marker becomes
    the indent prefix, which is removed from every kept line. Lines that
    are empty once the prefix is gone are dropped. The start marker is
    checked before the end marker on every line.

    Args:
        lines: Page source lines, with or without trailing newlines.
        markers: Start and end patterns.

    Returns:
        The fragment lines, or an empty list if the start marker never
        appears.
    """
    start = re.compile(markers.start)
    end = re.compile(markers.end)

    fragment: list[str] = []
    inside = False
    indent = ""

    for raw in lines:
        line = raw.rstrip("\r\n")
        if start.search(line):
            inside = True
            indent = LEADING_WHITESPACE.match(line).group()
        if end.search(line):
            inside = False
        if not inside:
            continue

        trimmed = line.removeprefix(indent)
        if not trimmed:
            continue
        fragment.append(trimmed)

    logger.debug("Found %d interesting lines", len(fragment))
    return fragment
