"""Merge wrapped fragment lines back into logical lines."""

import logging
import re

logger = logging.getLogger(__name__)

# Only these tags begin a new working line; everything else is a wrapped
# continuation of the line before it.
BLOCK_START = re.compile(r"^(?:<h1[\s>]|<ol[\s>]|<li\s)")


def starts_block(line: str) -> bool:
    """Return True if ``line`` opens a heading, ordered list or list item."""
    return BLOCK_START.match(line.lstrip()) is not None


def reflow_lines(fragment: list[str]) -> list[str]:
    """Join fragment lines into working lines.

    The first fragment line seeds the first working line verbatim. A line
    starting a block is kept as-is and starts a new working line; any other
    line is left-trimmed and appended after a single space.

    Args:
        fragment: Lines produced by the fragment isolator.

    Returns:
        The working lines, in order.
    """
    if not fragment:
        return []

    working = [fragment[0]]
    for line in fragment[1:]:
        if starts_block(line):
            working.append(line)
        else:
            working[-1] = working[-1] + " " + line.lstrip()

    logger.debug("Now reduced to %d working lines", len(working))
    return working
