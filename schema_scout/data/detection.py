"""
detection.py  ── container format and field delimiter heuristics

Both detectors only look at raw text lines and never parse the data.
"""
from __future__ import annotations

import logging
import re
from collections import Counter
from typing import Iterable, Optional

from .formats import Format

logger = logging.getLogger(__name__)

__all__ = ["detect_format", "detect_separator", "NOISE_CHARACTERS"]

# Characters that are never taken for a delimiter
NOISE_CHARACTERS = "A-Za-z0-9 \"'()@?!éèîàÀÉÈç+"
_NOISE_RE = re.compile(f"[{NOISE_CHARACTERS}]")


def detect_format(first_line: str, last_line: str) -> Format:
    """
    Classify a file from its first and last line.

    Lines are used as read, surrounding whitespace included. JSON is not
    validated here; a malformed document fails later in the typed read.
    """
    if first_line.startswith("{") and first_line.endswith("}"):
        return Format.JSON
    if first_line.startswith("[") and last_line.endswith("]"):
        return Format.ARRAY_JSON
    return Format.DSV


def detect_separator(lines: Iterable[str]) -> Optional[str]:
    """
    Return the most frequent candidate delimiter across *lines*.

    Letters, digits, space, quotes and common punctuation are dropped from
    every line; the character left over most often wins. Among characters
    tied for the highest count the one seen first wins, scanning lines in the
    order given.

    Returns:
        The delimiter, or None when no candidate character remains.
    """
    counts = Counter()
    for line in lines:
        counts.update(_NOISE_RE.sub("", line))

    if not counts:
        logger.warning("No delimiter candidate found in the sampled lines")
        return None

    # most_common keeps insertion order among equal counts
    separator, count = counts.most_common(1)[0]
    logger.debug("Delimiter candidates: %s", dict(counts))
    logger.info("Detected separator %r (%d occurrences)", separator, count)
    return separator
