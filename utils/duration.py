"""
Duration parsing and formatting for alarm requests.

A request like "1h 30" is split into numeric tokens, each optionally
followed by a unit letter (s, m, h, d). Tokens without a unit are
minutes, so "45" means 45 minutes.
"""

import logging
import re
from typing import Tuple

from utils.constants import DAY, HOUR, MAX_TOKEN_VALUE, MINUTE, UNIT_SUFFIXES

logger = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r"[0-9]+[smhd]?", re.IGNORECASE | re.ASCII)


def _to_int(value: str) -> int:
    """Convert a digit string, treating overflow and garbage as zero."""
    try:
        number = int(value)
    except ValueError:
        return 0
    if number > MAX_TOKEN_VALUE:
        logger.debug(f"Token value out of range, ignoring: {value}")
        return 0
    return number


def _token_seconds(token: str) -> int:
    seconds = 0
    coef = UNIT_SUFFIXES.get(token[-1])
    if coef is not None:
        seconds = _to_int(token[:-1]) * coef

    # A zero-valued suffixed token falls back to the bare-number parse,
    # which fails on the suffix and yields zero again.
    if seconds == 0:
        seconds = _to_int(token) * MINUTE

    return seconds


def parse_duration(text: str) -> Tuple[int, bool]:
    """
    Parse free-form text into a total number of seconds.

    Args:
        text: Raw message text

    Returns:
        Tuple of (total_seconds, ok). ok is False only when the text
        contains no numeric token at all.
    """
    tokens = TOKEN_PATTERN.findall(text.lower())
    if not tokens:
        return 0, False

    total = sum(_token_seconds(token) for token in tokens)
    return total, True


def format_duration(seconds: int) -> str:
    """
    Format seconds as "Xd Yh Zm Ws".

    Leading zero units are dropped, seconds are always shown, and every
    unit after the first non-zero one is kept ("1h 0m 0s").

    Raises:
        ValueError: If seconds is negative
    """
    if seconds < 0:
        raise ValueError(f"Cannot format negative duration: {seconds}")

    days, rest = divmod(seconds, DAY)
    hours, rest = divmod(rest, HOUR)
    minutes, secs = divmod(rest, MINUTE)

    parts = []
    if days:
        parts.append(f"{days}d")
    if hours or parts:
        parts.append(f"{hours}h")
    if minutes or parts:
        parts.append(f"{minutes}m")
    parts.append(f"{secs}s")

    return " ".join(parts)
