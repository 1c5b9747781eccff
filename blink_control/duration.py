"""
Duration parsing for blink(1) commands.

Durations are expressed in hundredths of a second, the device's native
unit. A bare number is taken as-is; the "s" and "ms" suffixes convert
from seconds and milliseconds:

    "50"     -> 50
    ".5s"    -> 50
    "2000ms" -> 200

Results are clamped to [-1, 65535]. Clamping is not an error.
"""

import math
import re
from typing import Tuple

from blink_control.errors import InvalidDurationError


DURATION_MIN = -1
DURATION_MAX = 0xFFFF  # stored on two bytes

_NUMBER_PATTERN = re.compile(
    r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)(.*)",
    re.DOTALL | re.ASCII,
)


def _clamp(value: float) -> float:
    return max(DURATION_MIN, min(DURATION_MAX, value))


def _round(value: float) -> int:
    """Round half away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def parse_duration(token: str) -> int:
    """
    Parse a duration token into hundredths of a second.

    Args:
        token: Number with an optional "s" or "ms" unit suffix.

    Returns:
        Duration clamped to [DURATION_MIN, DURATION_MAX].

    Raises:
        InvalidDurationError: If the token has no leading number or
            carries an unknown suffix.
    """
    match = _NUMBER_PATTERN.match(token)
    if match is None:
        raise InvalidDurationError(token)

    value = float(match.group(1))
    suffix = match.group(2)

    if suffix == "":
        # clamp first so huge values never reach int()
        return int(_clamp(value))
    if suffix == "s":
        return _round(_clamp(value * 100))
    if suffix == "ms":
        return _round(_clamp(value / 10))

    raise InvalidDurationError(token)


def split_duration(value: int) -> Tuple[int, int]:
    """Split a non-negative duration into big-endian (high, low) bytes."""
    return (value >> 8) & 0xFF, value & 0xFF
