"""
Color resolution for blink(1) commands.

A color is given either as one of the named colors below or as a
hexadecimal RGB value such as "454545" or "0xff8000".
"""

import logging
import re
from typing import List, Tuple

from blink_control.errors import InvalidColorError


logger = logging.getLogger(__name__)

# Named colors, matched case-sensitively
COLORS: Tuple[Tuple[str, int], ...] = (
    ("blue", 0x0000FF),
    ("cyan", 0x00FFFF),
    ("green", 0x00FF00),
    ("purple", 0xFF00FF),
    ("red", 0xFF0000),
    ("white", 0xFFFFFF),
    ("yellow", 0xFFFF00),
)

RGB_MAX = 0xFFFFFF

# Optional leading space, "+" and "0x" prefix, then hex digits only
_HEX_PATTERN = re.compile(r"\s*\+?(?:0[xX])?([0-9a-fA-F]+)", re.ASCII)


def color_names() -> List[str]:
    """Return the named colors in table order."""
    return [name for name, _ in COLORS]


def resolve_color(token: str) -> int:
    """
    Resolve a color token to a 24-bit RGB value.

    Args:
        token: A color name from COLORS, or a hexadecimal value.

    Returns:
        RGB value in range [0, 0xFFFFFF].

    Raises:
        InvalidColorError: If the token is neither a known name nor a
            complete hex number no greater than 0xFFFFFF.
    """
    for name, value in COLORS:
        if name == token:
            logger.debug(f"found defined color #{value:06X} ({name})")
            return value

    match = _HEX_PATTERN.fullmatch(token)
    if match is None:
        raise InvalidColorError(token)

    value = int(match.group(1), 16)
    if value > RGB_MAX:
        raise InvalidColorError(token)

    return value


def split_rgb(value: int) -> Tuple[int, int, int]:
    """Split a 24-bit RGB value into its (R, G, B) channel bytes."""
    return (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF
