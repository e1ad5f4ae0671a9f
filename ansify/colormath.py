#!/usr/bin/env python3
# ansify/colormath.py
"""
Pure color arithmetic: interpolation, hex <-> RGB and BT.601 luma.
"""

from __future__ import annotations

import math
import re
from typing import NamedTuple, Optional

from ansify.errors import ColorParseError

__all__ = [
    "Color",
    "lerp",
    "hex_to_rgb",
    "rgb_to_hex",
    "brightness",
    "is_white",
    "round_half_up",
    "transition_to_color",
]

_HEX_RE = re.compile(r"^#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})$", re.IGNORECASE)


class Color(NamedTuple):
    r: int
    g: int
    b: int


WHITE = Color(255, 255, 255)


def round_half_up(x: float) -> int:
    # round() is banker's rounding; luma and RMS values round .5 upward
    return int(math.floor(x + 0.5))


def lerp(a: float, b: float, u: float) -> float:
    """Linear interpolation; u is not clamped."""
    return (1 - u) * a + u * b


def hex_to_rgb(hex_str: str) -> Optional[Color]:
    """
    Parse '#rrggbb' or 'rrggbb' (any case).
    Returns None for wrong length, non-hex characters or non-string input.
    """
    if not isinstance(hex_str, str):
        return None
    m = _HEX_RE.match(hex_str)
    if m is None:
        return None
    return Color(int(m.group(1), 16), int(m.group(2), 16), int(m.group(3), 16))


def _clamp_channel(v: float) -> int:
    return max(0, min(255, round_half_up(v)))


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """
    Encode channels as lowercase '#rrggbb'.
    Out-of-range channels are clamped to [0, 255]; fractional ones rounded.
    """
    return "#{:02x}{:02x}{:02x}".format(_clamp_channel(r), _clamp_channel(g), _clamp_channel(b))


def brightness(color: Color) -> int:
    """Perceptual brightness 0..255 using ITU-R BT.601 weights."""
    r, g, b = color
    return round_half_up((r * 299 + g * 587 + b * 114) / 1000)


def is_white(color: Color) -> bool:
    return tuple(color) == WHITE


def transition_to_color(start: str, end: str, step: float) -> str:
    """
    Blend two hex colors; step 0 gives start, 1 gives end.
    Channels are floored like integer pixel math.
    """
    a = hex_to_rgb(start)
    b = hex_to_rgb(end)
    if a is None:
        raise ColorParseError(f"Malformed start color: {start!r}")
    if b is None:
        raise ColorParseError(f"Malformed end color: {end!r}")
    r = math.floor(lerp(a.r, b.r, step))
    g = math.floor(lerp(a.g, b.g, step))
    bl = math.floor(lerp(a.b, b.b, step))
    return rgb_to_hex(r, g, bl)
