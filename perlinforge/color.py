"""Hex colour parsing and gradient ramps."""

import re

import numpy as np

from .errors import InvalidConfiguration
from .noise import lerp

DEFAULT_GRADIENT = ("#0057B7", "#FFDD00")

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]+")


def hex_to_rgba(hex_color):
    """Convert '#RGB', '#RGBA', '#RRGGBB' or '#RRGGBBAA' to byte values.

    The leading '#' is optional. Returns (r, g, b) when the colour has no
    alpha component and (r, g, b, a) when it does.
    """
    if not isinstance(hex_color, str):
        raise InvalidConfiguration(f"Invalid hex color: {hex_color!r}")
    h = hex_color.strip()
    if h.startswith("#"):
        h = h[1:]
    if len(h) in (3, 4):
        h = "".join(c * 2 for c in h)
    if len(h) not in (6, 8) or not _HEX_DIGITS.fullmatch(h):
        raise InvalidConfiguration(f"Invalid hex color: {hex_color!r}")
    return tuple(int(h[i:i + 2], 16) for i in range(0, len(h), 2))


def hex_to_rgb(hex_color):
    """Like hex_to_rgba but always drops the alpha component."""
    return hex_to_rgba(hex_color)[:3]


def build_ramp(stops, size=256, wrap=True):
    """Interpolate colour stops into a lookup table.

    Args:
        stops: Ordered hex colours. A single string counts as one stop.
        size: Number of ramp entries.
        wrap: Interpolate from the last stop back to the first so the
            ramp is cyclic.

    Returns:
        uint8 array of shape (size, 3).
    """
    if isinstance(stops, str):
        stops = [stops]
    if stops is None or len(stops) == 0:
        raise InvalidConfiguration("Gradient needs at least one color stop")
    if size <= 0:
        raise InvalidConfiguration(f"Ramp size must be positive, got {size!r}")

    colors = np.array([hex_to_rgb(s) for s in stops], dtype=np.float64)
    if len(colors) == 1:
        return np.repeat(colors, size, axis=0).astype(np.uint8)

    if wrap:
        colors = np.vstack([colors, colors[:1]])
        positions = np.arange(size) * (len(colors) - 1) / size
    else:
        positions = np.arange(size) * (len(colors) - 1) / max(size - 1, 1)

    segment = np.minimum(np.floor(positions).astype(int), len(colors) - 2)
    frac = (positions - segment)[:, np.newaxis]
    ramp = lerp(colors[segment], colors[segment + 1], frac)
    return np.clip(np.rint(ramp), 0, 255).astype(np.uint8)
