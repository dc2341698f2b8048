"""Pixel values and their CSS-style text forms."""

import math
from typing import NamedTuple

from .errors import InvalidConfiguration


class Mono(NamedTuple):
    value: int


class RGB(NamedTuple):
    r: int
    g: int
    b: int


class RGBA(NamedTuple):
    r: int
    g: int
    b: int
    a: int


def _round(value):
    # Halves round up, not to even.
    return int(math.floor(value + 0.5))


def normalize(pixel):
    """Expand any pixel to RGBA.

    Missing green and blue take the red value, never zero. Missing alpha
    is fully opaque (255).
    """
    if isinstance(pixel, RGBA):
        return pixel
    r = int(pixel[0])
    g = int(pixel[1]) if len(pixel) > 1 else r
    b = int(pixel[2]) if len(pixel) > 2 else r
    a = int(pixel[3]) if len(pixel) > 3 else 255
    return RGBA(r, g, b, a)


def blend(foreground, background, opacity):
    """Composite a pixel over a background colour at a fixed opacity.

    Colour channels are mixed and rounded to bytes. The foreground alpha
    (255 when absent) is scaled by the opacity, so opacity 0 gives the
    background with alpha 0.
    """
    if not 0 <= opacity <= 1:
        raise InvalidConfiguration(
            f"opacity must be within [0, 1], got {opacity!r}")
    r, g, b, a = normalize(foreground)
    mixed = [_round(c * opacity + bg * (1 - opacity))
             for c, bg in zip((r, g, b), background[:3])]
    return RGBA(*mixed, _round(a * opacity))


def to_mono(pixel):
    m = int(pixel[0])
    return f"rgb({m}, {m}, {m})"


def to_rgb(pixel):
    r, g, b, _ = normalize(pixel)
    return f"rgb({r}, {g}, {b})"


def to_rgba(pixel, alpha=None):
    """Render ``rgba(...)``; alpha is the override, else the pixel's own."""
    r, g, b, a = normalize(pixel)
    if alpha is None:
        alpha = a / 255
    if isinstance(alpha, float) and alpha.is_integer():
        alpha = int(alpha)
    return f"rgba({r}, {g}, {b}, {alpha})"
