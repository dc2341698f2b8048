"""Channel layouts and the multi-channel noise stack.

A ChannelStack owns one independently generated noise matrix per channel
and composes them into pixels:

    monochrome  1 channel   grey value
    rgb         3 channels  red, green, blue
    rgba        4 channels  red, green, blue, alpha
    gradient    1 channel   index into a 256-entry colour ramp
"""

import logging
from dataclasses import dataclass, field

import numpy as np
from PIL import Image

from .color import DEFAULT_GRADIENT, build_ramp, hex_to_rgb
from .errors import IndexOutOfRange, InvalidConfiguration
from .noise import NoiseField, check_dimensions, make_rng
from .pixel import Mono, RGB, RGBA, blend, normalize, to_mono, to_rgb, to_rgba

logger = logging.getLogger(__name__)


class ChannelLayout:
    """How many noise channels a texture has and how they become a pixel."""

    name = None
    channels = 0

    def resolve(self, values):
        raise NotImplementedError

    def __repr__(self):
        return f"{type(self).__name__}()"


class MonochromeLayout(ChannelLayout):
    name = "monochrome"
    channels = 1

    def resolve(self, values):
        return Mono(int(values[0]))


class RGBLayout(ChannelLayout):
    name = "rgb"
    channels = 3

    def resolve(self, values):
        return RGB(*(int(v) for v in values))


class RGBALayout(ChannelLayout):
    name = "rgba"
    channels = 4

    def resolve(self, values):
        return RGBA(*(int(v) for v in values))


class GradientLayout(ChannelLayout):
    """Single index channel looked up in a colour ramp built from stops."""

    name = "gradient"
    channels = 1

    def __init__(self, stops=None):
        if stops is None:
            stops = DEFAULT_GRADIENT
        self.stops = (stops,) if isinstance(stops, str) else tuple(stops)
        self.ramp = build_ramp(self.stops, size=256, wrap=True)
        self.ramp.setflags(write=False)

    def resolve(self, values):
        index = min(max(int(values[0]), 0), len(self.ramp) - 1)
        return RGB(*(int(c) for c in self.ramp[index]))

    def __repr__(self):
        return f"GradientLayout(stops={self.stops!r})"


LAYOUTS = {cls.name: cls for cls in
           (MonochromeLayout, RGBLayout, RGBALayout, GradientLayout)}


def layout_from_name(name, gradient=None):
    """Build the layout for a public type name.

    ``gradient`` holds the colour stops and only matters for 'gradient'.
    """
    if isinstance(name, ChannelLayout):
        return name
    try:
        cls = LAYOUTS[name]
    except (KeyError, TypeError):
        raise InvalidConfiguration(
            f"Unknown texture type {name!r}, expected one of "
            f"{', '.join(LAYOUTS)}") from None
    if cls is GradientLayout:
        return cls(gradient)
    return cls()


@dataclass
class Blend:
    """Fixed background colour and opacity for alpha compositing."""

    background: str = "#FFFFFF"
    opacity: float = 1.0
    background_rgb: tuple = field(init=False, repr=False)

    def __post_init__(self):
        if isinstance(self.opacity, bool) or not isinstance(
                self.opacity, (int, float)):
            raise InvalidConfiguration(
                f"opacity must be a number, got {self.opacity!r}")
        if not 0 <= self.opacity <= 1:
            raise InvalidConfiguration(
                f"opacity must be within [0, 1], got {self.opacity!r}")
        self.background_rgb = hex_to_rgb(self.background)

    @classmethod
    def coerce(cls, value):
        """Turn None, a Blend or a dict into a Blend or None.

        Blending is only enabled when both the background and the
        opacity are given.
        """
        if value is None or isinstance(value, cls):
            return value
        if not isinstance(value, dict):
            raise InvalidConfiguration(f"Invalid blend settings: {value!r}")
        background = value.get("background")
        opacity = value.get("opacity")
        if background is None or opacity is None:
            logger.warning("Blend needs both background and opacity, "
                           "blending disabled")
            return None
        return cls(background=background, opacity=opacity)


class ChannelStack:
    """Independent noise channels composed into a texture.

    All matrices are materialized by ``build()`` (run on construction);
    reading pixels afterwards never recomputes noise.

    Args:
        width: Texture width in pixels.
        height: Texture height in pixels.
        layout: 'monochrome', 'rgb', 'rgba', 'gradient' or a ChannelLayout.
        scale: Stretch each channel to the full [0, 255] range.
        gradient: Hex colour stops for the 'gradient' layout.
        blend: Blend or dict with 'background' and 'opacity'.
        rng: numpy RandomState or int seed for reproducibility.
    """

    def __init__(self, width, height, layout="rgb", scale=True,
                 gradient=None, blend=None, rng=None):
        check_dimensions(width, height)
        self.width = int(width)
        self.height = int(height)
        self.layout = layout_from_name(layout, gradient)
        self.scale = scale
        self.blend = Blend.coerce(blend)
        self.rng = make_rng(rng)
        self.channels = []
        self.build()

    @property
    def has_blend(self):
        return self.blend is not None

    def build(self):
        """Generate and materialize one noise matrix per channel."""
        channels = []
        for _ in range(self.layout.channels):
            # Each channel gets its own stream drawn from the stack's RNG
            field_rng = np.random.RandomState(self.rng.randint(0, 2**31 - 1))
            noise = NoiseField(self.width, self.height, single_cell=True,
                               rescale=self.scale, rng=field_rng)
            matrix = noise.materialize()
            matrix.setflags(write=False)
            channels.append(matrix)
        self.channels = channels
        logger.debug("Built %s stack %dx%d with %d channel(s)",
                     self.layout.name, self.width, self.height, len(channels))
        return self

    def _check_bounds(self, x, y):
        for value in (x, y):
            if (isinstance(value, bool)
                    or not isinstance(value, (int, np.integer))):
                raise IndexOutOfRange(
                    f"Pixel coordinates must be integers, got ({x!r}, {y!r})")
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexOutOfRange(
                f"Pixel ({x}, {y}) outside {self.width}x{self.height} grid")

    def get_pixel(self, x, y):
        """Resolved pixel at (x, y): Mono, RGB or RGBA."""
        self._check_bounds(x, y)
        pixel = self.layout.resolve([c[x, y] for c in self.channels])
        if self.blend is not None:
            pixel = blend(pixel, self.blend.background_rgb,
                          self.blend.opacity)
        return pixel

    def get_mono(self, x, y):
        return to_mono(self.get_pixel(x, y))

    def get_rgb(self, x, y):
        return to_rgb(self.get_pixel(x, y))

    def get_rgba(self, x, y, alpha=None):
        return to_rgba(self.get_pixel(x, y), alpha)

    @property
    def bands(self):
        """Number of bands in ``to_array()`` output."""
        if self.blend is not None or isinstance(self.layout, RGBALayout):
            return 4
        if isinstance(self.layout, MonochromeLayout):
            return 1
        return 3

    def to_array(self):
        """Compose every pixel.

        Returns:
            uint8 array of shape (height, width) for monochrome, otherwise
            (height, width, 3) or (height, width, 4) when the texture
            carries alpha.
        """
        rgba = np.array([[normalize(self.get_pixel(x, y))
                          for x in range(self.width)]
                         for y in range(self.height)], dtype=np.uint8)
        bands = self.bands
        if bands == 1:
            return rgba[:, :, 0]
        return rgba[:, :, :bands]

    def to_image(self):
        """Texture as a PIL Image in L, RGB or RGBA mode."""
        return Image.fromarray(self.to_array())
