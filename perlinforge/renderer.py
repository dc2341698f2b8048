"""Texture rendering and bitmap export.

Builds a ChannelStack from a TextureConfig and serializes the composed
pixels as a 24-bit BMP, optionally wrapped in a base64 data URL.
"""

import logging
from dataclasses import dataclass

import numpy as np

from .bmp import create_bmp, to_data_url
from .channels import LAYOUTS, Blend, ChannelStack
from .errors import InvalidConfiguration
from .noise import check_dimensions
from .pixel import normalize

logger = logging.getLogger(__name__)


@dataclass
class TextureConfig:
    """Configuration for texture generation."""

    width: int
    height: int

    # One of monochrome, rgb, rgba, gradient
    type: str = "rgb"

    # Stretch every channel to the full byte range
    scale: bool = True

    # Hex colour stops, only used by the gradient type
    gradient: tuple = None

    # {"background": hex, "opacity": 0-1} or a Blend
    blend: object = None

    def validate(self):
        """Raise InvalidConfiguration if any setting is unusable.

        The blend setting is normalized to a Blend or None in place.
        """
        check_dimensions(self.width, self.height)
        if self.type not in LAYOUTS:
            raise InvalidConfiguration(
                f"Unknown texture type {self.type!r}, expected one of "
                f"{', '.join(LAYOUTS)}")
        self.blend = Blend.coerce(self.blend)
        return self


def render(config, seed=None):
    """Generate the noise channels for a texture.

    Args:
        config: TextureConfig instance.
        seed: Random seed for reproducible generation.

    Returns:
        ChannelStack with every channel materialized.
    """
    config.validate()
    if seed is None:
        seed = np.random.randint(0, 2**31)

    logger.info("Rendering %dx%d %s texture (seed %d)",
                config.width, config.height, config.type, seed)

    return ChannelStack(
        config.width,
        config.height,
        layout=config.type,
        scale=config.scale,
        gradient=config.gradient,
        blend=config.blend,
        rng=np.random.RandomState(seed),
    )


def export_bmp(stack):
    """Serialize a ChannelStack as BMP bytes. Alpha is dropped."""
    pixels = np.zeros((stack.height, stack.width, 3), dtype=np.uint8)
    for y in range(stack.height):
        for x in range(stack.width):
            pixels[y, x] = normalize(stack.get_pixel(x, y))[:3]

    data = create_bmp(pixels)
    logger.debug("Exported %dx%d bitmap, %d bytes",
                 stack.width, stack.height, len(data))
    return data


def export_data_url(stack):
    """ChannelStack as a ``data:image/bmp;base64,...`` string."""
    return to_data_url(export_bmp(stack), mime='image/bmp')
