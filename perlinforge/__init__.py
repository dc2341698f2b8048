"""PerlinForge - Generate Perlin noise textures and bitmap data URLs."""

from .channels import Blend, ChannelStack
from .errors import IndexOutOfRange, InvalidConfiguration, PerlinForgeError
from .noise import NoiseField
from .renderer import TextureConfig, export_bmp, export_data_url, render

__version__ = "0.1.0"
__all__ = [
    "generate",
    "generate_data_url",
    "render",
    "export_bmp",
    "export_data_url",
    "TextureConfig",
    "ChannelStack",
    "NoiseField",
    "Blend",
    "PerlinForgeError",
    "InvalidConfiguration",
    "IndexOutOfRange",
]


def generate(width, height, seed=None, **kwargs):
    """Generate a noise texture.

    Args:
        width: Texture width in pixels.
        height: Texture height in pixels.
        seed: Random seed for reproducible generation.
        **kwargs: Additional TextureConfig parameters (type, scale,
            gradient, blend).

    Returns:
        ChannelStack; use ``to_image()`` for a PIL Image.
    """
    config = TextureConfig(width=width, height=height, **kwargs)
    return render(config, seed=seed)


def generate_data_url(width, height, seed=None, **kwargs):
    """Generate a noise texture as a ``data:image/bmp;base64`` URL."""
    return export_data_url(generate(width, height, seed=seed, **kwargs))
