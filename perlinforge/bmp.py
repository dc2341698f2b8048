"""Uncompressed 24-bit BMP writer and base64 data URLs."""

import base64
import struct

import numpy as np

from .errors import InvalidConfiguration

FILE_HEADER_SIZE = 14
DIB_HEADER_SIZE = 40
BITS_PER_PIXEL = 24


def row_padding(width):
    """Zero bytes appended to each row to reach a 4-byte boundary."""
    return (4 - (width * 3) % 4) % 4


def create_bmp(pixels):
    """Serialize an RGB image as a BMP file.

    Args:
        pixels: uint8 array of shape (height, width, 3), top row first.

    Returns:
        bytes of a BITMAPINFOHEADER bitmap with bottom-up BGR rows.
    """
    pixels = np.asarray(pixels, dtype=np.uint8)
    if pixels.ndim != 3 or pixels.shape[2] != 3 or pixels.size == 0:
        raise InvalidConfiguration(
            f"Expected a non-empty (height, width, 3) array, "
            f"got shape {pixels.shape}")

    height, width = pixels.shape[:2]
    padding = row_padding(width)
    image_size = (width * 3 + padding) * height
    data_offset = FILE_HEADER_SIZE + DIB_HEADER_SIZE
    file_size = data_offset + image_size

    file_header = struct.pack('<2sIHHI', b'BM', file_size, 0, 0, data_offset)
    dib_header = struct.pack(
        '<IiiHHIIiiII',
        DIB_HEADER_SIZE,
        width,
        height,
        1,               # colour planes
        BITS_PER_PIXEL,
        0,               # no compression
        image_size,
        0, 0,            # resolution
        0, 0,            # palette
    )

    # Last image row first, channels swapped to BGR
    rows = pixels[::-1, :, ::-1].reshape(height, width * 3)
    if padding:
        rows = np.pad(rows, ((0, 0), (0, padding)))

    return file_header + dib_header + np.ascontiguousarray(rows).tobytes()


def encode_base64(data):
    """Standard base64 with '=' padding, as text."""
    return base64.b64encode(bytes(data)).decode('ascii')


def to_data_url(data, mime='image/bmp'):
    return f"data:{mime};base64,{encode_base64(data)}"
