"""Gradient (Perlin) noise fields."""

import logging

import numpy as np

from .errors import InvalidConfiguration

logger = logging.getLogger(__name__)


def fade(t):
    """Perlin fade function: 6t^5 - 15t^4 + 10t^3."""
    return t * t * t * (t * (t * 6 - 15) + 10)


def lerp(a, b, t):
    """Linear interpolation between a and b for t."""
    return a + t * (b - a)


def make_rng(rng=None):
    """Return a numpy RandomState for a handle, an int seed or None."""
    if isinstance(rng, np.random.RandomState):
        return rng
    try:
        return np.random.RandomState(rng)
    except (TypeError, ValueError) as exc:
        raise InvalidConfiguration(
            f"Invalid random seed {rng!r}: {exc}") from None


def check_dimensions(width, height):
    """Raise InvalidConfiguration unless both sizes are positive integers."""
    for name, value in (("width", width), ("height", height)):
        if (isinstance(value, bool)
                or not isinstance(value, (int, np.integer))
                or value <= 0):
            raise InvalidConfiguration(
                f"{name} must be a positive integer, got {value!r}")


def rescale_bytes(matrix):
    """Stretch a byte matrix linearly so its values span [0, 255].

    A uniform matrix has no range to stretch and comes back all zero.
    """
    lo, hi = int(matrix.min()), int(matrix.max())
    if lo == hi:
        logger.debug("Uniform noise matrix (value %d), rescaled to zero", lo)
        return np.zeros_like(matrix)
    return (255 * (matrix - lo)) // (hi - lo)


class NoiseField:
    """A lattice of random unit gradients sampled as 2D Perlin noise.

    In single-cell mode the lattice is a fixed 2x2 grid and the whole
    ``width`` x ``height`` matrix is drawn from inside that one cell,
    giving a single large smooth feature. Otherwise the lattice has one
    gradient per matrix cell plus a ring on each side, and every integer
    coordinate is sampled at its cell centre.

    Args:
        width: Matrix width in cells.
        height: Matrix height in cells.
        single_cell: Sample the whole matrix from one lattice cell.
        rescale: Stretch materialized matrices to the full [0, 255] range.
        rng: numpy RandomState or int seed for reproducibility.
    """

    def __init__(self, width=64, height=64, single_cell=False, rescale=True,
                 rng=None):
        check_dimensions(width, height)
        self.width = int(width)
        self.height = int(height)
        self.single_cell = single_cell
        self.rescale = rescale
        self.rng = make_rng(rng)
        self.gradients = None
        self.generate()

    @property
    def lattice_shape(self):
        if self.single_cell:
            return (2, 2)
        return (self.width + 2, self.height + 2)

    def generate(self):
        """Fill the lattice with fresh random unit vectors."""
        theta = self.rng.uniform(0, 2 * np.pi, size=self.lattice_shape)
        self.gradients = np.stack([np.cos(theta), np.sin(theta)], axis=-1)
        logger.debug("Generated %dx%d gradient lattice", *self.lattice_shape)

    def reset(self):
        """Redraw every gradient. Matrices already materialized are kept."""
        self.generate()

    def _remap(self, x, y):
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        if self.single_cell:
            return x / self.width, y / self.height
        return x + 0.5, y + 0.5

    def _dot_grid_gradient(self, ix, iy, x, y):
        # Corners past the lattice edge wrap around; the offset does not.
        lw, lh = self.gradients.shape[:2]
        g = self.gradients[ix % lw, iy % lh]
        return (x - ix) * g[..., 0] + (y - iy) * g[..., 1]

    def _noise(self, x, y):
        x0 = np.floor(x).astype(np.int64)
        y0 = np.floor(y).astype(np.int64)
        x1 = x0 + 1
        y1 = y0 + 1

        n00 = self._dot_grid_gradient(x0, y0, x, y)
        n10 = self._dot_grid_gradient(x1, y0, x, y)
        n01 = self._dot_grid_gradient(x0, y1, x, y)
        n11 = self._dot_grid_gradient(x1, y1, x, y)

        u = fade(x - x0)
        v = fade(y - y0)

        return lerp(lerp(n00, n10, u), lerp(n01, n11, u), v)

    @staticmethod
    def _to_byte(values):
        values = np.floor(256 * (values + 1) / 2)
        return np.clip(values, 0, 255).astype(np.int64)

    def sample(self, x, y):
        """Noise value at matrix coordinate (x, y), roughly in [-1, 1]."""
        return float(self._noise(*self._remap(x, y)))

    def sample_byte(self, x, y):
        """Noise value at (x, y) mapped onto [0, 255]."""
        return int(self._to_byte(self._noise(*self._remap(x, y))))

    def materialize(self):
        """Sample every integer coordinate.

        Returns:
            uint8 array of shape (width, height), indexed ``[x, y]``.
        """
        xs, ys = np.meshgrid(np.arange(self.width, dtype=np.float64),
                             np.arange(self.height, dtype=np.float64),
                             indexing='ij')
        values = self._to_byte(self._noise(*self._remap(xs, ys)))
        if self.rescale:
            values = rescale_bytes(values)
        return values.astype(np.uint8)
