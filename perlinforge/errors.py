"""Exceptions raised by PerlinForge."""


class PerlinForgeError(Exception):
    """Base class for all PerlinForge errors."""


class InvalidConfiguration(PerlinForgeError, ValueError):
    """Raised for bad dimensions, layout names, colours or blend settings."""


class IndexOutOfRange(PerlinForgeError, IndexError):
    """Raised when a pixel is read outside the texture grid."""
