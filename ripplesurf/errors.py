"""Ripple simulation errors."""


class RippleError(Exception):
    """Base class for ripplesurf errors."""
    pass


class InvalidDimensions(RippleError, ValueError):
    """Grid width/height is not a positive integer."""
    pass


class TopologyMismatch(InvalidDimensions):
    """Grid size disagrees with the vertex data it is paired with."""
    pass


class IndexOutOfRange(RippleError, IndexError):
    """Direct buffer access outside [0, width*height)."""
    pass


class InvalidImpulse(RippleError, ValueError):
    """Impulse with non-positive radius or non-finite values."""
    pass


class ConfigError(RippleError, ValueError):
    """Malformed simulation parameters or parameter file."""
    pass
