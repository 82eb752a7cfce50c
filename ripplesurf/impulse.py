"""
Impulse injection: localized additive perturbations of the current buffer.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from ripplesurf.errors import InvalidImpulse, TopologyMismatch
from ripplesurf.field import GridField

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Impulse:
    """A cone-shaped bump centred on a point of the reference plane.

    Attributes:
        center: (x, y) on the surface's reference plane
        intensity: Signed height per unit of (radius - distance)
        radius: Falloff cutoff; cells at distance >= radius are untouched
    """
    center: tuple[float, float]
    intensity: float
    radius: float

    def __post_init__(self):
        cx, cy = self.center
        values = (cx, cy, self.intensity, self.radius)
        if not all(math.isfinite(v) for v in values):
            raise InvalidImpulse(f"impulse values must be finite: {self!r}")
        if self.radius <= 0:
            raise InvalidImpulse(f"impulse radius must be positive, got {self.radius}")
        object.__setattr__(self, "center", (float(cx), float(cy)))


def as_positions(vertex_positions_xy, expected: int) -> np.ndarray:
    """Coerce reference vertex coordinates to an (N, 2) float array of length ``expected``."""
    positions = np.asarray(vertex_positions_xy, dtype=np.float64)
    if positions.ndim != 2 or positions.shape[1] < 2:
        raise TopologyMismatch(
            f"vertex positions must have shape (N, 2), got {positions.shape}"
        )
    if positions.shape[0] != expected:
        raise TopologyMismatch(
            f"{positions.shape[0]} vertex positions for a field of {expected} cells"
        )
    return positions[:, :2]


def inject(field: GridField, impulse: Impulse, vertex_positions_xy) -> None:
    """
    Add ``impulse`` to ``field.buffer_current``.

    Each cell whose reference (x, y) lies strictly within ``impulse.radius``
    of the centre gains ``intensity * (radius - d)``. The update is additive so
    overlapping ripples superpose. Vertex heights are never consulted.
    """
    positions = as_positions(vertex_positions_xy, field.size)
    cx, cy = impulse.center
    d = np.hypot(positions[:, 0] - cx, positions[:, 1] - cy)
    hit = d < impulse.radius
    current = field.buffer_current
    current[hit] += impulse.intensity * (impulse.radius - d[hit])
    logger.debug("Impulse %s touched %d cells", impulse, int(np.count_nonzero(hit)))
