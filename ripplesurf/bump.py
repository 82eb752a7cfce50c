"""Cursor bump follower: an eased raised-cosine hump that tracks the pointer hit.

This is the non-wave surface mode. It keeps no field state; every call moves
each vertex height a fixed fraction of the way toward its target.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ripplesurf import defaults
from ripplesurf.errors import TopologyMismatch
from ripplesurf.impulse import as_positions


@dataclass
class CursorBump:
    amplitude: float = defaults.DEFAULT_BUMP_AMPLITUDE
    dist_mult: float = defaults.DEFAULT_BUMP_DIST_MULT
    easing: float = defaults.DEFAULT_BUMP_EASING
    rest_height: float = defaults.DEFAULT_BUMP_REST_HEIGHT

    @property
    def reach(self) -> float:
        """Distance at which the cosine profile reaches zero."""
        return math.pi * self.dist_mult

    def targets(self, vertex_heights: np.ndarray, positions: np.ndarray, hit) -> np.ndarray:
        target = np.full(vertex_heights.shape, self.rest_height, dtype=np.float64)
        if hit is None:
            return target
        hx, hy, hz = hit
        # Distance is measured to the displaced vertex, so the hump flattens
        # slightly as it rises.
        d = np.sqrt(
            (positions[:, 0] - hx) ** 2
            + (positions[:, 1] - hy) ** 2
            + (vertex_heights - hz) ** 2
        )
        inside = d < self.reach
        target[inside] = (np.cos(d[inside] / self.dist_mult) + 1.0) * self.amplitude
        return target

    def update(self, vertex_heights: np.ndarray, vertex_positions_xy,
               hit: Optional[tuple[float, float, float]]) -> bool:
        """Ease ``vertex_heights`` in place toward the bump (or rest when ``hit`` is None).

        Returns True: normals must be recomputed.
        """
        if not isinstance(vertex_heights, np.ndarray) or vertex_heights.ndim != 1:
            raise TopologyMismatch("vertex heights must be a 1-D ndarray")
        positions = as_positions(vertex_positions_xy, vertex_heights.shape[0])
        target = self.targets(vertex_heights, positions, hit)
        vertex_heights += ((target - vertex_heights) * self.easing).astype(vertex_heights.dtype, copy=False)
        return True
