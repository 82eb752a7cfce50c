"""Ripple simulation context.

RippleSimulation owns everything one deformable surface needs between
frames: the height field, the reference vertex positions, the pointer
tracker, the active parameters and a queue of pending impulses.

Pointer events never touch the field directly. They queue ``Impulse``
commands, and ``tick()`` drains the queue, integrates one step and writes
heights out, all under one lock. Input callbacks on another thread can
therefore queue safely while the render loop ticks.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Callable, Optional

import numpy as np

from ripplesurf.config import SimulationParameters
from ripplesurf.field import GridField
from ripplesurf.geometry import plane_grid_shape, plane_positions
from ripplesurf.impulse import Impulse, as_positions, inject
from ripplesurf.integrator import step
from ripplesurf.pointer import PointerTracker, RayCaster, VelocityEstimate
from ripplesurf.surface import apply, check_sink

logger = logging.getLogger(__name__)


class RippleSimulation:
    """Explicitly constructed simulation for one surface.

    Args:
        width: Vertex columns (row stride)
        height: Vertex rows
        vertex_positions_xy: (width*height, 2) reference coordinates
        params: Simulation parameters (defaults if None)
    """

    def __init__(
        self,
        width: int,
        height: int,
        vertex_positions_xy,
        params: Optional[SimulationParameters] = None,
        _clock: Optional[Callable[[], float]] = None,
    ):
        self._field = GridField(width, height)
        self._positions = as_positions(vertex_positions_xy, self._field.size).copy()
        self._params = (params or SimulationParameters()).validate()
        self._tracker = PointerTracker() if _clock is None else PointerTracker(_clock=_clock)
        self._pending: deque[Impulse] = deque()
        self._heights = np.zeros(self._field.size, dtype=np.float64)
        self._lock = threading.RLock()
        self.tick_count = 0

    @classmethod
    def from_plane(
        cls,
        size_x: float,
        size_y: float,
        segments_x: int,
        segments_y: int,
        params: Optional[SimulationParameters] = None,
        **kwargs,
    ) -> RippleSimulation:
        width, height = plane_grid_shape(segments_x, segments_y)
        positions = plane_positions(size_x, size_y, segments_x, segments_y)
        return cls(width, height, positions, params=params, **kwargs)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def field(self) -> GridField:
        return self._field

    @property
    def params(self) -> SimulationParameters:
        return self._params

    @property
    def positions(self) -> np.ndarray:
        return self._positions

    @property
    def heights(self) -> np.ndarray:
        """Vertex heights written by the last tick when no external sink was given."""
        return self._heights

    @property
    def tracker(self) -> PointerTracker:
        return self._tracker

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._pending)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def queue_impulse(self, impulse: Impulse) -> None:
        with self._lock:
            self._pending.append(impulse)

    def pointer_moved(
        self,
        x_ndc: float,
        y_ndc: float,
        ray_caster: RayCaster,
        now: Optional[float] = None,
    ) -> VelocityEstimate:
        """Sample the pointer and, if its ray hits the surface, queue a continuous impulse."""
        with self._lock:
            velocity = self._tracker.sample(x_ndc, y_ndc, now)
        hit = self._tracker.project_to_surface(x_ndc, y_ndc, ray_caster)
        if hit is not None:
            self.queue_impulse(self._params.continuous.impulse_at(hit, velocity.speed))
        return velocity

    def trigger(self, x_ndc: float, y_ndc: float, ray_caster: RayCaster) -> Optional[Impulse]:
        """Queue a trigger-strength impulse at the pointer hit. Returns it, or None on a miss."""
        hit = self._tracker.project_to_surface(x_ndc, y_ndc, ray_caster)
        if hit is None:
            return None
        impulse = self._params.trigger.impulse_at(hit)
        self.queue_impulse(impulse)
        logger.debug("Trigger impulse queued at (%.3f, %.3f)", hit.x, hit.y)
        return impulse

    # ------------------------------------------------------------------
    # Frame
    # ------------------------------------------------------------------

    def tick(self, vertex_heights=None) -> bool:
        """Apply pending impulses, integrate one step and write vertex heights.

        Args:
            vertex_heights: Renderer-owned height sink; the internal
                ``heights`` array is used when None

        Returns:
            True when the mesh normals must be recomputed
        """
        sink = self._heights if vertex_heights is None else vertex_heights
        with self._lock:
            check_sink(self._field, sink)
            params = self._params
            while self._pending:
                inject(self._field, self._pending.popleft(), self._positions)
            step(self._field, params)
            self.tick_count += 1
            return apply(self._field, sink, params.wave_height_scale)

    def reconfigure(self, params: SimulationParameters) -> None:
        params.validate()
        with self._lock:
            self._params = params
        logger.debug("Simulation reconfigured: %s", params)

    def reset(self) -> None:
        """Zero the field and heights, drop pending impulses and forget the pointer."""
        with self._lock:
            self._field.reset()
            self._heights.fill(0.0)
            self._pending.clear()
            self._tracker.reset()
            self.tick_count = 0
