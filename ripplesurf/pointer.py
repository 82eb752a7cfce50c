"""Pointer tracking: velocity estimation and projection onto the surface."""

from __future__ import annotations

import logging
import math
import numbers
import time
from dataclasses import dataclass
from typing import Callable, NamedTuple, Optional

logger = logging.getLogger(__name__)


class WorldPoint(NamedTuple):
    x: float
    y: float
    z: float


@dataclass(frozen=True)
class VelocityEstimate:
    """Pointer velocity in NDC units per second."""
    velocity_x: float = 0.0
    velocity_y: float = 0.0
    speed: float = 0.0


ZERO_VELOCITY = VelocityEstimate()

# (ndc_x, ndc_y) -> (x, y, z) | None, or a nearest-first sequence of hits
RayCaster = Callable[[float, float], object]


@dataclass
class PointerState:
    position: tuple[float, float] = (0.0, 0.0)
    last_position: tuple[float, float] = (0.0, 0.0)
    last_timestamp: Optional[float] = None


def _as_world_point(hit) -> Optional[WorldPoint]:
    if hit is None:
        return None
    if isinstance(hit, WorldPoint):
        return hit
    # A renderer intersect list: nearest hit first, possibly empty
    first = next(iter(hit), None)
    if first is None:
        return None
    if isinstance(first, numbers.Real):
        x, y, z = hit
        return WorldPoint(float(x), float(y), float(z))
    x, y, z = first
    return WorldPoint(float(x), float(y), float(z))


class PointerTracker:
    """Tracks the last pointer sample and derives instantaneous velocity.

    Time is in seconds. ``now`` may be passed explicitly to ``sample``;
    otherwise the injected clock is read.
    """

    def __init__(self, _clock: Callable[[], float] = time.perf_counter):
        self.state = PointerState()
        self._clock = _clock

    def sample(self, x_ndc: float, y_ndc: float, now: Optional[float] = None) -> VelocityEstimate:
        """Record a pointer sample and return the velocity since the previous one.

        Velocity is zero on the first sample and whenever the elapsed time is
        not positive. The baseline always advances to the new sample.
        """
        if now is None:
            now = self._clock()
        state = self.state
        state.position = (float(x_ndc), float(y_ndc))

        last_time = state.last_timestamp
        last_x, last_y = state.last_position
        state.last_position = state.position
        state.last_timestamp = now

        if last_time is None:
            return ZERO_VELOCITY
        elapsed = now - last_time
        if elapsed <= 0:
            logger.debug("Non-positive pointer interval %.6fs, reporting zero velocity", elapsed)
            return ZERO_VELOCITY

        vx = (state.position[0] - last_x) / elapsed
        vy = (state.position[1] - last_y) / elapsed
        return VelocityEstimate(vx, vy, math.hypot(vx, vy))

    def project_to_surface(
        self,
        x_ndc: float,
        y_ndc: float,
        ray_caster: RayCaster,
    ) -> Optional[WorldPoint]:
        """Nearest intersection of the pointer ray with the surface, or None on a miss.

        The ray math belongs to the renderer; ``ray_caster`` is called with the
        NDC coordinates and may return a single ``(x, y, z)``, ``None``, or a
        nearest-first sequence of hits.
        """
        point = _as_world_point(ray_caster(x_ndc, y_ndc))
        if point is None:
            logger.debug("Pointer ray at (%.3f, %.3f) missed the surface", x_ndc, y_ndc)
        return point

    def reset(self) -> None:
        self.state = PointerState()
