"""Surface sync: copy integrated heights into renderer-owned vertex storage."""

from __future__ import annotations

from typing import Callable, Optional

import numpy as np

from ripplesurf.errors import TopologyMismatch
from ripplesurf.field import GridField


def check_sink(field: GridField, vertex_heights) -> None:
    """Raise TopologyMismatch unless ``vertex_heights`` holds exactly ``field.size`` entries."""
    count = vertex_heights.size if isinstance(vertex_heights, np.ndarray) else len(vertex_heights)
    if count != field.size:
        raise TopologyMismatch(
            f"height sink has {count} entries, field has {field.size}"
        )


def apply(field: GridField, vertex_heights, scale: float) -> bool:
    """Write ``buffer_current * scale`` into ``vertex_heights``.

    ``vertex_heights`` is any mutable sequence of length ``field.size``;
    ndarrays are written in place without a temporary. Returns True, meaning
    the mesh normals and position attribute are now stale; recomputing them
    is the renderer's job.
    """
    check_sink(field, vertex_heights)
    is_array = isinstance(vertex_heights, np.ndarray)
    current = field.buffer_current
    if is_array:
        np.multiply(current.reshape(vertex_heights.shape), scale,
                    out=vertex_heights, casting="same_kind")
    else:
        for i, value in enumerate((current * scale).tolist()):
            vertex_heights[i] = value
    return True


class SurfaceSync:
    """``apply`` bound to a scale, with an optional dirty callback.

    Args:
        scale: Multiplier from field value to vertex height
        on_dirty: Called after each write (e.g. to flag the position
            attribute and recompute normals)
    """

    def __init__(self, scale: float = 1.0, on_dirty: Optional[Callable[[], None]] = None):
        self.scale = scale
        self.on_dirty = on_dirty

    def __call__(self, field: GridField, vertex_heights) -> bool:
        dirty = apply(field, vertex_heights, self.scale)
        if dirty and self.on_dirty is not None:
            self.on_dirty()
        return dirty
