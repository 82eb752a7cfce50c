"""
Double-buffered scalar height field.

The field holds the surface height at tick t ("current") and t-1
("previous") as two flat row-major buffers, index ``i = row * width + col``.
Both buffers live in a two-slot list; a role index says which slot is
current, so swapping never copies elements.
"""

from __future__ import annotations

import numpy as np

from ripplesurf.errors import IndexOutOfRange, InvalidDimensions, TopologyMismatch


def _check_dimension(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidDimensions(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise InvalidDimensions(f"{name} must be positive, got {value}")
    return int(value)


class GridField:
    """Two equal-length float buffers plus the grid topology.

    Attributes:
        width: Number of columns (row stride)
        height: Number of rows
        size: width * height
    """

    def __init__(self, width: int, height: int, dtype=np.float64):
        self.width = _check_dimension("width", width)
        self.height = _check_dimension("height", height)
        self.size = self.width * self.height
        self.dtype = np.dtype(dtype)
        if self.dtype.kind != "f":
            raise InvalidDimensions(f"buffers must be floating point, got {self.dtype}")
        self._buffers = [
            np.zeros(self.size, dtype=self.dtype),
            np.zeros(self.size, dtype=self.dtype),
        ]
        self._current = 0

    @classmethod
    def for_vertex_count(cls, width: int, vertex_count: int, dtype=np.float64) -> GridField:
        """Build a field for a mesh of ``vertex_count`` vertices laid out ``width`` per row.

        Raises:
            TopologyMismatch: If width does not evenly divide vertex_count
        """
        width = _check_dimension("width", width)
        vertex_count = _check_dimension("vertex_count", vertex_count)
        height, remainder = divmod(vertex_count, width)
        if remainder or height == 0:
            raise TopologyMismatch(
                f"width {width} does not divide vertex count {vertex_count}"
            )
        return cls(width, height, dtype=dtype)

    @property
    def buffer_current(self) -> np.ndarray:
        return self._buffers[self._current]

    @property
    def buffer_previous(self) -> np.ndarray:
        return self._buffers[1 - self._current]

    @property
    def shape(self) -> tuple[int, int]:
        return (self.height, self.width)

    def __len__(self) -> int:
        return self.size

    def swap(self) -> None:
        """Exchange the roles of the current and previous buffers."""
        self._current = 1 - self._current

    def _check_index(self, i) -> int:
        if isinstance(i, bool) or not isinstance(i, (int, np.integer)):
            raise IndexOutOfRange(f"index must be an integer, got {i!r}")
        if not 0 <= i < self.size:
            raise IndexOutOfRange(f"index {i} outside [0, {self.size})")
        return int(i)

    def get(self, i: int) -> float:
        return float(self.buffer_current[self._check_index(i)])

    def set(self, i: int, value: float) -> None:
        self.buffer_current[self._check_index(i)] = value

    def reset(self) -> None:
        """Zero both buffers in place."""
        for buf in self._buffers:
            buf.fill(0.0)

    def as_grid(self) -> np.ndarray:
        """(height, width) view of the current buffer. Shares memory."""
        return self.buffer_current.reshape(self.shape)

    def __repr__(self) -> str:
        return f"GridField(width={self.width}, height={self.height}, dtype={self.dtype})"
