"""
Reference vertex lattice for a segmented plane.

Vertices are ordered the way a typical ``PlaneGeometry(size_x, size_y,
segments_x, segments_y)`` lays them out: row-major, first row at +y/2, x
increasing along each row. The grid therefore has ``segments_x + 1`` columns
and ``segments_y + 1`` rows, and ``width`` is the row stride for the field.
"""

import numpy as np

from ripplesurf.errors import InvalidDimensions


def plane_positions(size_x: float, size_y: float, segments_x: int, segments_y: int) -> np.ndarray:
    """
    (x, y) reference coordinates of every vertex of a plane centred on the origin.

    Args:
        size_x: Plane extent along x (world units)
        size_y: Plane extent along y (world units)
        segments_x: Number of quads along x
        segments_y: Number of quads along y

    Returns:
        Array of shape ((segments_y + 1) * (segments_x + 1), 2)
    """
    if segments_x < 1 or segments_y < 1:
        raise InvalidDimensions(f"plane needs at least one segment, got {segments_x}x{segments_y}")
    if not (size_x > 0 and size_y > 0):
        raise InvalidDimensions(f"plane size must be positive, got {size_x}x{size_y}")
    xs = np.linspace(-size_x / 2, size_x / 2, int(segments_x) + 1)
    ys = np.linspace(size_y / 2, -size_y / 2, int(segments_y) + 1)
    gx, gy = np.meshgrid(xs, ys)
    return np.column_stack([gx.ravel(), gy.ravel()])


def lattice_positions(width: int, height: int, spacing: float = 1.0,
                      origin: tuple[int, int] = (0, 0)) -> np.ndarray:
    """
    Uniform lattice with cell (col, row) at ``((col - origin_col) * spacing, (row - origin_row) * spacing)``.

    Handy when a specific cell should sit exactly on the world origin.
    """
    if width <= 0 or height <= 0:
        raise InvalidDimensions(f"lattice must be at least 1x1, got {width}x{height}")
    cols = (np.arange(width) - origin[0]) * spacing
    rows = (np.arange(height) - origin[1]) * spacing
    gx, gy = np.meshgrid(cols, rows)
    return np.column_stack([gx.ravel(), gy.ravel()]).astype(np.float64)


def plane_grid_shape(segments_x: int, segments_y: int) -> tuple[int, int]:
    """(width, height) of the vertex grid for a plane with the given segment counts."""
    return int(segments_x) + 1, int(segments_y) + 1
