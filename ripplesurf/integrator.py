"""
Leapfrog wave integrator.

One tick reads the 4-neighbour sum of the current buffer, writes the new
heights into the previous buffer and swaps the two:

    previous[i] = (spread * neighbour_sum(current, i) - previous[i]) * damping

Neighbours that would fall off the grid (left/right across a row edge, up/down
past the first/last row) are replaced by the cell's own value. Subtracting the
older buffer is what makes the field oscillate instead of merely diffusing.
"""

import numba
import numpy as np
from scipy.ndimage import convolve

from ripplesurf.errors import ConfigError
from ripplesurf.field import GridField

CROSS_STENCIL = np.array([[0, 1, 0],
                          [1, 0, 1],
                          [0, 1, 0]], dtype=np.float64)


@numba.njit(cache=True)
def leapfrog_kernel(current: np.ndarray, previous: np.ndarray, width: int,
                    spread: float, damping: float) -> None:
    """Update ``previous`` in place from ``current``, row-major over flat buffers."""
    n = current.shape[0]
    for i in range(n):
        own = current[i]
        left = current[i - 1] if i % width != 0 else own
        right = current[i + 1] if (i + 1) % width != 0 else own
        up = current[i - width] if i >= width else own
        down = current[i + width] if i < n - width else own
        raw = (left + right + up + down) * spread
        previous[i] = (raw - previous[i]) * damping


def neighbor_sum(grid: np.ndarray) -> np.ndarray:
    """4-neighbour sum of a (height, width) array with self-valued edges.

    ``mode='nearest'`` replicates the edge cell outward, which is exactly the
    cell's own value for every missing neighbour.
    """
    return convolve(grid, CROSS_STENCIL.astype(grid.dtype, copy=False), mode="nearest")


def _step_numba(field: GridField, spread: float, damping: float) -> None:
    leapfrog_kernel(field.buffer_current, field.buffer_previous, field.width,
                    spread, damping)


def _step_scipy(field: GridField, spread: float, damping: float) -> None:
    raw = neighbor_sum(field.as_grid()).ravel()
    raw *= spread
    previous = field.buffer_previous
    np.subtract(raw, previous, out=previous)
    previous *= damping


_BACKENDS = {
    "numba": _step_numba,
    "scipy": _step_scipy,
}


def step(field: GridField, params) -> None:
    """Advance ``field`` one tick using ``params.damping``/``params.spread``.

    ``params.backend`` selects the numba loop (default) or the scipy
    convolution; both implement the same update.
    """
    backend = getattr(params, "backend", "numba")
    try:
        kernel = _BACKENDS[backend]
    except KeyError:
        raise ConfigError(f"unknown integrator backend {backend!r}") from None
    kernel(field, params.spread, params.damping)
    field.swap()
