"""Compare the numba loop vs scipy.convolve integrator backends on a full-size plane."""

import time

import numpy as np

from ripplesurf import GridField, SimulationParameters, step
from ripplesurf.geometry import plane_grid_shape

SEGMENTS = (180, 252)
STEPS = 200

width, height = plane_grid_shape(*SEGMENTS)
print(f"Grid: {width} x {height} ({width * height} cells)\n")

rng = np.random.default_rng(42)
initial = rng.standard_normal(width * height) * 0.1


def run(backend: str) -> tuple[float, np.ndarray]:
    field = GridField(width, height)
    field.buffer_current[:] = initial
    params = SimulationParameters(backend=backend)
    step(field, params)  # warmup (JIT compile for numba)
    field.reset()
    field.buffer_current[:] = initial

    t0 = time.perf_counter()
    for _ in range(STEPS):
        step(field, params)
    return time.perf_counter() - t0, field.buffer_current.copy()


results = {}
for backend in ("scipy", "numba"):
    elapsed, final = run(backend)
    results[backend] = (elapsed, final)
    print(f"{backend}:")
    print(f"  {STEPS} steps: {elapsed:.3f}s ({elapsed / STEPS * 1000:.2f}ms/step)")

print("\n" + "=" * 60)
max_diff = np.max(np.abs(results["scipy"][1] - results["numba"][1]))
print(f"Max |scipy - numba|: {max_diff:.3e}")
print(f"Speedup: {results['scipy'][0] / results['numba'][0]:.1f}x")
