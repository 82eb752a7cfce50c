#!/usr/bin/env python
"""
Headless ripple demo.

Drives a RippleSimulation with a synthetic pointer sweeping a Lissajous path
over the plane, fires a trigger impulse every ``--trigger-every`` frames, and
saves a strip of height snapshots.

    PYTHONPATH=. python scripts/ripple_demo.py --frames 120 --output renders/ripples.png

The ray caster here is an orthographic stand-in for the renderer's: NDC maps
linearly onto the plane and every pointer inside [-1, 1] hits it.
"""

from __future__ import annotations

import argparse
import logging
import math
from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from ripplesurf import CursorBump, RippleSimulation, SimulationParameters, load_parameters
from ripplesurf.geometry import plane_grid_shape, plane_positions
from ripplesurf import defaults

logger = logging.getLogger("ripple_demo")


def make_ray_caster(size_x: float, size_y: float):
    def ray_caster(x_ndc: float, y_ndc: float):
        if abs(x_ndc) > 1.0 or abs(y_ndc) > 1.0:
            return None
        return (x_ndc * size_x / 2, y_ndc * size_y / 2, 0.0)
    return ray_caster


def pointer_path(frame: int, frames: int) -> tuple[float, float]:
    t = 2 * math.pi * frame / max(1, frames)
    return 0.7 * math.sin(2 * t), 0.7 * math.sin(3 * t + 0.5)


def run_ripples(params: SimulationParameters, frames: int, trigger_every: int,
                snapshots: int, dt: float) -> list[np.ndarray]:
    size_x, size_y = defaults.DEFAULT_PLANE_SIZE
    seg_x, seg_y = defaults.DEFAULT_PLANE_SEGMENTS
    sim = RippleSimulation.from_plane(size_x, size_y, seg_x, seg_y, params=params)
    ray_caster = make_ray_caster(size_x, size_y)

    keep = set(np.linspace(0, frames - 1, snapshots).astype(int).tolist())
    out = []
    for frame in range(frames):
        x, y = pointer_path(frame, frames)
        velocity = sim.pointer_moved(x, y, ray_caster, now=frame * dt)
        if trigger_every and frame % trigger_every == 0:
            sim.trigger(x, y, ray_caster)
        sim.tick()
        if frame in keep:
            logger.info("frame %d: speed=%.2f max|h|=%.4f", frame, velocity.speed,
                        float(np.abs(sim.heights).max()))
            out.append(sim.heights.reshape(sim.field.shape).copy())
    return out


def run_bump(frames: int, snapshots: int) -> list[np.ndarray]:
    size_x, size_y = defaults.DEFAULT_PLANE_SIZE
    seg_x, seg_y = defaults.DEFAULT_PLANE_SEGMENTS
    width, height = plane_grid_shape(seg_x, seg_y)
    positions = plane_positions(size_x, size_y, seg_x, seg_y)
    heights = np.zeros(width * height)
    ray_caster = make_ray_caster(size_x, size_y)
    bump = CursorBump()

    keep = set(np.linspace(0, frames - 1, snapshots).astype(int).tolist())
    out = []
    for frame in range(frames):
        bump.update(heights, positions, ray_caster(*pointer_path(frame, frames)))
        if frame in keep:
            out.append(heights.reshape(height, width).copy())
    return out


def positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return value


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--mode", choices=["ripple", "bump"], default="ripple")
    parser.add_argument("--params", type=Path, default=None, help="JSON parameter file.")
    parser.add_argument("--frames", type=positive_int, default=120)
    parser.add_argument("--snapshots", type=positive_int, default=4)
    parser.add_argument("--trigger-every", type=int, default=30)
    parser.add_argument("--dt", type=float, default=1.0 / 60.0, help="Seconds per frame.")
    parser.add_argument("--backend", choices=list(defaults.BACKEND_CHOICES), default=None)
    parser.add_argument("--output", type=Path, default=Path("renders/ripples.png"))
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    if args.mode == "ripple":
        params = load_parameters(args.params) if args.params else SimulationParameters()
        if args.backend:
            params = params.with_changes(backend=args.backend)
        frames = run_ripples(params, args.frames, args.trigger_every, args.snapshots, args.dt)
    else:
        frames = run_bump(args.frames, args.snapshots)

    fig, axes = plt.subplots(1, len(frames), figsize=(3 * len(frames), 4), squeeze=False)
    limit = max(float(np.abs(f).max()) for f in frames) or 1.0
    for ax, heights in zip(axes[0], frames):
        ax.imshow(heights, cmap="twilight_shifted", vmin=-limit, vmax=limit)
        ax.set_axis_off()
    fig.tight_layout()
    args.output.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(args.output, dpi=120)
    logger.info("Saved %s", args.output)


if __name__ == "__main__":
    main()
