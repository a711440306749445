from __future__ import annotations

from typing import Callable, Sequence

import numpy as np

from weaseltoon.mesh import Mesh

from .drawing2d import signed_area
from .node import Geometry, Loft

Curve = Callable[[np.ndarray], np.ndarray]


def _linear(t: np.ndarray) -> np.ndarray:
    return t


def _ease_in_out(t: np.ndarray) -> np.ndarray:
    return t * t * (3.0 - 2.0 * t)


def _smootherstep(t: np.ndarray) -> np.ndarray:
    return t * t * t * (t * (6.0 * t - 15.0) + 10.0)


INTERPOLATIONS: dict[str, Curve] = {
    "linear": _linear,
    "ease_in_out": _ease_in_out,
    "smootherstep": _smootherstep,
}


def loft(
    stations: Sequence[tuple[float, Geometry]],
    interpolation: str = "linear",
    steps: int | None = None,
) -> Loft:
    """Loft through 2D profiles placed at increasing Z stations.

    ``steps`` is the number of layers generated per gap between stations;
    ``None`` defers to the tessellation quality at evaluation time. Linear
    interpolation needs no intermediate layers.
    """

    if len(stations) < 2:
        raise ValueError("loft requires at least two stations.")
    if interpolation not in INTERPOLATIONS:
        raise ValueError(f"interpolation must be one of {sorted(INTERPOLATIONS)}.")
    frozen: list[tuple[float, Geometry]] = []
    previous: float | None = None
    for z, profile in stations:
        z = float(z)
        if profile.dimension != 2:
            raise ValueError("loft stations must be 2D profiles.")
        if previous is not None and z <= previous:
            raise ValueError("loft station heights must be strictly increasing.")
        frozen.append((z, profile))
        previous = z
    if steps is not None and int(steps) < 1:
        raise ValueError("steps must be >= 1.")
    resolved_steps = 1 if interpolation == "linear" else (0 if steps is None else int(steps))
    return Loft(stations=tuple(frozen), interpolation=interpolation, steps=resolved_steps)


def resample_loop(points: np.ndarray, count: int) -> np.ndarray:
    """Resample a closed loop to ``count`` points evenly spaced by arc length.

    The loop is made counter-clockwise and starts at the vertex closest to
    angle zero around its centroid, so loops of similar shapes line up.
    """

    if count < 3:
        raise ValueError("loop sample count must be >= 3.")
    pts = np.asarray(points, dtype=float).reshape(-1, 2)
    if pts.shape[0] > 1 and np.allclose(pts[0], pts[-1]):
        pts = pts[:-1]
    if pts.shape[0] < 3:
        raise ValueError("loop requires at least three points.")
    if signed_area(pts) < 0:
        pts = pts[::-1]
    center = pts.mean(axis=0)
    angles = np.arctan2(pts[:, 1] - center[1], pts[:, 0] - center[0])
    pts = np.roll(pts, -int(np.argmin(np.abs(angles))), axis=0)

    closed = np.vstack([pts, pts[:1]])
    seg_lengths = np.linalg.norm(np.diff(closed, axis=0), axis=1)
    cumulative = np.concatenate([[0.0], np.cumsum(seg_lengths)])
    total = float(cumulative[-1])
    if total == 0:
        raise ValueError("loop has zero length.")
    targets = np.linspace(0.0, total, count, endpoint=False)
    x = np.interp(targets, cumulative, closed[:, 0])
    y = np.interp(targets, cumulative, closed[:, 1])
    return np.column_stack([x, y])


def interpolate_layers(
    loops: Sequence[np.ndarray],
    heights: Sequence[float],
    interpolation: str,
    steps: int,
) -> tuple[list[np.ndarray], list[float]]:
    """Insert ``steps - 1`` eased layers between each pair of stations."""

    curve = INTERPOLATIONS[interpolation]
    steps = max(int(steps), 1)
    t = np.arange(steps, dtype=float) / steps
    eased = curve(t)
    out_loops: list[np.ndarray] = []
    out_heights: list[float] = []
    for idx in range(len(loops) - 1):
        a, b = loops[idx], loops[idx + 1]
        za, zb = float(heights[idx]), float(heights[idx + 1])
        for frac, weight in zip(t, eased):
            out_loops.append(a + (b - a) * weight)
            out_heights.append(za + (zb - za) * frac)
    out_loops.append(np.asarray(loops[-1], dtype=float))
    out_heights.append(float(heights[-1]))
    return out_loops, out_heights


def loft_mesh(loops: Sequence[np.ndarray], heights: Sequence[float]) -> Mesh:
    """Skin counter-clockwise loops stacked along +Z and fan-cap both ends."""

    if len(loops) < 2:
        raise ValueError("loft_mesh requires at least two layers.")
    samples = loops[0].shape[0]
    for loop in loops:
        if loop.shape != (samples, 2):
            raise ValueError("All loft layers must have the same number of points.")

    rings = [np.column_stack([loop, np.full(samples, z)]) for loop, z in zip(loops, heights)]
    bottom_center = np.append(loops[0].mean(axis=0), heights[0])
    top_center = np.append(loops[-1].mean(axis=0), heights[-1])
    vertices = np.vstack(rings + [bottom_center, top_center])
    bottom_idx = len(rings) * samples
    top_idx = bottom_idx + 1

    i = np.arange(samples)
    j = (i + 1) % samples
    faces = []
    for layer in range(len(rings) - 1):
        a0 = layer * samples + i
        a1 = layer * samples + j
        b0 = (layer + 1) * samples + i
        b1 = (layer + 1) * samples + j
        faces.append(np.column_stack([a0, a1, b1]))
        faces.append(np.column_stack([a0, b1, b0]))

    last = (len(rings) - 1) * samples
    faces.append(np.column_stack([np.full(samples, bottom_idx), j, i]))
    faces.append(np.column_stack([np.full(samples, top_idx), last + i, last + j]))
    return Mesh(vertices, np.vstack(faces))


__all__ = ["INTERPOLATIONS", "interpolate_layers", "loft", "loft_mesh", "resample_loop"]
