from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

from .node import Geometry, Primitive


def _require_vec2(value: Sequence[float], label: str) -> tuple[float, float]:
    try:
        arr = np.asarray(value, dtype=float).reshape(2)
    except Exception as exc:
        raise ValueError(f"{label} must be a 2D coordinate.") from exc
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{label} must be finite.")
    return float(arr[0]), float(arr[1])


def signed_area(points: np.ndarray) -> float:
    if points.shape[0] < 3:
        return 0.0
    x = points[:, 0]
    y = points[:, 1]
    return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1)))


def make_rect(size: Sequence[float] = (1.0, 1.0), center: bool = False) -> Primitive:
    sx, sy = float(size[0]), float(size[1])
    if sx <= 0 or sy <= 0:
        raise ValueError("size must be positive.")
    return Primitive.of("rectangle", size=(sx, sy), center=bool(center))


def make_circle(radius: float = 0.5, segments: int | None = None) -> Primitive:
    if radius <= 0:
        raise ValueError("radius must be positive.")
    kwargs = {}
    if segments is not None:
        kwargs["segments"] = int(segments)
    return Primitive.of("circle", radius=float(radius), **kwargs)


def make_polygon(points: Iterable[Sequence[float]]) -> Primitive:
    """Simple polygon; stored counter-clockwise whatever the input winding."""

    pts = np.asarray([_require_vec2(p, "point") for p in points], dtype=float)
    if pts.shape[0] > 1 and np.allclose(pts[0], pts[-1]):
        pts = pts[:-1]
    if pts.shape[0] < 3:
        raise ValueError("make_polygon requires at least three points.")
    area = signed_area(pts)
    if abs(area) < 1e-12:
        raise ValueError("make_polygon requires a non-degenerate outline.")
    if area < 0:
        pts = pts[::-1]
    return Primitive.of("polygon", points=pts.tolist())


def make_ring(outer_diameter: float, inner_diameter: float, segments: int | None = None) -> Geometry:
    if inner_diameter <= 0 or outer_diameter <= inner_diameter:
        raise ValueError("outer_diameter must exceed a positive inner_diameter.")
    outer = make_circle(outer_diameter / 2.0, segments=segments)
    inner = make_circle(inner_diameter / 2.0, segments=segments)
    return outer.subtracting(inner)


__all__ = ["make_circle", "make_polygon", "make_rect", "make_ring", "signed_area"]
