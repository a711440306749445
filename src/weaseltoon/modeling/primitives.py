from __future__ import annotations

from typing import Sequence

from .node import Primitive


def _positive(value: float, label: str) -> float:
    value = float(value)
    if value <= 0:
        raise ValueError(f"{label} must be positive.")
    return value


def make_box(size: Sequence[float] = (1.0, 1.0, 1.0), center: bool = False) -> Primitive:
    """Axis-aligned box (dx, dy, dz); min corner at the origin unless ``center``."""

    sx, sy, sz = (float(v) for v in size)
    for label, value in (("size x", sx), ("size y", sy), ("size z", sz)):
        _positive(value, label)
    return Primitive.of("box", size=(sx, sy, sz), center=bool(center))


def make_cylinder(
    radius: float = 0.5,
    height: float = 1.0,
    center: bool = False,
    segments: int | None = None,
) -> Primitive:
    """Right circular cylinder along +Z, base on the XY plane unless ``center``."""

    kwargs = {}
    if segments is not None:
        kwargs["segments"] = int(segments)
    return Primitive.of(
        "cylinder",
        radius=_positive(radius, "radius"),
        height=_positive(height, "height"),
        center=bool(center),
        **kwargs,
    )


def make_sphere(radius: float = 0.5, segments: int | None = None) -> Primitive:
    kwargs = {}
    if segments is not None:
        kwargs["segments"] = int(segments)
    return Primitive.of("sphere", radius=_positive(radius, "radius"), **kwargs)


__all__ = ["make_box", "make_cylinder", "make_sphere"]
