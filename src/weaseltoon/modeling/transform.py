from __future__ import annotations

from typing import Sequence

from .node import Anchor, Axis, Geometry


def translate(geometry: Geometry, offset: Sequence[float]) -> Geometry:
    """Return a translated copy of the geometry."""
    values = [float(v) for v in offset]
    return geometry.translated(*values)


def rotate(geometry: Geometry, angles_deg: Sequence[float]) -> Geometry:
    """Return a copy rotated by Euler angles (x, y, z) in degrees."""
    values = [float(v) for v in angles_deg]
    if geometry.dimension == 2 and len(values) == 1:
        return geometry.rotated(z=values[0])
    return geometry.rotated(*values)


def scale(geometry: Geometry, factors: Sequence[float]) -> Geometry:
    values = [float(v) for v in factors]
    return geometry.scaled(*values)


def mirror(geometry: Geometry, axis: Axis) -> Geometry:
    return geometry.mirrored(axis)


def align(
    geometry: Geometry,
    x: Anchor | None = None,
    y: Anchor | None = None,
    z: Anchor | None = None,
) -> Geometry:
    return geometry.aligned(x=x, y=y, z=z)


__all__ = ["align", "mirror", "rotate", "scale", "translate"]
