from __future__ import annotations

from .node import Extrude, Geometry


def linear_extrude(profile: Geometry, height: float = 1.0) -> Extrude:
    """Extrude a 2D profile along +Z from the XY plane."""

    height = float(height)
    if height <= 0:
        raise ValueError("height must be positive.")
    return Extrude.of(profile, height)


__all__ = ["linear_extrude"]
