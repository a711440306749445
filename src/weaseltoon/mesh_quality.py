from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal

MeshLOD = Literal["preview", "final"]


@dataclass(frozen=True)
class MeshQuality:
    """Controls tessellation density and runtime cost."""

    circular_segments: int = 64
    loft_steps: int = 8
    lod: MeshLOD = "final"


def apply_lod(quality: MeshQuality) -> MeshQuality:
    if quality.lod == "final":
        return quality
    if quality.lod != "preview":
        raise ValueError("lod must be 'preview' or 'final'.")
    return replace(
        quality,
        circular_segments=max(12, int(quality.circular_segments * 0.5)),
        loft_steps=max(2, int(quality.loft_steps * 0.5)),
    )
