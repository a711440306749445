from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np
import pyvista as pv

RGBA = Tuple[float, float, float, float]


def normalize_color(color: Sequence[float] | str) -> RGBA:
    """Resolve a named color or an RGB(A) sequence (0-1 or 0-255) to RGBA floats."""

    if isinstance(color, str):
        col = pv.Color(color)
        r, g, b = (float(c) for c in col.float_rgb)
        return (r, g, b, 1.0)

    arr = np.asarray(color, dtype=float).flatten()
    if arr.size not in (3, 4):
        raise ValueError("Color must be RGB or RGBA.")
    if arr.max() > 1.0:
        arr = arr / 255.0
    alpha = float(arr[3]) if arr.size == 4 else 1.0
    return (float(arr[0]), float(arr[1]), float(arr[2]), alpha)
