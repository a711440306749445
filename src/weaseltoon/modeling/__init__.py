"""Modeling utilities: immutable CSG nodes, builders and the kernel bridge."""

from __future__ import annotations

from .node import Boolean, Extrude, Geometry, Loft, Primitive, Tag, Transform, union
from .primitives import make_box, make_cylinder, make_sphere
from .drawing2d import make_circle, make_polygon, make_rect, make_ring
from .transform import align, mirror, rotate, scale, translate
from .csg import boolean_difference, boolean_intersection, boolean_union, symmetric, union_parts
from .extrude import linear_extrude
from .loft import INTERPOLATIONS, loft
from .group import Repetition, repeat
from .evaluate import Evaluator, GeometryError, bounds, evaluate, to_mesh

__all__ = [
    "Boolean",
    "Evaluator",
    "Extrude",
    "Geometry",
    "GeometryError",
    "INTERPOLATIONS",
    "Loft",
    "Primitive",
    "Repetition",
    "Tag",
    "Transform",
    "align",
    "boolean_difference",
    "boolean_intersection",
    "boolean_union",
    "bounds",
    "evaluate",
    "linear_extrude",
    "loft",
    "make_box",
    "make_circle",
    "make_cylinder",
    "make_polygon",
    "make_rect",
    "make_ring",
    "make_sphere",
    "mirror",
    "repeat",
    "rotate",
    "scale",
    "symmetric",
    "to_mesh",
    "translate",
    "union",
    "union_parts",
]
