"""Evaluate geometry trees with the manifold3d kernel."""

from __future__ import annotations

import operator
from functools import reduce
from typing import Union

import numpy as np
from manifold3d import CrossSection, Error, Manifold, Mesh as ManifoldMesh

from weaseltoon.cache import LRUCache
from weaseltoon.mesh import Mesh
from weaseltoon.mesh_quality import MeshQuality, apply_lod

from .loft import interpolate_layers, loft_mesh, resample_loop
from .node import Boolean, Extrude, Geometry, Loft, Primitive, Tag, Transform

Solid = Union[Manifold, CrossSection]

_BOOLEAN_OPERATORS = {
    "union": operator.add,
    "difference": operator.sub,
    "intersection": operator.xor,
}


class GeometryError(RuntimeError):
    """Raised when the kernel cannot produce a valid solid for a tree."""


class Evaluator:
    """Turns a geometry tree into manifold3d objects.

    Results are memoised per node, so repeated identical subtrees (the same
    straight section placed four times) are only built once.
    """

    def __init__(self, quality: MeshQuality | None = None, cache_size: int = 512) -> None:
        self.quality = apply_lod(quality or MeshQuality())
        self._cache: LRUCache[Geometry, Solid] = LRUCache(max_size=cache_size)

    def evaluate(self, node: Geometry) -> Solid:
        cached = self._cache.get(node)
        if cached is not None:
            return cached
        result = self._evaluate(node)
        self._cache.set(node, result)
        return result

    def to_mesh(self, node: Geometry) -> Mesh:
        if node.dimension != 3:
            raise GeometryError("Only 3D geometry can be meshed.")
        solid = self.evaluate(node)
        _check_status(solid)
        if solid.is_empty():
            raise GeometryError("Geometry evaluated to an empty solid.")
        mesh = _mesh_from_manifold(solid)
        color = _first_tag(node, "color")
        if color is not None:
            mesh.color = tuple(color)
        mesh.metadata["materials"] = sorted({str(n.value) for n in node.walk() if isinstance(n, Tag) and n.key == "material"})
        mesh.metadata["fingerprint"] = node.fingerprint()
        return mesh

    # Internal helpers -----------------------------------------------------

    def _segments(self, primitive: Primitive) -> int:
        segments = primitive.param("segments")
        if segments is None:
            return self.quality.circular_segments
        return max(int(segments), 3)

    def _evaluate(self, node: Geometry) -> Solid:
        if isinstance(node, Primitive):
            return self._primitive(node)
        if isinstance(node, Transform):
            return self._transform(node)
        if isinstance(node, Boolean):
            operands = [self.evaluate(child) for child in node.operands]
            return reduce(_BOOLEAN_OPERATORS[node.op], operands)
        if isinstance(node, Extrude):
            return _extrude(self.evaluate(node.profile), node.height)
        if isinstance(node, Loft):
            return self._loft(node)
        if isinstance(node, Tag):
            return self.evaluate(node.child)
        raise TypeError(f"Unsupported geometry node {type(node).__name__}.")

    def _primitive(self, node: Primitive) -> Solid:
        shape = node.shape
        if shape == "box":
            return Manifold.cube(node.param("size"), node.param("center", False))
        if shape == "cylinder":
            radius = node.param("radius")
            return Manifold.cylinder(
                node.param("height"),
                radius,
                radius,
                self._segments(node),
                node.param("center", False),
            )
        if shape == "sphere":
            return Manifold.sphere(node.param("radius"), self._segments(node))
        if shape == "circle":
            return CrossSection.circle(node.param("radius"), self._segments(node))
        if shape == "rectangle":
            return CrossSection.square(node.param("size"), node.param("center", False))
        if shape == "polygon":
            points = np.asarray(node.param("points"), dtype=float)
            return CrossSection([points])
        raise TypeError(f"Unsupported primitive '{shape}'.")

    def _transform(self, node: Transform) -> Solid:
        child = self.evaluate(node.child)
        op = node.op
        if op == "translate":
            return child.translate(node.param("offset"))
        if op == "rotate":
            angles = node.param("angles")
            if isinstance(child, CrossSection):
                return child.rotate(angles[0])
            return child.rotate(angles)
        if op == "scale":
            return child.scale(node.param("factors"))
        if op == "mirror":
            return child.mirror(node.param("normal"))
        if op == "align":
            return child.translate(_alignment_offset(child, node.param("anchors")))
        raise TypeError(f"Unsupported transform '{op}'.")

    def _loft(self, node: Loft) -> Manifold:
        samples = self.quality.circular_segments
        loops = []
        for _, profile in node.stations:
            polygons = self.evaluate(profile).to_polygons()
            if len(polygons) != 1:
                raise GeometryError("loft stations must be single-contour profiles.")
            loops.append(resample_loop(np.asarray(polygons[0], dtype=float), samples))
        heights = [z for z, _ in node.stations]
        steps = node.steps or self.quality.loft_steps
        layers, layer_heights = interpolate_layers(loops, heights, node.interpolation, steps)
        solid = _manifold_from_mesh(loft_mesh(layers, layer_heights))
        _check_status(solid)
        return solid


def evaluate(node: Geometry, quality: MeshQuality | None = None) -> Solid:
    return Evaluator(quality).evaluate(node)


def to_mesh(node: Geometry, quality: MeshQuality | None = None) -> Mesh:
    return Evaluator(quality).to_mesh(node)


def bounds(node: Geometry, quality: MeshQuality | None = None) -> tuple[float, ...]:
    """Bounding box as (xmin, xmax, ymin, ymax[, zmin, zmax])."""

    solid = Evaluator(quality).evaluate(node)
    lo, hi = _bounding_box(solid)
    out: list[float] = []
    for a, b in zip(lo, hi):
        out.extend([a, b])
    return tuple(out)


def _bounding_box(solid: Solid) -> tuple[tuple[float, ...], tuple[float, ...]]:
    if isinstance(solid, CrossSection):
        box = tuple(float(v) for v in solid.bounds())
        return box[:2], box[2:]
    box = tuple(float(v) for v in solid.bounding_box())
    return box[:3], box[3:]


def _alignment_offset(solid: Solid, anchors: tuple[str, ...]) -> tuple[float, ...]:
    lo, hi = _bounding_box(solid)
    offset = []
    for axis, anchor in enumerate(anchors):
        if anchor == "min":
            offset.append(-lo[axis])
        elif anchor == "max":
            offset.append(-hi[axis])
        elif anchor == "center":
            offset.append(-(lo[axis] + hi[axis]) / 2.0)
        else:
            offset.append(0.0)
    return tuple(offset)


def _extrude(cross_section: CrossSection, height: float) -> Manifold:
    if hasattr(Manifold, "extrude"):
        return Manifold.extrude(cross_section, height)
    return cross_section.extrude(height)


def _check_status(solid: Solid) -> None:
    if not isinstance(solid, Manifold):
        return
    status = solid.status()
    if status != Error.NoError:
        raise GeometryError(f"Kernel reported {getattr(status, 'name', status)}.")


def _first_tag(node: Geometry, key: str):
    for item in node.walk():
        if isinstance(item, Tag) and item.key == key:
            return item.value
    return None


def _manifold_from_mesh(mesh: Mesh) -> Manifold:
    vertices = np.asarray(mesh.vertices, dtype=np.float32)
    faces = np.asarray(mesh.faces, dtype=np.uint32)
    try:
        manifold_mesh = ManifoldMesh(vertices, faces)
    except TypeError:
        manifold_mesh = ManifoldMesh(vert_properties=vertices, tri_verts=faces)
    return Manifold(manifold_mesh)


def _mesh_from_manifold(manifold: Manifold) -> Mesh:
    mesh = manifold.to_mesh()
    vertices = np.asarray(mesh.vert_properties, dtype=float)[:, :3]
    faces = np.asarray(mesh.tri_verts, dtype=int)
    return Mesh(vertices, faces)


__all__ = ["Evaluator", "GeometryError", "bounds", "evaluate", "to_mesh"]
