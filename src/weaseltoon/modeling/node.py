"""Immutable CSG composition tree.

Every node is a frozen dataclass. Operations never mutate an operand; they
wrap it in a new node, so a tree built twice from the same inputs compares
equal and yields the same :meth:`Geometry.fingerprint`.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from typing import Any, Iterator, Literal, Sequence, Tuple

from ._color import normalize_color

Anchor = Literal["min", "center", "max"]
Axis = Literal["x", "y", "z"]
Params = Tuple[Tuple[str, Any], ...]

SHAPES_3D = frozenset({"box", "cylinder", "sphere"})
SHAPES_2D = frozenset({"circle", "rectangle", "polygon"})
TRANSFORM_OPS = frozenset({"translate", "rotate", "scale", "mirror", "align"})
BOOLEAN_OPS = frozenset({"union", "difference", "intersection"})
ANCHORS = ("min", "center", "max")
_AXIS_NORMALS = {
    "x": (1.0, 0.0, 0.0),
    "y": (0.0, 1.0, 0.0),
    "z": (0.0, 0.0, 1.0),
}


def _freeze(value: Any) -> Any:
    if isinstance(value, bool) or value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, dict):
        raise TypeError("Geometry parameters must not be mappings.")
    try:
        items = list(value)
    except TypeError as exc:
        raise TypeError(f"Unsupported geometry parameter {value!r}.") from exc
    return tuple(_freeze(item) for item in items)


def _params(**kwargs: Any) -> Params:
    return tuple((key, _freeze(kwargs[key])) for key in sorted(kwargs))


def _plain(value: Any) -> Any:
    if isinstance(value, tuple):
        return [_plain(item) for item in value]
    return value


class Geometry:
    """Base class for every node in the tree."""

    @property
    def dimension(self) -> int:  # pragma: no cover - overridden
        raise NotImplementedError

    def children(self) -> tuple["Geometry", ...]:
        return ()

    def describe(self) -> dict[str, Any]:  # pragma: no cover - overridden
        raise NotImplementedError

    def fingerprint(self) -> str:
        payload = json.dumps(self.describe(), sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()

    def walk(self) -> Iterator["Geometry"]:
        """Yield this node and all descendants depth-first, parents first."""
        yield self
        for child in self.children():
            yield from child.walk()

    def primitive_count(self) -> int:
        return sum(1 for node in self.walk() if isinstance(node, Primitive))

    # Transforms ---------------------------------------------------------

    def translated(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> "Geometry":
        if self.dimension == 2:
            if z:
                raise ValueError("2D geometry cannot be translated along z.")
            return Transform.of("translate", self, offset=(x, y))
        return Transform.of("translate", self, offset=(x, y, z))

    def rotated(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> "Geometry":
        """Rotate by Euler angles in degrees, applied x then y then z."""
        if self.dimension == 2:
            if x or y:
                raise ValueError("2D geometry can only be rotated about z.")
            return Transform.of("rotate", self, angles=(z,))
        return Transform.of("rotate", self, angles=(x, y, z))

    def scaled(self, x: float = 1.0, y: float = 1.0, z: float = 1.0) -> "Geometry":
        factors = (x, y) if self.dimension == 2 else (x, y, z)
        return Transform.of("scale", self, factors=factors)

    def mirrored(self, axis: Axis) -> "Geometry":
        """Mirror across the plane whose normal is ``axis`` (negates that coordinate)."""
        normal = _AXIS_NORMALS.get(axis)
        if normal is None:
            raise ValueError(f"axis must be one of {sorted(_AXIS_NORMALS)}.")
        if self.dimension == 2:
            if axis == "z":
                raise ValueError("2D geometry cannot be mirrored across z.")
            normal = normal[:2]
        return Transform.of("mirror", self, normal=normal)

    def symmetry(self, over: Axis) -> "Geometry":
        """Union of this geometry with its mirror image across ``over``."""
        return self.adding(self.mirrored(over))

    def aligned(self, x: Anchor | None = None, y: Anchor | None = None, z: Anchor | None = None) -> "Geometry":
        """Move the bounding box so the chosen anchor of each axis sits on the origin."""
        anchors = (x, y) if self.dimension == 2 else (x, y, z)
        if self.dimension == 2 and z is not None:
            raise ValueError("2D geometry has no z anchor.")
        for anchor in anchors:
            if anchor is not None and anchor not in ANCHORS:
                raise ValueError(f"anchor must be one of {ANCHORS}.")
        return Transform.of("align", self, anchors=tuple("none" if a is None else a for a in anchors))

    def cloned_at(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> "Geometry":
        return self.adding(self.translated(x, y, z))

    # Booleans -----------------------------------------------------------

    def adding(self, *others: "Geometry") -> "Geometry":
        if not others:
            return self
        return Boolean.of("union", self, *others)

    def subtracting(self, *others: "Geometry") -> "Geometry":
        if not others:
            return self
        return Boolean.of("difference", self, *others)

    def intersecting(self, *others: "Geometry") -> "Geometry":
        if not others:
            return self
        return Boolean.of("intersection", self, *others)

    # 2D -> 3D -----------------------------------------------------------

    def extruded(self, height: float) -> "Geometry":
        return Extrude.of(self, height)

    # Metadata -----------------------------------------------------------

    def colored(self, color: Sequence[float] | str) -> "Geometry":
        return Tag(key="color", value=normalize_color(color), child=self)

    def with_material(self, name: str) -> "Geometry":
        return Tag(key="material", value=str(name), child=self)


@dataclass(frozen=True)
class Primitive(Geometry):
    shape: str
    params: Params = ()

    @classmethod
    def of(cls, shape: str, **kwargs: Any) -> "Primitive":
        if shape not in SHAPES_3D and shape not in SHAPES_2D:
            raise ValueError(f"Unknown primitive '{shape}'.")
        return cls(shape=shape, params=_params(**kwargs))

    @property
    def dimension(self) -> int:
        return 3 if self.shape in SHAPES_3D else 2

    def param(self, name: str, default: Any = None) -> Any:
        for key, value in self.params:
            if key == name:
                return value
        return default

    def describe(self) -> dict[str, Any]:
        return {
            "node": "primitive",
            "shape": self.shape,
            "params": {key: _plain(value) for key, value in self.params},
        }


@dataclass(frozen=True)
class Transform(Geometry):
    op: str
    params: Params
    child: Geometry

    @classmethod
    def of(cls, op: str, child: Geometry, **kwargs: Any) -> "Transform":
        if op not in TRANSFORM_OPS:
            raise ValueError(f"Unknown transform '{op}'.")
        return cls(op=op, params=_params(**kwargs), child=child)

    @property
    def dimension(self) -> int:
        return self.child.dimension

    def children(self) -> tuple[Geometry, ...]:
        return (self.child,)

    def param(self, name: str, default: Any = None) -> Any:
        for key, value in self.params:
            if key == name:
                return value
        return default

    def describe(self) -> dict[str, Any]:
        return {
            "node": "transform",
            "op": self.op,
            "params": {key: _plain(value) for key, value in self.params},
            "child": self.child.describe(),
        }


@dataclass(frozen=True)
class Boolean(Geometry):
    op: str
    operands: tuple[Geometry, ...]

    @classmethod
    def of(cls, op: str, *operands: Geometry) -> "Boolean":
        if op not in BOOLEAN_OPS:
            raise ValueError(f"Unknown boolean '{op}'.")
        if not operands:
            raise ValueError(f"{op} requires at least one operand.")
        dims = {operand.dimension for operand in operands}
        if len(dims) != 1:
            raise ValueError(f"Cannot {op} 2D and 3D geometry.")
        return cls(op=op, operands=tuple(operands))

    @property
    def dimension(self) -> int:
        return self.operands[0].dimension

    def children(self) -> tuple[Geometry, ...]:
        return self.operands

    def describe(self) -> dict[str, Any]:
        return {
            "node": "boolean",
            "op": self.op,
            "operands": [operand.describe() for operand in self.operands],
        }


@dataclass(frozen=True)
class Extrude(Geometry):
    profile: Geometry
    height: float

    @classmethod
    def of(cls, profile: Geometry, height: float) -> "Extrude":
        if profile.dimension != 2:
            raise ValueError("Only 2D profiles can be extruded.")
        return cls(profile=profile, height=float(height))

    @property
    def dimension(self) -> int:
        return 3

    def children(self) -> tuple[Geometry, ...]:
        return (self.profile,)

    def describe(self) -> dict[str, Any]:
        return {"node": "extrude", "height": self.height, "profile": self.profile.describe()}


@dataclass(frozen=True)
class Loft(Geometry):
    stations: tuple[tuple[float, Geometry], ...]
    interpolation: str = "linear"
    steps: int = 0

    @property
    def dimension(self) -> int:
        return 3

    def children(self) -> tuple[Geometry, ...]:
        return tuple(profile for _, profile in self.stations)

    def describe(self) -> dict[str, Any]:
        return {
            "node": "loft",
            "interpolation": self.interpolation,
            "steps": self.steps,
            "stations": [{"z": z, "profile": profile.describe()} for z, profile in self.stations],
        }


@dataclass(frozen=True)
class Tag(Geometry):
    key: str
    value: Any
    child: Geometry

    @property
    def dimension(self) -> int:
        return self.child.dimension

    def children(self) -> tuple[Geometry, ...]:
        return (self.child,)

    def describe(self) -> dict[str, Any]:
        return {"node": "tag", "key": self.key, "value": _plain(self.value), "child": self.child.describe()}


def union(*operands: Geometry) -> Geometry:
    if len(operands) == 1:
        return operands[0]
    return Boolean.of("union", *operands)


__all__ = [
    "Anchor",
    "Axis",
    "Boolean",
    "Extrude",
    "Geometry",
    "Loft",
    "Primitive",
    "Tag",
    "Transform",
    "union",
]
