from __future__ import annotations

from typing import Iterable, Mapping, Union

from .node import Axis, Boolean, Geometry


def boolean_union(parts: Iterable[Geometry]) -> Geometry:
    sources = list(parts)
    if not sources:
        raise ValueError("boolean_union requires at least one geometry.")
    if len(sources) == 1:
        return sources[0]
    return Boolean.of("union", *sources)


def boolean_difference(base: Geometry, cutters: Iterable[Geometry]) -> Geometry:
    tools = list(cutters)
    if not tools:
        return base
    return Boolean.of("difference", base, *tools)


def boolean_intersection(parts: Iterable[Geometry]) -> Geometry:
    sources = list(parts)
    if not sources:
        raise ValueError("boolean_intersection requires at least one geometry.")
    if len(sources) == 1:
        return sources[0]
    return Boolean.of("intersection", *sources)


def symmetric(geometry: Geometry, over: Axis) -> Geometry:
    """Union of ``geometry`` and its mirror image across the plane normal to ``over``."""
    return geometry.symmetry(over)


def union_parts(parts: Union[Iterable[Geometry], Mapping[object, Geometry]]) -> Geometry:
    """Convenience wrapper around boolean_union that accepts an iterable or mapping."""

    if isinstance(parts, Mapping):
        parts = parts.values()
    return boolean_union(parts)


__all__ = ["boolean_difference", "boolean_intersection", "boolean_union", "symmetric", "union_parts"]
