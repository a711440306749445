"""Dimension table for the boat model. Every length is in inches.

The values are configuration, not derived facts: earlier iterations of the
model disagreed on several of them (beam flange width, auxiliary straight
count), so operators override them through a JSON mapping instead of editing
code.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping


@dataclass(frozen=True)
class FloatDimensions:
    diameter: float
    nose_cone_length: float
    straight_length: float
    straight_count: int
    channel_count: int = 0
    channel_width: float = 1.5
    channel_spacing: float = 9.0
    channel_depth: float = 0.75
    has_front_nose: bool = True
    has_rear_nose: bool = False

    @property
    def radius(self) -> float:
        return self.diameter / 2.0

    @property
    def total_length(self) -> float:
        noses = int(self.has_front_nose) + int(self.has_rear_nose)
        return self.nose_cone_length * noses + self.straight_length * self.straight_count


@dataclass(frozen=True)
class RibDimensions:
    spacing: float = 6.0
    height: float = 0.5
    outset: float = 0.3
    inset: float = 0.1


@dataclass(frozen=True)
class MainBeamDimensions:
    """T extrusion that sits in the main float channels."""

    width: float = 2.5
    height: float = 2.0
    flange_thickness: float = 0.25
    stem_width: float = 0.5


@dataclass(frozen=True)
class HatChannelDimensions:
    height: float = 2.0
    top_width: float = 2.0
    bottom_width: float = 3.5
    flange_width: float = 1.25
    thickness: float = 0.125

    @property
    def footprint(self) -> float:
        return self.bottom_width + 2.0 * self.flange_width


@dataclass(frozen=True)
class SquareTubeDimensions:
    size: float = 2.0
    wall: float = 0.125


@dataclass(frozen=True)
class BracketDimensions:
    thickness: float = 0.25
    width: float = 2.0
    tab_length: float = 2.0


@dataclass(frozen=True)
class TransomDimensions:
    width: float = 24.0
    height: float = 14.0
    depth: float = 3.0
    cap_thickness: float = 0.125
    cap_rim: float = 0.25


@dataclass(frozen=True)
class LayoutDimensions:
    boat_length: float = 180.0
    main_center_to_center: float = 74.0
    crossmember_count: int = 9
    crossmember_start: float = 3.0
    crossmember_overhang: float = 5.0
    bow_tube_setback: float = 2.0
    aux_lateral_spacing: float = 22.0
    aux_stern_offset: float = 4.0
    aux_bow_offset: float = 92.0
    aux_recess: float = 5.0
    transom_setback: float = 5.0


def _main_float() -> FloatDimensions:
    return FloatDimensions(
        diameter=27.0,
        nose_cone_length=35.4,
        straight_length=36.0,
        straight_count=4,
        channel_count=2,
        has_front_nose=True,
        has_rear_nose=False,
    )


def _aux_float() -> FloatDimensions:
    return FloatDimensions(
        diameter=18.0,
        nose_cone_length=24.0,
        straight_length=36.0,
        straight_count=1,
        channel_count=1,
        has_front_nose=True,
        has_rear_nose=True,
    )


@dataclass(frozen=True)
class BoatDimensions:
    main: FloatDimensions = field(default_factory=_main_float)
    aux: FloatDimensions = field(default_factory=_aux_float)
    ribs: RibDimensions = field(default_factory=RibDimensions)
    main_beam: MainBeamDimensions = field(default_factory=MainBeamDimensions)
    hat_channel: HatChannelDimensions = field(default_factory=HatChannelDimensions)
    square_tube: SquareTubeDimensions = field(default_factory=SquareTubeDimensions)
    bracket: BracketDimensions = field(default_factory=BracketDimensions)
    transom: TransomDimensions = field(default_factory=TransomDimensions)
    layout: LayoutDimensions = field(default_factory=LayoutDimensions)

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return asdict(self)

    @classmethod
    def from_mapping(cls, overrides: Mapping[str, Any] | None = None) -> "BoatDimensions":
        """Merge a nested ``{group: {field: value}}`` mapping over the defaults."""

        dims = cls()
        if not overrides:
            return dims
        groups = {f.name for f in fields(cls)}
        updates: dict[str, Any] = {}
        for group_name, values in overrides.items():
            if group_name.startswith("_"):
                continue
            if group_name not in groups:
                raise ValueError(f"Unknown dimension group '{group_name}'.")
            if not isinstance(values, Mapping):
                raise ValueError(f"Dimension group '{group_name}' must be a mapping.")
            updates[group_name] = _replace_group(getattr(dims, group_name), group_name, values)
        return replace(dims, **updates)

    def validate(self) -> "BoatDimensions":
        for group_name, group in self.to_dict().items():
            for name, value in group.items():
                if isinstance(value, bool):
                    continue
                if name in ("channel_count", "straight_count", "crossmember_count"):
                    continue
                if not value > 0:
                    raise ValueError(f"{group_name}.{name} must be positive (got {value}).")
        for label, float_dims in (("main", self.main), ("aux", self.aux)):
            if float_dims.straight_count < 1:
                raise ValueError(f"{label}.straight_count must be >= 1.")
            if float_dims.channel_count not in (0, 1, 2):
                raise ValueError(f"{label}.channel_count must be 0, 1 or 2.")
            if float_dims.channel_count > 0 and float_dims.channel_depth >= float_dims.radius:
                raise ValueError(f"{label}.channel_depth must be less than the float radius.")
        if self.layout.crossmember_count < 1:
            raise ValueError("layout.crossmember_count must be >= 1.")
        return self


def _replace_group(group: Any, group_name: str, values: Mapping[str, Any]) -> Any:
    known = {f.name for f in fields(group)}
    changes: dict[str, Any] = {}
    for name, value in values.items():
        if name not in known:
            raise ValueError(f"Unknown dimension '{group_name}.{name}'.")
        current = getattr(group, name)
        if isinstance(current, bool):
            if not isinstance(value, bool):
                raise ValueError(f"{group_name}.{name} must be true or false.")
            changes[name] = value
        elif isinstance(current, int):
            if isinstance(value, bool) or not isinstance(value, (int, float)) or int(value) != value:
                raise ValueError(f"{group_name}.{name} must be an integer.")
            changes[name] = int(value)
        else:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{group_name}.{name} must be a number.")
            changes[name] = float(value)
    return replace(group, **changes)


def default_dimensions() -> BoatDimensions:
    return BoatDimensions()


def load_dimensions(path: Path | str | None) -> BoatDimensions:
    """Read a JSON override file; ``None`` returns the defaults."""

    if path is None:
        return default_dimensions().validate()
    path = Path(path)
    try:
        raw = json.loads(path.read_text())
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(raw, Mapping):
        raise ValueError(f"{path} must contain a JSON object.")
    return BoatDimensions.from_mapping(raw).validate()


__all__ = [
    "BoatDimensions",
    "BracketDimensions",
    "FloatDimensions",
    "HatChannelDimensions",
    "LayoutDimensions",
    "MainBeamDimensions",
    "RibDimensions",
    "SquareTubeDimensions",
    "TransomDimensions",
    "default_dimensions",
    "load_dimensions",
]
