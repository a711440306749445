"""Primitive components of the boat.

Builders take plain numbers rather than the dimension table so the same
function serves the main and the auxiliary floats. Float parts run along +Y
with Z up; crossmember parts run along X.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from weaseltoon.modeling import (
    Geometry,
    loft,
    make_box,
    make_circle,
    make_cylinder,
    make_polygon,
    make_rect,
    make_ring,
)

FLOAT_COLOR = "orange"
FRAME_COLOR = "lightgray"
BRACKET_COLOR = "gray"
FRAME_MATERIAL = "aluminum"

# (fraction of length, fraction of diameter). The tip keeps a small non-zero
# diameter so the loft ends on a rounded face instead of a point.
NOSE_CONE_STATIONS: tuple[tuple[float, float], ...] = (
    (0.00, 1.00),
    (0.15, 1.02),
    (0.40, 0.90),
    (0.65, 0.65),
    (0.85, 0.35),
    (0.95, 0.15),
    (1.00, 0.02),
)

# Cutters overshoot the surface they open so no faces end up coplanar.
_CUT_CLEARANCE = 0.5


def _along_y(solid: Geometry, length: float) -> Geometry:
    """Turn a +Z extrusion into one spanning Y in [0, length], keeping profile Y as Z."""
    return solid.rotated(x=90).translated(y=length)


def _along_x(solid: Geometry, length: float) -> Geometry:
    """Turn a +Z extrusion into one centred on X, keeping profile X as Y and profile Y as Z."""
    return solid.rotated(x=90).rotated(z=90).translated(x=-length / 2.0)


# Floats ---------------------------------------------------------------------


def nose_cone(diameter: float, length: float, interpolation: str = "ease_in_out") -> Geometry:
    """Tapered nose cone along +Y, base (full diameter) at Y=0, tip at Y=length."""

    if diameter <= 0 or length <= 0:
        raise ValueError("nose cone diameter and length must be positive.")
    stations = [
        (length * along, make_circle(diameter * scale / 2.0))
        for along, scale in NOSE_CONE_STATIONS
    ]
    return loft(stations, interpolation=interpolation).rotated(x=-90).colored(FLOAT_COLOR)


@dataclass(frozen=True)
class ChannelCut:
    """Longitudinal channel cut into the top of a straight float section."""

    x: float
    y_start: float
    y_end: float
    width: float
    depth: float

    @property
    def length(self) -> float:
        return self.y_end - self.y_start

    def floor(self, radius: float) -> float:
        """Z of the channel floor: ``depth`` below the hull at the channel's outer edge."""
        return hull_height(radius, abs(self.x) + self.width / 2.0) - self.depth

    def cutter(self, radius: float) -> Geometry:
        floor = self.floor(radius)
        return make_box((self.width, self.length, radius + _CUT_CLEARANCE - floor)).translated(
            x=self.x - self.width / 2.0,
            y=self.y_start,
            z=floor,
        )


def hull_height(radius: float, x: float) -> float:
    """Z of the top of a float's circular hull at lateral offset ``x`` from its axis."""
    if abs(x) >= radius:
        raise ValueError("offset lies outside the float radius.")
    return math.sqrt(radius * radius - x * x)


def channel_cuts(
    diameter: float,
    length: float,
    channel_count: int,
    channel_width: float = 1.5,
    channel_spacing: float = 9.0,
    channel_depth: float = 0.75,
    end_margin: float = 1.0,
) -> list[ChannelCut]:
    """Placement of the 0, 1 or 2 channels opened in the top of a straight section."""

    if channel_count not in (0, 1, 2):
        raise ValueError("channel_count must be 0, 1 or 2.")
    if channel_count == 0:
        return []
    radius = diameter / 2.0
    if not 0 < channel_depth < radius:
        raise ValueError("channel_depth must be positive and less than the float radius.")
    if channel_width <= 0:
        raise ValueError("channel_width must be positive.")
    y_start, y_end = end_margin, length - end_margin
    if y_end <= y_start:
        raise ValueError("section is too short for its channel end margins.")
    if channel_count == 1:
        centers = [0.0]
    else:
        if channel_spacing <= channel_width:
            raise ValueError("channel_spacing must exceed channel_width.")
        centers = [-channel_spacing / 2.0, channel_spacing / 2.0]
    for center in centers:
        if abs(center) + channel_width / 2.0 >= radius:
            raise ValueError("channels must lie within the float diameter.")
        if channel_depth >= hull_height(radius, abs(center) + channel_width / 2.0):
            raise ValueError("channel_depth must be less than the hull height at the channel.")
    return [ChannelCut(x=c, y_start=y_start, y_end=y_end, width=channel_width, depth=channel_depth) for c in centers]


def rib_positions(length: float, spacing: float) -> list[float]:
    count = int(length // spacing)
    return [i * spacing for i in range(1, count)]


def straight_section(
    diameter: float,
    length: float,
    channel_count: int = 0,
    channel_width: float = 1.5,
    channel_spacing: float = 9.0,
    channel_depth: float = 0.75,
    rib_spacing: float = 6.0,
    rib_height: float = 0.5,
    rib_outset: float = 0.3,
    rib_inset: float = 0.1,
) -> Geometry:
    """Cylindrical float section along +Y from 0 to ``length`` with ribs and top channels."""

    cuts = channel_cuts(diameter, length, channel_count, channel_width, channel_spacing, channel_depth)
    body = make_cylinder(radius=diameter / 2.0, height=length)
    rib = make_ring(diameter + rib_outset, diameter - rib_inset).extruded(rib_height)
    ribs = [rib.translated(z=z) for z in rib_positions(length, rib_spacing)]
    section = body.adding(*ribs).rotated(x=-90)
    section = section.subtracting(*(cut.cutter(diameter / 2.0) for cut in cuts))
    return section.colored(FLOAT_COLOR)


def transom_cap(diameter: float, thickness: float = 0.125, rim: float = 0.25) -> Geometry:
    """Flat disc closing the square stern of a float, occupying Y in [0, thickness]."""

    return make_cylinder(radius=diameter / 2.0 + rim, height=thickness).rotated(x=-90).colored(FLOAT_COLOR)


# Profiles -------------------------------------------------------------------


def hat_channel_profile(
    height: float = 2.0,
    top_width: float = 2.0,
    bottom_width: float = 3.5,
    flange_width: float = 1.25,
    thickness: float = 0.125,
) -> Geometry:
    """Hat section: two flanges at Y=0, sloped webs, closed top at Y=height, open bottom."""

    if min(height, top_width, bottom_width, flange_width, thickness) <= 0:
        raise ValueError("hat channel dimensions must be positive.")
    if flange_width <= thickness:
        raise ValueError("hat channel flange must be wider than the web thickness.")
    if thickness >= min(height, top_width) / 2.0:
        raise ValueError("hat channel thickness must be less than half the height and top width.")

    t = thickness
    top, bottom = top_width / 2.0, bottom_width / 2.0
    slope = (bottom - top) / height
    # Web sides at the flange top (outer) and under the top plate (inner).
    outer = bottom - slope * t
    inner = bottom - t - slope * (height - t)
    if inner <= 0:
        raise ValueError("hat channel webs meet under the top plate; widen the top.")
    right = [
        (bottom - t, 0.0),
        (bottom + flange_width, 0.0),
        (bottom + flange_width, t),
        (outer, t),
        (top, height),
    ]
    left = [(-x, y) for x, y in reversed(right)]
    # One closed outline so the flanges, webs and top plate form a single region.
    return make_polygon([*left, (-inner, height - t), (inner, height - t), *right])


def t_beam_profile(
    width: float = 2.5,
    height: float = 2.0,
    flange_thickness: float = 0.25,
    stem_width: float = 0.5,
) -> Geometry:
    """T section: stem from Y=0 up to a top flange ending at Y=height."""

    if min(width, height, flange_thickness, stem_width) <= 0:
        raise ValueError("T beam dimensions must be positive.")
    if width <= stem_width:
        raise ValueError("T beam flange must be wider than its stem.")
    if flange_thickness >= height / 2.0:
        raise ValueError("T beam flange thickness must be less than half the height.")
    stem = make_rect((stem_width, height)).translated(x=-stem_width / 2.0)
    flange = make_rect((width, flange_thickness)).translated(x=-width / 2.0, y=height - flange_thickness)
    return stem.adding(flange)


def square_tube_profile(size: float = 2.0, wall: float = 0.125) -> Geometry:
    """Hollow square centred on the origin."""

    if size <= 0 or wall <= 0:
        raise ValueError("square tube dimensions must be positive.")
    if wall >= size / 2.0:
        raise ValueError("square tube wall must be less than half the outer size.")
    return make_rect((size, size), center=True).subtracting(
        make_rect((size - 2.0 * wall, size - 2.0 * wall), center=True)
    )


# Frame parts ----------------------------------------------------------------


def hat_channel(
    length: float,
    height: float = 2.0,
    top_width: float = 2.0,
    bottom_width: float = 3.5,
    flange_width: float = 1.25,
    thickness: float = 0.125,
) -> Geometry:
    """Hat channel crossmember along X, centred, flanges resting on Z=0."""

    profile = hat_channel_profile(height, top_width, bottom_width, flange_width, thickness)
    return _along_x(profile.extruded(length), length).with_material(FRAME_MATERIAL).colored(FRAME_COLOR)


def square_tube(length: float, size: float = 2.0, wall: float = 0.125) -> Geometry:
    """Square tube crossmember along X, centred, bottom face on Z=0."""

    profile = square_tube_profile(size, wall).translated(y=size / 2.0)
    return _along_x(profile.extruded(length), length).with_material(FRAME_MATERIAL).colored(FRAME_COLOR)


def main_beam(
    length: float,
    width: float = 2.5,
    height: float = 2.0,
    flange_thickness: float = 0.25,
    stem_width: float = 0.5,
) -> Geometry:
    """T beam along +Y from 0 to ``length``, stem foot on Z=0."""

    profile = t_beam_profile(width, height, flange_thickness, stem_width)
    return _along_y(profile.extruded(length), length).with_material(FRAME_MATERIAL).colored(FRAME_COLOR)


def c_bracket(
    pontoon_diameter: float,
    thickness: float = 0.25,
    width: float = 2.0,
    tab_length: float = 2.0,
) -> Geometry:
    """Half-ring strap cradling a float from below, with flat tabs at its open ends.

    Centred on the float axis (X=0, Z=0) and on Y=0; the tabs lie just below
    the float's horizontal centre plane.
    """

    if min(pontoon_diameter, thickness, width, tab_length) <= 0:
        raise ValueError("C-bracket dimensions must be positive.")
    radius = pontoon_diameter / 2.0
    outer = radius + thickness
    reach = outer + tab_length
    shell = make_ring(2.0 * outer, 2.0 * radius).intersecting(
        make_rect((2.0 * reach, outer + _CUT_CLEARANCE)).translated(x=-reach, y=-outer - _CUT_CLEARANCE)
    )
    tab = make_rect((thickness + tab_length, thickness))
    profile = shell.adding(
        tab.translated(x=radius, y=-thickness),
        tab.translated(x=-reach, y=-thickness),
    )
    strap = profile.extruded(width).rotated(x=90).translated(y=width / 2.0)
    return strap.with_material(FRAME_MATERIAL).colored(BRACKET_COLOR)


def transom_bracket(width: float = 24.0, height: float = 14.0, depth: float = 3.0) -> Geometry:
    """Motor mount plate, centred on X, starting at Y=0 and Z=0."""

    return (
        make_box((width, depth, height))
        .aligned(x="center", y="min", z="min")
        .with_material(FRAME_MATERIAL)
        .colored(BRACKET_COLOR)
    )


__all__ = [
    "ChannelCut",
    "NOSE_CONE_STATIONS",
    "c_bracket",
    "channel_cuts",
    "hat_channel",
    "hat_channel_profile",
    "hull_height",
    "main_beam",
    "nose_cone",
    "rib_positions",
    "square_tube",
    "square_tube_profile",
    "straight_section",
    "t_beam_profile",
    "transom_bracket",
    "transom_cap",
]
