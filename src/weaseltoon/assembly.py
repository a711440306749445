"""Sub-assemblies and the complete boat.

World axes: Y runs from the stern (Y=0) towards the bow, X is lateral and
Z is up with the hull bottoms of the main floats on Z=0. The frame is built
in its own coordinates, where Z=0 is the main float centreline, and raised by
the main float radius when placed on the boat.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from weaseltoon.dimensions import BoatDimensions, FloatDimensions, RibDimensions, default_dimensions
from weaseltoon.modeling import Geometry, Repetition, union
from weaseltoon.parts import (
    c_bracket,
    channel_cuts,
    hat_channel,
    hull_height,
    main_beam,
    nose_cone,
    square_tube,
    straight_section,
    transom_bracket,
    transom_cap,
)

SegmentKind = Literal["rear_nose", "straight", "front_nose"]


@dataclass(frozen=True)
class SegmentPlacement:
    """One piece of a float and where it starts along Y."""

    kind: SegmentKind
    offset: float
    length: float

    @property
    def end(self) -> float:
        return self.offset + self.length


def pontoon_layout(
    nose_length: float,
    straight_length: float,
    straight_count: int,
    has_front_nose: bool = True,
    has_rear_nose: bool = False,
) -> list[SegmentPlacement]:
    """Segments of a float, end to end; each starts where the previous one ends."""

    if straight_count < 1:
        raise ValueError("straight_count must be >= 1.")
    segments: list[SegmentPlacement] = []
    offset = 0.0
    if has_rear_nose:
        segments.append(SegmentPlacement("rear_nose", offset, nose_length))
        offset += nose_length
    for _ in range(straight_count):
        segments.append(SegmentPlacement("straight", offset, straight_length))
        offset += straight_length
    if has_front_nose:
        segments.append(SegmentPlacement("front_nose", offset, nose_length))
    return segments


def pontoon_assembly(
    diameter: float,
    nose_length: float,
    straight_length: float,
    straight_count: int,
    has_front_nose: bool = True,
    has_rear_nose: bool = False,
    channel_count: int = 0,
    channel_width: float = 1.5,
    channel_spacing: float = 9.0,
    channel_depth: float = 0.75,
    ribs: RibDimensions | None = None,
    cap_thickness: float = 0.125,
    cap_rim: float = 0.25,
) -> Geometry:
    """A complete float along +Y, centreline on X=0 and Z=0, stern end at Y=0.

    A float without a rear nose is closed at the stern by a transom cap.
    """

    ribs = ribs or RibDimensions()
    straight = straight_section(
        diameter,
        straight_length,
        channel_count=channel_count,
        channel_width=channel_width,
        channel_spacing=channel_spacing,
        channel_depth=channel_depth,
        rib_spacing=ribs.spacing,
        rib_height=ribs.height,
        rib_outset=ribs.outset,
        rib_inset=ribs.inset,
    )
    nose = nose_cone(diameter, nose_length)

    pieces: list[Geometry] = []
    for segment in pontoon_layout(nose_length, straight_length, straight_count, has_front_nose, has_rear_nose):
        if segment.kind == "rear_nose":
            pieces.append(nose.mirrored("y").translated(y=segment.end))
        elif segment.kind == "straight":
            pieces.append(straight.translated(y=segment.offset))
        else:
            pieces.append(nose.translated(y=segment.offset))
    if not has_rear_nose:
        pieces.append(transom_cap(diameter, cap_thickness, cap_rim))
    return union(*pieces)


def float_assembly(float_dims: FloatDimensions, dims: BoatDimensions | None = None) -> Geometry:
    dims = dims or default_dimensions()
    return pontoon_assembly(
        float_dims.diameter,
        float_dims.nose_cone_length,
        float_dims.straight_length,
        float_dims.straight_count,
        has_front_nose=float_dims.has_front_nose,
        has_rear_nose=float_dims.has_rear_nose,
        channel_count=float_dims.channel_count,
        channel_width=float_dims.channel_width,
        channel_spacing=float_dims.channel_spacing,
        channel_depth=float_dims.channel_depth,
        ribs=dims.ribs,
        cap_thickness=dims.transom.cap_thickness,
        cap_rim=dims.transom.cap_rim,
    )


def crossmember_positions(boat_length: float, count: int, start: float = 3.0) -> list[float]:
    """Y of each hat channel: ``start + i * boat_length / count``."""

    if count < 1:
        raise ValueError("crossmember count must be >= 1.")
    if boat_length <= 0:
        raise ValueError("boat_length must be positive.")
    pitch = boat_length / count
    return [start + i * pitch for i in range(count)]


def beam_seat_height(float_dims: FloatDimensions, stem_width: float) -> float:
    """Z, above the float axis, where a main beam's stem rests.

    With two channels the stem sits on the channel floor; otherwise it rests on
    the hull at the stem's outboard edge.
    """

    offset = float_dims.channel_spacing / 2.0
    if float_dims.channel_count == 2:
        (_, cut) = channel_cuts(
            float_dims.diameter,
            float_dims.straight_length,
            2,
            float_dims.channel_width,
            float_dims.channel_spacing,
            float_dims.channel_depth,
        )
        return cut.floor(float_dims.radius)
    return hull_height(float_dims.radius, offset + stem_width / 2.0)


def frame_assembly(
    boat_length: float,
    pontoon_spacing: float,
    crossmember_count: int,
    dims: BoatDimensions | None = None,
) -> Geometry:
    """Main beams, crossmembers and C-brackets in frame coordinates.

    Beams sit in the channels on top of the main floats, crossmembers on top
    of the beams. The last hat channel must clear the bow square tube.
    One C-bracket hangs under each main float at every hat channel.
    """

    dims = dims or default_dimensions()
    beam = dims.main_beam
    hat = dims.hat_channel
    layout = dims.layout

    tube = dims.square_tube
    positions = crossmember_positions(boat_length, crossmember_count, layout.crossmember_start)
    pitch = boat_length / crossmember_count
    if crossmember_count > 1 and pitch <= hat.footprint:
        raise ValueError("crossmembers would overlap; reduce crossmember_count.")
    bow_tube_y = boat_length - layout.bow_tube_setback
    if positions[-1] + hat.footprint / 2.0 >= bow_tube_y - tube.size / 2.0:
        raise ValueError("last hat channel would overlap the bow square tube; reduce crossmember_count.")

    half = pontoon_spacing / 2.0
    channel_offset = dims.main.channel_spacing / 2.0
    seat_z = beam_seat_height(dims.main, beam.stem_width)
    deck_z = seat_z + beam.height
    span = pontoon_spacing + 2.0 * layout.crossmember_overhang

    t_beam = main_beam(boat_length, beam.width, beam.height, beam.flange_thickness, beam.stem_width)
    beams = (
        t_beam.translated(x=half - channel_offset, z=seat_z)
        .adding(t_beam.translated(x=half + channel_offset, z=seat_z))
        .symmetry("x")
    )

    hat_channels = Repetition(
        hat_channel(span, hat.height, hat.top_width, hat.bottom_width, hat.flange_width, hat.thickness),
        count=crossmember_count,
        step=(0.0, pitch, 0.0),
        start=(0.0, positions[0], deck_z),
    )
    bow_tube = square_tube(span, tube.size, tube.wall).translated(y=bow_tube_y, z=deck_z)

    bracket = dims.bracket
    strap = c_bracket(dims.main.diameter, bracket.thickness, bracket.width, bracket.tab_length)
    brackets = Repetition(
        strap.translated(x=half).symmetry("x"),
        count=crossmember_count,
        step=(0.0, pitch, 0.0),
        start=(0.0, positions[0], 0.0),
    )
    return union(beams, hat_channels.combined(), bow_tube, brackets.combined())


def aux_float_pattern(dims: BoatDimensions | None = None) -> Geometry:
    """Four auxiliary floats in a 2x2 pattern, recessed below the main floats."""

    dims = dims or default_dimensions()
    layout = dims.layout
    z = dims.main.radius - dims.aux.radius - layout.aux_recess
    aux = float_assembly(dims.aux, dims).translated(x=layout.aux_lateral_spacing / 2.0)
    pair = aux.symmetry("x")
    return pair.translated(y=layout.aux_stern_offset, z=z).adding(
        pair.translated(y=layout.aux_bow_offset, z=z)
    )


def boat_assembly(dims: BoatDimensions | None = None) -> Geometry:
    dims = dims or default_dimensions()
    layout = dims.layout
    main_radius = dims.main.radius

    mains = float_assembly(dims.main, dims).translated(
        x=layout.main_center_to_center / 2.0,
        z=main_radius,
    ).symmetry("x")
    frame = frame_assembly(
        layout.boat_length,
        layout.main_center_to_center,
        layout.crossmember_count,
        dims,
    ).translated(z=main_radius)
    seat_z = beam_seat_height(dims.main, dims.main_beam.stem_width)
    deck_top = main_radius + seat_z + dims.main_beam.height + dims.hat_channel.height
    transom = transom_bracket(dims.transom.width, dims.transom.height, dims.transom.depth).translated(
        y=layout.transom_setback,
        z=deck_top,
    )
    return union(mains, aux_float_pattern(dims), frame, transom)


__all__ = [
    "SegmentPlacement",
    "aux_float_pattern",
    "beam_seat_height",
    "boat_assembly",
    "crossmember_positions",
    "float_assembly",
    "frame_assembly",
    "pontoon_assembly",
    "pontoon_layout",
]
