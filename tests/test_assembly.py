from __future__ import annotations

import math

import numpy as np
import pytest

from weaseltoon.assembly import (
    aux_float_pattern,
    beam_seat_height,
    boat_assembly,
    crossmember_positions,
    frame_assembly,
    pontoon_assembly,
    pontoon_layout,
)
from weaseltoon.dimensions import BoatDimensions
from weaseltoon.modeling import Evaluator, Transform
from weaseltoon.parts import channel_cuts

# Main float channel floor: 0.75 below the hull at the channel's outboard edge.
SEAT = math.sqrt(13.5**2 - 5.25**2) - 0.75


def test_segments_concatenate_without_gaps():
    layout = pontoon_layout(35.4, 36.0, 4, has_front_nose=True, has_rear_nose=True)
    assert [segment.kind for segment in layout] == ["rear_nose"] + ["straight"] * 4 + ["front_nose"]
    for previous, current in zip(layout, layout[1:]):
        assert current.offset == pytest.approx(previous.end)
    straights = [segment for segment in layout if segment.kind == "straight"]
    assert straights[-1].offset == pytest.approx(3 * 36.0 + 35.4)
    assert layout[-1].offset == pytest.approx(179.4)


def test_layout_without_rear_nose_starts_at_zero():
    layout = pontoon_layout(35.4, 36.0, 4)
    assert layout[0].kind == "straight"
    assert layout[0].offset == 0.0
    assert layout[-1].offset == pytest.approx(144.0)


def test_layout_requires_a_straight():
    with pytest.raises(ValueError):
        pontoon_layout(35.4, 36.0, 0)


def test_front_nose_placement_in_tree():
    tree = pontoon_assembly(27.0, 35.4, 36.0, 4, has_front_nose=True, has_rear_nose=True, channel_count=2)
    offsets = [
        node.param("offset")[1]
        for node in tree.operands
        if isinstance(node, Transform) and node.op == "translate"
    ]
    assert offsets[-1] == pytest.approx(179.4)


def test_pontoon_bounds(coarse):
    evaluator = Evaluator(coarse)
    mesh = evaluator.to_mesh(pontoon_assembly(27.0, 35.4, 36.0, 4, channel_count=2))
    xmin, xmax, ymin, ymax, zmin, zmax = mesh.bounds
    assert ymin == pytest.approx(0.0, abs=1e-4)
    assert ymax == pytest.approx(35.4 + 4 * 36.0, abs=1e-3)
    assert xmin == pytest.approx(-xmax, abs=1e-3)


def test_crossmember_positions_even():
    positions = crossmember_positions(180.0, 9, 3.0)
    assert positions[0] == 3.0
    gaps = np.diff(positions)
    assert np.all(gaps > 0)
    assert np.allclose(gaps, 20.0)


def test_crossmember_positions_reject_zero():
    with pytest.raises(ValueError):
        crossmember_positions(180.0, 0)


def test_crowded_crossmembers_rejected(dims):
    with pytest.raises(ValueError):
        frame_assembly(30.0, 74.0, 10, dims)


def test_last_hat_channel_must_clear_bow_tube(dims):
    # Pitch 8.57 clears the hat footprint, but the last channel reaches 177.43
    # while the bow tube starts at 177.
    with pytest.raises(ValueError):
        frame_assembly(180.0, 74.0, 21, dims)
    frame_assembly(180.0, 74.0, 19, dims)


def test_beams_seat_on_channel_floor(dims):
    _, outboard = channel_cuts(27.0, 36.0, 2)
    assert beam_seat_height(dims.main, 0.5) == pytest.approx(outboard.floor(13.5))
    assert beam_seat_height(dims.main, 0.5) == pytest.approx(SEAT)
    plain = BoatDimensions.from_mapping({"main": {"channel_count": 0}})
    assert beam_seat_height(plain.main, 0.5) == pytest.approx(math.sqrt(13.5**2 - 4.75**2))


def test_builders_are_deterministic():
    assert boat_assembly().fingerprint() == boat_assembly().fingerprint()
    a = frame_assembly(180.0, 74.0, 9)
    b = frame_assembly(180.0, 74.0, 9)
    assert a == b
    assert a.primitive_count() == b.primitive_count()


def test_dimension_changes_change_the_tree():
    wider = BoatDimensions.from_mapping({"layout": {"main_center_to_center": 80}})
    assert boat_assembly(wider).fingerprint() != boat_assembly().fingerprint()


def test_frame_symmetric_and_on_floats(coarse, dims):
    mesh = Evaluator(coarse).to_mesh(frame_assembly(180.0, 74.0, 9, dims))
    xmin, xmax, ymin, ymax, zmin, zmax = mesh.bounds
    assert xmin == pytest.approx(-xmax, abs=1e-3)
    # Bracket tabs reach furthest outboard.
    assert xmax == pytest.approx(74.0 / 2 + 13.5 + 0.25 + 2.0, abs=1e-3)
    # Top of the hat channels: channel floor + beam + hat height.
    assert zmax == pytest.approx(SEAT + 2.0 + 2.0, abs=1e-4)
    # Brackets hang below the centreline.
    assert zmin == pytest.approx(-(13.5 + 0.25), abs=1e-2)


def test_aux_pattern_is_recessed_and_symmetric(coarse, dims):
    mesh = Evaluator(coarse).to_mesh(aux_float_pattern(dims))
    xmin, xmax, ymin, ymax, zmin, zmax = mesh.bounds
    assert xmin == pytest.approx(-xmax, abs=1e-3)
    assert ymin == pytest.approx(4.0, abs=1e-3)
    assert ymax == pytest.approx(92.0 + dims.aux.total_length, abs=1e-3)
    centre_z = 13.5 - 9.0 - 5.0
    assert zmin < centre_z - 9.0 + 0.5


def test_complete_boat_bounds(coarse, dims):
    mesh = Evaluator(coarse).to_mesh(boat_assembly(dims))
    xmin, xmax, ymin, ymax, zmin, zmax = mesh.bounds
    assert xmin == pytest.approx(-xmax, abs=1e-3)
    assert xmax == pytest.approx(37.0 + 13.75 + 2.0, abs=1e-3)
    assert ymin == pytest.approx(0.0, abs=1e-3)
    # Main beams run the full boat length, just past the bow noses.
    assert ymax == pytest.approx(dims.layout.boat_length, abs=1e-3)
    # Motor mount stands on the deck.
    assert zmax == pytest.approx(13.5 + SEAT + 2.0 + 2.0 + 14.0, abs=1e-3)
