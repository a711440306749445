from __future__ import annotations

import math

import numpy as np
import pytest

from tests.helpers import is_watertight, mesh_volume
from weaseltoon.modeling import bounds, evaluate, to_mesh
from weaseltoon.parts import (
    NOSE_CONE_STATIONS,
    c_bracket,
    channel_cuts,
    hat_channel,
    hat_channel_profile,
    hull_height,
    main_beam,
    nose_cone,
    rib_positions,
    square_tube,
    square_tube_profile,
    straight_section,
    t_beam_profile,
    transom_bracket,
    transom_cap,
)


def test_nose_cone_station_table():
    fractions = [along for along, _ in NOSE_CONE_STATIONS]
    scales = [scale for _, scale in NOSE_CONE_STATIONS]
    assert fractions == [0.0, 0.15, 0.40, 0.65, 0.85, 0.95, 1.0]
    assert scales[0] == 1.0
    assert scales[1] > 1.0
    assert 0 < scales[-1] < 0.05


def test_nose_cone_runs_along_y(coarse):
    mesh = to_mesh(nose_cone(27.0, 35.4), coarse)
    xmin, xmax, ymin, ymax, zmin, zmax = mesh.bounds
    assert ymin == pytest.approx(0.0, abs=1e-4)
    assert ymax == pytest.approx(35.4, abs=1e-4)
    # The bulge near the base is slightly wider than the diameter.
    assert xmax - xmin > 27.0
    assert xmax - xmin < 27.0 * 1.03
    assert xmin == pytest.approx(-xmax, abs=1e-3)
    assert is_watertight(mesh)[0]


def test_nose_cone_scales_proportionally():
    small = nose_cone(18.0, 24.0)
    large = nose_cone(27.0, 36.0)
    small_radii = [profile.param("radius") for _, profile in small.child.child.stations]
    large_radii = [profile.param("radius") for _, profile in large.child.child.stations]
    assert np.allclose(np.array(large_radii) / np.array(small_radii), 1.5)


def test_nose_cone_rejects_zero_length():
    with pytest.raises(ValueError):
        nose_cone(27.0, 0.0)


def test_rib_positions():
    assert rib_positions(36.0, 6.0) == [6.0, 12.0, 18.0, 24.0, 30.0]
    assert rib_positions(5.0, 6.0) == []


def test_dual_channels_are_symmetric_and_inside_section():
    cuts = channel_cuts(27.0, 36.0, 2, channel_width=1.5, channel_spacing=9.0, channel_depth=0.75)
    assert [cut.x for cut in cuts] == [-4.5, 4.5]
    for cut in cuts:
        assert 0.0 < cut.y_start < cut.y_end < 36.0
        assert cut.depth < 27.0 / 2


def test_single_channel_is_centred():
    (cut,) = channel_cuts(18.0, 36.0, 1)
    assert cut.x == 0.0


def test_no_channels():
    assert channel_cuts(18.0, 36.0, 0) == []


@pytest.mark.parametrize(
    "kwargs",
    [
        {"channel_count": 3},
        {"channel_count": 1, "channel_depth": 13.5},
        {"channel_count": 1, "channel_depth": 20.0},
        {"channel_count": 2, "channel_spacing": 1.0},
        {"channel_count": 2, "channel_spacing": 26.0},
        {"channel_count": 2, "channel_spacing": 24.0, "channel_depth": 5.0},
    ],
)
def test_degenerate_channels_rejected(kwargs):
    with pytest.raises(ValueError):
        channel_cuts(27.0, 36.0, **kwargs)


def test_channel_longer_than_section_rejected():
    with pytest.raises(ValueError):
        channel_cuts(27.0, 2.0, 1)


def test_straight_section_geometry(coarse):
    plain = to_mesh(straight_section(27.0, 36.0, channel_count=0), coarse)
    channelled = to_mesh(straight_section(27.0, 36.0, channel_count=2), coarse)
    xmin, xmax, ymin, ymax, zmin, zmax = channelled.bounds
    assert ymin == pytest.approx(0.0, abs=1e-4)
    assert ymax == pytest.approx(36.0, abs=1e-4)
    # Ribs stand proud of the hull.
    assert xmax == pytest.approx((27.0 + 0.3) / 2, abs=1e-3)
    assert channelled.n_faces > plain.n_faces
    assert is_watertight(channelled)[0]


def test_off_axis_channels_cut_to_full_depth(coarse):
    plain = mesh_volume(to_mesh(straight_section(27.0, 36.0, channel_count=0), coarse))
    cut = mesh_volume(to_mesh(straight_section(27.0, 36.0, channel_count=2), coarse))
    # Two 1.5 wide channels, 0.75 deep at their outer edge, over 34 in.
    nominal = 2 * 1.5 * 0.75 * 34.0
    assert nominal * 0.8 < plain - cut < nominal * 2.5


def test_channel_floor_follows_hull():
    cuts = channel_cuts(27.0, 36.0, 2)
    expected = math.sqrt(13.5**2 - 5.25**2) - 0.75
    for cut in cuts:
        assert cut.floor(13.5) == pytest.approx(expected)
    (centre,) = channel_cuts(18.0, 36.0, 1)
    assert centre.floor(9.0) == pytest.approx(math.sqrt(81.0 - 0.75**2) - 0.75)


def test_hull_height():
    assert hull_height(13.5, 0.0) == pytest.approx(13.5)
    assert hull_height(5.0, 3.0) == pytest.approx(4.0)
    with pytest.raises(ValueError):
        hull_height(5.0, 5.0)


def test_hat_profile_shape():
    xmin, xmax, ymin, ymax = bounds(hat_channel_profile())
    assert xmax - xmin == pytest.approx(3.5 + 2 * 1.25)
    assert ymin == pytest.approx(0.0)
    assert ymax == pytest.approx(2.0)


def test_hat_profile_is_one_region():
    assert len(evaluate(hat_channel_profile()).decompose()) == 1


def test_hat_channel_is_one_body(coarse):
    assert len(evaluate(hat_channel(40.0), coarse).decompose()) == 1


@pytest.mark.parametrize(
    "kwargs",
    [
        {"flange_width": 0.1, "thickness": 0.125},
        {"thickness": 1.0},
        {"height": 0.0},
    ],
)
def test_hat_profile_invariants(kwargs):
    with pytest.raises(ValueError):
        hat_channel_profile(**kwargs)


def test_t_beam_profile_invariants():
    with pytest.raises(ValueError):
        t_beam_profile(width=0.5, stem_width=0.5)
    with pytest.raises(ValueError):
        t_beam_profile(height=2.0, flange_thickness=1.0)


def test_square_tube_profile_invariants():
    with pytest.raises(ValueError):
        square_tube_profile(size=2.0, wall=1.0)
    xmin, xmax, ymin, ymax = bounds(square_tube_profile(2.0, 0.125))
    assert (xmin, xmax, ymin, ymax) == pytest.approx((-1.0, 1.0, -1.0, 1.0))


def test_crossmembers_run_along_x_centred(coarse):
    for part in (hat_channel(40.0), square_tube(40.0)):
        xmin, xmax, ymin, ymax, zmin, zmax = to_mesh(part, coarse).bounds
        assert (xmin, xmax) == pytest.approx((-20.0, 20.0), abs=1e-4)
        assert ymin == pytest.approx(-ymax, abs=1e-4)
        assert zmin == pytest.approx(0.0, abs=1e-4)
        assert zmax == pytest.approx(2.0, abs=1e-4)


def test_main_beam_runs_along_y(coarse):
    xmin, xmax, ymin, ymax, zmin, zmax = to_mesh(main_beam(50.0), coarse).bounds
    assert (ymin, ymax) == pytest.approx((0.0, 50.0), abs=1e-4)
    assert (xmin, xmax) == pytest.approx((-1.25, 1.25), abs=1e-4)
    assert (zmin, zmax) == pytest.approx((0.0, 2.0), abs=1e-4)


def test_c_bracket_hugs_float_from_below(coarse):
    mesh = to_mesh(c_bracket(27.0, thickness=0.25, width=2.0, tab_length=2.0), coarse)
    xmin, xmax, ymin, ymax, zmin, zmax = mesh.bounds
    assert (xmin, xmax) == pytest.approx((-15.75, 15.75), abs=1e-3)
    assert (ymin, ymax) == pytest.approx((-1.0, 1.0), abs=1e-4)
    assert zmax == pytest.approx(0.0, abs=1e-4)
    assert zmin == pytest.approx(-13.75, abs=1e-2)
    assert is_watertight(mesh)[0]


def test_transom_cap_is_thin_disc(coarse):
    xmin, xmax, ymin, ymax, zmin, zmax = to_mesh(transom_cap(27.0, 0.125, 0.25), coarse).bounds
    assert (ymin, ymax) == pytest.approx((0.0, 0.125), abs=1e-5)
    assert xmax == pytest.approx(13.75, abs=1e-3)


def test_transom_bracket_alignment():
    mesh = to_mesh(transom_bracket(24.0, 14.0, 3.0))
    assert mesh.bounds == pytest.approx((-12.0, 12.0, 0.0, 3.0, 0.0, 14.0))
    assert mesh.metadata["materials"] == ["aluminum"]
