from __future__ import annotations

import math

import numpy as np
import pytest

from weaseltoon.mesh import analyze_mesh
from weaseltoon.modeling import loft, make_box, make_circle, make_rect, to_mesh
from weaseltoon.modeling.drawing2d import signed_area
from weaseltoon.modeling.loft import interpolate_layers, resample_loop


def test_loft_positive(coarse):
    shape = loft(
        [(0.0, make_rect(size=(1.0, 1.0), center=True)), (2.0, make_circle(0.4))],
        interpolation="ease_in_out",
        steps=4,
    )
    mesh = to_mesh(shape, coarse)
    assert mesh.n_faces > 0
    assert analyze_mesh(mesh).is_watertight


def test_loft_requires_two_stations():
    with pytest.raises(ValueError):
        loft([(0.0, make_rect())])


def test_loft_heights_strictly_increasing():
    with pytest.raises(ValueError):
        loft([(1.0, make_rect()), (1.0, make_rect())])


def test_loft_rejects_solid_stations():
    with pytest.raises(ValueError):
        loft([(0.0, make_box()), (1.0, make_box())])


def test_loft_rejects_unknown_curve():
    with pytest.raises(ValueError):
        loft([(0.0, make_rect()), (1.0, make_rect())], interpolation="cubic")


def test_linear_loft_has_no_intermediate_layers():
    shape = loft([(0.0, make_rect()), (1.0, make_rect())])
    assert shape.steps == 1
    deferred = loft([(0.0, make_rect()), (1.0, make_rect())], interpolation="smootherstep")
    assert deferred.steps == 0


def test_cylinder_loft_volume(coarse):
    shape = loft([(0.0, make_circle(1.0)), (3.0, make_circle(1.0))])
    mesh = to_mesh(shape, coarse)
    # Inscribed 24-gon area times height.
    expected = 0.5 * 24 * math.sin(2 * math.pi / 24) * 3.0
    vertices, faces = mesh.vertices, mesh.faces
    v0, v1, v2 = vertices[faces[:, 0]], vertices[faces[:, 1]], vertices[faces[:, 2]]
    volume = float(np.einsum("ij,ij->i", v0, np.cross(v1, v2)).sum() / 6.0)
    assert volume == pytest.approx(expected, rel=1e-3)


def test_resample_loop_is_ccw_and_uniform():
    square_cw = np.array([(0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (1.0, 0.0)])
    loop = resample_loop(square_cw, 8)
    assert loop.shape == (8, 2)
    assert signed_area(loop) > 0
    steps = np.linalg.norm(np.diff(np.vstack([loop, loop[:1]]), axis=0), axis=1)
    assert np.allclose(steps, steps[0])


def test_interpolate_layers_eases_profile_not_height():
    a = np.zeros((4, 2))
    b = np.ones((4, 2))
    layers, heights = interpolate_layers([a, b], [0.0, 4.0], "ease_in_out", 4)
    assert heights == [0.0, 1.0, 2.0, 3.0, 4.0]
    assert layers[1][0, 0] == pytest.approx(0.15625)
    assert layers[2][0, 0] == pytest.approx(0.5)
