from __future__ import annotations

import dataclasses

import pytest

from weaseltoon.modeling import (
    Boolean,
    Primitive,
    Repetition,
    Tag,
    Transform,
    boolean_difference,
    boolean_union,
    make_box,
    make_circle,
    make_rect,
    repeat,
    union_parts,
)


def test_operations_do_not_mutate_operands():
    box = make_box(size=(1.0, 2.0, 3.0))
    before = box.describe()
    moved = box.translated(x=5.0)
    box.subtracting(make_box(size=(0.5, 0.5, 0.5)))
    assert box.describe() == before
    assert isinstance(moved, Transform)
    assert moved.child is box


def test_nodes_are_frozen():
    box = make_box()
    with pytest.raises(dataclasses.FrozenInstanceError):
        box.shape = "sphere"  # type: ignore[misc]


def test_identical_inputs_give_identical_trees():
    def build():
        return make_box(size=(2.0, 2.0, 2.0)).translated(x=1).adding(make_box().rotated(z=45)).colored("orange")

    a, b = build(), build()
    assert a == b
    assert hash(a) == hash(b)
    assert a.fingerprint() == b.fingerprint()


def test_fingerprint_changes_with_parameters():
    assert make_box(size=(1, 1, 1)).fingerprint() != make_box(size=(1, 1, 2)).fingerprint()


def test_numeric_params_are_normalised():
    assert make_box(size=(1, 2, 3)) == make_box(size=(1.0, 2.0, 3.0))
    assert make_box(size=[1, 2, 3]).param("size") == (1.0, 2.0, 3.0)


def test_unknown_primitive_rejected():
    with pytest.raises(ValueError):
        Primitive.of("torus", radius=1.0)


def test_cannot_mix_dimensions():
    with pytest.raises(ValueError):
        make_box().adding(make_rect())


def test_only_profiles_extrude():
    with pytest.raises(ValueError):
        make_box().extruded(2.0)
    assert make_circle(1.0).extruded(2.0).dimension == 3


def test_profile_transforms_stay_planar():
    rect = make_rect(size=(1.0, 1.0))
    assert rect.translated(x=1.0, y=2.0).dimension == 2
    with pytest.raises(ValueError):
        rect.translated(z=1.0)
    with pytest.raises(ValueError):
        rect.rotated(x=90)
    with pytest.raises(ValueError):
        rect.mirrored("z")


def test_symmetry_is_union_with_mirror():
    box = make_box().translated(x=2.0)
    sym = box.symmetry("x")
    assert isinstance(sym, Boolean)
    assert sym.op == "union"
    assert sym.operands[0] == box
    assert sym.operands[1].op == "mirror"
    assert sym.operands[1].param("normal") == (1.0, 0.0, 0.0)


def test_walk_and_primitive_count():
    tree = make_box().adding(make_box().translated(x=2), make_box().translated(x=4)).with_material("aluminum")
    assert isinstance(next(tree.walk()), Tag)
    assert tree.primitive_count() == 3


def test_empty_boolean_helpers():
    box = make_box()
    assert box.adding() is box
    assert boolean_difference(box, []) is box
    with pytest.raises(ValueError):
        boolean_union([])


def test_union_parts_accepts_mapping():
    parts = {"a": make_box(), "b": make_box().translated(x=3)}
    combined = union_parts(parts)
    assert combined.primitive_count() == 2


def test_repetition_is_finite_and_restartable():
    rep = repeat(make_box(), count=3, step=(0.0, 10.0, 0.0), start=(0.0, 5.0, 0.0))
    assert len(rep) == 3
    assert rep.offsets() == [(0.0, 5.0, 0.0), (0.0, 15.0, 0.0), (0.0, 25.0, 0.0)]
    first = list(rep)
    second = list(rep)
    assert first == second
    assert [node.param("offset") for node in first] == [(0.0, 5.0, 0.0), (0.0, 15.0, 0.0), (0.0, 25.0, 0.0)]


def test_repetition_rejects_zero_count():
    with pytest.raises(ValueError):
        Repetition(make_box(), count=0, step=(1.0, 0.0, 0.0))


def test_colour_tag_is_rgba():
    tagged = make_box().colored((255, 128, 0))
    assert tagged.key == "color"
    assert tagged.value[0] == pytest.approx(1.0)
    assert tagged.value[3] == pytest.approx(1.0)
