from __future__ import annotations

import numpy as np
import pytest

from eigenpath.analysis.contact import (
    CONTACT_TOLERANCE, compute_contact, detect_contacts, resolve_normal_direction,
)
from eigenpath.runtime.types import Wall


def _p(*xs):
    return np.array(xs, dtype=np.float64)


def test_crossing_is_interpolated():
    c = compute_contact(Wall("w", "x", 0.0), _p(1, 0, 0), _p(-1, 0, 0))
    assert c is not None
    assert c.rule == "crossing"
    np.testing.assert_allclose(c.point, [0.0, 0.0, 0.0])
    assert c.normal_direction == 1
    assert c.wall_id == "w" and c.axis == "x" and c.position == 0.0


def test_crossing_point_lies_on_segment():
    c = compute_contact(Wall(0, "x", 0.0), _p(3, 4, 0), _p(-1, 0, 0))
    np.testing.assert_allclose(c.point, [0.0, 1.0, 0.0])


def test_crossing_in_negative_direction():
    c = compute_contact(Wall(0, "y", 1.0), _p(0, 0, 0), _p(0, 2, 0))
    assert c.rule == "crossing"
    assert c.normal_direction == -1
    np.testing.assert_allclose(c.point, [0.0, 1.0, 0.0])


def test_current_within_tolerance_wins():
    c = compute_contact(Wall(0, "x", 0.0), _p(0.02, 0, 0), _p(0.02, 0, 0))
    assert c.rule == "current"
    np.testing.assert_allclose(c.point, [0.0, 0.0, 0.0])
    assert c.normal_direction == 1


def test_previous_within_tolerance():
    c = compute_contact(Wall(0, "z", 2.0), _p(0, 0, 3.0), _p(1, 1, 1.95))
    assert c.rule == "previous"
    np.testing.assert_allclose(c.point, [1.0, 1.0, 2.0])
    # previous is just below the wall
    assert c.normal_direction == -1


def test_point_is_projected_onto_wall():
    c = compute_contact(Wall(0, "y", -1.0), _p(5, -1.05, 7))
    assert c.point[1] == -1.0
    assert c.point[0] == 5.0 and c.point[2] == 7.0


def test_no_previous_and_far_away():
    assert compute_contact(Wall(0, "x", 0.0), _p(1, 0, 0)) is None


def test_same_side_is_no_contact():
    assert compute_contact(Wall(0, "x", 0.0), _p(2, 0, 0), _p(1, 0, 0)) is None


def test_nearly_parallel_step_is_skipped():
    c = compute_contact(Wall(0, "x", 0.0), _p(4e-9, 0, 0), _p(-4e-9, 0, 0), tolerance=1e-9)
    assert c is None


def test_tolerance_boundary_is_inclusive():
    c = compute_contact(Wall(0, "x", 0.0), _p(0.5, 0, 0), tolerance=0.5)
    assert c is not None and c.rule == "current"


def test_exact_touch_uses_previous_side():
    c = compute_contact(Wall(0, "x", 0.0), _p(0, 0, 0), _p(-1, 0, 0))
    assert c.rule == "current"
    assert c.normal_direction == -1


@pytest.mark.parametrize(
    "primary, secondary, expected",
    [
        (0.5, None, 1),
        (-0.5, None, -1),
        (0.0, -2.0, -1),
        (1e-7, 3.0, 1),
        (0.0, None, 1),
        (0.0, 1e-9, 1),
    ],
)
def test_resolve_normal_direction(primary, secondary, expected):
    assert resolve_normal_direction(primary, secondary) == expected


def test_detect_contacts_one_per_wall():
    walls = [Wall("a", "x", 0.0), Wall("b", "y", 10.0), Wall("c", "z", 0.0)]
    contacts = detect_contacts(walls, _p(1, 0, 0.01), _p(-1, 0, 0.01))
    assert [c.wall_id for c in contacts] == ["a", "c"]
    assert contacts[0].rule == "crossing"
    assert contacts[1].rule == "current"


def test_default_tolerance():
    assert CONTACT_TOLERANCE == pytest.approx(0.07)
    assert compute_contact(Wall(0, "x", 0.0), _p(0.069, 0, 0)) is not None
    assert compute_contact(Wall(0, "x", 0.0), _p(0.071, 0, 0)) is None


def test_wall_rejects_bad_axis():
    with pytest.raises(ValueError):
        Wall(0, "w", 0.0)
    with pytest.raises(ValueError):
        Wall(0, "x", float("inf"))


def test_previous_on_wall_takes_direction_from_current():
    c = compute_contact(Wall(0, "z", 2.0), _p(0, 0, 1.0), _p(1, 1, 2.0))
    assert c.rule == "previous"
    assert c.normal_direction == -1
    np.testing.assert_allclose(c.point, [1.0, 1.0, 2.0])
