from __future__ import annotations
import math

import numpy as np
import pytest

from eigenpath.runtime.sampling import PATH_RESOLUTION, plan_samples


def test_two_units_at_default_precision():
    plan = plan_samples(0.0, 2.0, 0.01)
    assert plan.ok
    assert plan.total_steps == 200
    assert len(plan) == 201
    assert plan.times[0] == 0.0
    assert plan.times[-1] == 2.0


def test_empty_range_gives_no_samples():
    plan = plan_samples(0.0, 0.0, 0.01)
    assert not plan.ok
    assert len(plan) == 0
    assert plan.total_steps == 0


def test_reversed_range_gives_no_samples():
    assert len(plan_samples(1.0, 0.0, 0.01)) == 0


def test_coarse_precision_is_capped_by_resolution():
    plan = plan_samples(0.0, 1.0, 0.5)
    assert plan.total_steps == PATH_RESOLUTION


def test_fine_precision_adds_samples():
    plan = plan_samples(0.0, 1.0, 0.005)
    assert plan.total_steps == 200


def test_tiny_range_still_has_one_step():
    plan = plan_samples(0.0, 0.001, 0.01)
    assert plan.total_steps == 1
    np.testing.assert_array_equal(plan.times, [0.0, 0.001])


@pytest.mark.parametrize("precision", [math.nan, 0.0, -1.0, math.inf])
def test_invalid_precision_falls_back_to_default(precision):
    assert plan_samples(0.0, 1.0, precision).total_steps == 100


def test_samples_are_evenly_spaced_and_exact_at_ends():
    plan = plan_samples(-0.3, 1.7, 0.01)
    steps = np.diff(plan.times)
    np.testing.assert_allclose(steps, steps[0], rtol=1e-9)
    assert plan.times[0] == -0.3
    assert plan.times[-1] == 1.7
    assert np.all(steps > 0)


def test_times_are_read_only():
    plan = plan_samples(0.0, 1.0)
    with pytest.raises(ValueError):
        plan.times[0] = 5.0


def test_progress():
    plan = plan_samples(1.0, 3.0)
    assert plan.range == 2.0
    assert plan.progress(2.0) == 0.5
    assert plan.progress(0.0) == -0.5
    assert plan_samples(1.0, 1.0).progress(2.0) == 0.0
