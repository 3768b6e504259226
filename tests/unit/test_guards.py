from __future__ import annotations
import math

import numpy as np
import pytest

from eigenpath.runtime import guards


@pytest.mark.parametrize(
    "values, expected",
    [([1.0, 2.0, 3.0], True), ([1.0, math.nan, 0.0], False), ([math.inf, 0.0, 0.0], False), ([], True)],
)
def test_python_guard(values, expected):
    guard = guards.get_guard(False)
    assert guard(np.array(values, dtype=np.float64)) is expected


def test_jit_request_without_numba_falls_back(monkeypatch):
    monkeypatch.setattr(guards, "_allfinite1d_jit", None)
    assert guards.get_guard(True) is guards._allfinite1d_py
    assert not guards.numba_available()


def test_numba_guard_matches_python():
    pytest.importorskip("numba")
    assert guards.numba_available()
    jitted = guards.get_guard(True)
    assert jitted is not guards._allfinite1d_py
    assert bool(jitted(np.array([1.0, 2.0, 3.0]))) is True
    assert bool(jitted(np.array([1.0, -math.inf, 3.0]))) is False


def test_guard_is_chosen_per_call():
    assert guards.__all__ == ["get_guard", "numba_available"]
    assert not hasattr(guards, "configure_allfinite_guard")
    assert guards.get_guard(False) is guards.get_guard(False)
