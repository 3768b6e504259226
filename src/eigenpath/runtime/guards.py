# src/eigenpath/runtime/guards.py
from __future__ import annotations

import math
from typing import Callable
import numpy as np

# numba is optional; without it the Python implementation is used as-is.
try:
    from numba import njit
except Exception:  # pragma: no cover
    njit = None  # type: ignore

__all__ = ["get_guard", "numba_available"]


def _allfinite1d_impl(x: np.ndarray) -> bool:
    for i in range(x.size):
        if not math.isfinite(x[i]):
            return False
    return True


_allfinite1d_py = _allfinite1d_impl
_allfinite1d_jit = njit(cache=False)(_allfinite1d_impl) if njit is not None else None


def numba_available() -> bool:
    return _allfinite1d_jit is not None


def get_guard(jit: bool) -> Callable[[np.ndarray], bool]:
    """Return the numba guard when requested and available, else the Python one."""
    if jit and _allfinite1d_jit is not None:
        return _allfinite1d_jit
    return _allfinite1d_py

