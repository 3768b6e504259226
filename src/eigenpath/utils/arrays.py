# src/eigenpath/utils/arrays.py
from __future__ import annotations
from typing import Any
import numpy as np

__all__ = [
    "as_matrix3", "as_vector3", "frozen_copy",
]

def as_matrix3(a: Any, name: str = "matrix") -> np.ndarray:
    """
    Coerce 'a' to a float64 (3, 3) array (row-major). Raise ValueError if
    the shape is wrong or the entries are not real numbers.
    """
    try:
        arr = np.array(a, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be a 3x3 array of real numbers") from e
    if arr.shape != (3, 3):
        raise ValueError(f"{name} must have shape (3, 3); got {arr.shape}")
    return arr

def as_vector3(v: Any, name: str = "vector") -> np.ndarray:
    """
    Coerce 'v' to a float64 array of shape (3,). Raise ValueError if not.
    """
    try:
        arr = np.array(v, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be a triple of real numbers") from e
    if arr.shape != (3,):
        raise ValueError(f"{name} must have shape (3,); got {arr.shape}")
    return arr

def frozen_copy(a: np.ndarray) -> np.ndarray:
    """Return an independent read-only copy of 'a'."""
    out = np.array(a, copy=True)
    out.flags.writeable = False
    return out
