# src/eigenpath/linalg/evaluator.py
"""
Fractional matrix powers through eigendecomposition.

For a diagonalizable 3x3 real matrix ``A = P D P^-1`` the evaluator exposes

    A(t) = P · D_t · P^-1

where ``D_t`` holds the eigenvalues interpolated by an interpolation mode
(see :mod:`eigenpath.linalg.modes`). The reconstruction is real for a real
input up to rounding; the imaginary residue is dropped.

For a well-formed 3x3 input :func:`create_evaluator` never raises; it returns ``None`` when the
matrix cannot be diagonalized, and callers must check for it.
"""
from __future__ import annotations

import math
from typing import Dict, Optional, Tuple

import numpy as np

from eigenpath.utils.arrays import as_matrix3, as_vector3
from .eigen import Eigenvalue, to_eigenvalues
from .modes import DEFAULT_MODE, InterpolationMode, get_mode

__all__ = [
    "MatrixEvaluator", "create_evaluator", "calculate_at", "calculate_atv",
    "TIME_DECIMALS", "COND_LIMIT",
]

# cache keys round t to this many decimals
TIME_DECIMALS = 6
# eigenvector matrices worse conditioned than this count as singular
COND_LIMIT = 1e10


def _time_key(t: float) -> Optional[float]:
    t = float(t)
    if not math.isfinite(t):
        return None
    return round(t, TIME_DECIMALS)


class MatrixEvaluator:
    """
    Evaluator bound to one base matrix.

    Owns its own cache keyed by ``(mode name, t rounded to 6 decimals)``;
    there is no state shared between evaluator instances. Build a new
    evaluator whenever the base matrix changes.
    """

    def __init__(self, matrix: np.ndarray, values: np.ndarray, P: np.ndarray, P_inv: np.ndarray):
        self._matrix = matrix
        self._values = np.asarray(values, dtype=np.complex128)
        self._P = P
        self._P_inv = P_inv
        self._eigenvalues = to_eigenvalues(self._values)
        self._cache: Dict[Tuple[str, float], np.ndarray] = {}

    # ---------------- introspection ----------------

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix

    @property
    def eigenvalues(self) -> tuple[Eigenvalue, ...]:
        """Eigenvalues in decomposition order (columns of P)."""
        return self._eigenvalues

    @property
    def eigenvectors(self) -> np.ndarray:
        """P: column i is the eigenvector of eigenvalue i."""
        return self._P

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def eigenvalues_at(self, t: float, mode: str | InterpolationMode = DEFAULT_MODE) -> tuple[Eigenvalue, ...]:
        """Interpolated eigenvalues (the diagonal of D_t)."""
        with np.errstate(all="ignore"):
            values = get_mode(mode).fn(self._values, float(t))
        return to_eigenvalues(values)

    # ---------------- evaluation ----------------

    def matrix_at(self, t: float, mode: str | InterpolationMode = DEFAULT_MODE) -> Optional[np.ndarray]:
        """
        Return the real (3, 3) matrix A(t), or None if t is not finite or the
        reconstruction is not finite. Results are cached and returned
        read-only; repeated calls that round to the same key return the same
        array object.
        """
        m = get_mode(mode)
        t_key = _time_key(t)
        if t_key is None:
            return None
        key = (m.name, t_key)
        hit = self._cache.get(key)
        if hit is not None:
            return hit

        with np.errstate(all="ignore"):
            d_t = m.fn(self._values, float(t))
            A_t = ((self._P * d_t) @ self._P_inv).real
        if not np.all(np.isfinite(A_t)):
            return None
        A_t = np.ascontiguousarray(A_t, dtype=np.float64)
        A_t.flags.writeable = False
        self._cache[key] = A_t
        return A_t

    def apply_to_vector(
        self,
        t: float,
        v,
        mode: str | InterpolationMode = DEFAULT_MODE,
    ) -> Optional[np.ndarray]:
        """Return A(t) @ v, or None when A(t) is unavailable."""
        A_t = self.matrix_at(t, mode)
        if A_t is None:
            return None
        return A_t @ as_vector3(v)

    def __repr__(self) -> str:
        return f"MatrixEvaluator(eigenvalues={list(self._eigenvalues)}, cached={len(self._cache)})"


def create_evaluator(A) -> Optional[MatrixEvaluator]:
    """
    Factor A and return an evaluator, or None when A is not diagonalizable.

    Failure covers: the eigen solver not converging, non-finite eigen data,
    and a singular (or numerically singular) eigenvector matrix P.
    """
    matrix = as_matrix3(A)
    matrix.flags.writeable = False
    if not np.all(np.isfinite(matrix)):
        return None
    try:
        values, P = np.linalg.eig(matrix)
    except (np.linalg.LinAlgError, ValueError):
        return None
    if values is None or P is None or P.shape != (3, 3):
        return None
    if not (np.all(np.isfinite(values)) and np.all(np.isfinite(P))):
        return None

    P = np.asarray(P, dtype=np.complex128)
    # numpy hands back near-parallel columns for defective matrices
    # instead of failing, so the conditioning decides as well
    try:
        cond = float(np.linalg.cond(P))
        if not math.isfinite(cond) or cond > COND_LIMIT:
            return None
        P_inv = np.linalg.inv(P)
    except np.linalg.LinAlgError:
        return None
    return MatrixEvaluator(matrix, values, P, P_inv)


def calculate_at(A, t: float, mode: str | InterpolationMode = DEFAULT_MODE) -> Optional[np.ndarray]:
    """One-shot A(t) with a throwaway evaluator."""
    evaluator = create_evaluator(A)
    return evaluator.matrix_at(t, mode) if evaluator is not None else None


def calculate_atv(A, v, t: float, activation=None, mode: str | InterpolationMode = DEFAULT_MODE) -> Optional[np.ndarray]:
    """One-shot activation(A(t) @ v); ``activation`` defaults to identity."""
    evaluator = create_evaluator(A)
    if evaluator is None:
        return None
    raw = evaluator.apply_to_vector(t, v, mode)
    if raw is None:
        return None
    if activation is None:
        return raw
    return np.array([activation(float(c)) for c in raw], dtype=np.float64)
