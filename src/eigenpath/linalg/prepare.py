# src/eigenpath/linalg/prepare.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import math
import warnings

import numpy as np

from eigenpath.errors import NormalizationWarning
from eigenpath.utils.arrays import as_matrix3, frozen_copy

__all__ = [
    "MatrixPreparation", "prepare_matrix", "sanitize_scalar", "sanitize_exponent",
    "DET_EPS", "NORMALIZATION_FAILED_MSG", "ADJUSTMENT_ERROR_MSG",
]

DET_EPS = 1e-8
NORMALIZATION_FAILED_MSG = "Normalization requires a non-zero determinant. Matrix left unnormalized."
ADJUSTMENT_ERROR_MSG = "Matrix adjustment error. Check scalar or exponent values."


@dataclass(frozen=True)
class MatrixPreparation:
    """
    Outcome of pre-scaling a base matrix before decomposition.

    Fields:
      - matrix: effective matrix fed to the evaluator (None on error)
      - adjusted_matrix: (scalar * A) ** exponent, before normalization
      - normalization_applied / normalization_failed: at most one is True
      - determinant_before / determinant_after: det of the adjusted and
        normalized matrices (after is None unless normalization applied)
      - error: adjustment error message, or None
    """
    matrix: Optional[np.ndarray]
    adjusted_matrix: np.ndarray
    scalar: float
    exponent: int
    normalization_applied: bool = False
    normalization_failed: bool = False
    determinant_before: Optional[float] = None
    determinant_after: Optional[float] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.matrix is not None


def sanitize_scalar(value: float) -> float:
    value = float(value)
    return value if math.isfinite(value) else 1.0


def sanitize_exponent(value: float) -> int:
    value = float(value)
    base = value if math.isfinite(value) else 1.0
    return max(1, int(round(base)))


def prepare_matrix(
    A,
    *,
    scalar: float = 1.0,
    exponent: float = 1,
    normalize: bool = False,
) -> MatrixPreparation:
    """
    Apply scalar and integer exponent to A, then optionally divide by the cube
    root of |det| so the result has unit |det|.

    When normalization is requested but |det| < DET_EPS the matrix is left
    unnormalized, ``normalization_failed`` is set and a NormalizationWarning
    is emitted. The caller owns resetting its normalize flag.
    """
    base = as_matrix3(A)
    safe_scalar = sanitize_scalar(scalar)
    safe_exponent = sanitize_exponent(exponent)

    with np.errstate(all="ignore"):
        scaled = base * safe_scalar
        powered = scaled if safe_exponent == 1 else np.linalg.matrix_power(scaled, safe_exponent)
        det_before = float(np.linalg.det(powered)) if np.all(np.isfinite(powered)) else math.nan

    if not np.all(np.isfinite(powered)) or not math.isfinite(det_before):
        return MatrixPreparation(
            matrix=None,
            adjusted_matrix=frozen_copy(base),
            scalar=safe_scalar,
            exponent=safe_exponent,
            error=ADJUSTMENT_ERROR_MSG,
        )

    adjusted = frozen_copy(powered)
    if not normalize:
        return MatrixPreparation(
            matrix=adjusted,
            adjusted_matrix=adjusted,
            scalar=safe_scalar,
            exponent=safe_exponent,
            determinant_before=det_before,
        )

    if abs(det_before) < DET_EPS:
        warnings.warn(NORMALIZATION_FAILED_MSG, NormalizationWarning, stacklevel=2)
        return MatrixPreparation(
            matrix=adjusted,
            adjusted_matrix=adjusted,
            scalar=safe_scalar,
            exponent=safe_exponent,
            normalization_failed=True,
            determinant_before=det_before,
        )

    normalized = frozen_copy(powered / np.cbrt(abs(det_before)))
    return MatrixPreparation(
        matrix=normalized,
        adjusted_matrix=adjusted,
        scalar=safe_scalar,
        exponent=safe_exponent,
        normalization_applied=True,
        determinant_before=det_before,
        determinant_after=float(np.linalg.det(normalized)),
    )
