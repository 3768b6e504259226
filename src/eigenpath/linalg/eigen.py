# src/eigenpath/linalg/eigen.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Literal
import math

import numpy as np

__all__ = ["Eigenvalue", "EigenvalueDisplay", "to_eigenvalues", "display_pairs"]

EigenKind = Literal["real", "complex"]

# imaginary parts below this are rounding residue from the decomposition
IMAG_TOL = 1e-12


@dataclass(frozen=True)
class Eigenvalue:
    """
    Tagged eigenvalue: ``kind == "real"`` carries ``im == 0.0`` exactly,
    ``kind == "complex"`` carries a non-zero imaginary part.
    """
    kind: EigenKind
    re: float
    im: float = 0.0

    @classmethod
    def of_real(cls, value: float) -> Eigenvalue:
        return cls("real", float(value), 0.0)

    @classmethod
    def of_complex(cls, re: float, im: float) -> Eigenvalue:
        return cls("complex", float(re), float(im))

    @classmethod
    def from_number(cls, z: complex | float, imag_tol: float = IMAG_TOL) -> Eigenvalue:
        z = complex(z)
        if math.isfinite(z.imag) and abs(z.imag) <= imag_tol:
            return cls.of_real(z.real)
        return cls.of_complex(z.real, z.imag)

    @property
    def is_complex(self) -> bool:
        return self.kind == "complex"

    def as_complex(self) -> complex:
        return complex(self.re, self.im)

    def __repr__(self) -> str:
        if self.is_complex:
            return f"Eigenvalue({self.re:.6g}{self.im:+.6g}j)"
        return f"Eigenvalue({self.re:.6g})"


@dataclass(frozen=True)
class EigenvalueDisplay:
    """Real/imaginary split of one eigenvalue for display; NaN marks non-finite parts."""
    re: float
    im: float


def to_eigenvalues(values: Iterable[complex | float]) -> tuple[Eigenvalue, ...]:
    return tuple(Eigenvalue.from_number(v) for v in np.asarray(list(values)).ravel())


def display_pairs(values: Iterable[Eigenvalue | complex | float]) -> list[EigenvalueDisplay]:
    out: list[EigenvalueDisplay] = []
    for v in values:
        z = v.as_complex() if isinstance(v, Eigenvalue) else complex(v)
        re = z.real if math.isfinite(z.real) else math.nan
        im = z.imag if math.isfinite(z.imag) else math.nan
        out.append(EigenvalueDisplay(re=re, im=im))
    return out
