# src/eigenpath/runtime/types.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Hashable, Literal
import math

import numpy as np

from eigenpath.utils.arrays import as_vector3, frozen_copy

__all__ = ["Axis", "AXES", "AXIS_INDEX", "VectorObject", "Wall", "normalize_vectors"]

Axis = Literal["x", "y", "z"]
AXES: tuple[Axis, ...] = ("x", "y", "z")
AXIS_INDEX: dict[str, int] = {"x": 0, "y": 1, "z": 2}


@dataclass(frozen=True, eq=False)
class VectorObject:
    """A tracked vector: initial value plus display attributes."""
    id: Hashable
    value: np.ndarray
    visible: bool = True
    color: str = "#f87171"

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", frozen_copy(as_vector3(self.value, f"vector {self.id!r}")))


@dataclass(frozen=True)
class Wall:
    """Axis-aligned plane ``point[axis] == position``."""
    id: Hashable
    axis: Axis = "x"
    position: float = 0.0
    index: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.axis not in AXIS_INDEX:
            raise ValueError(f"wall axis must be one of {AXES}; got {self.axis!r}")
        position = float(self.position)
        if not math.isfinite(position):
            raise ValueError(f"wall {self.id!r} position must be finite")
        object.__setattr__(self, "position", position)
        object.__setattr__(self, "index", AXIS_INDEX[self.axis])


def normalize_vectors(vectors: list[VectorObject] | tuple[VectorObject, ...]) -> list[VectorObject]:
    """Scale each vector to unit length; zero or non-finite lengths are left as-is."""
    out: list[VectorObject] = []
    for vec in vectors:
        length = float(np.linalg.norm(vec.value))
        if not math.isfinite(length) or length == 0.0:
            out.append(vec)
            continue
        out.append(replace(vec, value=vec.value / length))
    return out
