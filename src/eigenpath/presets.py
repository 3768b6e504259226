# src/eigenpath/presets.py
from __future__ import annotations

from dataclasses import dataclass
import math

import numpy as np

from eigenpath.utils.arrays import as_matrix3, frozen_copy

__all__ = ["MatrixPreset", "PRESETS", "DEFAULT_PRESET", "get_preset", "list_presets"]


@dataclass(frozen=True, eq=False)
class MatrixPreset:
    name: str
    matrix: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "matrix", frozen_copy(as_matrix3(self.matrix, self.name)))


_c, _s = math.cos(2.0), math.sin(2.0)

PRESETS: tuple[MatrixPreset, ...] = (
    MatrixPreset("Rotation (XY, 2rad)", [[_c, -_s, 0], [_s, _c, 0], [0, 0, 1]]),
    MatrixPreset("Shear", [[1, 1, 0], [0, 1, 0], [0, 0, 1]]),
    MatrixPreset("Scale (Uniform)", [[1.5, 0, 0], [0, 1.5, 0], [0, 0, 1.5]]),
    MatrixPreset("Scale (Non-uniform)", [[1.5, 0, 0], [0, 0.5, 0], [0, 0, 1]]),
    MatrixPreset("Spiral Sink (XY)", [[1, -1, 0], [1, 1, 0], [0, 0, 0.8]]),
    MatrixPreset("Spiral Source (XY)", [[1, -1, 0], [1, 1, 0], [0, 0, 1.2]]),
    MatrixPreset("Saddle Point", [[1.2, 0, 0], [0, 0.8, 0], [0, 0, 1]]),
    MatrixPreset("Custom", np.eye(3)),
)
DEFAULT_PRESET = PRESETS[0].name

_by_name = {p.name: p for p in PRESETS}


def get_preset(name: str) -> MatrixPreset:
    """Return the preset called 'name' or raise KeyError."""
    try:
        return _by_name[name]
    except KeyError:
        raise KeyError(f"Unknown preset '{name}'; available: {list(_by_name)}") from None


def list_presets() -> list[str]:
    return [p.name for p in PRESETS]
