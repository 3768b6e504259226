# src/eigenpath/config/loader.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping

import numpy as np

from eigenpath.activation import IDENTITY, Activation, get_activation
from eigenpath.errors import SceneLoadError, SceneNotFoundError
from eigenpath.linalg.modes import DEFAULT_MODE, get_mode
from eigenpath.presets import DEFAULT_PRESET, get_preset
from eigenpath.runtime.sampling import DEFAULT_PRECISION
from eigenpath.runtime.types import VectorObject, Wall
from eigenpath.utils.arrays import as_matrix3, frozen_copy
from .schema import validate_tables

try:  # pragma: no cover - Python >=3.11
    import tomllib  # type: ignore
except Exception:  # pragma: no cover
    import tomli as tomllib  # type: ignore

__all__ = ["SceneConfig", "scene_from_dict", "loads_scene", "load_scene", "DEFAULT_VECTOR_COLORS"]

DEFAULT_VECTOR_COLORS = ("#f87171", "#60a5fa", "#facc15", "#4ade80", "#a78bfa", "#fb923c")
DEFAULT_START_T = 0.0
DEFAULT_END_T = 2.0


def _default_vectors() -> tuple[VectorObject, ...]:
    return (VectorObject(id=0, value=[2.0, 0.0, 0.5], color=DEFAULT_VECTOR_COLORS[0]),)


@dataclass(frozen=True, eq=False)
class SceneConfig:
    """Everything one pipeline pass reads, as loaded from a scene file."""
    matrix: np.ndarray = field(default_factory=lambda: get_preset(DEFAULT_PRESET).matrix)
    preset: str | None = DEFAULT_PRESET
    scalar: float = 1.0
    exponent: int = 1
    normalize: bool = False
    interpolation: str = DEFAULT_MODE
    start_t: float = DEFAULT_START_T
    end_t: float = DEFAULT_END_T
    precision: float = DEFAULT_PRECISION
    activation: Activation = IDENTITY
    vectors: tuple[VectorObject, ...] = field(default_factory=_default_vectors)
    walls: tuple[Wall, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "matrix", frozen_copy(as_matrix3(self.matrix)))
        object.__setattr__(self, "vectors", tuple(self.vectors))
        object.__setattr__(self, "walls", tuple(self.walls))


def scene_from_dict(doc: Mapping[str, Any]) -> SceneConfig:
    """Validate a parsed scene document and build a SceneConfig."""
    doc = dict(doc)
    validate_tables(doc)

    mtbl: Dict[str, Any] = doc.get("matrix", {})
    preset: str | None = None
    if "values" in mtbl:
        matrix = np.array(mtbl["values"], dtype=np.float64)
    else:
        preset = mtbl.get("preset", DEFAULT_PRESET)
        try:
            matrix = get_preset(preset).matrix
        except KeyError as e:
            raise SceneLoadError(f"[matrix].preset: {e.args[0]}") from None

    interpolation = mtbl.get("interpolation", DEFAULT_MODE)
    try:
        interpolation = get_mode(interpolation).name
    except KeyError as e:
        raise SceneLoadError(f"[matrix].interpolation: {e.args[0]}") from None

    act_name = doc.get("activation", {}).get("name", IDENTITY.name)
    try:
        activation = get_activation(act_name)
    except KeyError as e:
        raise SceneLoadError(f"[activation].name: {e.args[0]}") from None

    stbl: Dict[str, Any] = doc.get("sampling", {})

    if "vectors" in doc:
        vectors = tuple(
            VectorObject(
                id=body.get("id", i),
                value=body["value"],
                visible=body.get("visible", True),
                color=body.get("color", DEFAULT_VECTOR_COLORS[i % len(DEFAULT_VECTOR_COLORS)]),
            )
            for i, body in enumerate(doc["vectors"])
        )
    else:
        vectors = _default_vectors()

    walls = tuple(
        Wall(id=body.get("id", i), axis=body.get("axis", "x"), position=body.get("position", 0.0))
        for i, body in enumerate(doc.get("walls", []))
    )

    return SceneConfig(
        matrix=matrix,
        preset=preset,
        scalar=float(mtbl.get("scalar", 1.0)),
        exponent=int(round(float(mtbl.get("exponent", 1)))),
        normalize=bool(mtbl.get("normalize", False)),
        interpolation=interpolation,
        start_t=float(stbl.get("start", DEFAULT_START_T)),
        end_t=float(stbl.get("end", DEFAULT_END_T)),
        precision=float(stbl.get("precision", DEFAULT_PRECISION)),
        activation=activation,
        vectors=vectors,
        walls=walls,
    )


def loads_scene(text: str) -> SceneConfig:
    """Parse a scene from TOML text."""
    try:
        doc = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise SceneLoadError(f"Invalid scene TOML: {e}") from e
    return scene_from_dict(doc)


def load_scene(path: str | Path) -> SceneConfig:
    """Read and parse a scene file."""
    p = Path(path).expanduser()
    if not p.is_file():
        raise SceneNotFoundError(str(p))
    try:
        with open(p, "rb") as fh:
            doc = tomllib.load(fh)
    except tomllib.TOMLDecodeError as e:
        raise SceneLoadError(f"Invalid scene TOML in {p}: {e}") from e
    return scene_from_dict(doc)
