# src/eigenpath/config/schema.py
from __future__ import annotations
from typing import Any, Dict
import math

from eigenpath.errors import SceneLoadError
from eigenpath.runtime.types import AXES

__all__ = [
    "validate_tables",
    "validate_matrix_table",
    "validate_sampling_table",
    "validate_vectors",
    "validate_walls",
]

_KNOWN_TABLES = {"matrix", "sampling", "activation", "vectors", "walls"}


def _is_number(x: Any) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool)


def _is_finite_number(x: Any) -> bool:
    return _is_number(x) and math.isfinite(float(x))


def _optional_table(doc: Dict[str, Any], key: str) -> Dict[str, Any]:
    tbl = doc.get(key, {})
    if not isinstance(tbl, dict):
        raise SceneLoadError(f"[{key}] must be a table if present")
    return tbl


def _check_triple(value: Any, where: str) -> None:
    if not isinstance(value, list) or len(value) != 3 or not all(_is_finite_number(c) for c in value):
        raise SceneLoadError(f"{where} must be a list of 3 finite numbers")


def validate_matrix_table(doc: Dict[str, Any]) -> None:
    """Structural checks for [matrix].

    Rules:
      - at most one of values / preset.
      - values is 3 rows of 3 finite numbers.
      - scalar, exponent are numbers; normalize is a bool.
      - interpolation is a string if present (resolved against registered modes later).
    """
    tbl = _optional_table(doc, "matrix")
    if "values" in tbl and "preset" in tbl:
        raise SceneLoadError("[matrix] accepts either 'values' or 'preset', not both")
    if "values" in tbl:
        rows = tbl["values"]
        if not isinstance(rows, list) or len(rows) != 3:
            raise SceneLoadError("[matrix].values must be a list of 3 rows")
        for i, row in enumerate(rows):
            _check_triple(row, f"[matrix].values[{i}]")
    if "preset" in tbl and not isinstance(tbl["preset"], str):
        raise SceneLoadError("[matrix].preset must be a string")
    for key in ("scalar", "exponent"):
        if key in tbl and not _is_number(tbl[key]):
            raise SceneLoadError(f"[matrix].{key} must be a number")
    if "normalize" in tbl and not isinstance(tbl["normalize"], bool):
        raise SceneLoadError("[matrix].normalize must be true or false")
    if "interpolation" in tbl and not isinstance(tbl["interpolation"], str):
        raise SceneLoadError("[matrix].interpolation must be a string")


def validate_sampling_table(doc: Dict[str, Any]) -> None:
    """[sampling]: start, end, precision are finite numbers; precision > 0.

    The range itself (end > start) is not checked here; an empty range is
    reported by the pipeline as INVALID_RANGE.
    """
    tbl = _optional_table(doc, "sampling")
    for key in ("start", "end", "precision"):
        if key in tbl and not _is_finite_number(tbl[key]):
            raise SceneLoadError(f"[sampling].{key} must be a finite number")
    if "precision" in tbl and float(tbl["precision"]) <= 0:
        raise SceneLoadError("[sampling].precision must be > 0")


def validate_vectors(doc: Dict[str, Any]) -> None:
    vectors = doc.get("vectors", [])
    if not isinstance(vectors, list):
        raise SceneLoadError("[[vectors]] must be an array of tables")
    seen = set()
    for i, body in enumerate(vectors):
        if not isinstance(body, dict):
            raise SceneLoadError(f"[[vectors]] entry {i} must be a table")
        _check_triple(body.get("value"), f"[[vectors]][{i}].value")
        vid = body.get("id", i)
        if vid in seen:
            raise SceneLoadError(f"[[vectors]] duplicate id {vid!r}")
        seen.add(vid)
        if "visible" in body and not isinstance(body["visible"], bool):
            raise SceneLoadError(f"[[vectors]][{i}].visible must be true or false")
        if "color" in body and not isinstance(body["color"], str):
            raise SceneLoadError(f"[[vectors]][{i}].color must be a string")


def validate_walls(doc: Dict[str, Any]) -> None:
    walls = doc.get("walls", [])
    if not isinstance(walls, list):
        raise SceneLoadError("[[walls]] must be an array of tables")
    seen = set()
    for i, body in enumerate(walls):
        if not isinstance(body, dict):
            raise SceneLoadError(f"[[walls]] entry {i} must be a table")
        if body.get("axis", "x") not in AXES:
            raise SceneLoadError(f"[[walls]][{i}].axis must be one of {list(AXES)}")
        if "position" in body and not _is_finite_number(body["position"]):
            raise SceneLoadError(f"[[walls]][{i}].position must be a finite number")
        wid = body.get("id", i)
        if wid in seen:
            raise SceneLoadError(f"[[walls]] duplicate id {wid!r}")
        seen.add(wid)


def validate_tables(doc: Dict[str, Any]) -> None:
    """Presence and shape checks for every top-level table.

    All tables are optional: [matrix], [sampling], [activation],
    [[vectors]], [[walls]]. Unknown top-level keys are rejected.
    """
    unknown = sorted(set(doc) - _KNOWN_TABLES)
    if unknown:
        raise SceneLoadError(f"Unknown top-level table(s): {unknown}")
    validate_matrix_table(doc)
    validate_sampling_table(doc)
    act = _optional_table(doc, "activation")
    if "name" in act and not isinstance(act["name"], str):
        raise SceneLoadError("[activation].name must be a string")
    validate_vectors(doc)
    validate_walls(doc)
