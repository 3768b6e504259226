# src/eigenpath/__init__.py
from __future__ import annotations

from pathlib import Path

# Re-export frozen constants/types for stable imports
from eigenpath.runtime.status import (
    Status, OK, ADJUST_FAILED, ACTIVATION_ERROR, MATRIX_UNAVAILABLE,
    INVALID_RANGE, SAMPLE_FAILED, CALC_ERROR, NAN_DETECTED,
)
from .runtime.types import VectorObject, Wall
from .linalg import MatrixEvaluator, create_evaluator, prepare_matrix
from .runtime.sampling import plan_samples
from .runtime.paths import build_paths
from .analysis import compute_contact, assemble_scene
from .activation import Activation, get_activation, custom_activation
from .config import SceneConfig, load_scene, loads_scene
from .runtime.session import Session, SceneSnapshot


__all__ = [
    # Core entry points
    "setup", "Session", "SceneSnapshot", "SceneConfig", "load_scene", "loads_scene",
    # Building blocks
    "MatrixEvaluator", "create_evaluator", "prepare_matrix", "plan_samples",
    "build_paths", "compute_contact", "assemble_scene",
    "VectorObject", "Wall", "Activation", "get_activation", "custom_activation",
    # Status codes
    "Status", "OK", "ADJUST_FAILED", "ACTIVATION_ERROR", "MATRIX_UNAVAILABLE",
    "INVALID_RANGE", "SAMPLE_FAILED", "CALC_ERROR", "NAN_DETECTED",
]


def setup(scene=None, *, jit: bool = False) -> Session:
    """Load a scene and open a session in one call.

    Parameters:
        scene: A SceneConfig, a path to a scene TOML file, or None for the
            default scene (XY rotation preset, one vector, no walls).
        jit: Use the numba-compiled finite guard when numba is installed.

    Returns:
        A `Session` whose evaluator, sampling plan and trajectories are built
        on first use.

    Example::

        from eigenpath import setup

        session = setup("scenes/spiral.toml")
        snap = session.snapshot(1.25)
        if snap.ok:
            print(snap.transformed, snap.contact_counts)
    """
    if scene is None or isinstance(scene, SceneConfig):
        config = scene
    else:
        config = load_scene(Path(scene))
    return Session(config, jit=jit)
