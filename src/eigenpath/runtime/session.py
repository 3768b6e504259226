# src/eigenpath/runtime/session.py
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Hashable, Optional, Sequence
import warnings

import numpy as np

from eigenpath.activation import Activation
from eigenpath.analysis.contact import CONTACT_TOLERANCE
from eigenpath.analysis.scene import SceneEntry, assemble_scene, wall_contact_counts
from eigenpath.config.loader import SceneConfig
from eigenpath.errors import ConfigError
from eigenpath.linalg.eigen import EigenvalueDisplay, display_pairs
from eigenpath.linalg.evaluator import MatrixEvaluator, create_evaluator
from eigenpath.linalg.modes import get_mode
from eigenpath.linalg.prepare import (
    NORMALIZATION_FAILED_MSG, MatrixPreparation, prepare_matrix, sanitize_exponent, sanitize_scalar,
)
from eigenpath.utils.arrays import as_matrix3
from .paths import PathResult, build_paths
from .sampling import SamplingPlan, plan_samples
from .status import Status
from .types import VectorObject, Wall

__all__ = ["Session", "SceneSnapshot"]


@dataclass(frozen=True, eq=False)
class SceneSnapshot:
    """
    Everything a consumer renders for one time t.

    Fields:
      - entries: one SceneEntry per visible vector
      - contact_counts: wall id -> number of contacts across entries
      - eigenvalues / eigenvalues_at_t: (re, im) pairs, None without an evaluator
      - matrix_at_t: A(t), None when unavailable
      - raw_transformed: A(t) @ v for the first visible vector (no activation)
      - transformed: interpolated (activated) position of that vector
      - status / error: pipeline status; error falls back to the
        normalization warning when the pipeline is OK
    """
    t: float
    entries: tuple[SceneEntry, ...]
    contact_counts: dict[Hashable, int]
    eigenvalues: Optional[list[EigenvalueDisplay]]
    eigenvalues_at_t: Optional[list[EigenvalueDisplay]]
    matrix_at_t: Optional[np.ndarray]
    raw_transformed: Optional[np.ndarray]
    transformed: Optional[np.ndarray]
    status: int
    error: Optional[str]

    @property
    def ok(self) -> bool:
        return int(self.status) == int(Status.OK)


class Session:
    """
    Pipeline facade over a SceneConfig.

    Derived state is rebuilt lazily and only when an input it depends on
    changes: the evaluator when the effective matrix changes, the sampling
    plan when the time range or precision changes, and the trajectories when
    any of those, the vectors, the activation or the interpolation mode
    change. Each evaluator owns its cache, so replacing it discards the
    previous cache.
    """

    def __init__(self, config: SceneConfig | None = None, *, jit: bool = False, tolerance: float = CONTACT_TOLERANCE):
        self._config = config if config is not None else SceneConfig()
        self._jit = bool(jit)
        self._tolerance = float(tolerance)
        self.normalization_warning: Optional[str] = None
        self._preparation: Optional[MatrixPreparation] = None
        self._evaluator: Optional[MatrixEvaluator] = None
        self._evaluator_ready = False
        self._plan: Optional[SamplingPlan] = None
        self._paths: Optional[PathResult] = None

    # ---------------- configuration ----------------

    @property
    def config(self) -> SceneConfig:
        return self._config

    def _update(self, *, matrix_changed: bool = False, plan_changed: bool = False, **changes) -> None:
        self._config = replace(self._config, **changes)
        if matrix_changed:
            self._preparation = None
            self._evaluator = None
            self._evaluator_ready = False
        if plan_changed:
            self._plan = None
        self._paths = None

    def set_matrix(self, matrix, *, preset: str | None = None) -> None:
        try:
            matrix = as_matrix3(matrix)
        except ValueError as e:
            raise ConfigError(str(e)) from e
        self.normalization_warning = None
        self._update(matrix=matrix, preset=preset, matrix_changed=True)

    def set_scalar(self, scalar: float) -> None:
        self.normalization_warning = None
        self._update(scalar=sanitize_scalar(scalar), matrix_changed=True)

    def set_exponent(self, exponent: float) -> None:
        self.normalization_warning = None
        self._update(exponent=sanitize_exponent(exponent), matrix_changed=True)

    def set_normalize(self, enabled: bool) -> None:
        if not enabled:
            self.normalization_warning = None
        self._update(normalize=bool(enabled), matrix_changed=True)

    def set_interpolation(self, mode: str) -> None:
        self._update(interpolation=get_mode(mode).name)

    def set_time_range(self, start_t: float, end_t: float, precision: float | None = None) -> None:
        precision = self._config.precision if precision is None else float(precision)
        self._update(start_t=float(start_t), end_t=float(end_t), precision=precision, plan_changed=True)

    def set_activation(self, activation: Activation) -> None:
        self._update(activation=activation)

    def set_vectors(self, vectors: Sequence[VectorObject]) -> None:
        self._update(vectors=tuple(vectors))

    def set_walls(self, walls: Sequence[Wall]) -> None:
        # walls only affect contacts; trajectories stay valid
        self._config = replace(self._config, walls=tuple(walls))

    # ---------------- derived state ----------------

    @property
    def preparation(self) -> MatrixPreparation:
        if self._preparation is None:
            cfg = self._config
            prep = prepare_matrix(cfg.matrix, scalar=cfg.scalar, exponent=cfg.exponent, normalize=cfg.normalize)
            if prep.normalization_failed:
                self.normalization_warning = NORMALIZATION_FAILED_MSG
                # the normalize flag resets; the unnormalized matrix stays in use
                self._config = replace(self._config, normalize=False)
            elif prep.normalization_applied:
                self.normalization_warning = None
            self._preparation = prep
        return self._preparation

    @property
    def evaluator(self) -> Optional[MatrixEvaluator]:
        if not self._evaluator_ready:
            prep = self.preparation
            self._evaluator = create_evaluator(prep.matrix) if prep.matrix is not None else None
            self._evaluator_ready = True
        return self._evaluator

    @property
    def plan(self) -> SamplingPlan:
        if self._plan is None:
            cfg = self._config
            self._plan = plan_samples(cfg.start_t, cfg.end_t, cfg.precision)
        return self._plan

    @property
    def paths(self) -> PathResult:
        if self._paths is None:
            cfg = self._config
            prep = self.preparation
            result = build_paths(
                self.evaluator,
                cfg.vectors,
                self.plan,
                cfg.activation,
                cfg.interpolation,
                preparation=prep,
                jit=self._jit,
            )
            if not result.ok:
                status = Status(result.status)
                warnings.warn(
                    f"path build exited with status {status.name} ({int(status)})",
                    RuntimeWarning,
                    stacklevel=2,
                )
            self._paths = result
        return self._paths

    # ---------------- per-time queries ----------------

    def matrix_at(self, t: float) -> Optional[np.ndarray]:
        ev = self.evaluator
        return ev.matrix_at(t, self._config.interpolation) if ev is not None else None

    def snapshot(self, t: float) -> SceneSnapshot:
        """Recompute everything shown at time t; never raises for numeric failures."""
        t = float(t)
        cfg = self._config
        paths = self.paths
        ev = self.evaluator
        entries = tuple(
            assemble_scene(t, cfg.vectors, paths.trajectories, cfg.walls, self.plan, self._tolerance)
        )

        first_visible = next((v for v in cfg.vectors if v.visible), None)
        raw = None
        if first_visible is not None and ev is not None:
            raw = ev.apply_to_vector(t, first_visible.value, cfg.interpolation)
        transformed = None
        if first_visible is not None:
            entry = next((e for e in entries if e.id == first_visible.id), None)
            transformed = None if entry is None else np.array(entry.current, copy=True)

        return SceneSnapshot(
            t=t,
            entries=entries,
            contact_counts=wall_contact_counts(entries),
            eigenvalues=display_pairs(ev.eigenvalues) if ev is not None else None,
            eigenvalues_at_t=display_pairs(ev.eigenvalues_at(t, cfg.interpolation)) if ev is not None else None,
            matrix_at_t=self.matrix_at(t),
            raw_transformed=raw,
            transformed=transformed,
            status=paths.status,
            error=paths.error if paths.error is not None else self.normalization_warning,
        )

    def __repr__(self) -> str:
        return f"Session(preset={self._config.preset!r}, mode={self._config.interpolation!r}, jit={self._jit})"
