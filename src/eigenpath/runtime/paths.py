# src/eigenpath/runtime/paths.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable, Mapping, Optional, Sequence, TYPE_CHECKING

import numpy as np

from eigenpath.activation import IDENTITY, Activation
from eigenpath.linalg.modes import DEFAULT_MODE, InterpolationMode
from eigenpath.utils.arrays import frozen_copy
from .guards import get_guard
from .sampling import SamplingPlan
from .status import Status, message_for
from .types import VectorObject

if TYPE_CHECKING:  # pragma: no cover
    from eigenpath.linalg.evaluator import MatrixEvaluator
    from eigenpath.linalg.prepare import MatrixPreparation

__all__ = ["Trajectory", "PathResult", "build_trajectory", "build_paths"]


@dataclass(frozen=True, eq=False)
class Trajectory:
    """
    Activated positions of one vector at every sample time.

    Fields:
      - times: sample times, shape (n,)
      - path: points, shape (n, 3), row i at times[i]
      - initial / final: independent read-only copies of the first and last rows
    """
    vector_id: Hashable
    times: np.ndarray
    path: np.ndarray
    initial: np.ndarray = field(init=False)
    final: np.ndarray = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", frozen_copy(self.path))
        object.__setattr__(self, "initial", frozen_copy(self.path[0]))
        object.__setattr__(self, "final", frozen_copy(self.path[-1]))

    def __len__(self) -> int:
        return int(self.path.shape[0])

    def to_pandas(self):
        """
        Build a tidy pandas.DataFrame (optional dependency).
        Columns: 't', 'x', 'y', 'z'.
        """
        try:
            import pandas as pd  # type: ignore
        except Exception as e:  # pragma: no cover
            raise RuntimeError("pandas is required for Trajectory.to_pandas()") from e
        return pd.DataFrame(
            {
                "t": np.asarray(self.times),
                "x": self.path[:, 0],
                "y": self.path[:, 1],
                "z": self.path[:, 2],
            }
        )


@dataclass(frozen=True)
class PathResult:
    """Value-or-error record for one path-building pass."""
    trajectories: Optional[Mapping[Hashable, Trajectory]]
    status: int = int(Status.OK)
    error: Optional[str] = None
    failed_vector: Optional[Hashable] = None

    @property
    def ok(self) -> bool:
        return int(self.status) == int(Status.OK)

    @classmethod
    def failure(cls, status: Status, detail: str = "", failed_vector: Hashable | None = None) -> PathResult:
        return cls(None, int(status), message_for(status, detail), failed_vector)


def build_trajectory(
    evaluator: MatrixEvaluator,
    vector: VectorObject,
    times: np.ndarray,
    activation: Activation = IDENTITY,
    mode: str | InterpolationMode = DEFAULT_MODE,
    *,
    jit: bool = False,
) -> tuple[Optional[Trajectory], Status]:
    """
    Evaluate one vector at every sample time. Any unavailable sample or
    non-finite activated point fails the whole trajectory.
    """
    if len(times) == 0:
        return None, Status.CALC_ERROR
    allfinite = get_guard(jit)
    path = np.empty((len(times), 3), dtype=np.float64)
    for i, t in enumerate(times):
        raw = evaluator.apply_to_vector(float(t), vector.value, mode)
        if raw is None:
            return None, Status.CALC_ERROR
        point = activation.apply(raw)
        if not allfinite(point):
            return None, Status.NAN_DETECTED
        path[i] = point
    return Trajectory(vector.id, np.asarray(times), path), Status.OK


def build_paths(
    evaluator: Optional[MatrixEvaluator],
    vectors: Sequence[VectorObject],
    plan: SamplingPlan,
    activation: Activation = IDENTITY,
    mode: str | InterpolationMode = DEFAULT_MODE,
    *,
    preparation: Optional[MatrixPreparation] = None,
    jit: bool = False,
) -> PathResult:
    """
    Build a trajectory for every vector (visible or not) over ``plan.times``.

    Checks run in a fixed order and the first failure is returned:
    matrix adjustment, activation, evaluator availability, time range, matrix
    availability at every sample, then each vector in turn. A failing vector
    discards the whole pass.
    """
    if preparation is not None and preparation.error is not None:
        return PathResult.failure(Status.ADJUST_FAILED)
    if activation.error is not None:
        return PathResult.failure(Status.ACTIVATION_ERROR, activation.error)
    if evaluator is None:
        return PathResult.failure(Status.MATRIX_UNAVAILABLE)
    if not plan.ok:
        return PathResult.failure(Status.INVALID_RANGE)
    if any(evaluator.matrix_at(float(t), mode) is None for t in plan.times):
        return PathResult.failure(Status.SAMPLE_FAILED)

    trajectories: dict[Hashable, Trajectory] = {}
    for vector in vectors:
        traj, status = build_trajectory(evaluator, vector, plan.times, activation, mode, jit=jit)
        if traj is None:
            return PathResult.failure(status, failed_vector=vector.id)
        trajectories[vector.id] = traj
    return PathResult(trajectories)
