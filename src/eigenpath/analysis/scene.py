# src/eigenpath/analysis/scene.py
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Hashable, Iterable, Mapping, Optional, Sequence
import math

import numpy as np

from eigenpath.runtime.paths import Trajectory
from eigenpath.runtime.sampling import SamplingPlan
from eigenpath.runtime.types import VectorObject, Wall
from .contact import CONTACT_TOLERANCE, WallContact, detect_contacts

__all__ = ["SceneEntry", "slice_end", "assemble_scene", "wall_contact_counts"]


@dataclass(frozen=True, eq=False)
class SceneEntry:
    """
    Renderable record for one visible vector at time t.

    ``path`` is the prefix of the trajectory reached at t; ``current`` is its
    last point and ``previous`` the one before (both fall back to the initial
    point). ``contacts`` holds at most one contact per wall for that step.
    """
    id: Hashable
    color: str
    initial: np.ndarray
    final: np.ndarray
    current: np.ndarray
    previous: np.ndarray
    path: np.ndarray
    contacts: tuple[WallContact, ...]


def slice_end(progress: float, n_points: int) -> int:
    """
    Index of the last reached sample, ``floor(progress * (n - 1))`` clamped
    to ``[-1, n - 1]``; -1 means nothing is reached yet.
    """
    if n_points <= 0 or not math.isfinite(progress):
        return -1
    idx = math.floor(progress * (n_points - 1))
    return min(max(idx, -1), n_points - 1)


def assemble_scene(
    t: float,
    vectors: Sequence[VectorObject],
    trajectories: Optional[Mapping[Hashable, Trajectory]],
    walls: Iterable[Wall],
    plan: SamplingPlan,
    tolerance: float = CONTACT_TOLERANCE,
) -> list[SceneEntry]:
    """Compose visible vectors, their trajectories and wall contacts at time t."""
    if not trajectories or not plan.ok:
        return []
    walls = tuple(walls)
    progress = plan.progress(t)

    entries: list[SceneEntry] = []
    for vector in vectors:
        if not vector.visible:
            continue
        traj = trajectories.get(vector.id)
        if traj is None:
            continue
        end = slice_end(progress, len(traj))
        path = traj.path[: end + 1]
        # entries own their points; consumers may edit them in place
        current = np.array(path[-1] if len(path) else traj.initial, copy=True)
        previous = np.array(path[-2] if len(path) > 1 else traj.initial, copy=True)
        entries.append(
            SceneEntry(
                id=vector.id,
                color=vector.color,
                initial=np.array(traj.initial, copy=True),
                final=np.array(traj.final, copy=True),
                current=current,
                previous=previous,
                path=np.array(path, copy=True),
                contacts=tuple(detect_contacts(walls, current, previous, tolerance)),
            )
        )
    return entries


def wall_contact_counts(entries: Iterable[SceneEntry]) -> dict[Hashable, int]:
    """Number of contacts per wall id across all entries."""
    counts: Counter = Counter()
    for entry in entries:
        for contact in entry.contacts:
            counts[contact.wall_id] += 1
    return dict(counts)
