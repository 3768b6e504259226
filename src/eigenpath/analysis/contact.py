# src/eigenpath/analysis/contact.py
"""
Wall contact detection for one step of a trajectory.

A step is the segment from ``previous`` to ``current``. Against a single wall
the first matching rule wins:

1. ``current`` lies within CONTACT_TOLERANCE of the wall plane.
2. ``previous`` lies within CONTACT_TOLERANCE of the wall plane.
3. The signed offsets of the two endpoints have opposite signs; the crossing
   point is linearly interpolated along the segment.

The contact point is always projected onto the wall plane.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Iterable, Literal, Optional

import numpy as np

from eigenpath.runtime.types import Axis, Wall

__all__ = [
    "WallContact", "compute_contact", "detect_contacts", "resolve_normal_direction",
    "CONTACT_TOLERANCE", "NORMAL_EPS", "PARALLEL_EPS",
]

# world-space units of the scene
CONTACT_TOLERANCE = 0.07
# offsets this close to zero do not decide a direction
NORMAL_EPS = 1e-6
# axis spans below this are treated as parallel to the wall
PARALLEL_EPS = 1e-8

Direction = Literal[1, -1]


@dataclass(frozen=True, eq=False)
class WallContact:
    wall_id: Hashable
    axis: Axis
    position: float
    point: np.ndarray
    normal_direction: Direction
    rule: Literal["current", "previous", "crossing"] = "current"


def resolve_normal_direction(primary: float, secondary: Optional[float] = None) -> Direction:
    """
    Sign of ``primary``; falls back to ``secondary`` when ``primary`` is within
    NORMAL_EPS of zero, and to +1 when both are.
    """
    # TODO: a grazing contact exactly on the wall always reports +1; decide
    # whether it should inherit the direction of the previous step instead.
    if abs(primary) > NORMAL_EPS:
        return 1 if primary >= 0 else -1
    if secondary is not None and abs(secondary) > NORMAL_EPS:
        return 1 if secondary >= 0 else -1
    return 1


def _project(point: np.ndarray, wall: Wall) -> np.ndarray:
    out = np.array(point, dtype=np.float64, copy=True)
    out[wall.index] = wall.position
    return out


def compute_contact(
    wall: Wall,
    current: np.ndarray,
    previous: Optional[np.ndarray] = None,
    tolerance: float = CONTACT_TOLERANCE,
) -> Optional[WallContact]:
    """Return the contact of the step previous -> current with 'wall', or None."""
    k = wall.index
    current_value = float(current[k])
    diff_current = current_value - wall.position
    diff_prev = None if previous is None else float(previous[k]) - wall.position

    if abs(diff_current) <= tolerance:
        return WallContact(
            wall.id, wall.axis, wall.position,
            _project(current, wall),
            resolve_normal_direction(diff_current, diff_prev),
            "current",
        )

    if previous is None:
        return None

    if abs(diff_prev) <= tolerance:
        return WallContact(
            wall.id, wall.axis, wall.position,
            _project(previous, wall),
            resolve_normal_direction(diff_prev, diff_current),
            "previous",
        )

    if diff_prev * diff_current < 0:
        prev_value = float(previous[k])
        denominator = current_value - prev_value
        if abs(denominator) > PARALLEL_EPS:
            ratio = min(max((wall.position - prev_value) / denominator, 0.0), 1.0)
            p0 = np.asarray(previous, dtype=np.float64)
            p1 = np.asarray(current, dtype=np.float64)
            point = p0 + (p1 - p0) * ratio
            return WallContact(
                wall.id, wall.axis, wall.position,
                _project(point, wall),
                resolve_normal_direction(diff_current, diff_prev),
                "crossing",
            )

    return None


def detect_contacts(
    walls: Iterable[Wall],
    current: np.ndarray,
    previous: Optional[np.ndarray] = None,
    tolerance: float = CONTACT_TOLERANCE,
) -> list[WallContact]:
    """At most one contact per wall for the step previous -> current."""
    contacts: list[WallContact] = []
    for wall in walls:
        contact = compute_contact(wall, current, previous, tolerance)
        if contact is not None:
            contacts.append(contact)
    return contacts
