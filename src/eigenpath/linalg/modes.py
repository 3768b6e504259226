# src/eigenpath/linalg/modes.py
"""
Eigenvalue interpolation modes.

A mode maps one (complex) eigenvalue and a real time ``t`` to the eigenvalue
used on the diagonal of ``D_t``:

    power  : lam -> lam ** t            (principal branch)
    linear : lam -> (1 - t) * 1 + t * lam

Modes are looked up by name; "pow" is accepted as an alias of "power".
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict

import numpy as np

__all__ = [
    "InterpolationMode", "register", "get_mode", "registry",
    "POWER", "LINEAR", "DEFAULT_MODE",
]


@dataclass(frozen=True)
class InterpolationMode:
    """
    Public metadata for an interpolation mode.

    ``fn`` takes a complex128 array of eigenvalues and a real t and returns
    the interpolated complex128 array of the same shape.
    """
    name: str
    fn: Callable[[np.ndarray, float], np.ndarray]
    description: str = ""
    aliases: tuple[str, ...] = ()


# name -> mode instance
_registry: Dict[str, InterpolationMode] = {}

def register(mode: InterpolationMode) -> None:
    """
    Add an interpolation mode under its name and every alias. A name or
    alias already bound to another mode raises ValueError and leaves the
    table untouched; re-registering the same instance is a no-op.
    """
    name = mode.name
    if name in _registry and _registry[name] is not mode:
        raise ValueError(f"Interpolation mode '{name}' already registered with a different mode.")
    for alias in mode.aliases:
        if alias in _registry and _registry[alias] is not mode:
            raise ValueError(f"Alias '{alias}' already registered for a different mode.")

    _registry[name] = mode
    for alias in mode.aliases:
        _registry[alias] = mode

def get_mode(name: str | InterpolationMode) -> InterpolationMode:
    """
    Return the registered mode for 'name' or raise KeyError.
    """
    if isinstance(name, InterpolationMode):
        return name
    try:
        return _registry[name]
    except KeyError:
        known = sorted({m.name for m in _registry.values()})
        raise KeyError(f"Unknown interpolation mode '{name}'; available: {known}") from None

def registry() -> Dict[str, InterpolationMode]:
    """Snapshot of the lookup table: name or alias -> mode."""
    return dict(_registry)


def _power(values: np.ndarray, t: float) -> np.ndarray:
    # complex dtype keeps negative real eigenvalues on the principal branch
    return np.power(np.asarray(values, dtype=np.complex128), t)

def _linear(values: np.ndarray, t: float) -> np.ndarray:
    return (1.0 - t) * 1.0 + t * np.asarray(values, dtype=np.complex128)


POWER = InterpolationMode(
    name="power",
    fn=_power,
    description="lam ** t on the principal branch",
    aliases=("pow",),
)
LINEAR = InterpolationMode(
    name="linear",
    fn=_linear,
    description="(1 - t) + t * lam, blend from the identity eigenvalue",
)
DEFAULT_MODE = POWER.name

register(POWER)
register(LINEAR)
