# src/eigenpath/activation.py
"""
Element-wise activation strategies applied to transformed points.

Built-in strategies are pure ``float -> float`` callables looked up by name.
A ``custom`` strategy wraps a callable produced elsewhere (for instance by an
expression parser) and may carry the parser's error text instead; a pass
with an erroring activation reports ACTIVATION_ERROR and builds nothing.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional
import math

import numpy as np

__all__ = [
    "ActivationFn", "Activation", "get_activation", "list_activations", "custom_activation",
    "IDENTITY",
]

ActivationFn = Callable[[float], float]


def _identity(x: float) -> float:
    return x

def _relu(x: float) -> float:
    return x if x > 0.0 else 0.0

def _leaky_relu(x: float) -> float:
    return x if x > 0.0 else 0.01 * x

def _sigmoid(x: float) -> float:
    # split keeps exp() from overflowing for large |x|
    if x >= 0.0:
        return 1.0 / (1.0 + math.exp(-x))
    z = math.exp(x)
    return z / (1.0 + z)

def _softplus(x: float) -> float:
    return max(x, 0.0) + math.log1p(math.exp(-abs(x)))


@dataclass(frozen=True)
class Activation:
    name: str
    fn: ActivationFn
    error: Optional[str] = None

    def __call__(self, x: float) -> float:
        return self.fn(x)

    def apply(self, point: np.ndarray) -> np.ndarray:
        """Apply fn to each coordinate of a point; returns a new float64 array."""
        return np.array([self.fn(float(c)) for c in point], dtype=np.float64)

    @property
    def ok(self) -> bool:
        return self.error is None


IDENTITY = Activation("identity", _identity)

_catalog: Dict[str, Activation] = {
    a.name: a
    for a in (
        IDENTITY,
        Activation("relu", _relu),
        Activation("leaky_relu", _leaky_relu),
        Activation("sigmoid", _sigmoid),
        Activation("tanh", math.tanh),
        Activation("softplus", _softplus),
    )
}


def get_activation(name: str) -> Activation:
    """Return the built-in activation for 'name' or raise KeyError."""
    try:
        return _catalog[name]
    except KeyError:
        raise KeyError(f"Unknown activation '{name}'; available: {sorted(_catalog)}") from None


def list_activations() -> list[str]:
    return sorted(_catalog)


def custom_activation(fn: Optional[ActivationFn], error: Optional[str] = None) -> Activation:
    """
    Wrap an externally parsed expression. With no callable (parse failure)
    the strategy evaluates to NaN and carries 'error'.
    """
    if fn is None:
        return Activation("custom", lambda x: math.nan, error or "expression could not be parsed")
    return Activation("custom", fn, error)
