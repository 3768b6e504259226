# src/eigenpath/errors.py
from __future__ import annotations

__all__ = [
    "EigenpathError",
    "SceneLoadError",
    "SceneNotFoundError",
    "ConfigError",
    "NormalizationWarning",
]

class EigenpathError(Exception):
    """Base error for the eigenpath package."""


class SceneLoadError(EigenpathError):
    """Raised when a scene (TOML) fails validation or parsing."""
    def __init__(self, message: str):
        super().__init__(message)


class SceneNotFoundError(EigenpathError):
    """Raised when a scene path cannot be resolved to an existing file."""
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Scene not found: {path}")


class ConfigError(EigenpathError):
    """Raised when values handed to a scene or session are malformed."""
    def __init__(self, message: str):
        super().__init__(message)


class NormalizationWarning(UserWarning):
    """Emitted when determinant normalization cannot be applied."""
