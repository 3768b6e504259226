from .arrays import as_matrix3, as_vector3, frozen_copy

__all__ = ["as_matrix3", "as_vector3", "frozen_copy"]
