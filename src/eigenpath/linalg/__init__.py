from .eigen import Eigenvalue, EigenvalueDisplay, display_pairs
from .modes import InterpolationMode, get_mode, register, registry, DEFAULT_MODE
from .evaluator import MatrixEvaluator, create_evaluator, calculate_at, calculate_atv
from .prepare import MatrixPreparation, prepare_matrix

__all__ = [
    "Eigenvalue", "EigenvalueDisplay", "display_pairs",
    "InterpolationMode", "get_mode", "register", "registry", "DEFAULT_MODE",
    "MatrixEvaluator", "create_evaluator", "calculate_at", "calculate_atv",
    "MatrixPreparation", "prepare_matrix",
]
