from .status import Status, OK, MATRIX_UNAVAILABLE, INVALID_RANGE, CALC_ERROR, NAN_DETECTED
from .types import Axis, VectorObject, Wall, normalize_vectors
from .sampling import SamplingPlan, plan_samples, PATH_RESOLUTION
from .paths import Trajectory, PathResult, build_paths, build_trajectory

__all__ = [
    "Status", "OK", "MATRIX_UNAVAILABLE", "INVALID_RANGE", "CALC_ERROR", "NAN_DETECTED",
    "Axis", "VectorObject", "Wall", "normalize_vectors",
    "SamplingPlan", "plan_samples", "PATH_RESOLUTION",
    "Trajectory", "PathResult", "build_paths", "build_trajectory",
]
