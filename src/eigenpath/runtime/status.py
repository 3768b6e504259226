# src/eigenpath/runtime/status.py
from __future__ import annotations
from enum import IntEnum

__all__ = [
    "Status",
    # int constants
    "OK", "ADJUST_FAILED", "ACTIVATION_ERROR", "MATRIX_UNAVAILABLE",
    "INVALID_RANGE", "SAMPLE_FAILED", "CALC_ERROR", "NAN_DETECTED",
    "MESSAGES", "message_for",
]

class Status(IntEnum):
    """Stable outcome codes for one pipeline pass."""
    OK = 0                  # trajectories built
    ADJUST_FAILED = 1       # scalar/exponent produced an unusable matrix
    ACTIVATION_ERROR = 2    # activation strategy carries an error
    MATRIX_UNAVAILABLE = 3  # evaluator could not be built
    INVALID_RANGE = 4       # end time <= start time
    SAMPLE_FAILED = 5       # A(t) unavailable at some sample time
    CALC_ERROR = 6          # a vector's trajectory could not be completed
    NAN_DETECTED = 7        # activated point is not finite

OK: int = int(Status.OK)
ADJUST_FAILED: int = int(Status.ADJUST_FAILED)
ACTIVATION_ERROR: int = int(Status.ACTIVATION_ERROR)
MATRIX_UNAVAILABLE: int = int(Status.MATRIX_UNAVAILABLE)
INVALID_RANGE: int = int(Status.INVALID_RANGE)
SAMPLE_FAILED: int = int(Status.SAMPLE_FAILED)
CALC_ERROR: int = int(Status.CALC_ERROR)
NAN_DETECTED: int = int(Status.NAN_DETECTED)

MESSAGES: dict[Status, str] = {
    Status.ADJUST_FAILED: "Matrix adjustment error. Check scalar or exponent values.",
    Status.ACTIVATION_ERROR: "Activation Function Error: {detail}",
    Status.MATRIX_UNAVAILABLE: "Matrix unavailable.",
    Status.INVALID_RANGE: "Animation End Time must be greater than Start Time.",
    Status.SAMPLE_FAILED: "Matrix generation failed at specific time samples.",
    Status.CALC_ERROR: "Calculation Error: The matrix might be singular or non-diagonalizable.",
    Status.NAN_DETECTED: "Calculation Error: activated point is not finite.",
}


def message_for(status: Status | int, detail: str = "") -> str | None:
    """Return the user-facing message for 'status' (None for OK)."""
    status = Status(status)
    if status is Status.OK:
        return None
    return MESSAGES[status].format(detail=detail)
