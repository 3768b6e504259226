from __future__ import annotations
import math
import warnings

import numpy as np
import pytest

from eigenpath.errors import NormalizationWarning
from eigenpath.linalg.prepare import (
    ADJUSTMENT_ERROR_MSG, NORMALIZATION_FAILED_MSG,
    prepare_matrix, sanitize_exponent, sanitize_scalar,
)


def test_plain_matrix_passes_through():
    A = np.diag([2.0, 3.0, 4.0])
    prep = prepare_matrix(A)
    assert prep.ok
    np.testing.assert_allclose(prep.matrix, A)
    assert prep.determinant_before == pytest.approx(24.0)
    assert prep.determinant_after is None
    assert not prep.normalization_applied and not prep.normalization_failed


def test_scalar_then_exponent():
    prep = prepare_matrix(np.eye(3), scalar=2.0, exponent=2)
    np.testing.assert_allclose(prep.matrix, 4.0 * np.eye(3))
    assert prep.scalar == 2.0
    assert prep.exponent == 2
    assert prep.determinant_before == pytest.approx(64.0)


def test_exponent_is_matrix_power():
    A = np.array([[1.0, 1.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 2.0]])
    prep = prepare_matrix(A, exponent=3)
    np.testing.assert_allclose(prep.matrix, A @ A @ A)


def test_normalization_scales_to_unit_determinant():
    prep = prepare_matrix(np.diag([8.0, 1.0, 1.0]), normalize=True)
    assert prep.normalization_applied
    np.testing.assert_allclose(prep.matrix, np.diag([4.0, 0.5, 0.5]))
    np.testing.assert_allclose(prep.adjusted_matrix, np.diag([8.0, 1.0, 1.0]))
    assert prep.determinant_after == pytest.approx(1.0)


def test_normalization_of_negative_determinant_uses_absolute_value():
    prep = prepare_matrix(np.diag([-8.0, 1.0, 1.0]), normalize=True)
    assert prep.determinant_after == pytest.approx(-1.0)


def test_normalization_fails_on_singular_matrix():
    A = np.array([[1.0, 2.0, 3.0], [2.0, 4.0, 6.0], [0.0, 0.0, 1.0]])
    with pytest.warns(NormalizationWarning, match="non-zero determinant"):
        prep = prepare_matrix(A, normalize=True)
    assert prep.normalization_failed
    assert not prep.normalization_applied
    assert prep.ok
    # the pre-normalization matrix stays in use
    np.testing.assert_allclose(prep.matrix, A)
    assert prep.determinant_after is None


def test_no_warning_without_normalize_request():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        prep = prepare_matrix(np.zeros((3, 3)))
    assert prep.ok
    assert prep.determinant_before == 0.0


def test_overflow_is_an_adjustment_error():
    prep = prepare_matrix(np.eye(3), scalar=1e200, exponent=3)
    assert not prep.ok
    assert prep.matrix is None
    assert prep.error == ADJUSTMENT_ERROR_MSG
    np.testing.assert_allclose(prep.adjusted_matrix, np.eye(3))


def test_bad_shape_raises():
    with pytest.raises(ValueError):
        prepare_matrix([1.0, 2.0, 3.0])


@pytest.mark.parametrize(
    "value, expected",
    [(2.0, 2), (2.6, 3), (0.2, 1), (-4.0, 1), (math.nan, 1), (math.inf, 1)],
)
def test_sanitize_exponent(value, expected):
    assert sanitize_exponent(value) == expected


@pytest.mark.parametrize("value, expected", [(0.5, 0.5), (-2.0, -2.0), (math.nan, 1.0), (-math.inf, 1.0)])
def test_sanitize_scalar(value, expected):
    assert sanitize_scalar(value) == expected


def test_message_constant():
    assert NORMALIZATION_FAILED_MSG == "Normalization requires a non-zero determinant. Matrix left unnormalized."
