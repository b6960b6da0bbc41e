"""Unit tests for cosine similarity."""

import math

import pytest

from second_brain.core.domain import cosine_similarity
from second_brain.core.domain.exceptions import DimensionMismatchError, ValidationError

pytestmark = pytest.mark.unit


class TestCosineSimilarity:
    def test_identical_vectors_score_one(self):
        assert cosine_similarity([0.3, 0.4, 0.5], [0.3, 0.4, 0.5]) == pytest.approx(1.0)

    def test_orthogonal_vectors_score_zero(self):
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)

    def test_opposite_vectors_score_minus_one(self):
        assert cosine_similarity([1.0, 2.0], [-1.0, -2.0]) == pytest.approx(-1.0)

    def test_scale_invariant(self):
        """Magnitude should not affect the score."""
        assert cosine_similarity([1.0, 1.0], [10.0, 10.0]) == pytest.approx(1.0)

    def test_known_angle(self):
        expected = math.cos(math.radians(60))
        a = [1.0, 0.0]
        b = [math.cos(math.radians(60)), math.sin(math.radians(60))]
        assert cosine_similarity(a, b) == pytest.approx(expected)

    def test_symmetric(self):
        a, b = [0.1, 0.7, -0.2], [0.5, -0.3, 0.9]
        assert cosine_similarity(a, b) == pytest.approx(cosine_similarity(b, a))

    def test_zero_norm_returns_zero(self):
        assert cosine_similarity([0.0, 0.0], [1.0, 2.0]) == 0.0
        assert cosine_similarity([1.0, 2.0], [0.0, 0.0]) == 0.0

    def test_empty_vectors_return_zero(self):
        assert cosine_similarity([], []) == 0.0

    def test_returns_python_float(self):
        assert type(cosine_similarity([1.0], [2.0])) is float


class TestDimensionMismatch:
    def test_length_mismatch_raises(self):
        with pytest.raises(DimensionMismatchError) as exc_info:
            cosine_similarity([1.0, 0.0, 0.0], [1.0, 0.0])

        assert exc_info.value.extra_context == {"left_dimension": 3, "right_dimension": 2}

    def test_mismatch_is_validation_error(self):
        with pytest.raises(ValidationError):
            cosine_similarity([1.0], [])
