"""Tests for the shared division guard."""

from src.calculations.safe_math import safe_div


class TestSafeDiv:
    """Tests for safe_div."""

    def test_normal_division(self):
        assert safe_div(10, 4) == 2.5

    def test_zero_denominator_returns_default(self):
        assert safe_div(10, 0) == 0.0
        assert safe_div(10, 0, default=-1.0) == -1.0

    def test_negative_denominator_allowed_by_default(self):
        assert safe_div(10, -2) == -5.0

    def test_negative_denominator_rejected_when_positive_required(self):
        assert safe_div(10, -2, require_positive=True) == 0.0

    def test_zero_numerator(self):
        assert safe_div(0, 5) == 0.0
