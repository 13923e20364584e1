"""Tests for loan sizing and amortizing debt service."""

import numpy_financial as npf
import pytest

from src.calculations.debt import (
    size_loan,
    calculate_monthly_payment,
    calculate_annual_debt_service,
)
from tests.fixtures.test_inputs import (
    EXPECTED_TOTAL_PROJECT_COST,
    EXPECTED_MAX_LOAN,
    EXPECTED_REQUIRED_EQUITY,
    EXPECTED_EQUITY_PCT,
)


class TestSizeLoan:
    """Tests for loan-to-cost sizing."""

    def test_loan_is_ltc_of_cost(self):
        """Loan should be the LTC share of total cost."""
        stack = size_loan(EXPECTED_TOTAL_PROJECT_COST, 65)

        assert stack.max_loan == pytest.approx(EXPECTED_MAX_LOAN)
        assert stack.required_equity == pytest.approx(EXPECTED_REQUIRED_EQUITY)
        assert stack.equity_pct == pytest.approx(EXPECTED_EQUITY_PCT)
        assert stack.ltc_pct == 65

    def test_loan_plus_equity_equals_cost(self):
        """The capital stack always sums to total cost."""
        for ltc in (0, 40, 72.5, 100):
            stack = size_loan(9_876_543, ltc)
            assert stack.max_loan + stack.required_equity == pytest.approx(9_876_543)

    def test_zero_cost_has_zero_equity_pct(self):
        """Equity share of a zero-cost project is 0, not an error."""
        stack = size_loan(0, 65)

        assert stack.max_loan == 0
        assert stack.equity_pct == 0


class TestMonthlyPayment:
    """Tests for the amortizing payment."""

    def test_matches_annuity_formula(self):
        """Payment matches P x r x (1+r)^n / ((1+r)^n - 1)."""
        principal = 8_909_550
        r = 0.0725 / 12
        n = 300
        expected = principal * r * (1 + r) ** n / ((1 + r) ** n - 1)

        payment = calculate_monthly_payment(principal, 7.25, 25)

        assert payment == pytest.approx(expected)
        assert payment == pytest.approx(-npf.pmt(r, n, principal))

    def test_zero_rate_is_straight_line(self):
        """Zero interest amortizes the principal evenly."""
        payment = calculate_monthly_payment(1_200_000, 0, 25)

        assert payment == pytest.approx(4_000)

    def test_zero_loan_has_no_payment(self):
        """No principal means no payment."""
        assert calculate_monthly_payment(0, 7.25, 25) == 0

    def test_zero_term_has_no_payment(self):
        """A zero amortization term yields no payment instead of an error."""
        assert calculate_monthly_payment(1_000_000, 7.25, 0) == 0


class TestAnnualDebtService:
    """Tests for annual debt service."""

    def test_is_twelve_monthly_payments(self):
        """Annual debt service is 12 x the monthly payment."""
        monthly = calculate_monthly_payment(8_909_550, 7.25, 25)

        assert calculate_annual_debt_service(8_909_550, 7.25, 25) == pytest.approx(monthly * 12)

    def test_default_scenario_magnitude(self):
        """Default loan carries roughly $772.8K of annual debt service."""
        annual = calculate_annual_debt_service(EXPECTED_MAX_LOAN, 7.25, 25)

        assert abs(annual - 772_800) < 1_000

    def test_zero_rate_annual(self):
        """$1.2M over 25 years at 0% is $48K per year."""
        assert calculate_annual_debt_service(1_200_000, 0, 25) == pytest.approx(48_000)

    def test_higher_rate_costs_more(self):
        """Debt service increases with the interest rate."""
        low = calculate_annual_debt_service(5_000_000, 5.0, 25)
        high = calculate_annual_debt_service(5_000_000, 8.0, 25)

        assert high > low
