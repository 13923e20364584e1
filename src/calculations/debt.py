"""Debt calculations: loan-to-cost sizing and amortizing debt service."""

from dataclasses import dataclass

import numpy_financial as npf

from .safe_math import safe_div
from .trace import trace


@dataclass
class CapitalStack:
    """Debt / equity split of the total project cost."""

    max_loan: float
    required_equity: float
    equity_pct: float  # Equity as % of total project cost
    ltc_pct: float


def size_loan(total_project_cost: float, max_ltc: float) -> CapitalStack:
    """Size the loan based on loan-to-cost.

    The loan is the maximum the lender allows; equity fills the rest, so
    loan + equity always equals total cost.

    Args:
        total_project_cost: Total project cost.
        max_ltc: Loan-to-cost ratio in percent (e.g., 65).

    Returns:
        CapitalStack with loan, equity and equity share.
    """
    max_loan = trace(
        "capital.max_loan",
        total_project_cost * (max_ltc / 100),
        {"costs.total_project_cost": total_project_cost, "inputs.max_ltc": max_ltc},
    )
    required_equity = trace(
        "capital.required_equity",
        total_project_cost - max_loan,
        {"costs.total_project_cost": total_project_cost, "capital.max_loan": max_loan},
    )
    equity_pct = trace(
        "capital.equity_pct",
        safe_div(required_equity, total_project_cost) * 100,
        {"capital.required_equity": required_equity, "costs.total_project_cost": total_project_cost},
    )

    return CapitalStack(
        max_loan=max_loan,
        required_equity=required_equity,
        equity_pct=equity_pct,
        ltc_pct=max_ltc,
    )


def calculate_monthly_payment(
    loan_amount: float,
    interest_rate: float,
    amort_years: int,
) -> float:
    """Calculate the level monthly payment on a fully amortizing loan.

    PMT = P x r x (1 + r)^n / ((1 + r)^n - 1), with r the monthly rate and
    n the number of monthly periods.

    The formula is 0/0 at a zero rate; that case amortizes straight-line
    (P / n). A loan with no principal or no amortization term has no payment.

    Args:
        loan_amount: Loan principal.
        interest_rate: Annual interest rate in percent (e.g., 7.25).
        amort_years: Amortization period in years.

    Returns:
        Monthly principal and interest payment.
    """
    monthly_rate = interest_rate / 100 / 12
    amort_months = amort_years * 12

    if loan_amount <= 0 or amort_months <= 0:
        return 0.0

    if monthly_rate == 0:
        return loan_amount / amort_months

    # numpy_financial.pmt returns the payment as a negative cash flow
    return float(-npf.pmt(
        rate=monthly_rate,
        nper=amort_months,
        pv=loan_amount,
        fv=0,
    ))


def calculate_annual_debt_service(
    loan_amount: float,
    interest_rate: float,
    amort_years: int,
) -> float:
    """Calculate annual debt service (12 x monthly payment).

    Args:
        loan_amount: Loan principal.
        interest_rate: Annual interest rate in percent.
        amort_years: Amortization period in years.

    Returns:
        Annual debt service.

    Example:
        >>> calculate_annual_debt_service(1_200_000, 0, 25)
        48000.0  # Straight-line at zero interest
    """
    return trace(
        "debt.annual_debt_service",
        calculate_monthly_payment(loan_amount, interest_rate, amort_years) * 12,
        {
            "capital.max_loan": loan_amount,
            "inputs.interest_rate": interest_rate,
            "inputs.amort_years": amort_years,
        },
    )
