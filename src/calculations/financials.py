"""Financial underwriting model: capital stack, NOI, debt service and coverage."""

from dataclasses import dataclass

from ..models.project import ProjectState
from .costs import calculate_development_costs
from .debt import size_loan, calculate_annual_debt_service
from .revenue import calculate_operating_income
from .safe_math import safe_div
from .trace import trace


@dataclass
class FinancialResult:
    """Underwriting results for one ProjectState snapshot."""

    # Costs
    land_total_cost: float
    hard_cost_total: float
    soft_cost_total: float
    contingency_total: float
    total_project_cost: float
    cost_per_sf: float

    # Capital stack
    max_loan: float
    required_equity: float
    equity_pct: float

    # Operations
    gross_potential_rent: float
    effective_gross_income: float
    operating_expenses: float
    noi: float

    # Debt
    annual_debt_service: float
    dscr: float
    break_even_rent_psf: float

    # Phase 1 (pro-rata share of the full project)
    phase1_weight: float
    phase1_noi: float
    phase1_loan: float
    phase1_debt_service: float
    phase1_dscr: float


def compute_financials(state: ProjectState) -> FinancialResult:
    """Underwrite the project under conservative bank assumptions.

    Steps:
    1. Total project cost = land (incl. closing) + hard + soft + contingency
    2. Loan = cost x LTC; equity = cost - loan
    3. NOI from tenant rents after fixed 10% vacancy and 32% expense ratio
    4. Annual debt service on a fully amortizing loan
    5. DSCR, break-even rent/SF and a phase-1 view allocated by SF share

    Every division is guarded, so the result is complete and finite for any
    numeric input (zero area, no tenants, zero interest, no loan).

    Args:
        state: Project snapshot.

    Returns:
        FinancialResult with all underwriting values.

    Example:
        >>> fin = compute_financials(ProjectState())
        >>> fin.total_project_cost
        13707000.0
        >>> fin.noi
        430174.8
    """
    costs = calculate_development_costs(
        land_cost=state.land_cost,
        land_closing_pct=state.land_closing_pct,
        total_build_sf=state.total_build_sf,
        hard_cost_psf=state.hard_cost_psf,
        soft_cost_pct=state.soft_cost_pct,
        contingency_pct=state.contingency_pct,
    )
    capital = size_loan(costs.total_project_cost, state.max_ltc)
    income = calculate_operating_income(state.tenants)

    annual_debt_service = calculate_annual_debt_service(
        loan_amount=capital.max_loan,
        interest_rate=state.interest_rate,
        amort_years=state.amort_years,
    )

    dscr = trace(
        "debt.dscr",
        safe_div(income.noi, annual_debt_service, require_positive=True),
        {"operations.noi": income.noi, "debt.annual_debt_service": annual_debt_service},
    )
    break_even_rent_psf = trace(
        "operations.break_even_rent_psf",
        safe_div(
            annual_debt_service + income.operating_expenses,
            state.total_build_sf,
            require_positive=True,
        ),
        {
            "debt.annual_debt_service": annual_debt_service,
            "operations.opex": income.operating_expenses,
            "inputs.total_build_sf": state.total_build_sf,
        },
    )

    # Phase 1 is a proportional slice, not an independently underwritten phase
    phase1_weight = trace(
        "phase1.weight",
        safe_div(state.phase1_sf, state.total_build_sf, require_positive=True),
        {"inputs.phase1_sf": state.phase1_sf, "inputs.total_build_sf": state.total_build_sf},
    )
    phase1_noi = trace(
        "phase1.noi",
        income.noi * phase1_weight,
        {"operations.noi": income.noi, "phase1.weight": phase1_weight},
    )
    phase1_loan = trace(
        "phase1.loan",
        capital.max_loan * phase1_weight,
        {"capital.max_loan": capital.max_loan, "phase1.weight": phase1_weight},
    )
    phase1_debt_service = trace(
        "phase1.debt_service",
        annual_debt_service * phase1_weight,
        {"debt.annual_debt_service": annual_debt_service, "phase1.weight": phase1_weight},
    )
    phase1_dscr = trace(
        "phase1.dscr",
        safe_div(phase1_noi, phase1_debt_service, require_positive=True),
        {"phase1.noi": phase1_noi, "phase1.debt_service": phase1_debt_service},
    )

    return FinancialResult(
        land_total_cost=costs.land_total,
        hard_cost_total=costs.hard_total,
        soft_cost_total=costs.soft_total,
        contingency_total=costs.contingency_total,
        total_project_cost=costs.total_project_cost,
        cost_per_sf=costs.cost_per_sf,
        max_loan=capital.max_loan,
        required_equity=capital.required_equity,
        equity_pct=capital.equity_pct,
        gross_potential_rent=income.gross_potential_rent,
        effective_gross_income=income.effective_gross_income,
        operating_expenses=income.operating_expenses,
        noi=income.noi,
        annual_debt_service=annual_debt_service,
        dscr=dscr,
        break_even_rent_psf=break_even_rent_psf,
        phase1_weight=phase1_weight,
        phase1_noi=phase1_noi,
        phase1_loan=phase1_loan,
        phase1_debt_service=phase1_debt_service,
        phase1_dscr=phase1_dscr,
    )
