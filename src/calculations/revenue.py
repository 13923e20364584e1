"""Revenue calculations: Gross Potential Rent (GPR) through Net Operating Income (NOI)."""

from dataclasses import dataclass
from typing import Iterable

from ..models.lookups import VACANCY_RATE, EXPENSE_RATIO
from ..models.project import Tenant
from .trace import trace


@dataclass
class OperatingIncomeResult:
    """Stabilized annual operating statement."""

    gross_potential_rent: float
    vacancy_loss: float
    effective_gross_income: float
    operating_expenses: float
    noi: float


def calculate_gpr(tenants: Iterable[Tenant]) -> float:
    """Calculate annual Gross Potential Rent.

    GPR is the total rent assuming every tenant pays in full:
    sum of SF x annual rent/SF.

    Args:
        tenants: Tenant roster.

    Returns:
        Annual GPR (0 for an empty roster).
    """
    return sum(t.sf * t.rent_psf for t in tenants)


def calculate_egi(gpr: float, vacancy_rate: float = VACANCY_RATE) -> float:
    """Calculate Effective Gross Income.

    EGI = GPR x (1 - vacancy rate)

    Args:
        gpr: Annual Gross Potential Rent.
        vacancy_rate: Vacancy rate as decimal (e.g., 0.10 for 10%).

    Returns:
        Annual EGI.
    """
    return gpr * (1 - vacancy_rate)


def calculate_operating_income(tenants: Iterable[Tenant]) -> OperatingIncomeResult:
    """Build the stabilized operating statement from the tenant roster.

    Vacancy and the expense ratio are fixed underwriting conventions
    (10% and 32% of EGI) rather than user inputs.

    Args:
        tenants: Tenant roster.

    Returns:
        OperatingIncomeResult with GPR, vacancy, EGI, OpEx and NOI.

    Example:
        >>> result = calculate_operating_income(default_tenants)
        >>> result.noi
        430174.8  # 702,900 GPR -> 632,610 EGI -> 202,435.2 OpEx
    """
    tenants = tuple(tenants)

    gpr = trace("revenue.gpr", calculate_gpr(tenants), {"inputs.tenants": len(tenants)})
    egi = trace("revenue.egi", calculate_egi(gpr), {"revenue.gpr": gpr})
    opex = trace("operations.opex", egi * EXPENSE_RATIO, {"revenue.egi": egi})
    noi = trace(
        "operations.noi",
        egi - opex,
        {"revenue.egi": egi, "operations.opex": opex},
    )

    return OperatingIncomeResult(
        gross_potential_rent=gpr,
        vacancy_loss=gpr - egi,
        effective_gross_income=egi,
        operating_expenses=opex,
        noi=noi,
    )
