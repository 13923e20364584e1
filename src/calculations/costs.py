"""Development cost build-up: land, hard, soft and contingency."""

from dataclasses import dataclass

from .safe_math import safe_div
from .trace import trace


@dataclass
class DevelopmentCostResult:
    """Results of the total project cost calculation."""

    land_total: float  # Land plus closing costs
    hard_total: float
    soft_total: float
    contingency_total: float
    total_project_cost: float
    cost_per_sf: float


def calculate_land_total(land_cost: float, land_closing_pct: float) -> float:
    """Land purchase price grossed up for closing costs.

    Args:
        land_cost: Purchase price in dollars.
        land_closing_pct: Closing costs as percent of price (e.g., 2 for 2%).

    Returns:
        Land cost including closing.
    """
    return land_cost * (1 + land_closing_pct / 100)


def calculate_development_costs(
    land_cost: float,
    land_closing_pct: float,
    total_build_sf: float,
    hard_cost_psf: float,
    soft_cost_pct: float,
    contingency_pct: float,
) -> DevelopmentCostResult:
    """Calculate total project cost.

    Total = Land (incl. closing) + Hard + Soft + Contingency, where soft costs
    and contingency are both percentages of hard costs.

    Args:
        land_cost: Land purchase price.
        land_closing_pct: Closing costs as percent of land price.
        total_build_sf: Total buildable area.
        hard_cost_psf: Hard construction cost per SF.
        soft_cost_pct: Soft costs as percent of hard costs.
        contingency_pct: Contingency as percent of hard costs.

    Returns:
        DevelopmentCostResult with each component and the total.

    Example:
        >>> result = calculate_development_costs(1_500_000, 2, 45_000, 220, 15, 8)
        >>> result.total_project_cost
        13707000.0  # 1.53M + 9.9M + 1.485M + 0.792M
    """
    land_total = trace(
        "costs.land_total",
        calculate_land_total(land_cost, land_closing_pct),
        {"inputs.land_cost": land_cost, "inputs.land_closing_pct": land_closing_pct},
    )
    hard_total = trace(
        "costs.hard_total",
        total_build_sf * hard_cost_psf,
        {"inputs.total_build_sf": total_build_sf, "inputs.hard_cost_psf": hard_cost_psf},
    )
    soft_total = trace(
        "costs.soft_total",
        hard_total * (soft_cost_pct / 100),
        {"costs.hard_total": hard_total, "inputs.soft_cost_pct": soft_cost_pct},
    )
    contingency_total = trace(
        "costs.contingency_total",
        hard_total * (contingency_pct / 100),
        {"costs.hard_total": hard_total, "inputs.contingency_pct": contingency_pct},
    )

    total_project_cost = trace(
        "costs.total_project_cost",
        land_total + hard_total + soft_total + contingency_total,
        {
            "costs.land_total": land_total,
            "costs.hard_total": hard_total,
            "costs.soft_total": soft_total,
            "costs.contingency_total": contingency_total,
        },
    )
    cost_per_sf = trace(
        "costs.cost_per_sf",
        safe_div(total_project_cost, total_build_sf, require_positive=True),
        {"costs.total_project_cost": total_project_cost, "inputs.total_build_sf": total_build_sf},
    )

    return DevelopmentCostResult(
        land_total=land_total,
        hard_total=hard_total,
        soft_total=soft_total,
        contingency_total=contingency_total,
        total_project_cost=total_project_cost,
        cost_per_sf=cost_per_sf,
    )
