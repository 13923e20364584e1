"""Formula Registry for transparent calculation auditing.

This module provides a central registry of every underwriting and
walkability formula, so users can see exactly how each value is computed.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Set
from enum import Enum


class FormulaCategory(str, Enum):
    """Categories for organizing formulas."""
    INPUT = "Input"
    DEVELOPMENT = "Development"
    FINANCING = "Financing"
    REVENUE = "Revenue"
    OPERATIONS = "Operations"
    PHASING = "Phasing"
    COMFORT = "Comfort"
    ACTIVATION = "Activation"
    WALKABILITY = "Walkability"


@dataclass
class FormulaDefinition:
    """Definition of a single calculation formula.

    Attributes:
        field_path: Dot-notation path to the field (e.g., "costs.total_project_cost")
        name: Human-readable name (e.g., "Total Project Cost")
        formula: Symbolic formula (e.g., "land_total + hard + soft + contingency")
        inputs: List of input field paths that feed into this formula
        category: Category for grouping formulas
        unit: Display unit ("$", "$/SF", "%", "x", "ft", "pts", "count")
        notes: Optional explanation or caveats
    """
    field_path: str
    name: str
    formula: str
    inputs: List[str]
    category: FormulaCategory
    unit: str = "$"
    notes: str = ""


class FormulaRegistry:
    """Central registry of all calculation formulas.

    Class-level mapping of field paths to their formula definitions,
    populated lazily on first lookup.
    """
    _formulas: Dict[str, FormulaDefinition] = {}
    _initialized: bool = False

    @classmethod
    def register(cls, definition: FormulaDefinition) -> None:
        """Register a formula definition."""
        cls._formulas[definition.field_path] = definition

    @classmethod
    def get(cls, field_path: str) -> Optional[FormulaDefinition]:
        """Get formula definition by field path."""
        cls._ensure_initialized()
        return cls._formulas.get(field_path)

    @classmethod
    def get_all(cls) -> Dict[str, FormulaDefinition]:
        """Get all registered formulas."""
        cls._ensure_initialized()
        return cls._formulas.copy()

    @classmethod
    def get_by_category(cls, category: FormulaCategory) -> List[FormulaDefinition]:
        """Get all formulas in a category."""
        cls._ensure_initialized()
        return [f for f in cls._formulas.values() if f.category == category]

    @classmethod
    def get_inputs(cls, field_path: str) -> List[str]:
        """Get the input field paths for a formula."""
        formula = cls.get(field_path)
        return formula.inputs if formula else []

    @classmethod
    def get_dependents(cls, field_path: str) -> List[str]:
        """Get all formulas that use this field as an input."""
        cls._ensure_initialized()
        return [path for path, formula in cls._formulas.items() if field_path in formula.inputs]

    @classmethod
    def get_all_ancestors(cls, field_path: str) -> Set[str]:
        """Get all upstream dependencies recursively."""
        cls._ensure_initialized()
        ancestors = set()
        to_process = list(cls.get_inputs(field_path))

        while to_process:
            current = to_process.pop()
            if current not in ancestors:
                ancestors.add(current)
                to_process.extend(cls.get_inputs(current))

        return ancestors

    @classmethod
    def get_all_descendants(cls, field_path: str) -> Set[str]:
        """Get all downstream dependencies recursively."""
        cls._ensure_initialized()
        descendants = set()
        to_process = list(cls.get_dependents(field_path))

        while to_process:
            current = to_process.pop()
            if current not in descendants:
                descendants.add(current)
                to_process.extend(cls.get_dependents(current))

        return descendants

    @classmethod
    def _ensure_initialized(cls) -> None:
        """Ensure the registry is populated with formulas."""
        if not cls._initialized:
            _populate_registry()
            cls._initialized = True

    @classmethod
    def reset(cls) -> None:
        """Reset the registry (mainly for testing)."""
        cls._formulas = {}
        cls._initialized = False


def _input(name: str, label: str, unit: str = "$", notes: str = "") -> FormulaDefinition:
    return FormulaDefinition(
        field_path=f"inputs.{name}",
        name=label,
        formula="User input",
        inputs=[],
        category=FormulaCategory.INPUT,
        unit=unit,
        notes=notes,
    )


def _populate_registry() -> None:
    """Populate the registry with all calculation formulas."""

    # =========================================================================
    # INPUT FIELDS (Raw inputs from ProjectState)
    # =========================================================================
    inputs = [
        _input("land_cost", "Land Cost"),
        _input("land_closing_pct", "Land Closing Costs", "%"),
        _input("total_build_sf", "Total Buildable SF", "SF"),
        _input("phase1_sf", "Phase 1 SF", "SF"),
        _input("hard_cost_psf", "Hard Cost per SF", "$/SF"),
        _input("soft_cost_pct", "Soft Cost Percentage", "%"),
        _input("contingency_pct", "Contingency Percentage", "%"),
        _input("max_ltc", "Max Loan-to-Cost", "%"),
        _input("interest_rate", "Interest Rate", "%"),
        _input("amort_years", "Amortization", "years"),
        _input("tenants", "Tenant Roster", "count", "SF, rent/SF, hours and night activity per tenant"),
        _input("ped_spine_length_ft", "Pedestrian Spine Length", "ft"),
        _input("num_nodes", "Activity Nodes", "count"),
        _input("shade_pct", "Shade Coverage", "%"),
        _input("seating_interval_ft", "Seating Interval", "ft"),
        _input("tree_interval_ft", "Tree Interval", "ft"),
        _input("heat_mitigation_count", "Heat Mitigation Features", "count"),
        _input("active_frontage_pct", "Active Frontage", "%"),
        _input("parking_visible_pct", "Visible Parking", "%"),
        _input("car_crossings_count", "Car Crossings", "count"),
    ]

    # =========================================================================
    # DEVELOPMENT COSTS
    # =========================================================================
    development = [
        FormulaDefinition(
            field_path="costs.land_total",
            name="Land (incl. closing)",
            formula="land_cost x (1 + land_closing_pct / 100)",
            inputs=["inputs.land_cost", "inputs.land_closing_pct"],
            category=FormulaCategory.DEVELOPMENT,
        ),
        FormulaDefinition(
            field_path="costs.hard_total",
            name="Hard Costs",
            formula="total_build_sf x hard_cost_psf",
            inputs=["inputs.total_build_sf", "inputs.hard_cost_psf"],
            category=FormulaCategory.DEVELOPMENT,
        ),
        FormulaDefinition(
            field_path="costs.soft_total",
            name="Soft Costs",
            formula="hard_total x soft_cost_pct / 100",
            inputs=["costs.hard_total", "inputs.soft_cost_pct"],
            category=FormulaCategory.DEVELOPMENT,
        ),
        FormulaDefinition(
            field_path="costs.contingency_total",
            name="Contingency",
            formula="hard_total x contingency_pct / 100",
            inputs=["costs.hard_total", "inputs.contingency_pct"],
            category=FormulaCategory.DEVELOPMENT,
        ),
        FormulaDefinition(
            field_path="costs.total_project_cost",
            name="Total Project Cost",
            formula="land_total + hard_total + soft_total + contingency_total",
            inputs=["costs.land_total", "costs.hard_total", "costs.soft_total", "costs.contingency_total"],
            category=FormulaCategory.DEVELOPMENT,
        ),
        FormulaDefinition(
            field_path="costs.cost_per_sf",
            name="Cost per SF Built",
            formula="total_project_cost / total_build_sf",
            inputs=["costs.total_project_cost", "inputs.total_build_sf"],
            category=FormulaCategory.DEVELOPMENT,
            unit="$/SF",
            notes="0 when total_build_sf is 0",
        ),
    ]

    # =========================================================================
    # FINANCING
    # =========================================================================
    financing = [
        FormulaDefinition(
            field_path="capital.max_loan",
            name="Max Loan",
            formula="total_project_cost x max_ltc / 100",
            inputs=["costs.total_project_cost", "inputs.max_ltc"],
            category=FormulaCategory.FINANCING,
        ),
        FormulaDefinition(
            field_path="capital.required_equity",
            name="Required Equity",
            formula="total_project_cost - max_loan",
            inputs=["costs.total_project_cost", "capital.max_loan"],
            category=FormulaCategory.FINANCING,
        ),
        FormulaDefinition(
            field_path="capital.equity_pct",
            name="Equity % of Capital",
            formula="required_equity / total_project_cost x 100",
            inputs=["capital.required_equity", "costs.total_project_cost"],
            category=FormulaCategory.FINANCING,
            unit="%",
        ),
        FormulaDefinition(
            field_path="debt.annual_debt_service",
            name="Annual Debt Service",
            formula="12 x PMT(interest_rate / 100 / 12, amort_years x 12, max_loan)",
            inputs=["capital.max_loan", "inputs.interest_rate", "inputs.amort_years"],
            category=FormulaCategory.FINANCING,
            notes="Straight-line (max_loan / amort_years) when the rate is 0",
        ),
        FormulaDefinition(
            field_path="debt.dscr",
            name="DSCR",
            formula="noi / annual_debt_service",
            inputs=["operations.noi", "debt.annual_debt_service"],
            category=FormulaCategory.FINANCING,
            unit="x",
            notes="0 when there is no debt service",
        ),
    ]

    # =========================================================================
    # REVENUE & OPERATIONS
    # =========================================================================
    revenue = [
        FormulaDefinition(
            field_path="revenue.gpr",
            name="Gross Potential Rent",
            formula="sum(tenant.sf x tenant.rent_psf)",
            inputs=["inputs.tenants"],
            category=FormulaCategory.REVENUE,
        ),
        FormulaDefinition(
            field_path="revenue.egi",
            name="Effective Gross Income",
            formula="gpr x (1 - vacancy_rate)",
            inputs=["revenue.gpr"],
            category=FormulaCategory.REVENUE,
            notes="Vacancy fixed at 10% (bank standard)",
        ),
        FormulaDefinition(
            field_path="operations.opex",
            name="Operating Expenses",
            formula="egi x expense_ratio",
            inputs=["revenue.egi"],
            category=FormulaCategory.OPERATIONS,
            notes="Expense ratio fixed at 32% (bank standard)",
        ),
        FormulaDefinition(
            field_path="operations.noi",
            name="Net Operating Income",
            formula="egi - opex",
            inputs=["revenue.egi", "operations.opex"],
            category=FormulaCategory.OPERATIONS,
        ),
        FormulaDefinition(
            field_path="operations.break_even_rent_psf",
            name="Break-even Rent",
            formula="(annual_debt_service + opex) / total_build_sf",
            inputs=["debt.annual_debt_service", "operations.opex", "inputs.total_build_sf"],
            category=FormulaCategory.OPERATIONS,
            unit="$/SF",
            notes="0 when total_build_sf is 0",
        ),
    ]

    # =========================================================================
    # PHASE 1 (proportional allocation)
    # =========================================================================
    phasing = [
        FormulaDefinition(
            field_path="phase1.weight",
            name="Phase 1 Weight",
            formula="phase1_sf / total_build_sf",
            inputs=["inputs.phase1_sf", "inputs.total_build_sf"],
            category=FormulaCategory.PHASING,
            unit="%",
        ),
        FormulaDefinition(
            field_path="phase1.noi",
            name="Phase 1 NOI",
            formula="noi x phase1_weight",
            inputs=["operations.noi", "phase1.weight"],
            category=FormulaCategory.PHASING,
        ),
        FormulaDefinition(
            field_path="phase1.loan",
            name="Phase 1 Loan",
            formula="max_loan x phase1_weight",
            inputs=["capital.max_loan", "phase1.weight"],
            category=FormulaCategory.PHASING,
        ),
        FormulaDefinition(
            field_path="phase1.debt_service",
            name="Phase 1 Debt Service",
            formula="annual_debt_service x phase1_weight",
            inputs=["debt.annual_debt_service", "phase1.weight"],
            category=FormulaCategory.PHASING,
        ),
        FormulaDefinition(
            field_path="phase1.dscr",
            name="Phase 1 DSCR",
            formula="phase1_noi / phase1_debt_service",
            inputs=["phase1.noi", "phase1.debt_service"],
            category=FormulaCategory.PHASING,
            unit="x",
        ),
    ]

    # =========================================================================
    # WALKABILITY: COMFORT
    # =========================================================================
    comfort = [
        FormulaDefinition(
            field_path="walk.shade_score",
            name="Shade Score",
            formula="min(shade_pct / 70, 1) x 100",
            inputs=["inputs.shade_pct"],
            category=FormulaCategory.COMFORT,
            unit="pts",
        ),
        FormulaDefinition(
            field_path="walk.seating_score",
            name="Seating Score",
            formula="<=150ft: 100, <=250ft: 70, else 40",
            inputs=["inputs.seating_interval_ft"],
            category=FormulaCategory.COMFORT,
            unit="pts",
        ),
        FormulaDefinition(
            field_path="walk.tree_score",
            name="Tree Score",
            formula="<=40ft: 100, <=60ft: 70, else 40",
            inputs=["inputs.tree_interval_ft"],
            category=FormulaCategory.COMFORT,
            unit="pts",
        ),
        FormulaDefinition(
            field_path="walk.heat_score",
            name="Heat Mitigation Score",
            formula="min(heat_mitigation_count / 3, 1) x 100",
            inputs=["inputs.heat_mitigation_count"],
            category=FormulaCategory.COMFORT,
            unit="pts",
        ),
        FormulaDefinition(
            field_path="walk.comfort_score",
            name="Human Comfort",
            formula="0.35 x shade + 0.25 x seating + 0.25 x tree + 0.15 x heat",
            inputs=["walk.shade_score", "walk.seating_score", "walk.tree_score", "walk.heat_score"],
            category=FormulaCategory.COMFORT,
            unit="pts",
        ),
    ]

    # =========================================================================
    # WALKABILITY: ACTIVATION
    # =========================================================================
    activation = [
        FormulaDefinition(
            field_path="walk.avg_operating_hours",
            name="Average Operating Hours",
            formula="mean(tenant.operating_hours)",
            inputs=["inputs.tenants"],
            category=FormulaCategory.ACTIVATION,
            unit="hours",
            notes="0 with no tenants",
        ),
        FormulaDefinition(
            field_path="walk.hours_score",
            name="Hours Score",
            formula=">=12h: 100, >=9h: 70, else 40",
            inputs=["walk.avg_operating_hours"],
            category=FormulaCategory.ACTIVATION,
            unit="pts",
        ),
        FormulaDefinition(
            field_path="walk.uses_per_node",
            name="Uses per Node",
            formula="tenant_count / num_nodes",
            inputs=["inputs.tenants", "inputs.num_nodes"],
            category=FormulaCategory.ACTIVATION,
            unit="x",
            notes="0 when num_nodes is 0",
        ),
        FormulaDefinition(
            field_path="walk.node_score",
            name="Node Density Score",
            formula=">=4: 100, >=3: 70, else 40",
            inputs=["walk.uses_per_node"],
            category=FormulaCategory.ACTIVATION,
            unit="pts",
        ),
        FormulaDefinition(
            field_path="walk.night_life_pct",
            name="Night Activation",
            formula="night_active_count / tenant_count x 100",
            inputs=["inputs.tenants"],
            category=FormulaCategory.ACTIVATION,
            unit="%",
        ),
        FormulaDefinition(
            field_path="walk.activation_score",
            name="Activation Density",
            formula="0.30 x frontage + 0.25 x hours + 0.25 x node + 0.20 x night_life",
            inputs=["inputs.active_frontage_pct", "walk.hours_score", "walk.node_score", "walk.night_life_pct"],
            category=FormulaCategory.ACTIVATION,
            unit="pts",
        ),
    ]

    # =========================================================================
    # WALKABILITY: PENALTIES & FINAL SCORE
    # =========================================================================
    walkability = [
        FormulaDefinition(
            field_path="walk.avg_walk_distance",
            name="Avg Walk Segment",
            formula="ped_spine_length_ft / num_nodes",
            inputs=["inputs.ped_spine_length_ft", "inputs.num_nodes"],
            category=FormulaCategory.WALKABILITY,
            unit="ft",
            notes="Compliant with the 5-minute walk at <= 1200 ft",
        ),
        FormulaDefinition(
            field_path="walk.parking_penalty",
            name="Parking Penalty",
            formula="parking_visible_pct / 100 x 15",
            inputs=["inputs.parking_visible_pct"],
            category=FormulaCategory.WALKABILITY,
            unit="pts",
        ),
        FormulaDefinition(
            field_path="walk.conflict_penalty",
            name="Conflict Penalty",
            formula="car_crossings_count x 3",
            inputs=["inputs.car_crossings_count"],
            category=FormulaCategory.WALKABILITY,
            unit="pts",
            notes="Uncapped",
        ),
        FormulaDefinition(
            field_path="walk.raw_score",
            name="Raw Score",
            formula="0.50 x comfort + 0.50 x activation",
            inputs=["walk.comfort_score", "walk.activation_score"],
            category=FormulaCategory.WALKABILITY,
            unit="pts",
        ),
        FormulaDefinition(
            field_path="walk.final_score",
            name="Final Walkability Score",
            formula="max(0, raw_score - parking_penalty - conflict_penalty)",
            inputs=["walk.raw_score", "walk.parking_penalty", "walk.conflict_penalty"],
            category=FormulaCategory.WALKABILITY,
            unit="pts",
        ),
    ]

    for definition in inputs + development + financing + revenue + phasing + comfort + activation + walkability:
        FormulaRegistry.register(definition)
