"""Calculation modules for the Mini-World underwriting calculator."""

from .safe_math import safe_div
from .costs import calculate_development_costs, DevelopmentCostResult
from .revenue import calculate_gpr, calculate_egi, calculate_operating_income, OperatingIncomeResult
from .debt import (
    size_loan,
    CapitalStack,
    calculate_monthly_payment,
    calculate_annual_debt_service,
)
from .financials import compute_financials, FinancialResult
from .walkability import compute_walkability, assign_grade, WalkabilityResult
from .tenants import analyze_tenant_mix, TenantMixResult
from .metrics import (
    calculate_verdict,
    PartnerVerdict,
    evaluate_project,
    ProjectEvaluation,
    format_summary_table,
)

# Audit trail
from .formula_registry import FormulaRegistry, FormulaDefinition, FormulaCategory
from .trace import TraceContext, TracedValue, trace, format_value

__all__ = [
    "safe_div",
    "calculate_development_costs",
    "DevelopmentCostResult",
    "calculate_gpr",
    "calculate_egi",
    "calculate_operating_income",
    "OperatingIncomeResult",
    "size_loan",
    "CapitalStack",
    "calculate_monthly_payment",
    "calculate_annual_debt_service",
    "compute_financials",
    "FinancialResult",
    "compute_walkability",
    "assign_grade",
    "WalkabilityResult",
    "analyze_tenant_mix",
    "TenantMixResult",
    "calculate_verdict",
    "PartnerVerdict",
    "evaluate_project",
    "ProjectEvaluation",
    "format_summary_table",
    # Audit trail
    "FormulaRegistry",
    "FormulaDefinition",
    "FormulaCategory",
    "TraceContext",
    "TracedValue",
    "trace",
    "format_value",
]
