"""Data models for the Mini-World underwriting calculator."""

from .lookups import (
    VACANCY_RATE,
    EXPENSE_RATIO,
    DSCR_TARGET,
    PHASE1_DSCR_STRONG,
    EQUITY_PCT_WARNING,
    FIVE_MINUTE_WALK_FT,
    GRADE_THRESHOLDS,
    DEFAULT_GRADE,
)
from .project import (
    TenantCategory,
    Tenant,
    ProjectState,
)
from .updates import (
    update_land,
    update_construction,
    update_capital,
    update_urbanism,
    new_tenant,
    add_tenant,
    update_tenant,
    remove_tenant,
)

__all__ = [
    "VACANCY_RATE",
    "EXPENSE_RATIO",
    "DSCR_TARGET",
    "PHASE1_DSCR_STRONG",
    "EQUITY_PCT_WARNING",
    "FIVE_MINUTE_WALK_FT",
    "GRADE_THRESHOLDS",
    "DEFAULT_GRADE",
    "TenantCategory",
    "Tenant",
    "ProjectState",
    "update_land",
    "update_construction",
    "update_capital",
    "update_urbanism",
    "new_tenant",
    "add_tenant",
    "update_tenant",
    "remove_tenant",
]
