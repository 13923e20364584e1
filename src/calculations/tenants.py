"""Tenant-mix analytics: leased area, utilization and category concentration."""

from dataclasses import dataclass
from typing import Dict

from ..models.project import ProjectState, TenantCategory
from .safe_math import safe_div


@dataclass
class TenantMixResult:
    """Summary of the tenant roster against the building program."""

    tenant_count: int
    total_leased_sf: float
    utilization_pct: float  # Leased SF as % of total buildable SF; may exceed 100
    gross_potential_rent: float
    sf_by_category: Dict[TenantCategory, float]  # Only categories with leased area
    rent_by_tenant: Dict[str, float]  # Annual rent keyed by tenant id
    night_active_count: int

    @property
    def is_over_leased(self) -> bool:
        return self.utilization_pct > 100


def analyze_tenant_mix(state: ProjectState) -> TenantMixResult:
    """Summarize the roster for the lease-up matrix.

    Leased area is not checked against the building program; an over-leased
    roster simply shows utilization above 100%.

    Args:
        state: Project snapshot.

    Returns:
        TenantMixResult.
    """
    total_leased_sf = state.total_leased_sf

    sf_by_category: Dict[TenantCategory, float] = {}
    for category in TenantCategory:
        category_sf = sum(t.sf for t in state.tenants if t.category == category)
        if category_sf > 0:
            sf_by_category[category] = category_sf

    rent_by_tenant = {t.id: t.annual_rent for t in state.tenants}

    return TenantMixResult(
        tenant_count=len(state.tenants),
        total_leased_sf=total_leased_sf,
        utilization_pct=safe_div(total_leased_sf, state.total_build_sf, require_positive=True) * 100,
        gross_potential_rent=sum(rent_by_tenant.values()),
        sf_by_category=sf_by_category,
        rent_by_tenant=rent_by_tenant,
        night_active_count=sum(1 for t in state.tenants if t.night_active),
    )
