"""Typed update operations for ProjectState.

Each function takes the current snapshot and returns a new one. Only
arguments that are passed (not None) are changed. There is one function per
input group so that UI code never sets fields by name.
"""

import uuid
from dataclasses import replace
from typing import Optional

from .project import ProjectState, Tenant, TenantCategory


def _changes(**kwargs) -> dict:
    return {k: v for k, v in kwargs.items() if v is not None}


def update_land(
    state: ProjectState,
    *,
    land_cost: Optional[float] = None,
    land_closing_pct: Optional[float] = None,
    site_acres: Optional[float] = None,
) -> ProjectState:
    """Update land and site-size inputs."""
    return replace(state, **_changes(
        land_cost=land_cost,
        land_closing_pct=land_closing_pct,
        site_acres=site_acres,
    ))


def update_construction(
    state: ProjectState,
    *,
    total_build_sf: Optional[float] = None,
    phase1_sf: Optional[float] = None,
    hard_cost_psf: Optional[float] = None,
    soft_cost_pct: Optional[float] = None,
    contingency_pct: Optional[float] = None,
) -> ProjectState:
    """Update building area and construction budget inputs."""
    return replace(state, **_changes(
        total_build_sf=total_build_sf,
        phase1_sf=phase1_sf,
        hard_cost_psf=hard_cost_psf,
        soft_cost_pct=soft_cost_pct,
        contingency_pct=contingency_pct,
    ))


def update_capital(
    state: ProjectState,
    *,
    max_ltc: Optional[float] = None,
    interest_rate: Optional[float] = None,
    amort_years: Optional[int] = None,
    io_months: Optional[int] = None,
) -> ProjectState:
    """Update debt terms."""
    return replace(state, **_changes(
        max_ltc=max_ltc,
        interest_rate=interest_rate,
        amort_years=amort_years,
        io_months=io_months,
    ))


def update_urbanism(
    state: ProjectState,
    *,
    ped_spine_length_ft: Optional[float] = None,
    avg_block_length_ft: Optional[float] = None,
    num_nodes: Optional[int] = None,
    shade_pct: Optional[float] = None,
    seating_interval_ft: Optional[float] = None,
    tree_interval_ft: Optional[float] = None,
    heat_mitigation_count: Optional[int] = None,
    active_frontage_pct: Optional[float] = None,
    parking_visible_pct: Optional[float] = None,
    car_crossings_count: Optional[int] = None,
) -> ProjectState:
    """Update the pedestrian-experience metrics."""
    return replace(state, **_changes(
        ped_spine_length_ft=ped_spine_length_ft,
        avg_block_length_ft=avg_block_length_ft,
        num_nodes=num_nodes,
        shade_pct=shade_pct,
        seating_interval_ft=seating_interval_ft,
        tree_interval_ft=tree_interval_ft,
        heat_mitigation_count=heat_mitigation_count,
        active_frontage_pct=active_frontage_pct,
        parking_visible_pct=parking_visible_pct,
        car_crossings_count=car_crossings_count,
    ))


def new_tenant() -> Tenant:
    """Placeholder tenant added from the lease-up matrix."""
    return Tenant(
        id=uuid.uuid4().hex[:9],
        name="New Tenant",
        category=TenantCategory.RETAIL,
        sf=1500,
        rent_psf=30,
        operating_hours=10,
        night_active=False,
    )


def add_tenant(state: ProjectState, tenant: Optional[Tenant] = None) -> ProjectState:
    """Append a tenant (a fresh placeholder if none is given)."""
    return replace(state, tenants=state.tenants + (tenant or new_tenant(),))


def update_tenant(
    state: ProjectState,
    tenant_id: str,
    *,
    name: Optional[str] = None,
    category: Optional[TenantCategory] = None,
    sf: Optional[float] = None,
    rent_psf: Optional[float] = None,
    operating_hours: Optional[float] = None,
    night_active: Optional[bool] = None,
) -> ProjectState:
    """Change fields of one tenant, keeping roster order.

    Raises:
        KeyError: If no tenant has this id.
    """
    target = state.get_tenant(tenant_id)
    updated = replace(target, **_changes(
        name=name,
        category=category,
        sf=sf,
        rent_psf=rent_psf,
        operating_hours=operating_hours,
        night_active=night_active,
    ))
    return replace(state, tenants=tuple(
        updated if t.id == tenant_id else t for t in state.tenants
    ))


def remove_tenant(state: ProjectState, tenant_id: str) -> ProjectState:
    """Drop a tenant by id. Unknown ids leave the roster unchanged."""
    return replace(state, tenants=tuple(t for t in state.tenants if t.id != tenant_id))
