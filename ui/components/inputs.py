"""Input components for the Streamlit UI."""

import streamlit as st

from src.models.project import ProjectState, TenantCategory
from src.models.updates import (
    update_land,
    update_construction,
    update_capital,
    update_urbanism,
    add_tenant,
    update_tenant,
    remove_tenant,
)


def render_sidebar_inputs(state: ProjectState) -> ProjectState:
    """Render the project input panel and return the edited snapshot.

    Args:
        state: Current project snapshot (seeds the widget values).

    Returns:
        New ProjectState built through the typed update functions.
    """
    st.sidebar.header("Project Inputs")

    st.sidebar.subheader("Land & Site")
    col1, col2 = st.sidebar.columns(2)
    with col1:
        land_cost = st.number_input(
            "Land Cost ($)", min_value=0.0, value=float(state.land_cost),
            step=50_000.0, format="%.0f",
        )
    with col2:
        site_acres = st.number_input(
            "Acres", min_value=0.0, value=float(state.site_acres), step=0.5,
        )
    land_closing_pct = st.sidebar.number_input(
        "Land Closing (%)", min_value=0.0, max_value=100.0,
        value=float(state.land_closing_pct), step=0.5,
    )
    state = update_land(
        state, land_cost=land_cost, land_closing_pct=land_closing_pct, site_acres=site_acres,
    )

    st.sidebar.subheader("Construction")
    total_build_sf = st.sidebar.number_input(
        "Total Buildable SF", min_value=0.0, value=float(state.total_build_sf),
        step=1_000.0, format="%.0f",
    )
    col1, col2 = st.sidebar.columns(2)
    with col1:
        phase1_sf = st.number_input(
            "Phase 1 SF", min_value=0.0, value=float(state.phase1_sf),
            step=1_000.0, format="%.0f",
        )
        soft_cost_pct = st.number_input(
            "Soft Cost (%)", min_value=0.0, max_value=100.0,
            value=float(state.soft_cost_pct), step=1.0,
        )
    with col2:
        hard_cost_psf = st.number_input(
            "Hard Cost/SF", min_value=0.0, value=float(state.hard_cost_psf), step=5.0,
        )
        contingency_pct = st.number_input(
            "Contingency (%)", min_value=0.0, max_value=100.0,
            value=float(state.contingency_pct), step=1.0,
        )
    state = update_construction(
        state,
        total_build_sf=total_build_sf,
        phase1_sf=phase1_sf,
        hard_cost_psf=hard_cost_psf,
        soft_cost_pct=soft_cost_pct,
        contingency_pct=contingency_pct,
    )

    st.sidebar.subheader("Debt & Capital")
    col1, col2 = st.sidebar.columns(2)
    with col1:
        max_ltc = st.number_input(
            "Max LTC (%)", min_value=0.0, max_value=100.0,
            value=float(state.max_ltc), step=1.0,
        )
        amort_years = st.number_input(
            "Amortization (yrs)", min_value=1, max_value=40,
            value=int(state.amort_years), step=1,
        )
    with col2:
        interest_rate = st.number_input(
            "Interest (%)", min_value=0.0, max_value=25.0,
            value=float(state.interest_rate), step=0.05, format="%.2f",
        )
        io_months = st.number_input(
            "Interest-Only (mo)", min_value=0, max_value=60,
            value=int(state.io_months), step=1,
            help="Recorded with the project; not used in debt service",
        )
    state = update_capital(
        state,
        max_ltc=max_ltc,
        interest_rate=interest_rate,
        amort_years=int(amort_years),
        io_months=int(io_months),
    )

    st.sidebar.subheader("Urban Logic")
    shade_pct = st.sidebar.slider(
        "Shade Coverage (%)", 0.0, 100.0, float(state.shade_pct), 1.0,
    )
    active_frontage_pct = st.sidebar.slider(
        "Active Frontage (%)", 0.0, 100.0,
        float(state.active_frontage_pct), 1.0,
    )
    parking_visible_pct = st.sidebar.slider(
        "Parking Visible (%)", 0.0, 100.0, float(state.parking_visible_pct), 1.0,
    )

    with st.sidebar.expander("Street Metrics", expanded=False):
        ped_spine_length_ft = st.number_input(
            "Ped Spine Length (ft)", min_value=0.0,
            value=float(state.ped_spine_length_ft), step=50.0,
        )
        avg_block_length_ft = st.number_input(
            "Avg Block Length (ft)", min_value=0.0,
            value=float(state.avg_block_length_ft), step=25.0,
        )
        num_nodes = st.number_input(
            "Activity Nodes", min_value=0, value=int(state.num_nodes), step=1,
        )
        seating_interval_ft = st.number_input(
            "Seating Interval (ft)", min_value=1.0,
            value=float(state.seating_interval_ft), step=10.0,
        )
        tree_interval_ft = st.number_input(
            "Tree Interval (ft)", min_value=1.0,
            value=float(state.tree_interval_ft), step=5.0,
        )
        heat_mitigation_count = st.number_input(
            "Heat Mitigation Features", min_value=0,
            value=int(state.heat_mitigation_count), step=1,
        )
        car_crossings_count = st.number_input(
            "Car Crossings", min_value=0, value=int(state.car_crossings_count), step=1,
        )

    return update_urbanism(
        state,
        ped_spine_length_ft=ped_spine_length_ft,
        avg_block_length_ft=avg_block_length_ft,
        num_nodes=int(num_nodes),
        shade_pct=shade_pct,
        seating_interval_ft=seating_interval_ft,
        tree_interval_ft=tree_interval_ft,
        heat_mitigation_count=int(heat_mitigation_count),
        active_frontage_pct=active_frontage_pct,
        parking_visible_pct=parking_visible_pct,
        car_crossings_count=int(car_crossings_count),
    )


def render_tenant_editor(state: ProjectState) -> ProjectState:
    """Render the lease-up matrix with add/edit/remove controls.

    Args:
        state: Current project snapshot.

    Returns:
        Snapshot with the roster edits applied.
    """
    header_col, button_col = st.columns([4, 1])
    with header_col:
        st.subheader("Lease-Up Matrix")
    with button_col:
        if st.button("+ Add Tenant", use_container_width=True):
            state = add_tenant(state)

    categories = list(TenantCategory)
    labels = st.columns([3, 2, 2, 2, 2, 1, 1])
    for col, label in zip(labels, ["Tenant", "Category", "SF", "Rent/SF", "Hours/Day", "Night", ""]):
        col.caption(label)

    removed = []
    for tenant in state.tenants:
        cols = st.columns([3, 2, 2, 2, 2, 1, 1])
        name = cols[0].text_input(
            "Name", value=tenant.name, key=f"tenant_name_{tenant.id}",
            label_visibility="collapsed",
        )
        category = cols[1].selectbox(
            "Category", categories, index=categories.index(tenant.category),
            format_func=lambda c: c.value, key=f"tenant_cat_{tenant.id}",
            label_visibility="collapsed",
        )
        sf = cols[2].number_input(
            "SF", min_value=0.0, value=float(tenant.sf), step=100.0,
            key=f"tenant_sf_{tenant.id}", label_visibility="collapsed",
        )
        rent_psf = cols[3].number_input(
            "Rent/SF", min_value=0.0, value=float(tenant.rent_psf), step=1.0,
            key=f"tenant_rent_{tenant.id}", label_visibility="collapsed",
        )
        hours = cols[4].number_input(
            "Hours", min_value=0.0, max_value=24.0, value=float(tenant.operating_hours),
            step=1.0, key=f"tenant_hours_{tenant.id}", label_visibility="collapsed",
        )
        night = cols[5].checkbox(
            "Night", value=tenant.night_active, key=f"tenant_night_{tenant.id}",
            label_visibility="collapsed",
        )
        if cols[6].button("🗑", key=f"tenant_remove_{tenant.id}"):
            removed.append(tenant.id)
            continue

        state = update_tenant(
            state, tenant.id,
            name=name, category=category, sf=sf, rent_psf=rent_psf,
            operating_hours=hours, night_active=night,
        )

    for tenant_id in removed:
        state = remove_tenant(state, tenant_id)

    return state
