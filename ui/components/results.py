"""Results display components for the Streamlit UI."""

import streamlit as st
import pandas as pd

from src.calculations.metrics import ProjectEvaluation, PartnerVerdict
from src.calculations.financials import FinancialResult
from src.calculations.tenants import TenantMixResult
from src.calculations.walkability import WalkabilityResult
from src.models.lookups import DSCR_TARGET, PHASE1_DSCR_STRONG


def render_key_metrics(evaluation: ProjectEvaluation) -> None:
    """Render the three headline stat cards.

    Args:
        evaluation: Project evaluation.
    """
    fin = evaluation.financials
    verdict = evaluation.verdict

    col1, col2, col3 = st.columns(3)

    with col1:
        st.metric(
            "Total Project Cost",
            f"${fin.total_project_cost/1_000_000:.2f}M",
            f"${fin.cost_per_sf:,.0f}/SF Built",
            delta_color="off",
        )

    with col2:
        st.metric(
            "Conservative DSCR",
            f"{fin.dscr:.2f}",
            f"Target: {DSCR_TARGET:.2f}",
            delta_color="normal" if verdict.meets_dscr_target else "inverse",
        )

    with col3:
        st.metric(
            "Required Equity",
            f"${fin.required_equity/1_000:,.0f}K",
            f"{fin.equity_pct:.1f}% of Capital",
            delta_color="inverse" if verdict.equity_heavy else "off",
        )


def render_break_even_and_phase1(fin: FinancialResult) -> None:
    """Render break-even rent and phase 1 standalone feasibility.

    Args:
        fin: Financial underwriting result.
    """
    col1, col2 = st.columns(2)

    with col1:
        st.markdown("**Break-even Analysis**")
        st.write(f"Break-even Rent: **${fin.break_even_rent_psf:.2f}/SF**")
        st.progress(min(max(fin.break_even_rent_psf / 45, 0.0), 1.0))
        st.caption("Project is safe as long as market rents stay above this floor.")

    with col2:
        st.markdown("**Phase 1 Standalone**")
        st.write(f"Phase 1 DSCR: **{fin.phase1_dscr:.2f}**")
        feasibility = "STRONG" if fin.phase1_dscr >= PHASE1_DSCR_STRONG else "WEAK"
        st.caption(f"Standalone feasibility is {feasibility}.")


def render_walkability_summary(walk: WalkabilityResult, night_activation_pct: float) -> None:
    """Render the score card and pedestrian experience metrics.

    Args:
        walk: Walkability result.
        night_activation_pct: Share of night-active tenants (0-100).
    """
    st.metric("Final Walkability Score", f"{walk.final_score:.0f}", walk.grade, delta_color="off")
    st.caption(
        "This score measures human-scale intimacy, thermal comfort and active storefronts."
    )

    col1, col2, col3 = st.columns(3)

    with col1:
        st.markdown("**Avg Walk Segment**")
        st.write(f"{walk.avg_walk_distance:,.0f} FT")
        if walk.five_min_walk_compliant:
            st.success("5-Min Walk Compliant")
        else:
            st.warning("Scaling Risk")

    with col2:
        st.markdown("**Active Frontage**")
        st.write(f"{walk.frontage_score:.0f}%")

    with col3:
        st.markdown("**Night Activation**")
        st.write(f"{night_activation_pct:.0f}%")


def render_score_table(walk: WalkabilityResult) -> None:
    """Render every walkability sub-score.

    Args:
        walk: Walkability result.
    """
    df = pd.DataFrame({
        "Component": [
            "Shade", "Seating", "Trees", "Heat Mitigation", "Human Comfort",
            "Active Frontage", "Operating Hours", "Node Density", "Night Life", "Activation Density",
            "Parking Penalty", "Conflict Penalty", "Final Score",
        ],
        "Score": [
            walk.shade_score, walk.seating_score, walk.tree_score, walk.heat_score, walk.comfort_score,
            walk.frontage_score, walk.hours_score, walk.node_score, walk.night_life_pct,
            walk.activation_score, -walk.parking_penalty, -walk.conflict_penalty, walk.final_score,
        ],
    })
    df["Score"] = df["Score"].round(1)
    st.dataframe(df, use_container_width=True, hide_index=True)


def render_tenant_totals(mix: TenantMixResult) -> None:
    """Render leased area and utilization.

    Args:
        mix: Tenant mix analytics.
    """
    st.metric("Total Leased Area", f"{mix.total_leased_sf:,.0f} SF")
    st.metric("Phase 1 Utilization", f"{mix.utilization_pct:.0f}%")
    if mix.is_over_leased:
        st.warning("Leased area exceeds the buildable program.")


def render_partner_verdict(verdict: PartnerVerdict, fin: FinancialResult, walk: WalkabilityResult) -> None:
    """Render the partner verdict callout.

    Args:
        verdict: Partner verdict.
        fin: Financial underwriting result.
        walk: Walkability result.
    """
    message = f"""
    ### Partner Verdict
    Based on conservative bank standards, this project has a **{verdict.funding_probability}**
    probability of institutional funding. The walkability score of {walk.final_score:.0f}
    provides a resilient competitive advantage.

    Equity Rec: **${fin.required_equity/1_000:,.0f}K** | DSCR Goal: **{verdict.dscr_target:.2f}+**
    """

    if verdict.meets_dscr_target:
        st.success(message)
    else:
        st.warning(message)
