"""Chart components for the Streamlit UI."""

import streamlit as st
import plotly.graph_objects as go

from src.calculations.financials import FinancialResult
from src.calculations.tenants import TenantMixResult
from src.calculations.walkability import WalkabilityResult

CATEGORY_COLORS = ['#0f172a', '#334155', '#64748b', '#94a3b8', '#cbd5e1']


def render_capital_stack_chart(fin: FinancialResult) -> None:
    """Render the capital stack and income coverage bars.

    Args:
        fin: Financial underwriting result.
    """
    rows = ["Capital Stack", "Stability"]

    fig = go.Figure()
    fig.add_trace(go.Bar(
        y=rows, x=[fin.max_loan, 0], name="Debt",
        orientation="h", marker_color="#0f172a",
    ))
    fig.add_trace(go.Bar(
        y=rows, x=[fin.required_equity, 0], name="Equity",
        orientation="h", marker_color="#cbd5e1",
    ))
    fig.add_trace(go.Bar(
        y=rows, x=[0, fin.noi], name="NOI",
        orientation="h", marker_color="#059669",
    ))
    fig.add_trace(go.Bar(
        y=rows, x=[0, fin.annual_debt_service], name="Debt Srv",
        orientation="h", marker_color="#f87171",
    ))

    fig.update_layout(
        title="Capital & Income Stack",
        barmode="stack",
        xaxis_tickformat="$,.0f",
        height=300,
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
    )

    st.plotly_chart(fig, use_container_width=True)


def render_cost_breakdown_chart(fin: FinancialResult) -> None:
    """Render cost breakdown pie chart.

    Args:
        fin: Financial underwriting result.
    """
    labels = ['Land', 'Hard Costs', 'Soft Costs', 'Contingency']
    values = [fin.land_total_cost, fin.hard_cost_total, fin.soft_cost_total, fin.contingency_total]

    fig = go.Figure(data=[go.Pie(
        labels=labels,
        values=values,
        hole=0.4,
        textinfo='label+percent',
        textposition='outside',
        marker=dict(colors=['#2ca02c', '#1f77b4', '#ff7f0e', '#d62728'])
    )])

    fig.update_layout(
        title="Cost Breakdown",
        height=350,
        showlegend=True,
        legend=dict(
            orientation="h",
            yanchor="bottom",
            y=-0.2,
            xanchor="center",
            x=0.5
        )
    )

    st.plotly_chart(fig, use_container_width=True)


def render_score_breakdown_chart(walk: WalkabilityResult) -> None:
    """Render the walkability sub-scores as horizontal bars.

    Args:
        walk: Walkability result.
    """
    labels = ["Human Comfort", "Activation Density", "Parking Penalty", "Conflict Penalty"]
    values = [walk.comfort_score, walk.activation_score, -walk.parking_penalty, -walk.conflict_penalty]
    colors = ["#10b981", "#3b82f6", "#ef4444", "#f97316"]

    fig = go.Figure(go.Bar(
        x=values,
        y=labels,
        orientation="h",
        marker_color=colors,
        text=[f"{v:.0f}" for v in values],
        textposition="auto",
    ))

    fig.update_layout(
        title="Score Breakdown",
        xaxis=dict(range=[-max(20.0, walk.penalty), 100]),
        height=300,
    )

    st.plotly_chart(fig, use_container_width=True)


def render_usage_concentration_chart(mix: TenantMixResult) -> None:
    """Render leased SF by category as a donut chart.

    Args:
        mix: Tenant mix analytics.
    """
    if not mix.sf_by_category:
        st.info("No tenants to display")
        return

    fig = go.Figure(data=[go.Pie(
        labels=[category.value for category in mix.sf_by_category],
        values=list(mix.sf_by_category.values()),
        hole=0.6,
        marker=dict(colors=CATEGORY_COLORS),
    )])

    fig.update_layout(title="Usage Concentration", height=320)

    st.plotly_chart(fig, use_container_width=True)
