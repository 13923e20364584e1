"""UI components for the Mini-World underwriting app."""

from .inputs import render_sidebar_inputs, render_tenant_editor
from .results import (
    render_key_metrics,
    render_break_even_and_phase1,
    render_walkability_summary,
    render_score_table,
    render_tenant_totals,
    render_partner_verdict,
)
from .charts import (
    render_capital_stack_chart,
    render_cost_breakdown_chart,
    render_score_breakdown_chart,
    render_usage_concentration_chart,
)
from .calculation_trace_view import render_calculation_trace_view

__all__ = [
    "render_sidebar_inputs",
    "render_tenant_editor",
    "render_key_metrics",
    "render_break_even_and_phase1",
    "render_walkability_summary",
    "render_score_table",
    "render_tenant_totals",
    "render_partner_verdict",
    "render_capital_stack_chart",
    "render_cost_breakdown_chart",
    "render_score_breakdown_chart",
    "render_usage_concentration_chart",
    "render_calculation_trace_view",
]
