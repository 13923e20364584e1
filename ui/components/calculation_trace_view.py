"""Calculation Trace View - Interactive drill-down into formulas and values.

This component displays traced calculations, allowing users to see:
- Formula definitions (symbolic)
- Actual values used in each formula
- Drill-down navigation through calculation dependencies
"""

import streamlit as st
from typing import Optional, Dict, List

from src.calculations.trace import TraceContext, TracedValue, format_value
from src.calculations.formula_registry import FormulaRegistry


def render_trace_summary(trace_context: Optional[TraceContext]) -> None:
    """Render summary of all traced calculations.

    Args:
        trace_context: The TraceContext containing traced values
    """
    if trace_context is None or not trace_context.traces:
        st.warning("No calculation traces available. Ensure tracing is enabled.")
        return

    st.subheader("Calculation Trace Summary")
    st.caption(f"{len(trace_context.traces)} calculations traced")

    by_category: Dict[str, List[TracedValue]] = {}
    for traced in trace_context.traces.values():
        cat = traced.formula_def.category.value if traced.formula_def else "Uncategorized"
        by_category.setdefault(cat, []).append(traced)

    for category, traces in sorted(by_category.items()):
        with st.expander(f"{category} ({len(traces)} calculations)", expanded=False):
            for traced in traces:
                col1, col2 = st.columns([2, 3])
                with col1:
                    name = traced.formula_def.name if traced.formula_def else traced.field_path
                    st.markdown(f"**{name}**")
                    st.write(f"= {format_value(traced.value, traced.unit)}")
                with col2:
                    if traced.formula_def:
                        st.code(traced.formula_def.formula, language=None)
                    st.caption(
                        traced.computed_formula[:100] + "..."
                        if len(traced.computed_formula) > 100 else traced.computed_formula
                    )


def render_single_trace(traced: TracedValue, trace_context: TraceContext) -> None:
    """Render detailed view of a single traced calculation.

    Args:
        traced: The TracedValue to display
        trace_context: Context for looking up input traces
    """
    if traced.formula_def:
        st.markdown(f"### {traced.formula_def.name}")
        st.caption(f"`{traced.field_path}`")
    else:
        st.markdown(f"### {traced.field_path}")

    st.metric("Result", format_value(traced.value, traced.unit))

    st.markdown("**Formula:**")
    if traced.formula_def:
        st.code(traced.formula_def.formula, language=None)
        if traced.formula_def.notes:
            st.info(traced.formula_def.notes)

    st.markdown("**With Values:**")
    st.code(traced.computed_formula, language=None)

    if traced.input_values:
        st.markdown("**Input Values:**")
        input_data = []
        for input_path, value in traced.input_values.items():
            input_def = FormulaRegistry.get(input_path)
            input_data.append({
                "Input": input_path.split(".")[-1],
                "Full Path": input_path,
                "Value": format_value(value, input_def.unit if input_def else "$"),
                "Traceable": "Yes" if input_path in trace_context.traces else "No",
            })

        st.dataframe(input_data, use_container_width=True, hide_index=True)

    if traced.notes:
        st.markdown(f"**Notes:** {traced.notes}")


def render_calculation_trace_view(trace_context: Optional[TraceContext]) -> None:
    """Render interactive calculation trace viewer.

    Args:
        trace_context: The TraceContext from evaluate_project(trace_enabled=True)
    """
    if trace_context is None or not trace_context.traces:
        st.info("No calculation traces available.")
        st.caption("Traces are captured when the project is evaluated with tracing enabled.")
        return

    st.header("Calculation Trace Viewer")
    st.markdown(
        "Explore how each value was calculated. "
        "Select a calculation to see its formula and inputs."
    )

    tab1, tab2, tab3 = st.tabs(["By Category", "Search", "Formula Registry"])

    with tab1:
        render_trace_summary(trace_context)

    with tab2:
        trace_keys = sorted(trace_context.traces.keys())
        default_key = st.session_state.get("selected_trace")
        selected_trace = st.selectbox(
            "Select Calculation",
            trace_keys,
            index=trace_keys.index(default_key) if default_key in trace_keys else 0,
            format_func=lambda k: (
                f"{k}: {format_value(trace_context.traces[k].value, trace_context.traces[k].unit)}"
            ),
        )

        if selected_trace:
            traced = trace_context.traces[selected_trace]
            render_single_trace(traced, trace_context)

            traceable = [p for p in traced.input_values if p in trace_context.traces]
            if traceable:
                st.markdown("---")
                st.markdown("**Drill Down into Inputs:**")
                cols = st.columns(min(len(traceable), 4))
                for i, input_path in enumerate(traceable):
                    with cols[i % len(cols)]:
                        if st.button(
                            input_path.split(".")[-1],
                            key=f"drill_{input_path}_{selected_trace}",
                            use_container_width=True,
                        ):
                            st.session_state["selected_trace"] = input_path
                            st.rerun()

    with tab3:
        st.subheader("Formula Registry")
        st.caption("All formula definitions available in the system")

        all_formulas = FormulaRegistry.get_all()

        by_cat: Dict[str, list] = {}
        for field_path, formula_def in all_formulas.items():
            by_cat.setdefault(formula_def.category.value, []).append((field_path, formula_def))

        for category, formulas in sorted(by_cat.items()):
            with st.expander(f"{category} ({len(formulas)} formulas)", expanded=False):
                for field_path, formula_def in formulas:
                    st.markdown(f"**{formula_def.name}** (`{field_path}`)")
                    st.code(formula_def.formula, language=None)
                    if formula_def.inputs:
                        st.caption(f"Inputs: {', '.join(formula_def.inputs)}")
                    if formula_def.notes:
                        st.caption(f"Note: {formula_def.notes}")
                    st.markdown("---")
