"""Main Streamlit application for the Mini-World underwriting calculator."""

import logging
import sys
from dataclasses import replace
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import streamlit as st

from src.calculations.metrics import evaluate_project, ProjectEvaluation
from src.config import Settings
from src.export.audit_report import generate_audit_excel, AuditReportConfig
from src.export.partner_summary import generate_narrative
from src.models.project import ProjectState
from src.storage import JsonFileProjectStore, ProjectNotFoundError
from ui.components import (
    render_sidebar_inputs,
    render_tenant_editor,
    render_key_metrics,
    render_break_even_and_phase1,
    render_walkability_summary,
    render_score_table,
    render_tenant_totals,
    render_partner_verdict,
    render_capital_stack_chart,
    render_cost_breakdown_chart,
    render_score_breakdown_chart,
    render_usage_concentration_chart,
    render_calculation_trace_view,
)

logger = logging.getLogger(__name__)

# Page configuration
st.set_page_config(
    page_title="Mini-World Developer OS",
    page_icon="🏙️",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .stTabs [data-baseweb="tab-list"] {
        gap: 24px;
    }
    .status-bar {
        font-size: 0.85rem;
        color: #64748b;
    }
</style>
""", unsafe_allow_html=True)


def get_settings() -> Settings:
    """Settings from the environment, with the API key falling back to st.secrets."""
    settings = Settings.from_env()
    if not settings.gemini_api_key:
        try:
            key = st.secrets.get("GEMINI_API_KEY")
        except FileNotFoundError:
            key = None
        if key:
            settings = replace(settings, gemini_api_key=key)
    return settings


def get_store(settings: Settings) -> JsonFileProjectStore:
    return JsonFileProjectStore(settings.data_dir)


def init_session_state(store: JsonFileProjectStore) -> None:
    """Seed the session with the most recent saved project, or the defaults."""
    if "project_state" in st.session_state:
        return

    latest = store.latest()
    if latest is not None:
        project_id, state = latest
        logger.info("Loaded project %s", project_id)
        st.session_state["project_id"] = project_id
        st.session_state["project_state"] = state
    else:
        st.session_state["project_id"] = None
        st.session_state["project_state"] = ProjectState()

    st.session_state["ai_summary"] = ""


def render_project_controls(store: JsonFileProjectStore) -> None:
    """Save / load / reset controls at the top of the sidebar."""
    st.sidebar.title("Mini-World Developer OS")

    name = st.sidebar.text_input("Project Name", value=st.session_state.get("project_name", "New Project"))
    st.session_state["project_name"] = name

    col1, col2, col3 = st.sidebar.columns(3)
    with col1:
        if st.button("Save", use_container_width=True):
            project_id = store.save(
                st.session_state["project_state"],
                project_id=st.session_state.get("project_id"),
                name=name,
            )
            st.session_state["project_id"] = project_id
            st.sidebar.success("Saved")
    with col2:
        if st.button("Reload", use_container_width=True) and st.session_state.get("project_id"):
            try:
                st.session_state["project_state"] = store.load(st.session_state["project_id"])
            except ProjectNotFoundError:
                st.sidebar.error("Saved project not found")
            else:
                st.rerun()
    with col3:
        if st.button("Reset", use_container_width=True):
            st.session_state["project_state"] = ProjectState()
            st.session_state["ai_summary"] = ""
            st.rerun()


def render_status_bar(evaluation: ProjectEvaluation) -> None:
    """DSCR / walk score / break-even strip shown under the tabs."""
    fin = evaluation.financials
    col1, col2, col3 = st.columns(3)
    col1.metric("DSCR", f"{fin.dscr:.2f}")
    col2.metric("Walk Score", f"{evaluation.walkability.final_score:.0f}")
    col3.metric("Breakeven", f"${fin.break_even_rent_psf:.2f}")


def render_financials_tab(evaluation: ProjectEvaluation) -> None:
    render_key_metrics(evaluation)
    st.markdown("---")
    col1, col2 = st.columns([3, 2])
    with col1:
        render_capital_stack_chart(evaluation.financials)
    with col2:
        render_cost_breakdown_chart(evaluation.financials)
    st.markdown("---")
    render_break_even_and_phase1(evaluation.financials)


def render_walkability_tab(evaluation: ProjectEvaluation) -> None:
    walk = evaluation.walkability
    mix = evaluation.tenant_mix
    night_pct = mix.night_active_count / mix.tenant_count * 100 if mix.tenant_count else 0.0

    col1, col2 = st.columns(2)
    with col1:
        render_walkability_summary(walk, night_pct)
    with col2:
        render_score_breakdown_chart(walk)

    with st.expander("Score Detail", expanded=False):
        render_score_table(walk)


def render_tenants_tab(evaluation: ProjectEvaluation) -> None:
    new_state = render_tenant_editor(st.session_state["project_state"])
    if new_state != st.session_state["project_state"]:
        st.session_state["project_state"] = new_state
        st.rerun()

    col1, col2 = st.columns(2)
    with col1:
        render_usage_concentration_chart(evaluation.tenant_mix)
    with col2:
        render_tenant_totals(evaluation.tenant_mix)


def render_summary_tab(evaluation: ProjectEvaluation, settings: Settings) -> None:
    st.subheader("AI Investor Narrative")

    if not settings.narrative_enabled:
        st.caption("Set GEMINI_API_KEY to enable narrative generation.")

    if st.button("Generate New Narrative", type="primary"):
        with st.spinner("Thinking..."):
            st.session_state["ai_summary"] = generate_narrative(
                evaluation.state,
                evaluation.financials,
                evaluation.walkability,
                settings=settings,
            )

    summary = st.session_state.get("ai_summary")
    if summary:
        for para in summary.split("\n"):
            if para.strip():
                st.write(para)
    else:
        st.info("Click generate to build the investment case based on your data.")

    st.markdown("---")
    render_partner_verdict(evaluation.verdict, evaluation.financials, evaluation.walkability)

    st.download_button(
        "Download Audit Workbook",
        data=generate_audit_excel(
            evaluation,
            AuditReportConfig(project_name=st.session_state.get("project_name", "New Project")),
        ),
        file_name="underwriting_audit.xlsx",
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )


def main():
    """Main application entry point."""
    settings = get_settings()
    store = get_store(settings)
    init_session_state(store)

    render_project_controls(store)
    state = render_sidebar_inputs(st.session_state["project_state"])
    st.session_state["project_state"] = state

    for message in state.validate():
        st.sidebar.warning(message)

    evaluation = evaluate_project(state, trace_enabled=True)

    st.title("Mini-World Developer OS")
    render_status_bar(evaluation)

    tab1, tab2, tab3, tab4, tab5 = st.tabs([
        "Financials", "Walkability", "Tenant Mix", "Partner Summary", "Calculation Trace",
    ])

    with tab1:
        render_financials_tab(evaluation)

    with tab2:
        render_walkability_tab(evaluation)

    with tab3:
        render_tenants_tab(evaluation)

    with tab4:
        render_summary_tab(evaluation, settings)

    with tab5:
        render_calculation_trace_view(evaluation.trace_context)


if __name__ == "__main__":
    main()
