"""Partner verdict, project evaluation and the text summary table."""

from dataclasses import dataclass
from typing import Optional

from ..models.lookups import DSCR_TARGET, PHASE1_DSCR_STRONG, EQUITY_PCT_WARNING
from ..models.project import ProjectState
from .financials import FinancialResult, compute_financials
from .tenants import TenantMixResult, analyze_tenant_mix
from .trace import TraceContext
from .walkability import WalkabilityResult, compute_walkability


@dataclass
class PartnerVerdict:
    """Lender-facing read of the underwriting results."""

    meets_dscr_target: bool
    dscr_status: str  # "green" or "yellow"
    funding_probability: str  # "HIGH" or "MODERATE"
    phase1_feasibility: str  # "STRONG" or "WEAK"
    equity_heavy: bool  # Equity share above the comfort level
    dscr_target: float = DSCR_TARGET


@dataclass
class ProjectEvaluation:
    """Everything derived from one ProjectState snapshot."""

    state: ProjectState
    financials: FinancialResult
    walkability: WalkabilityResult
    tenant_mix: TenantMixResult
    verdict: PartnerVerdict
    trace_context: Optional[TraceContext] = None


def calculate_verdict(fin: FinancialResult) -> PartnerVerdict:
    """Classify the deal the way the partner summary presents it.

    Args:
        fin: Financial underwriting result.

    Returns:
        PartnerVerdict with DSCR status, funding probability, phase-1
        feasibility and an equity flag.
    """
    meets_target = fin.dscr >= DSCR_TARGET

    return PartnerVerdict(
        meets_dscr_target=meets_target,
        dscr_status="green" if meets_target else "yellow",
        funding_probability="HIGH" if meets_target else "MODERATE",
        phase1_feasibility="STRONG" if fin.phase1_dscr >= PHASE1_DSCR_STRONG else "WEAK",
        equity_heavy=fin.equity_pct > EQUITY_PCT_WARNING,
    )


def evaluate_project(state: ProjectState, trace_enabled: bool = False) -> ProjectEvaluation:
    """Run both models and the roster analytics on one snapshot.

    Args:
        state: Project snapshot.
        trace_enabled: Capture a calculation trace for the audit views.

    Returns:
        ProjectEvaluation (trace_context is set only when tracing).
    """
    trace_context = None
    if trace_enabled:
        with TraceContext() as trace_context:
            fin = compute_financials(state)
            walk = compute_walkability(state)
    else:
        fin = compute_financials(state)
        walk = compute_walkability(state)

    return ProjectEvaluation(
        state=state,
        financials=fin,
        walkability=walk,
        tenant_mix=analyze_tenant_mix(state),
        verdict=calculate_verdict(fin),
        trace_context=trace_context,
    )


def format_summary_table(evaluation: ProjectEvaluation) -> str:
    """Format the evaluation as a text table.

    Args:
        evaluation: Project evaluation.

    Returns:
        Formatted string table.
    """
    fin = evaluation.financials
    walk = evaluation.walkability
    mix = evaluation.tenant_mix
    verdict = evaluation.verdict

    lines = [
        "=" * 60,
        "UNDERWRITING SUMMARY",
        "=" * 60,
        "",
        f"{'Land (incl. closing)':<30} ${fin.land_total_cost:>18,.0f}",
        f"{'Hard Costs':<30} ${fin.hard_cost_total:>18,.0f}",
        f"{'Soft Costs':<30} ${fin.soft_cost_total:>18,.0f}",
        f"{'Contingency':<30} ${fin.contingency_total:>18,.0f}",
        f"{'Total Project Cost':<30} ${fin.total_project_cost:>18,.0f}",
        f"{'Cost / SF Built':<30} ${fin.cost_per_sf:>18,.2f}",
        "",
        f"{'Max Loan':<30} ${fin.max_loan:>18,.0f}",
        f"{'Required Equity':<30} ${fin.required_equity:>18,.0f}",
        f"{'Equity % of Capital':<30} {fin.equity_pct:>18.1f}%",
        "",
        f"{'Gross Potential Rent':<30} ${fin.gross_potential_rent:>18,.0f}",
        f"{'Effective Gross Income':<30} ${fin.effective_gross_income:>18,.0f}",
        f"{'Operating Expenses':<30} ${fin.operating_expenses:>18,.0f}",
        f"{'NOI':<30} ${fin.noi:>18,.0f}",
        f"{'Annual Debt Service':<30} ${fin.annual_debt_service:>18,.0f}",
        f"{'DSCR':<30} {fin.dscr:>18.2f}x",
        f"{'Break-even Rent / SF':<30} ${fin.break_even_rent_psf:>18,.2f}",
        f"{'Phase 1 NOI':<30} ${fin.phase1_noi:>18,.0f}",
        f"{'Phase 1 DSCR':<30} {fin.phase1_dscr:>18.2f}x",
        "",
        "-" * 60,
        "WALKABILITY",
        "-" * 60,
        f"{'Avg Walk Segment':<30} {walk.avg_walk_distance:>17,.0f} ft",
        f"{'5-Min Walk Compliant':<30} {'YES' if walk.five_min_walk_compliant else 'NO':>18}",
        f"{'Human Comfort':<30} {walk.comfort_score:>18.1f}",
        f"{'Activation Density':<30} {walk.activation_score:>18.1f}",
        f"{'Penalties':<30} {-walk.penalty:>18.1f}",
        f"{'Final Score':<30} {walk.final_score:>18.1f}",
        f"{'Grade':<30} {walk.grade:>18}",
        "",
        "-" * 60,
        f"{'Tenants':<30} {mix.tenant_count:>18d}",
        f"{'Total Leased SF':<30} {mix.total_leased_sf:>18,.0f}",
        f"{'Utilization':<30} {mix.utilization_pct:>17.0f}%",
        "",
        "-" * 60,
        f"{'DSCR Target':<30} {verdict.dscr_target:>18.2f}x",
        f"{'Funding Probability':<30} {verdict.funding_probability:>18}",
        f"{'Phase 1 Standalone':<30} {verdict.phase1_feasibility:>18}",
        "=" * 60,
    ]

    return "\n".join(lines)
