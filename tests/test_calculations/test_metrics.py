"""Tests for the partner verdict and project evaluation."""

from dataclasses import replace

import pytest

from src.calculations.financials import compute_financials
from src.calculations.metrics import calculate_verdict, evaluate_project, format_summary_table
from src.models.updates import update_capital


class TestVerdict:
    """Tests for calculate_verdict."""

    def test_default_scenario_is_moderate(self, default_state):
        verdict = calculate_verdict(compute_financials(default_state))

        assert verdict.meets_dscr_target is False
        assert verdict.dscr_status == "yellow"
        assert verdict.funding_probability == "MODERATE"
        assert verdict.phase1_feasibility == "WEAK"
        assert verdict.equity_heavy is False
        assert verdict.dscr_target == 1.25

    def test_high_coverage_is_green(self, default_state):
        """A zero-interest, low-leverage deal clears the target."""
        state = update_capital(default_state, max_ltc=20, interest_rate=0)
        verdict = calculate_verdict(compute_financials(state))

        assert verdict.meets_dscr_target is True
        assert verdict.dscr_status == "green"
        assert verdict.funding_probability == "HIGH"
        assert verdict.phase1_feasibility == "STRONG"

    def test_dscr_boundary_is_inclusive(self, default_state):
        fin = replace(compute_financials(default_state), dscr=1.25, phase1_dscr=1.2)
        verdict = calculate_verdict(fin)

        assert verdict.meets_dscr_target is True
        assert verdict.phase1_feasibility == "STRONG"

    def test_equity_heavy_above_40_pct(self, default_state):
        fin = compute_financials(update_capital(default_state, max_ltc=55))

        assert fin.equity_pct == pytest.approx(45)
        assert calculate_verdict(fin).equity_heavy is True


class TestEvaluateProject:
    """Tests for evaluate_project."""

    def test_no_trace_by_default(self, default_state):
        evaluation = evaluate_project(default_state)

        assert evaluation.trace_context is None
        assert evaluation.state is default_state

    def test_traced_results_match_untraced(self, default_state, traced_evaluation):
        plain = evaluate_project(default_state)

        assert traced_evaluation.financials == plain.financials
        assert traced_evaluation.walkability == plain.walkability

    def test_trace_covers_both_models(self, traced_evaluation):
        traces = traced_evaluation.trace_context.traces

        assert "costs.total_project_cost" in traces
        assert "debt.dscr" in traces
        assert "phase1.dscr" in traces
        assert "walk.final_score" in traces

    def test_summary_table(self, traced_evaluation):
        table = format_summary_table(traced_evaluation)

        assert "UNDERWRITING SUMMARY" in table
        assert "13,707,000" in table
        assert "Car Dependent" in table
        assert "MODERATE" in table
