"""Tests for the calculation tracing system."""

import threading

import pytest
from src.calculations.trace import TraceContext, trace, format_value
from src.calculations.formula_registry import FormulaRegistry, FormulaCategory
from src.calculations.financials import compute_financials
from src.calculations.walkability import compute_walkability
from src.calculations.metrics import evaluate_project


class TestFormulaRegistry:
    """Test the formula registry."""

    def test_formulas_are_registered(self):
        """Every model output and input is registered."""
        all_formulas = FormulaRegistry.get_all()

        assert len(all_formulas) >= 50, "Expected at least 50 formulas registered"

    def test_can_get_formula_by_path(self):
        """Can retrieve a specific formula."""
        formula = FormulaRegistry.get("costs.total_project_cost")

        assert formula is not None
        assert formula.name == "Total Project Cost"
        assert "land" in formula.formula.lower()

    def test_unknown_path_returns_none(self):
        assert FormulaRegistry.get("nope.missing") is None

    def test_can_get_by_category(self):
        """Can filter formulas by category."""
        walk_formulas = FormulaRegistry.get_by_category(FormulaCategory.WALKABILITY)

        assert len(walk_formulas) > 0
        for formula in walk_formulas:
            assert formula.category == FormulaCategory.WALKABILITY

    def test_can_get_dependents(self):
        """Loan, equity, equity share and cost/SF all use total cost."""
        dependents = FormulaRegistry.get_dependents("costs.total_project_cost")

        assert "capital.max_loan" in dependents
        assert "capital.required_equity" in dependents
        assert len(dependents) >= 3

    def test_ancestors_reach_inputs(self):
        """DSCR traces back to land cost and the tenant roster."""
        ancestors = FormulaRegistry.get_all_ancestors("debt.dscr")

        assert "inputs.land_cost" in ancestors
        assert "inputs.tenants" in ancestors

    def test_descendants_of_shade(self):
        descendants = FormulaRegistry.get_all_descendants("inputs.shade_pct")

        assert "walk.comfort_score" in descendants
        assert "walk.final_score" in descendants

    def test_every_input_reference_is_registered(self):
        """Formula inputs only point at registered paths."""
        all_formulas = FormulaRegistry.get_all()
        for formula in all_formulas.values():
            for input_path in formula.inputs:
                assert input_path in all_formulas, f"{formula.field_path} -> {input_path}"


class TestTraceContext:
    """Test the trace context manager."""

    def test_trace_context_captures_traces(self):
        """TraceContext captures trace calls."""
        with TraceContext() as ctx:
            trace("test.value", 100.0, {"input_a": 50.0, "input_b": 50.0})

        assert "test.value" in ctx.traces
        traced = ctx.traces["test.value"]
        assert traced.value == 100.0
        assert traced.input_values["input_a"] == 50.0

    def test_trace_context_can_be_disabled(self):
        """Disabled TraceContext does not capture traces."""
        with TraceContext(enabled=False) as ctx:
            trace("test.value", 100.0, {"input_a": 50.0})

        assert len(ctx.traces) == 0

    def test_trace_returns_value_outside_context(self):
        """trace() is a pass-through with no active context."""
        assert TraceContext.current() is None
        assert trace("test.value", 42.0, {}) == 42.0

    def test_context_is_cleared_on_exit(self):
        with TraceContext():
            assert TraceContext.current() is not None
        assert TraceContext.current() is None

    def test_computed_formula_includes_values(self, default_state):
        """Computed formula shows symbolic formula, inputs and result."""
        with TraceContext() as ctx:
            compute_financials(default_state)

        traced = ctx.get_trace("costs.total_project_cost")
        assert traced is not None
        assert traced.formula_def.name == "Total Project Cost"
        assert "land_total=" in traced.computed_formula
        assert traced.computed_formula.endswith("$13.71M")

    def test_calculation_chain_ends_at_target(self, default_state):
        with TraceContext() as ctx:
            compute_financials(default_state)

        chain = ctx.get_calculation_chain("debt.dscr")
        paths = [t.field_path for t in chain]

        assert paths[-1] == "debt.dscr"
        assert "operations.noi" in paths
        assert paths.index("operations.noi") < paths.index("debt.dscr")

    def test_traces_by_category(self, default_state):
        with TraceContext() as ctx:
            compute_walkability(default_state)

        comfort = ctx.get_traces_by_category("Comfort")
        assert "walk.shade_score" in comfort

    def test_summary_lists_categories(self, default_state):
        with TraceContext() as ctx:
            compute_financials(default_state)

        summary = ctx.summary()
        assert "=== Development" in summary
        assert "costs.total_project_cost" in summary


class TestConcurrentContexts:
    """Each thread only records into the context it entered."""

    def _hold_context(self, entered, release, work=None):
        """Run in a thread: enter a context, wait, optionally compute, exit."""
        result = {}

        def run():
            with TraceContext() as ctx:
                entered.set()
                release.wait(timeout=5)
                if work is not None:
                    work()
            result["ctx"] = ctx

        thread = threading.Thread(target=run)
        thread.start()
        return thread, result

    def test_untraced_caller_does_not_leak_into_other_thread(self, default_state):
        entered, release = threading.Event(), threading.Event()
        thread, result = self._hold_context(entered, release)
        entered.wait(timeout=5)

        assert TraceContext.current() is None
        compute_financials(default_state)

        release.set()
        thread.join(timeout=5)
        assert len(result["ctx"].traces) == 0

    def test_other_caller_exit_keeps_thread_context(self, default_state):
        entered, release = threading.Event(), threading.Event()
        thread, result = self._hold_context(
            entered, release, work=lambda: compute_financials(default_state),
        )
        entered.wait(timeout=5)

        evaluation = evaluate_project(default_state, trace_enabled=True)
        assert evaluation.trace_context.traces

        release.set()
        thread.join(timeout=5)
        assert "costs.total_project_cost" in result["ctx"].traces

    def test_nested_context_restores_outer(self):
        with TraceContext() as outer:
            with TraceContext() as inner:
                assert TraceContext.current() is inner
            assert TraceContext.current() is outer
        assert TraceContext.current() is None


class TestFormatValue:
    """Tests for unit-aware formatting."""

    @pytest.mark.parametrize("value,unit,expected", [
        (13_707_000, "$", "$13.71M"),
        (4_500, "$", "$4.5K"),
        (0, "$", "$0"),
        (21.672, "$/SF", "$21.67/SF"),
        (35, "%", "35.00%"),
        (0.5567, "x", "0.56x"),
        (45_000, "SF", "45,000 SF"),
        (266.67, "ft", "267 ft"),
        (True, "", "Yes"),
    ])
    def test_format_value(self, value, unit, expected):
        assert format_value(value, unit) == expected
