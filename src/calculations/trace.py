"""Calculation tracing for transparent audit trails.

Both models call ``trace()`` on every derived value. Outside a
``TraceContext`` that call is a pass-through, so the models stay pure; inside
one, the actual inputs and result of each formula are recorded for the audit
workbook and the trace view.
"""

from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from .formula_registry import FormulaRegistry, FormulaDefinition


def format_value(value: float, unit: str = "$") -> str:
    """Format a value for display according to its unit."""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if unit == "$":
        if abs(value) >= 1_000_000:
            return f"${value/1_000_000:,.2f}M"
        elif abs(value) >= 1_000:
            return f"${value/1_000:,.1f}K"
        elif value == 0:
            return "$0"
        return f"${value:,.2f}"
    if unit == "$/SF":
        return f"${value:,.2f}/SF"
    if unit == "%":
        return f"{value:,.2f}%"
    if unit == "x":
        return f"{value:.2f}x"
    if unit == "SF":
        return f"{value:,.0f} SF"
    if unit == "ft":
        return f"{value:,.0f} ft"
    return f"{value:,.2f}"


@dataclass
class TracedValue:
    """A single traced calculation.

    Captures the formula definition, actual input values,
    computed result, and formatted formula string.
    """
    field_path: str
    value: float
    formula_def: Optional[FormulaDefinition]
    input_values: Dict[str, float]
    computed_formula: str  # Formula with values substituted
    timestamp: datetime = field(default_factory=datetime.now)
    notes: str = ""

    @property
    def unit(self) -> str:
        return self.formula_def.unit if self.formula_def else ""

    def format_inputs(self) -> str:
        """Format input values for display."""
        return ", ".join(
            f"{name.split('.')[-1]}={format_value(val, _unit_for(name))}"
            for name, val in self.input_values.items()
        )


def _unit_for(field_path: str) -> str:
    definition = FormulaRegistry.get(field_path)
    return definition.unit if definition else ""


_current_context: ContextVar[Optional["TraceContext"]] = ContextVar("trace_context", default=None)


class TraceContext:
    """Context manager for capturing calculation traces.

    Usage:
        with TraceContext() as ctx:
            result = compute_financials(state)
            # ctx.traces now contains all traced calculations

    The active context lives in a context variable, so each thread (and
    each Streamlit session) sees only the context it entered.
    """

    def __init__(self, enabled: bool = True):
        """Initialize trace context.

        Args:
            enabled: If False, trace() calls are no-ops.
        """
        self.enabled = enabled
        self.traces: Dict[str, TracedValue] = {}
        self._start_time = datetime.now()
        self._token = None

    def __enter__(self) -> 'TraceContext':
        self._token = _current_context.set(self)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        _current_context.reset(self._token)
        self._token = None

    def trace(
        self,
        field_path: str,
        value: float,
        input_values: Dict[str, float],
        notes: str = "",
    ) -> None:
        """Record a traced calculation.

        Args:
            field_path: The formula field path (e.g., "costs.total_project_cost")
            value: The calculated result
            input_values: Dict of input field path -> value used in calculation
            notes: Optional notes about this specific calculation
        """
        if not self.enabled:
            return

        formula_def = FormulaRegistry.get(field_path)
        unit = formula_def.unit if formula_def else ""
        symbolic = formula_def.formula if formula_def else field_path
        if input_values:
            substituted = ", ".join(
                f"{name.split('.')[-1]}={format_value(val, _unit_for(name))}"
                for name, val in input_values.items()
            )
            computed_formula = f"{symbolic} | {substituted} = {format_value(value, unit)}"
        else:
            computed_formula = f"{symbolic} = {format_value(value, unit)}"

        self.traces[field_path] = TracedValue(
            field_path=field_path,
            value=value,
            formula_def=formula_def,
            input_values=dict(input_values),
            computed_formula=computed_formula,
            timestamp=datetime.now(),
            notes=notes,
        )

    def get_trace(self, field_path: str) -> Optional[TracedValue]:
        """Get a specific trace by field path."""
        return self.traces.get(field_path)

    def get_traces_by_category(self, category: str) -> Dict[str, TracedValue]:
        """Get all traces in a specific category."""
        return {
            k: v for k, v in self.traces.items()
            if v.formula_def and v.formula_def.category.value == category
        }

    def get_calculation_chain(self, field_path: str) -> List[TracedValue]:
        """Get the full calculation chain for a value (all upstream traces).

        Returns traces in order from inputs to final value.
        """
        chain: List[TracedValue] = []
        visited = set()

        def _collect_chain(path: str) -> None:
            if path in visited:
                return
            visited.add(path)

            traced = self.get_trace(path)
            if traced:
                for input_path in traced.input_values:
                    _collect_chain(input_path)
                chain.append(traced)

        _collect_chain(field_path)
        return chain

    def summary(self) -> str:
        """Generate a summary of all traces."""
        lines = [
            f"Trace Summary ({len(self.traces)} calculations traced)",
            f"Duration: {datetime.now() - self._start_time}",
            "",
        ]

        by_category: Dict[str, List[TracedValue]] = {}
        for traced in self.traces.values():
            cat = traced.formula_def.category.value if traced.formula_def else "Unknown"
            by_category.setdefault(cat, []).append(traced)

        for category, traces in sorted(by_category.items()):
            lines.append(f"=== {category} ({len(traces)} traces) ===")
            for traced in traces:
                lines.append(f"  {traced.field_path}: {traced.computed_formula}")
            lines.append("")

        return "\n".join(lines)

    @staticmethod
    def current() -> Optional['TraceContext']:
        """Get the current active trace context."""
        return _current_context.get()


def trace(
    field_path: str,
    value: float,
    input_values: Dict[str, float],
    notes: str = "",
) -> float:
    """Trace a calculation and return the value unchanged.

    This can be used inline in calculations:
        noi = trace("operations.noi", egi - opex, {"revenue.egi": egi, "operations.opex": opex})

    Args:
        field_path: The formula field path
        value: The calculated result
        input_values: Dict of input field path -> value
        notes: Optional notes

    Returns:
        The value (unchanged), allowing inline usage
    """
    ctx = TraceContext.current()
    if ctx:
        ctx.trace(field_path, value, input_values, notes)
    return value
