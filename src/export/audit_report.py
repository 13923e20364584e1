"""Audit Report Generator - Export the underwriting with its formulas.

This module generates an Excel workbook showing the results, the tenant
roster, every formula definition and, when a trace was captured, the actual
values used in each calculation.
"""

import io
from datetime import datetime
from typing import Dict, Optional
from dataclasses import dataclass

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment
from openpyxl.utils.dataframe import dataframe_to_rows

from src.calculations.metrics import ProjectEvaluation
from src.calculations.trace import TraceContext, format_value
from src.calculations.formula_registry import FormulaRegistry, FormulaCategory


@dataclass
class AuditReportConfig:
    """Configuration for audit report generation."""
    include_summary: bool = True
    include_capital_stack: bool = True
    include_walkability: bool = True
    include_tenants: bool = True
    include_formula_registry: bool = True
    include_traced_values: bool = True
    project_name: str = "Walkable Mixed-Use Project"


def _add_header_style(ws, row: int, cols: int) -> None:
    """Apply header styling to a row."""
    header_fill = PatternFill(start_color="0F172A", end_color="0F172A", fill_type="solid")
    header_font = Font(color="FFFFFF", bold=True)

    for col in range(1, cols + 1):
        cell = ws.cell(row=row, column=col)
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = Alignment(horizontal="center")


def _add_section_header(ws, title: str, row: int) -> int:
    """Add a section header and return next row."""
    ws.cell(row=row, column=1, value=title)
    ws.cell(row=row, column=1).font = Font(bold=True, size=14)
    return row + 1


def _write_label_rows(ws, rows, row: int) -> int:
    """Write (label, value) pairs; empty labels leave a blank row."""
    for label, value in rows:
        if label:
            ws.cell(row=row, column=1, value=label)
            ws.cell(row=row, column=2, value=value)
        row += 1
    return row


def generate_audit_excel(
    evaluation: ProjectEvaluation,
    config: Optional[AuditReportConfig] = None,
) -> bytes:
    """Generate the Excel audit workbook.

    Args:
        evaluation: Result of evaluate_project() (trace sheet needs
            trace_enabled=True).
        config: Optional configuration for the report

    Returns:
        Excel file as bytes
    """
    if config is None:
        config = AuditReportConfig()

    wb = Workbook()
    wb.remove(wb.active)

    if config.include_summary:
        _create_summary_sheet(wb.create_sheet("Summary"), evaluation, config)

    if config.include_capital_stack:
        _create_capital_stack_sheet(wb.create_sheet("Capital Stack"), evaluation)

    if config.include_walkability:
        _create_walkability_sheet(wb.create_sheet("Walkability"), evaluation)

    if config.include_tenants:
        _create_tenants_sheet(wb.create_sheet("Tenants"), evaluation)

    if config.include_formula_registry:
        _create_formula_registry_sheet(wb.create_sheet("Formula Registry"))

    if config.include_traced_values and evaluation.trace_context:
        _create_traced_calculations_sheet(
            wb.create_sheet("Traced Calculations"), evaluation.trace_context
        )

    output = io.BytesIO()
    wb.save(output)
    output.seek(0)
    return output.getvalue()


def _create_summary_sheet(ws, evaluation: ProjectEvaluation, config: AuditReportConfig) -> None:
    """Create the summary sheet."""
    fin = evaluation.financials
    walk = evaluation.walkability
    verdict = evaluation.verdict

    row = 1
    ws.cell(row=row, column=1, value=f"Audit Report: {config.project_name}")
    ws.cell(row=row, column=1).font = Font(bold=True, size=16)
    row += 1

    ws.cell(row=row, column=1, value=f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    row += 2

    row = _add_section_header(ws, "Key Metrics", row)
    row += 1

    row = _write_label_rows(ws, [
        ("Total Project Cost", f"${fin.total_project_cost:,.0f}"),
        ("Required Equity", f"${fin.required_equity:,.0f}"),
        ("Equity % of Capital", f"{fin.equity_pct:.1f}%"),
        ("", ""),
        ("NOI", f"${fin.noi:,.0f}"),
        ("Annual Debt Service", f"${fin.annual_debt_service:,.0f}"),
        ("DSCR", f"{fin.dscr:.2f}x"),
        ("Break-even Rent", f"${fin.break_even_rent_psf:,.2f}/SF"),
        ("Phase 1 DSCR", f"{fin.phase1_dscr:.2f}x"),
        ("", ""),
        ("Walkability Score", f"{walk.final_score:.0f}"),
        ("Grade", walk.grade),
    ], row)

    row += 1
    row = _add_section_header(ws, "Partner Verdict", row)
    row += 1

    _write_label_rows(ws, [
        ("DSCR Target", f"{verdict.dscr_target:.2f}x"),
        ("Funding Probability", verdict.funding_probability),
        ("Phase 1 Standalone", verdict.phase1_feasibility),
        ("Equity Heavy", "Yes" if verdict.equity_heavy else "No"),
    ], row)

    ws.column_dimensions['A'].width = 25
    ws.column_dimensions['B'].width = 20


def _create_capital_stack_sheet(ws, evaluation: ProjectEvaluation) -> None:
    """Create the uses / sources and operating statement sheet."""
    fin = evaluation.financials

    row = 1
    row = _add_section_header(ws, "Uses of Funds", row)
    row += 1

    headers = ["Item", "Amount", "% of Cost", "Formula"]
    for col, header in enumerate(headers, 1):
        ws.cell(row=row, column=col, value=header)
    _add_header_style(ws, row, len(headers))
    row += 1

    uses = [
        ("Land (incl. closing)", fin.land_total_cost, "land_cost x (1 + closing %)"),
        ("Hard Costs", fin.hard_cost_total, "total_build_sf x hard_cost_psf"),
        ("Soft Costs", fin.soft_cost_total, "hard x soft %"),
        ("Contingency", fin.contingency_total, "hard x contingency %"),
        ("Total Project Cost", fin.total_project_cost, "land + hard + soft + contingency"),
        ("", 0.0, ""),
        ("Max Loan", fin.max_loan, "total_cost x max_ltc"),
        ("Required Equity", fin.required_equity, "total_cost - loan"),
    ]

    for label, amount, formula in uses:
        if label:
            ws.cell(row=row, column=1, value=label)
            ws.cell(row=row, column=2, value=f"${amount:,.0f}")
            ws.cell(row=row, column=3, value=(
                f"{amount / fin.total_project_cost:.1%}" if fin.total_project_cost > 0 else "-"
            ))
            ws.cell(row=row, column=4, value=formula)
            if label == "Total Project Cost":
                ws.cell(row=row, column=1).font = Font(bold=True)
                ws.cell(row=row, column=2).font = Font(bold=True)
        row += 1

    row += 1
    row = _add_section_header(ws, "Stabilized Operations", row)
    row += 1

    _write_label_rows(ws, [
        ("Gross Potential Rent", f"${fin.gross_potential_rent:,.0f}"),
        ("Effective Gross Income", f"${fin.effective_gross_income:,.0f}"),
        ("Operating Expenses", f"${fin.operating_expenses:,.0f}"),
        ("NOI", f"${fin.noi:,.0f}"),
        ("Annual Debt Service", f"${fin.annual_debt_service:,.0f}"),
        ("Phase 1 Loan", f"${fin.phase1_loan:,.0f}"),
        ("Phase 1 Debt Service", f"${fin.phase1_debt_service:,.0f}"),
        ("Phase 1 NOI", f"${fin.phase1_noi:,.0f}"),
    ], row)

    ws.column_dimensions['A'].width = 30
    ws.column_dimensions['B'].width = 18
    ws.column_dimensions['C'].width = 12
    ws.column_dimensions['D'].width = 40


def _create_walkability_sheet(ws, evaluation: ProjectEvaluation) -> None:
    """Create the walkability score breakdown sheet."""
    walk = evaluation.walkability

    row = 1
    row = _add_section_header(ws, "Walkability Score Breakdown", row)
    row += 1

    headers = ["Component", "Value"]
    for col, header in enumerate(headers, 1):
        ws.cell(row=row, column=col, value=header)
    _add_header_style(ws, row, len(headers))
    row += 1

    _write_label_rows(ws, [
        ("Avg Walk Segment (ft)", round(walk.avg_walk_distance, 1)),
        ("5-Min Walk Compliant", "Yes" if walk.five_min_walk_compliant else "No"),
        ("", ""),
        ("Shade", round(walk.shade_score, 2)),
        ("Seating", walk.seating_score),
        ("Trees", walk.tree_score),
        ("Heat Mitigation", round(walk.heat_score, 2)),
        ("Human Comfort", round(walk.comfort_score, 2)),
        ("", ""),
        ("Active Frontage", walk.frontage_score),
        ("Operating Hours", walk.hours_score),
        ("Node Density", walk.node_score),
        ("Night Life %", round(walk.night_life_pct, 2)),
        ("Activation Density", round(walk.activation_score, 2)),
        ("", ""),
        ("Parking Penalty", round(-walk.parking_penalty, 2)),
        ("Conflict Penalty", round(-walk.conflict_penalty, 2)),
        ("Final Score", round(walk.final_score, 2)),
        ("Grade", walk.grade),
    ], row)

    ws.column_dimensions['A'].width = 25
    ws.column_dimensions['B'].width = 20


def tenant_dataframe(evaluation: ProjectEvaluation) -> pd.DataFrame:
    """Tenant roster as a DataFrame (one row per tenant)."""
    return pd.DataFrame(
        [
            {
                "Tenant": t.name,
                "Category": t.category.value,
                "SF": t.sf,
                "Rent/SF": t.rent_psf,
                "Annual Rent": t.annual_rent,
                "Hours/Day": t.operating_hours,
                "Night Active": "Yes" if t.night_active else "No",
            }
            for t in evaluation.state.tenants
        ],
        columns=["Tenant", "Category", "SF", "Rent/SF", "Annual Rent", "Hours/Day", "Night Active"],
    )


def _create_tenants_sheet(ws, evaluation: ProjectEvaluation) -> None:
    """Create the tenant roster sheet."""
    mix = evaluation.tenant_mix

    row = 1
    row = _add_section_header(ws, "Lease-Up Matrix", row)
    row += 1

    df = tenant_dataframe(evaluation)
    for r_idx, values in enumerate(dataframe_to_rows(df, index=False, header=True)):
        for c_idx, value in enumerate(values, 1):
            ws.cell(row=row, column=c_idx, value=value)
        if r_idx == 0:
            _add_header_style(ws, row, len(values))
        row += 1

    row += 1
    _write_label_rows(ws, [
        ("Total Leased SF", f"{mix.total_leased_sf:,.0f}"),
        ("Utilization", f"{mix.utilization_pct:.0f}%"),
    ], row)

    for col in "ABCDEFG":
        ws.column_dimensions[col].width = 16


def _create_formula_registry_sheet(ws) -> None:
    """Create the Formula Registry sheet."""
    all_formulas = FormulaRegistry.get_all()

    row = 1
    row = _add_section_header(ws, "Formula Registry - All Calculation Definitions", row)
    row += 2

    headers = ["Category", "Name", "Field Path", "Formula", "Inputs", "Notes"]
    for col, header in enumerate(headers, 1):
        ws.cell(row=row, column=col, value=header)
    _add_header_style(ws, row, len(headers))
    row += 1

    by_category: Dict[FormulaCategory, list] = {}
    for field_path, formula in all_formulas.items():
        by_category.setdefault(formula.category, []).append((field_path, formula))

    for category in FormulaCategory:
        if category not in by_category:
            continue

        for field_path, formula in sorted(by_category[category], key=lambda x: x[0]):
            ws.cell(row=row, column=1, value=category.value)
            ws.cell(row=row, column=2, value=formula.name)
            ws.cell(row=row, column=3, value=field_path)
            ws.cell(row=row, column=4, value=formula.formula)
            ws.cell(row=row, column=5, value=", ".join(formula.inputs) if formula.inputs else "-")
            ws.cell(row=row, column=6, value=formula.notes if formula.notes else "-")
            row += 1

    ws.column_dimensions['A'].width = 15
    ws.column_dimensions['B'].width = 30
    ws.column_dimensions['C'].width = 30
    ws.column_dimensions['D'].width = 50
    ws.column_dimensions['E'].width = 40
    ws.column_dimensions['F'].width = 40


def _create_traced_calculations_sheet(ws, trace_context: TraceContext) -> None:
    """Create the Traced Calculations sheet."""
    row = 1
    row = _add_section_header(ws, "Traced Calculations - Actual Values Used", row)
    row += 2

    headers = ["Field Path", "Result", "Computed Formula", "Notes"]
    for col, header in enumerate(headers, 1):
        ws.cell(row=row, column=col, value=header)
    _add_header_style(ws, row, len(headers))
    row += 1

    for trace_key in sorted(trace_context.traces):
        traced = trace_context.traces[trace_key]

        ws.cell(row=row, column=1, value=traced.field_path)
        ws.cell(row=row, column=2, value=format_value(traced.value, traced.unit))
        ws.cell(row=row, column=3, value=traced.computed_formula)
        ws.cell(row=row, column=4, value=traced.notes if traced.notes else "-")
        row += 1

    ws.column_dimensions['A'].width = 30
    ws.column_dimensions['B'].width = 18
    ws.column_dimensions['C'].width = 90
    ws.column_dimensions['D'].width = 30
