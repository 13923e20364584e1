"""Export utilities: Excel audit workbook and AI partner narrative."""

from .audit_report import generate_audit_excel, AuditReportConfig, tenant_dataframe
from .partner_summary import (
    build_narrative_payload,
    format_partner_prompt,
    generate_narrative,
)

__all__ = [
    "generate_audit_excel",
    "AuditReportConfig",
    "tenant_dataframe",
    "build_narrative_payload",
    "format_partner_prompt",
    "generate_narrative",
]
