#!/usr/bin/env python3
"""Example script to underwrite a project from the command line.

Usage:
    python run_example.py                         # default scenario
    python run_example.py --state project.json    # saved ProjectState
    python run_example.py --trace --export audit.xlsx
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent))

from src.calculations.metrics import evaluate_project, format_summary_table
from src.export.audit_report import generate_audit_excel, AuditReportConfig
from src.models.project import ProjectState

logger = logging.getLogger(__name__)


def load_state(path: Path) -> ProjectState:
    """Read a ProjectState JSON file (a bare state or a saved project record)."""
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if "data" in data and isinstance(data["data"], dict):
        data = data["data"]
    return ProjectState.from_dict(data)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Underwrite a walkable mixed-use project.")
    parser.add_argument("--state", type=Path, help="ProjectState JSON file (default scenario if omitted)")
    parser.add_argument("--trace", action="store_true", help="Print the calculation trace")
    parser.add_argument("--export", type=Path, help="Write the Excel audit workbook to this path")
    parser.add_argument("--name", default="Walkable Mixed-Use Project", help="Project name for the workbook")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    state = load_state(args.state) if args.state else ProjectState()

    for message in state.validate():
        logger.warning("Input check: %s", message)

    evaluation = evaluate_project(state, trace_enabled=args.trace or args.export is not None)

    print("\n" + format_summary_table(evaluation))

    if args.trace and evaluation.trace_context is not None:
        print("\n" + evaluation.trace_context.summary())

    if args.export:
        args.export.write_bytes(
            generate_audit_excel(evaluation, AuditReportConfig(project_name=args.name))
        )
        logger.info("Wrote audit workbook to %s", args.export)

    return 0


if __name__ == "__main__":
    sys.exit(main())
