"""
Report rendering — tabular and JSON views of a validation Report.
"""

from __future__ import annotations

import json

from rich import box
from rich.table import Table
from rich.text import Text

from modgate.models.rule_models import Report

COLUMNS = ["Status", "Property", "Expected", "Actual", "Classification", "Severity"]


def build_table(report: Report) -> Table:
    table = Table(box=box.SQUARE, show_lines=True)
    for column in COLUMNS:
        table.add_column(column)

    for path, fail in report.fails.items():
        table.add_row(
            *(
                Text(cell)
                for cell in (
                    "FAIL",
                    path,
                    fail.expected,
                    fail.actual,
                    fail.classification.label,
                    "|" * fail.severity,
                )
            )
        )
    return table


def render_json(report: Report) -> str:
    return json.dumps(report.model_dump(mode="json"), indent=2)


def render_json_reports(reports: dict[str, Report]) -> str:
    return json.dumps(
        {key: report.model_dump(mode="json") for key, report in reports.items()},
        indent=2,
    )
