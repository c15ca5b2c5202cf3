from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .results import CommandResult


@dataclass(frozen=True, slots=True)
class RenderSettings:
    output: str  # "table" | "json"
    quiet: bool
    verbosity: int


def _error_title(error_type: str) -> str:
    mapping = {
        "usage_error": "Usage error",
        "invalid_scope": "Invalid scope",
        "invalid_table_name": "Invalid table name",
        "invalid_record": "Invalid quota record",
        "quota_error": "Quota error",
        "internal_error": "Internal error",
    }
    return mapping.get((error_type or "").strip(), "Error")


def _format_scalar_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, sort_keys=True)
    return str(value)


def _table_from_rows(rows: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, header_style="bold")
    if not rows:
        table.add_column("result")
        table.add_row("No results")
        return table
    columns: list[str] = []
    for row in rows:
        for key in row:
            if key not in columns:
                columns.append(key)
    for col in columns:
        table.add_column(col)
    for row in rows:
        table.add_row(*[Text(_format_scalar_value(row.get(col))) for col in columns])
    return table


def _kv_table(obj: dict[str, Any]) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("field")
    table.add_column("value")
    for k, v in obj.items():
        table.add_row(Text(str(k)), Text(_format_scalar_value(v)))
    return table


def render_result(result: CommandResult, *, settings: RenderSettings) -> int:
    stdout = Console(file=sys.stdout, force_terminal=False)
    stderr = Console(file=sys.stderr, force_terminal=False)

    if settings.output == "json":
        payload = result.model_dump(by_alias=True, mode="json")
        sys.stdout.write(json.dumps(payload, ensure_ascii=False) + "\n")
        return 0

    if not result.ok:
        if result.error is None:
            stderr.print("Error")
            return 0
        stderr.print(f"{_error_title(result.error.type)}: {result.error.message}")
        if settings.quiet:
            return 0
        if result.error.hint:
            stderr.print(f"Hint: {result.error.hint}")
        if result.error.details and settings.verbosity >= 1:
            stderr.print(Text(json.dumps(result.error.details, ensure_ascii=False, indent=2)))
        return 0

    data = result.data
    if result.command == "version" and isinstance(data, dict):
        stdout.print(Text(str(data.get("version", "")), style="bold"))
    elif isinstance(data, list):
        stdout.print(_table_from_rows([row for row in data if isinstance(row, dict)]))
    elif isinstance(data, dict):
        stdout.print(_kv_table(data))
    elif data is not None:
        stdout.print(Text(str(data)))
    return 0
