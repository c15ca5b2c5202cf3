from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Literal

from hquota.exceptions import InvalidScopeError, InvalidTableNameError, QuotaError, QuotaRecordError

from .errors import CLIError
from .results import CommandMeta, CommandResult, ErrorInfo

OutputFormat = Literal["table", "json"]


@dataclass(slots=True)
class CLIContext:
    output: OutputFormat = "table"
    quiet: bool = False
    verbosity: int = 0


def exit_code_for_exception(exc: Exception) -> int:
    if isinstance(exc, CLIError):
        return exc.exit_code
    if isinstance(exc, (InvalidScopeError, InvalidTableNameError)):
        return 2
    return 1


def _error_type_for_exception(exc: Exception) -> str:
    if isinstance(exc, InvalidScopeError):
        return "invalid_scope"
    if isinstance(exc, InvalidTableNameError):
        return "invalid_table_name"
    if isinstance(exc, QuotaRecordError):
        return "invalid_record"
    if isinstance(exc, QuotaError):
        return "quota_error"
    return "internal_error"


def error_info_for_exception(exc: Exception) -> ErrorInfo:
    if isinstance(exc, CLIError):
        return ErrorInfo(
            type=exc.error_type, message=exc.message, hint=exc.hint, details=exc.details
        )
    if isinstance(exc, QuotaError):
        return ErrorInfo(
            type=_error_type_for_exception(exc), message=exc.message, details=exc.details
        )
    return ErrorInfo(type=_error_type_for_exception(exc), message=str(exc), details=None)


def build_result(
    *,
    ok: bool,
    command: str,
    started_at: float,
    data: Any | None,
    warnings: list[str],
    error: ErrorInfo | None = None,
) -> CommandResult:
    duration_ms = int(max(0.0, (time.time() - started_at) * 1000))
    return CommandResult(
        ok=ok,
        command=command,
        data=data,
        warnings=warnings,
        meta=CommandMeta(duration_ms=duration_ms),
        error=error,
    )
