from __future__ import annotations

from typing import Any


class CLIError(Exception):
    """
    Command input that can not be turned into quota settings.

    Raised from a command body; the runner reports it as a failed result of
    type `error_type` and exits with `exit_code`.
    """

    error_type = "usage_error"
    exit_code = 2

    def __init__(
        self, message: str, *, hint: str | None = None, details: dict[str, Any] | None = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint
        self.details = details
