"""
Exceptions raised by the quota settings layer.

All errors are raised synchronously while building or decoding settings and
indicate bad caller input; nothing here is transient or worth retrying.
"""

from __future__ import annotations

from typing import Any


class QuotaError(Exception):
    """Base class for all hquota errors."""

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return self.message


class InvalidScopeError(QuotaError, ValueError):
    """
    The user/table/namespace combination is not legal for the requested quota.

    Raised when a table and a namespace are supplied together, or when a space
    limit is requested without exactly one of them.
    """


class InvalidTableNameError(QuotaError, ValueError):
    """A table name could not be parsed or contains illegal characters."""


class QuotaRecordError(QuotaError):
    """A wire-level quota record is not valid JSON or does not match the schema."""
