"""
Enumerations and identifier types shared by the wire schema and the settings.

Enum values match the names used in quota records, so they can be read and
written by pydantic directly.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from .exceptions import InvalidTableNameError

DEFAULT_NAMESPACE = "default"
NAMESPACE_DELIMITER = ":"

_NAMESPACE_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")
_QUALIFIER_PATTERN = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.-]*$")


class ThrottleType(str, Enum):
    """What a throttle counts."""

    REQUEST_NUMBER = "REQUEST_NUMBER"
    REQUEST_SIZE = "REQUEST_SIZE"
    WRITE_NUMBER = "WRITE_NUMBER"
    WRITE_SIZE = "WRITE_SIZE"
    READ_NUMBER = "READ_NUMBER"
    READ_SIZE = "READ_SIZE"

    @property
    def is_size(self) -> bool:
        return self.name.endswith("_SIZE")


class TimeUnit(str, Enum):
    NANOSECONDS = "NANOSECONDS"
    MICROSECONDS = "MICROSECONDS"
    MILLISECONDS = "MILLISECONDS"
    SECONDS = "SECONDS"
    MINUTES = "MINUTES"
    HOURS = "HOURS"
    DAYS = "DAYS"

    @property
    def abbreviation(self) -> str:
        return _TIME_UNIT_ABBREVIATIONS[self]


_TIME_UNIT_ABBREVIATIONS: dict[TimeUnit, str] = {
    TimeUnit.NANOSECONDS: "nsec",
    TimeUnit.MICROSECONDS: "usec",
    TimeUnit.MILLISECONDS: "msec",
    TimeUnit.SECONDS: "sec",
    TimeUnit.MINUTES: "min",
    TimeUnit.HOURS: "hour",
    TimeUnit.DAYS: "day",
}


class QuotaScope(str, Enum):
    """Where usage is accounted: per machine or across the whole cluster."""

    CLUSTER = "CLUSTER"
    MACHINE = "MACHINE"


class QuotaType(str, Enum):
    THROTTLE = "THROTTLE"
    GLOBAL_BYPASS = "GLOBAL_BYPASS"
    SPACE = "SPACE"


class SpaceViolationPolicy(str, Enum):
    """Action taken against a table or namespace once its space limit is exceeded."""

    DISABLE = "DISABLE"
    NO_WRITES_COMPACTIONS = "NO_WRITES_COMPACTIONS"
    NO_WRITES = "NO_WRITES"
    NO_INSERTS = "NO_INSERTS"


def _check_namespace(value: str) -> None:
    if not _NAMESPACE_PATTERN.match(value):
        raise InvalidTableNameError(
            f"Illegal namespace {value!r}: use letters, digits or '_'",
            details={"namespace": value},
        )


def _check_qualifier(value: str) -> None:
    if not _QUALIFIER_PATTERN.match(value):
        raise InvalidTableNameError(
            f"Illegal qualifier {value!r}: use letters, digits, '_', '-' or '.'",
            details={"qualifier": value},
        )


@dataclass(frozen=True, slots=True)
class TableName:
    """
    Fully qualified table identifier.

    Tables living in the default namespace may be written without a prefix:
    `TableName.parse("t1")` equals `TableName("default", "t1")`.
    """

    namespace: str
    qualifier: str

    def __post_init__(self) -> None:
        _check_namespace(self.namespace)
        _check_qualifier(self.qualifier)

    @classmethod
    def parse(cls, name: str) -> TableName:
        text = name.strip()
        if NAMESPACE_DELIMITER in text:
            namespace, _, qualifier = text.partition(NAMESPACE_DELIMITER)
            if NAMESPACE_DELIMITER in qualifier:
                raise InvalidTableNameError(
                    f"Illegal table name {name!r}: more than one namespace delimiter",
                    details={"table": name},
                )
            return cls(namespace, qualifier)
        return cls(DEFAULT_NAMESPACE, text)

    @property
    def name_as_string(self) -> str:
        if self.namespace == DEFAULT_NAMESPACE:
            return self.qualifier
        return f"{self.namespace}{NAMESPACE_DELIMITER}{self.qualifier}"

    def __str__(self) -> str:
        return self.name_as_string
