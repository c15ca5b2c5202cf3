"""
Typed quota settings.

A quota setting is one of three immutable variants, each carrying the `Scope`
it applies to:

- `ThrottleSettings`: a rate limit (or its removal) for one throttle type
- `GlobalBypassSettings`: a per-user exemption from global quotas
- `SpaceLimitSettings`: a size cap on a table or namespace

Use the builders in `hquota.factory` rather than constructing these directly;
the constructors still enforce the scope rules so an invalid value can never
exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from .exceptions import InvalidScopeError
from .types import (
    QuotaScope,
    QuotaType,
    SpaceViolationPolicy,
    TableName,
    ThrottleType,
    TimeUnit,
)


@dataclass(frozen=True, slots=True)
class Scope:
    """Who or what a setting applies to."""

    user: str | None = None
    table: TableName | None = None
    namespace: str | None = None

    def __post_init__(self) -> None:
        if self.table is not None and self.namespace is not None:
            raise InvalidScopeError(
                "A quota can target a table or a namespace, not both",
                details=_scope_details(self.user, self.table, self.namespace),
            )

    @property
    def is_empty(self) -> bool:
        return self.user is None and self.table is None and self.namespace is None

    def __str__(self) -> str:
        parts = []
        if self.user is not None:
            parts.append(f"USER => '{self.user}', ")
        if self.table is not None:
            parts.append(f"TABLE => '{self.table}', ")
        if self.namespace is not None:
            parts.append(f"NAMESPACE => '{self.namespace}', ")
        return "".join(parts)


def _scope_details(
    user: str | None, table: TableName | None, namespace: str | None
) -> dict[str, str | None]:
    return {
        "user": user,
        "table": str(table) if table is not None else None,
        "namespace": namespace,
    }


def validate_scope(
    user: str | None = None,
    table: TableName | None = None,
    namespace: str | None = None,
) -> Scope:
    """
    Build a `Scope`, rejecting a table and a namespace supplied together.

    Raises:
        InvalidScopeError: If both `table` and `namespace` are given.
    """
    return Scope(user=user, table=table, namespace=namespace)


@dataclass(frozen=True, slots=True)
class TimedQuota:
    """A rate threshold: `limit` units per `time_unit`."""

    limit: int
    time_unit: TimeUnit
    scope: QuotaScope = QuotaScope.MACHINE


def _size_to_string(size: int) -> str:
    for shift, suffix in ((50, "P"), (40, "T"), (30, "G"), (20, "M"), (10, "K")):
        if size >= (1 << shift):
            return f"{size // (1 << shift)}{suffix}"
    return f"{size}B"


@dataclass(frozen=True, slots=True)
class ThrottleSettings:
    """
    Throttle (or un-throttle) a scope.

    With both `throttle_type` and `timed_quota` set this installs a limit; with
    both `None` it removes the scope's throttle. A value with only one of them
    set is representable, but its meaning is left to the enforcing side.
    """

    scope: Scope
    throttle_type: ThrottleType | None
    timed_quota: TimedQuota | None

    @property
    def quota_type(self) -> QuotaType:
        return QuotaType.THROTTLE

    @property
    def is_removal(self) -> bool:
        return self.throttle_type is None and self.timed_quota is None

    def __str__(self) -> str:
        text = f"{self.scope}TYPE => THROTTLE"
        if self.throttle_type is not None:
            text += f", THROTTLE_TYPE => {self.throttle_type.value}"
        quota = self.timed_quota
        if quota is None:
            return text + ", LIMIT => NONE"
        if self.throttle_type is not None and self.throttle_type.is_size:
            limit = _size_to_string(quota.limit)
        else:
            limit = f"{quota.limit}req"
        return (
            f"{text}, LIMIT => {limit}/{quota.time_unit.abbreviation}"
            f", SCOPE => {quota.scope.value}"
        )


@dataclass(frozen=True, slots=True)
class GlobalBypassSettings:
    """Exempt a user from (or subject them again to) the global quotas."""

    scope: Scope
    bypass: bool

    def __post_init__(self) -> None:
        if self.scope.table is not None or self.scope.namespace is not None:
            raise InvalidScopeError(
                "Global bypass applies to a user only",
                details=_scope_details(self.scope.user, self.scope.table, self.scope.namespace),
            )

    @property
    def quota_type(self) -> QuotaType:
        return QuotaType.GLOBAL_BYPASS

    def __str__(self) -> str:
        return f"{self.scope}GLOBAL_BYPASS => {str(self.bypass).lower()}"


@dataclass(frozen=True, slots=True)
class SpaceLimitSettings:
    """Cap the filesystem usage of a table or a namespace."""

    scope: Scope
    size_limit: int
    violation_policy: SpaceViolationPolicy

    def __post_init__(self) -> None:
        scope = self.scope
        if scope.user is not None or (scope.table is None) == (scope.namespace is None):
            raise InvalidScopeError(
                "A space limit applies to exactly one table or namespace",
                details=_scope_details(scope.user, scope.table, scope.namespace),
            )

    @property
    def quota_type(self) -> QuotaType:
        return QuotaType.SPACE

    def __str__(self) -> str:
        return (
            f"{self.scope}TYPE => SPACE, LIMIT => {self.size_limit}"
            f", VIOLATION_POLICY => {self.violation_policy.value}"
        )


QuotaSettings: TypeAlias = ThrottleSettings | GlobalBypassSettings | SpaceLimitSettings
