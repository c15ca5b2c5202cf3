"""
Builders and decoders for quota settings.

Decoding turns a stored composite `Quotas` record into the list of settings
it holds, for a given owner. Building produces a single setting from
high-level parameters; hand it to `hquota.requests.build_set_quota_request`
to obtain the wire request that installs it.

Example:
    from hquota import factory
    from hquota.types import TableName, ThrottleType, TimeUnit

    settings = factory.throttle_user(
        "alice",
        ThrottleType.REQUEST_NUMBER,
        100,
        TimeUnit.SECONDS,
        table=TableName.parse("ns:orders"),
    )
"""

from __future__ import annotations

import logging

from . import wire
from .exceptions import InvalidScopeError, QuotaRecordError
from .settings import (
    GlobalBypassSettings,
    QuotaSettings,
    Scope,
    SpaceLimitSettings,
    ThrottleSettings,
    TimedQuota,
    validate_scope,
)
from .types import QuotaScope, SpaceViolationPolicy, TableName, ThrottleType, TimeUnit

logger = logging.getLogger(__name__)

# =============================================================================
# Decoding
# =============================================================================


def from_user_quotas(user: str, quotas: wire.Quotas) -> list[QuotaSettings]:
    return from_quotas(user, None, None, quotas)


def from_user_table_quotas(
    user: str, table: TableName, quotas: wire.Quotas
) -> list[QuotaSettings]:
    return from_quotas(user, table, None, quotas)


def from_user_namespace_quotas(
    user: str, namespace: str, quotas: wire.Quotas
) -> list[QuotaSettings]:
    return from_quotas(user, None, namespace, quotas)


def from_table_quotas(table: TableName, quotas: wire.Quotas) -> list[QuotaSettings]:
    return from_quotas(None, table, None, quotas)


def from_namespace_quotas(namespace: str, quotas: wire.Quotas) -> list[QuotaSettings]:
    return from_quotas(None, None, namespace, quotas)


def from_quotas(
    user: str | None,
    table: TableName | None,
    namespace: str | None,
    quotas: wire.Quotas,
) -> list[QuotaSettings]:
    """
    Decode every setting held by a composite quota record.

    Throttles come first (in the record's field order), then the global bypass
    when the record explicitly enables it, then the space limit. A record with
    none of these yields an empty list. A space quota flagged for removal
    holds no limit and is skipped.

    Raises:
        InvalidScopeError: If the owner names both a table and a namespace, or if
            the record holds a space quota and the owner is not exactly one
            table or namespace.
    """
    scope = validate_scope(user, table, namespace)
    settings: list[QuotaSettings] = []
    if quotas.throttle is not None:
        settings.extend(from_throttle(scope, quotas.throttle))
    if quotas.bypass_globals is True:
        settings.append(GlobalBypassSettings(Scope(user=scope.user), True))
    if quotas.space is not None and quotas.space.remove is not True:
        settings.append(from_space(scope.table, scope.namespace, quotas.space))
    logger.debug("Decoded %d quota setting(s) for %r", len(settings), scope)
    return settings


def from_throttle(scope: Scope, throttle: wire.Throttle) -> list[ThrottleSettings]:
    settings: list[ThrottleSettings] = []
    for throttle_type in wire.THROTTLE_FIELDS:
        timed_quota = throttle.get(throttle_type)
        if timed_quota is not None:
            settings.append(ThrottleSettings(scope, throttle_type, _from_timed_quota(timed_quota)))
    return settings


def from_space(
    table: TableName | None, namespace: str | None, space: wire.SpaceQuota
) -> SpaceLimitSettings:
    """
    Decode a space quota owned by a table or a namespace.

    Raises:
        InvalidScopeError: Unless exactly one of `table` and `namespace` is given.
        QuotaRecordError: If the space quota lacks its soft limit or violation
            policy, or is a removal marker.
    """
    if (table is None) == (namespace is None):
        raise InvalidScopeError(
            "Can only decode a space limit for a table or a namespace",
            details={
                "table": str(table) if table is not None else None,
                "namespace": namespace,
            },
        )
    if space.remove is True:
        raise QuotaRecordError("Space quota record is a removal marker, not a limit")
    if space.soft_limit is None:
        raise QuotaRecordError("Space quota record has no soft limit")
    if space.violation_policy is None:
        raise QuotaRecordError("Space quota record has no violation policy")
    return space_limit(table, namespace, space.soft_limit, space.violation_policy)


def _from_timed_quota(timed_quota: wire.TimedQuota) -> TimedQuota:
    limit = timed_quota.soft_limit if timed_quota.soft_limit is not None else 0
    return TimedQuota(limit, timed_quota.time_unit, timed_quota.scope)


# =============================================================================
# Throttle
# =============================================================================


def throttle(
    user: str | None,
    table: TableName | None,
    namespace: str | None,
    throttle_type: ThrottleType | None,
    limit: int,
    time_unit: TimeUnit | None,
) -> ThrottleSettings:
    """
    Build a throttle for any scope.

    Passing `throttle_type=None` and `time_unit=None` removes the scope's
    throttle. Passing only one of them is accepted unchanged; how such a
    setting is enforced is up to the master. `limit` is not range checked and
    is ignored when `time_unit` is `None`.

    Raises:
        InvalidScopeError: If both `table` and `namespace` are given.
    """
    scope = validate_scope(user, table, namespace)
    timed_quota = None
    if time_unit is not None:
        timed_quota = TimedQuota(limit, time_unit, QuotaScope.MACHINE)
    return ThrottleSettings(scope, throttle_type, timed_quota)


def throttle_user(
    user: str,
    throttle_type: ThrottleType,
    limit: int,
    time_unit: TimeUnit,
    *,
    table: TableName | None = None,
    namespace: str | None = None,
) -> ThrottleSettings:
    """
    Throttle a user, optionally only on one table or namespace.

    Args:
        user: The user to throttle
        throttle_type: What to count
        limit: Allowed requests (or bytes) per `time_unit`
        time_unit: The limit's time window
        table: Restrict the throttle to this table
        namespace: Restrict the throttle to this namespace
    """
    return throttle(user, table, namespace, throttle_type, limit, time_unit)


def unthrottle_user(
    user: str, *, table: TableName | None = None, namespace: str | None = None
) -> ThrottleSettings:
    return throttle(user, table, namespace, None, 0, None)


def throttle_table(
    table: TableName, throttle_type: ThrottleType, limit: int, time_unit: TimeUnit
) -> ThrottleSettings:
    return throttle(None, table, None, throttle_type, limit, time_unit)


def unthrottle_table(table: TableName) -> ThrottleSettings:
    return throttle(None, table, None, None, 0, None)


def throttle_namespace(
    namespace: str, throttle_type: ThrottleType, limit: int, time_unit: TimeUnit
) -> ThrottleSettings:
    return throttle(None, None, namespace, throttle_type, limit, time_unit)


def unthrottle_namespace(namespace: str) -> ThrottleSettings:
    return throttle(None, None, namespace, None, 0, None)


# =============================================================================
# Global bypass
# =============================================================================


def bypass_globals(user: str, bypass: bool) -> GlobalBypassSettings:
    """Set whether `user` bypasses the global quota settings."""
    return GlobalBypassSettings(Scope(user=user), bypass)


# =============================================================================
# Space limits
# =============================================================================


def space_limit(
    table: TableName | None,
    namespace: str | None,
    size_limit: int,
    violation_policy: SpaceViolationPolicy,
) -> SpaceLimitSettings:
    """
    Limit the filesystem usage of exactly one table or namespace.

    `size_limit` is in bytes and stored as given. When usage exceeds it the
    `violation_policy` is enacted on the table, or on every table of the
    namespace.

    Raises:
        InvalidScopeError: Unless exactly one of `table` and `namespace` is given.
    """
    if (table is None) == (namespace is None):
        raise InvalidScopeError(
            "A space limit applies to exactly one table or namespace",
            details={
                "table": str(table) if table is not None else None,
                "namespace": namespace,
            },
        )
    return SpaceLimitSettings(Scope(table=table, namespace=namespace), size_limit, violation_policy)


def limit_table_space(
    table: TableName, size_limit: int, violation_policy: SpaceViolationPolicy
) -> SpaceLimitSettings:
    return space_limit(table, None, size_limit, violation_policy)


def limit_namespace_space(
    namespace: str, size_limit: int, violation_policy: SpaceViolationPolicy
) -> SpaceLimitSettings:
    return space_limit(None, namespace, size_limit, violation_policy)
