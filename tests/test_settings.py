"""Tests for scope validation and the settings variants."""

from __future__ import annotations

import dataclasses

import pytest

from hquota.exceptions import InvalidScopeError, QuotaError
from hquota.settings import (
    GlobalBypassSettings,
    Scope,
    SpaceLimitSettings,
    ThrottleSettings,
    TimedQuota,
    validate_scope,
)
from hquota.types import (
    QuotaScope,
    QuotaType,
    SpaceViolationPolicy,
    TableName,
    ThrottleType,
    TimeUnit,
)

# =============================================================================
# Scope
# =============================================================================


def test_validate_scope_accepts_legal_combinations(orders_table: TableName) -> None:
    assert validate_scope().is_empty
    assert validate_scope(user="alice") == Scope(user="alice")
    assert validate_scope(user="alice", table=orders_table).table == orders_table
    assert validate_scope(user="alice", namespace="ns").namespace == "ns"
    assert validate_scope(table=orders_table).user is None


def test_validate_scope_rejects_table_and_namespace(orders_table: TableName) -> None:
    with pytest.raises(InvalidScopeError) as excinfo:
        validate_scope(user="alice", table=orders_table, namespace="ns")
    assert excinfo.value.details == {"user": "alice", "table": "ns:orders", "namespace": "ns"}


def test_invalid_scope_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        Scope(table=TableName("ns", "t"), namespace="ns")
    assert issubclass(InvalidScopeError, QuotaError)


def test_scope_str_lists_owner_parts(orders_table: TableName) -> None:
    assert str(Scope()) == ""
    assert str(Scope(user="alice", table=orders_table)) == "USER => 'alice', TABLE => 'ns:orders', "
    assert str(Scope(namespace="ns")) == "NAMESPACE => 'ns', "


# =============================================================================
# Variants
# =============================================================================


def test_settings_are_immutable() -> None:
    throttle = ThrottleSettings(Scope(user="alice"), None, None)
    with pytest.raises(dataclasses.FrozenInstanceError):
        throttle.throttle_type = ThrottleType.READ_NUMBER  # type: ignore[misc]

    bypass = GlobalBypassSettings(Scope(user="alice"), True)
    with pytest.raises(dataclasses.FrozenInstanceError):
        bypass.bypass = False  # type: ignore[misc]


def test_quota_type_tags() -> None:
    assert ThrottleSettings(Scope(), None, None).quota_type == QuotaType.THROTTLE
    assert GlobalBypassSettings(Scope(user="u"), False).quota_type == QuotaType.GLOBAL_BYPASS
    space = SpaceLimitSettings(Scope(namespace="ns"), 1, SpaceViolationPolicy.DISABLE)
    assert space.quota_type == QuotaType.SPACE


def test_timed_quota_defaults_to_machine_scope() -> None:
    assert TimedQuota(10, TimeUnit.SECONDS).scope == QuotaScope.MACHINE


def test_global_bypass_rejects_table_or_namespace(orders_table: TableName) -> None:
    with pytest.raises(InvalidScopeError):
        GlobalBypassSettings(Scope(user="alice", table=orders_table), True)
    with pytest.raises(InvalidScopeError):
        GlobalBypassSettings(Scope(namespace="ns"), True)


@pytest.mark.parametrize(
    "scope",
    [
        Scope(),
        Scope(user="alice"),
        Scope(user="alice", namespace="ns"),
        Scope(user="alice", table=TableName("ns", "orders")),
    ],
)
def test_space_limit_requires_exactly_one_table_or_namespace_and_no_user(scope: Scope) -> None:
    with pytest.raises(InvalidScopeError):
        SpaceLimitSettings(scope, 1024, SpaceViolationPolicy.NO_WRITES)


def test_throttle_removal_flag() -> None:
    assert ThrottleSettings(Scope(), None, None).is_removal
    assert not ThrottleSettings(Scope(), ThrottleType.READ_NUMBER, None).is_removal
    assert not ThrottleSettings(Scope(), None, TimedQuota(1, TimeUnit.SECONDS)).is_removal


# =============================================================================
# Rendering
# =============================================================================


def test_throttle_str_for_request_count() -> None:
    settings = ThrottleSettings(
        Scope(user="alice"), ThrottleType.REQUEST_NUMBER, TimedQuota(100, TimeUnit.SECONDS)
    )
    assert str(settings) == (
        "USER => 'alice', TYPE => THROTTLE, THROTTLE_TYPE => REQUEST_NUMBER, "
        "LIMIT => 100req/sec, SCOPE => MACHINE"
    )


@pytest.mark.parametrize(
    ("limit", "rendered"),
    [(512, "512B"), (1024, "1K"), (1536, "1K"), (10 * 1024 * 1024, "10M"), (3 << 30, "3G")],
)
def test_throttle_str_for_sizes(limit: int, rendered: str, orders_table: TableName) -> None:
    settings = ThrottleSettings(
        Scope(table=orders_table), ThrottleType.READ_SIZE, TimedQuota(limit, TimeUnit.MINUTES)
    )
    assert str(settings) == (
        "TABLE => 'ns:orders', TYPE => THROTTLE, THROTTLE_TYPE => READ_SIZE, "
        f"LIMIT => {rendered}/min, SCOPE => MACHINE"
    )


def test_throttle_removal_str() -> None:
    settings = ThrottleSettings(Scope(namespace="ns"), None, None)
    assert str(settings) == "NAMESPACE => 'ns', TYPE => THROTTLE, LIMIT => NONE"


def test_bypass_and_space_str() -> None:
    bypass = GlobalBypassSettings(Scope(user="bob"), True)
    assert str(bypass) == "USER => 'bob', GLOBAL_BYPASS => true"
    space = SpaceLimitSettings(Scope(namespace="ns"), 1024, SpaceViolationPolicy.DISABLE)
    assert str(space) == (
        "NAMESPACE => 'ns', TYPE => SPACE, LIMIT => 1024, VIOLATION_POLICY => DISABLE"
    )
