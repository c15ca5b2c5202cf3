"""Tests for decoding composite quota records into settings."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from hquota import factory
from hquota.exceptions import InvalidScopeError, QuotaRecordError
from hquota.settings import (
    GlobalBypassSettings,
    Scope,
    SpaceLimitSettings,
    ThrottleSettings,
    TimedQuota,
)
from hquota.types import QuotaScope, SpaceViolationPolicy, TableName, ThrottleType, TimeUnit
from hquota.wire import THROTTLE_FIELDS, Quotas, SpaceQuota, Throttle, parse_quotas
from hquota.wire import TimedQuota as WireTimedQuota

LoadFixture = Callable[[str], dict[str, Any]]


def _quota(limit: int, unit: TimeUnit = TimeUnit.SECONDS) -> WireTimedQuota:
    return WireTimedQuota(time_unit=unit, soft_limit=limit)


def test_full_record_yields_throttles_then_bypass_then_space(load_fixture: LoadFixture) -> None:
    quotas = Quotas.model_validate(load_fixture("full_record.json"))
    scope = Scope(namespace="ns")

    settings = factory.from_namespace_quotas("ns", quotas)

    assert settings == [
        ThrottleSettings(scope, ThrottleType.REQUEST_NUMBER, TimedQuota(100, TimeUnit.SECONDS)),
        ThrottleSettings(scope, ThrottleType.REQUEST_SIZE, TimedQuota(1 << 30, TimeUnit.HOURS)),
        ThrottleSettings(scope, ThrottleType.WRITE_NUMBER, TimedQuota(50, TimeUnit.SECONDS)),
        ThrottleSettings(scope, ThrottleType.WRITE_SIZE, TimedQuota(5 << 30, TimeUnit.DAYS)),
        ThrottleSettings(scope, ThrottleType.READ_NUMBER, TimedQuota(200, TimeUnit.SECONDS)),
        ThrottleSettings(scope, ThrottleType.READ_SIZE, TimedQuota(10 << 20, TimeUnit.MINUTES)),
        GlobalBypassSettings(Scope(), True),
        SpaceLimitSettings(scope, 1 << 40, SpaceViolationPolicy.NO_INSERTS),
    ]


def test_empty_record_yields_nothing(load_fixture: LoadFixture) -> None:
    quotas = Quotas.model_validate(load_fixture("empty.json"))
    assert factory.from_user_quotas("alice", quotas) == []
    assert factory.from_quotas(None, None, None, quotas) == []


@pytest.mark.parametrize(
    "present",
    [
        [],
        ["read_size"],
        ["write_num", "req_size"],
        ["read_num", "req_num", "write_size"],
        ["req_num", "req_size", "write_num", "write_size", "read_num", "read_size"],
    ],
)
def test_one_throttle_per_present_field_in_fixed_order(present: list[str]) -> None:
    throttle = Throttle(**{name: _quota(i + 1) for i, name in enumerate(present)})
    settings = factory.from_user_quotas("alice", Quotas(throttle=throttle))

    expected_order = [t for t, name in THROTTLE_FIELDS.items() if name in present]
    assert len(settings) == len(present)
    assert [s.throttle_type for s in settings] == expected_order
    assert all(isinstance(s, ThrottleSettings) for s in settings)
    assert all(s.scope == Scope(user="alice") for s in settings)


def test_partial_throttle_fixture(load_fixture: LoadFixture, orders_table: TableName) -> None:
    quotas = Quotas.model_validate(load_fixture("throttle_partial.json"))
    settings = factory.from_user_table_quotas("alice", orders_table, quotas)

    scope = Scope(user="alice", table=orders_table)
    assert settings == [
        ThrottleSettings(scope, ThrottleType.REQUEST_NUMBER, TimedQuota(600, TimeUnit.MINUTES)),
        ThrottleSettings(scope, ThrottleType.WRITE_SIZE, TimedQuota(2048, TimeUnit.SECONDS)),
    ]


@pytest.mark.parametrize("flag", [None, False])
def test_bypass_absent_or_false_is_not_emitted(flag: bool | None) -> None:
    assert factory.from_user_quotas("alice", Quotas(bypass_globals=flag)) == []


def test_bypass_true_is_emitted_once_for_the_user(orders_table: TableName) -> None:
    settings = factory.from_user_table_quotas("alice", orders_table, Quotas(bypass_globals=True))
    assert settings == [GlobalBypassSettings(Scope(user="alice"), True)]


def test_space_record_dispatches_on_table_or_namespace(
    load_fixture: LoadFixture, orders_table: TableName
) -> None:
    quotas = Quotas.model_validate(load_fixture("space_only.json"))

    (table_limit,) = factory.from_table_quotas(orders_table, quotas)
    assert table_limit == SpaceLimitSettings(
        Scope(table=orders_table), 1 << 30, SpaceViolationPolicy.NO_WRITES_COMPACTIONS
    )

    (ns_limit,) = factory.from_namespace_quotas("ns", quotas)
    assert ns_limit == SpaceLimitSettings(
        Scope(namespace="ns"), 1 << 30, SpaceViolationPolicy.NO_WRITES_COMPACTIONS
    )


def test_space_record_ignores_user_of_owner(orders_table: TableName) -> None:
    quotas = Quotas(space=SpaceQuota(soft_limit=10, violation_policy=SpaceViolationPolicy.DISABLE))
    (limit,) = factory.from_user_table_quotas("alice", orders_table, quotas)
    assert limit.scope == Scope(table=orders_table)


def test_space_record_without_table_or_namespace_fails() -> None:
    quotas = Quotas(space=SpaceQuota(soft_limit=10, violation_policy=SpaceViolationPolicy.DISABLE))
    with pytest.raises(InvalidScopeError):
        factory.from_user_quotas("alice", quotas)
    with pytest.raises(InvalidScopeError):
        factory.from_quotas(None, None, None, quotas)


def test_owner_with_table_and_namespace_fails(orders_table: TableName) -> None:
    with pytest.raises(InvalidScopeError):
        factory.from_quotas("alice", orders_table, "ns", Quotas())


def test_from_space_requires_exactly_one_owner(orders_table: TableName) -> None:
    space = SpaceQuota(soft_limit=10, violation_policy=SpaceViolationPolicy.DISABLE)
    with pytest.raises(InvalidScopeError):
        factory.from_space(orders_table, "ns", space)
    with pytest.raises(InvalidScopeError):
        factory.from_space(None, None, space)


def test_from_space_without_violation_policy_is_a_record_error() -> None:
    with pytest.raises(QuotaRecordError):
        factory.from_space(None, "ns", SpaceQuota(soft_limit=10))


def test_unset_throttle_soft_limit_decodes_as_zero() -> None:
    quotas = Quotas(throttle=Throttle(read_num=WireTimedQuota(time_unit=TimeUnit.SECONDS)))
    (throttle,) = factory.from_namespace_quotas("ns", quotas)
    assert isinstance(throttle, ThrottleSettings)
    assert throttle.timed_quota == TimedQuota(0, TimeUnit.SECONDS)


def test_space_without_soft_limit_is_a_record_error() -> None:
    quotas = parse_quotas({"space": {"violation_policy": "DISABLE"}})
    with pytest.raises(QuotaRecordError, match="no soft limit"):
        factory.from_namespace_quotas("ns", quotas)


def test_space_removal_marker_decodes_to_nothing(orders_table: TableName) -> None:
    quotas = parse_quotas(
        {"space": {"remove": True, "soft_limit": 10, "violation_policy": "NO_INSERTS"}}
    )
    assert factory.from_table_quotas(orders_table, quotas) == []


def test_from_space_rejects_removal_marker(orders_table: TableName) -> None:
    space = SpaceQuota(remove=True, soft_limit=10, violation_policy=SpaceViolationPolicy.NO_INSERTS)
    with pytest.raises(QuotaRecordError, match="removal marker"):
        factory.from_space(orders_table, None, space)


def test_decoded_quota_keeps_record_scope() -> None:
    throttle = Throttle(
        req_num=WireTimedQuota(time_unit=TimeUnit.SECONDS, soft_limit=5, scope=QuotaScope.CLUSTER)
    )
    (settings,) = factory.from_user_quotas("alice", Quotas(throttle=throttle))
    assert isinstance(settings, ThrottleSettings)
    assert settings.timed_quota == TimedQuota(5, TimeUnit.SECONDS, QuotaScope.CLUSTER)
