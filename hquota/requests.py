"""
Settings to wire messages.

`build_set_quota_request` fills in the `SetQuotaRequest` that installs or
clears one setting. `to_quotas` folds settings into the composite record the
master keeps for their owner, which is what `hquota.factory.from_quotas`
reads back.
"""

from __future__ import annotations

from collections.abc import Iterable

from . import wire
from .exceptions import InvalidScopeError
from .settings import (
    GlobalBypassSettings,
    QuotaSettings,
    Scope,
    SpaceLimitSettings,
    ThrottleSettings,
    TimedQuota,
)


def _to_wire_timed_quota(quota: TimedQuota) -> wire.TimedQuota:
    return wire.TimedQuota(time_unit=quota.time_unit, soft_limit=quota.limit, scope=quota.scope)


def _to_wire_space_quota(settings: SpaceLimitSettings) -> wire.SpaceQuota:
    return wire.SpaceQuota(
        soft_limit=settings.size_limit,
        violation_policy=settings.violation_policy,
    )


def build_set_quota_request(settings: QuotaSettings) -> wire.SetQuotaRequest:
    """
    Build the request that applies `settings` for its owner.

    Only the owner fields and the sub-field of the setting's kind are
    populated; a throttle removal carries an empty throttle directive.
    """
    if not isinstance(settings, (ThrottleSettings, GlobalBypassSettings, SpaceLimitSettings)):
        raise TypeError(f"Unsupported quota settings type: {type(settings).__name__}")

    request = wire.SetQuotaRequest()
    scope = settings.scope
    if scope.user is not None:
        request.user_name = scope.user
    if scope.table is not None:
        request.table_name = wire.WireTableName.from_table(scope.table)
    if scope.namespace is not None:
        request.namespace = scope.namespace

    if isinstance(settings, ThrottleSettings):
        directive = wire.ThrottleRequest()
        if settings.throttle_type is not None:
            directive.type = settings.throttle_type
        if settings.timed_quota is not None:
            directive.timed_quota = _to_wire_timed_quota(settings.timed_quota)
        request.throttle = directive
    elif isinstance(settings, GlobalBypassSettings):
        request.bypass_globals = settings.bypass
    else:
        request.space_limit = wire.SpaceLimitRequest(quota=_to_wire_space_quota(settings))
    return request


def _check_single_owner(settings: Iterable[QuotaSettings]) -> None:
    owners: set[Scope] = set()
    users: set[str | None] = set()
    for item in settings:
        if not isinstance(item, (ThrottleSettings, GlobalBypassSettings, SpaceLimitSettings)):
            raise TypeError(f"Unsupported quota settings type: {type(item).__name__}")
        if isinstance(item, GlobalBypassSettings):
            users.add(item.scope.user)
        else:
            owners.add(item.scope)
            users.add(item.scope.user)
    if len(owners) > 1 or len(users) > 1:
        raise InvalidScopeError("All settings folded into one quota record must share an owner")


def _apply_throttle(quotas: wire.Quotas, settings: ThrottleSettings) -> None:
    if settings.is_removal:
        quotas.throttle = None
        return
    if settings.throttle_type is None:
        # A quota without a type does not name a field to write.
        return
    throttle = quotas.throttle.model_copy() if quotas.throttle is not None else wire.Throttle()
    if settings.timed_quota is not None:
        throttle.set(settings.throttle_type, _to_wire_timed_quota(settings.timed_quota))
    else:
        throttle.set(settings.throttle_type, None)
    quotas.throttle = throttle if throttle.to_dict() else None


def to_quotas(*settings: QuotaSettings, base: wire.Quotas | None = None) -> wire.Quotas:
    """
    Fold settings for a single owner into a composite quota record.

    Settings apply in order on top of `base` (left untouched):

    - a throttle with a type and a quota writes that type's field
    - a throttle with a type only clears that type's field
    - a throttle removal drops the whole throttle section
    - a global bypass writes the bypass flag
    - a space limit replaces the space section

    Raises:
        InvalidScopeError: If the settings belong to different owners.
    """
    _check_single_owner(settings)
    quotas = base.model_copy(deep=True) if base is not None else wire.Quotas()
    for item in settings:
        if isinstance(item, ThrottleSettings):
            _apply_throttle(quotas, item)
        elif isinstance(item, GlobalBypassSettings):
            quotas.bypass_globals = item.bypass
        else:
            quotas.space = _to_wire_space_quota(item)
    return quotas
