from __future__ import annotations

from typing import Any

from hquota.settings import (
    GlobalBypassSettings,
    QuotaSettings,
    SpaceLimitSettings,
    ThrottleSettings,
)


def serialize_settings_for_cli(settings: QuotaSettings) -> dict[str, Any]:
    """Flatten a setting into one row; every row has the same keys."""
    scope = settings.scope
    row: dict[str, Any] = {
        "type": settings.quota_type.value,
        "user": scope.user,
        "table": str(scope.table) if scope.table is not None else None,
        "namespace": scope.namespace,
        "throttleType": None,
        "limit": None,
        "timeUnit": None,
        "bypass": None,
        "violationPolicy": None,
    }
    if isinstance(settings, ThrottleSettings):
        if settings.throttle_type is not None:
            row["throttleType"] = settings.throttle_type.value
        if settings.timed_quota is not None:
            row["limit"] = settings.timed_quota.limit
            row["timeUnit"] = settings.timed_quota.time_unit.value
    elif isinstance(settings, GlobalBypassSettings):
        row["bypass"] = settings.bypass
    elif isinstance(settings, SpaceLimitSettings):
        row["limit"] = settings.size_limit
        row["violationPolicy"] = settings.violation_policy.value
    return row
