"""
hquota - typed quota settings for a distributed storage quota subsystem.

Decode stored quota records into immutable settings, and build the requests
that install or clear them.

Example:
    from hquota import factory, build_set_quota_request
    from hquota.types import ThrottleType, TimeUnit

    settings = factory.throttle_user("alice", ThrottleType.REQUEST_NUMBER, 100, TimeUnit.SECONDS)
    request = build_set_quota_request(settings)
"""

from __future__ import annotations

from . import factory, wire
from .exceptions import InvalidScopeError, InvalidTableNameError, QuotaError, QuotaRecordError
from .requests import build_set_quota_request, to_quotas
from .settings import (
    GlobalBypassSettings,
    QuotaSettings,
    Scope,
    SpaceLimitSettings,
    ThrottleSettings,
    TimedQuota,
    validate_scope,
)
from .types import (
    QuotaScope,
    QuotaType,
    SpaceViolationPolicy,
    TableName,
    ThrottleType,
    TimeUnit,
)

__version__ = "0.1.0"

__all__ = [
    "GlobalBypassSettings",
    "InvalidScopeError",
    "InvalidTableNameError",
    "QuotaError",
    "QuotaRecordError",
    "QuotaScope",
    "QuotaSettings",
    "QuotaType",
    "Scope",
    "SpaceLimitSettings",
    "SpaceViolationPolicy",
    "TableName",
    "ThrottleSettings",
    "ThrottleType",
    "TimeUnit",
    "TimedQuota",
    "__version__",
    "build_set_quota_request",
    "factory",
    "to_quotas",
    "validate_scope",
    "wire",
]
