"""
Wire-level quota messages.

These models mirror the quota records stored by the master and the
`SetQuotaRequest` sent to it. Field names follow the message schema
(snake_case); every field is optional unless the schema requires it, and
presence is modelled with `None`.

Records can be loaded from an already-decoded mapping with
`Quotas.model_validate(...)` or from raw JSON text/bytes with `parse_quotas`.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from .exceptions import QuotaRecordError
from .types import QuotaScope, SpaceViolationPolicy, TableName, ThrottleType, TimeUnit


class _WireModel(BaseModel):
    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    def to_dict(self) -> dict[str, Any]:
        """Dump only the fields that are present, the way the message would be encoded."""
        return self.model_dump(mode="json", exclude_none=True)


class TimedQuota(_WireModel):
    time_unit: TimeUnit
    soft_limit: int | None = None
    scope: QuotaScope = QuotaScope.MACHINE


class Throttle(_WireModel):
    req_num: TimedQuota | None = None
    req_size: TimedQuota | None = None
    write_num: TimedQuota | None = None
    write_size: TimedQuota | None = None
    read_num: TimedQuota | None = None
    read_size: TimedQuota | None = None

    def get(self, throttle_type: ThrottleType) -> TimedQuota | None:
        return getattr(self, THROTTLE_FIELDS[throttle_type])

    def set(self, throttle_type: ThrottleType, quota: TimedQuota | None) -> None:
        setattr(self, THROTTLE_FIELDS[throttle_type], quota)


# Order matters: decoded throttles are emitted in this order.
THROTTLE_FIELDS: dict[ThrottleType, str] = {
    ThrottleType.REQUEST_NUMBER: "req_num",
    ThrottleType.REQUEST_SIZE: "req_size",
    ThrottleType.WRITE_NUMBER: "write_num",
    ThrottleType.WRITE_SIZE: "write_size",
    ThrottleType.READ_NUMBER: "read_num",
    ThrottleType.READ_SIZE: "read_size",
}


class SpaceQuota(_WireModel):
    soft_limit: int | None = None
    violation_policy: SpaceViolationPolicy | None = None
    remove: bool | None = None


class Quotas(_WireModel):
    """Composite quota record: throttles, the global bypass flag and a space quota."""

    bypass_globals: bool | None = None
    throttle: Throttle | None = None
    space: SpaceQuota | None = None


class WireTableName(_WireModel):
    namespace: str
    qualifier: str

    @classmethod
    def from_table(cls, table: TableName) -> WireTableName:
        return cls(namespace=table.namespace, qualifier=table.qualifier)

    def to_table(self) -> TableName:
        return TableName(self.namespace, self.qualifier)


class ThrottleRequest(_WireModel):
    type: ThrottleType | None = None
    timed_quota: TimedQuota | None = None


class SpaceLimitRequest(_WireModel):
    quota: SpaceQuota | None = None


class SetQuotaRequest(_WireModel):
    """Mutation request installing or clearing a single quota setting."""

    user_name: str | None = None
    namespace: str | None = None
    table_name: WireTableName | None = None
    remove_all: bool | None = None
    bypass_globals: bool | None = None
    throttle: ThrottleRequest | None = None
    space_limit: SpaceLimitRequest | None = None


def parse_quotas(payload: bytes | str | Mapping[str, Any]) -> Quotas:
    """
    Parse a composite quota record.

    Args:
        payload: JSON text/bytes, or an already-decoded mapping.

    Raises:
        QuotaRecordError: If the payload is not JSON, not an object, or does not
            match the record schema.
    """
    data: Any = payload
    if isinstance(payload, bytes):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise QuotaRecordError("Quota record bytes are not valid UTF-8") from e
    if isinstance(payload, str):
        try:
            data = json.loads(payload)
        except json.JSONDecodeError as e:
            raise QuotaRecordError("Quota record is not valid JSON") from e

    if not isinstance(data, Mapping):
        raise QuotaRecordError("Quota record must be a JSON object at the top level")

    try:
        return Quotas.model_validate(dict(data))
    except ValidationError as e:
        raise QuotaRecordError(
            f"Quota record does not match the schema: {e.error_count()} error(s)",
            details={"errors": e.errors(include_url=False, include_context=False)},
        ) from e
