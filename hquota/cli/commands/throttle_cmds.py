from __future__ import annotations

from hquota import factory
from hquota.requests import build_set_quota_request
from hquota.settings import QuotaSettings
from hquota.types import TableName, ThrottleType, TimeUnit

from ..click_compat import RichCommand, RichGroup, click
from ..context import CLIContext
from ..options import THROTTLE_TYPE, TIME_UNIT, output_options, scope_options
from ..runner import CommandOutput, run_command


def request_output(settings: QuotaSettings) -> CommandOutput:
    request = build_set_quota_request(settings)
    return CommandOutput(data={"setting": str(settings), "request": request.to_dict()})


@click.group(name="throttle", cls=RichGroup)
def throttle_group() -> None:
    """Build throttle requests."""


@throttle_group.command(name="set", cls=RichCommand)
@scope_options
@click.option("--type", "throttle_type", type=THROTTLE_TYPE, required=True, help="What to count.")
@click.option("--limit", type=int, required=True, help="Allowed requests or bytes per unit.")
@click.option("--unit", type=TIME_UNIT, default=TimeUnit.SECONDS.value, show_default=True)
@output_options
@click.pass_obj
def throttle_set(
    ctx: CLIContext,
    *,
    user: str | None,
    table: TableName | None,
    namespace: str | None,
    throttle_type: str,
    limit: int,
    unit: str,
) -> None:
    """Throttle a user, table or namespace."""

    def fn(_: CLIContext, _warnings: list[str]) -> CommandOutput:
        settings = factory.throttle(
            user, table, namespace, ThrottleType(throttle_type), limit, TimeUnit(unit)
        )
        return request_output(settings)

    run_command(ctx, command="throttle set", fn=fn)


@throttle_group.command(name="clear", cls=RichCommand)
@scope_options
@output_options
@click.pass_obj
def throttle_clear(
    ctx: CLIContext,
    *,
    user: str | None,
    table: TableName | None,
    namespace: str | None,
) -> None:
    """Remove the throttle of a user, table or namespace."""

    def fn(_: CLIContext, _warnings: list[str]) -> CommandOutput:
        return request_output(factory.throttle(user, table, namespace, None, 0, None))

    run_command(ctx, command="throttle clear", fn=fn)
