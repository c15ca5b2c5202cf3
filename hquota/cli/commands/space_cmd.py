from __future__ import annotations

from hquota import factory
from hquota.types import SpaceViolationPolicy, TableName

from ..click_compat import RichCommand, click
from ..context import CLIContext
from ..options import TABLE_NAME, VIOLATION_POLICY, output_options
from ..runner import CommandOutput, run_command
from .throttle_cmds import request_output


@click.command(name="space", cls=RichCommand)
@click.option("--table", type=TABLE_NAME, default=None, help="Table name ([namespace:]qualifier).")
@click.option("--namespace", type=str, default=None, help="Namespace name.")
@click.option("--limit", type=int, required=True, help="Size limit in bytes.")
@click.option("--policy", type=VIOLATION_POLICY, required=True, help="Action on violation.")
@output_options
@click.pass_obj
def space_cmd(
    ctx: CLIContext,
    *,
    table: TableName | None,
    namespace: str | None,
    limit: int,
    policy: str,
) -> None:
    """Limit the filesystem space of one table or namespace."""

    def fn(_: CLIContext, _warnings: list[str]) -> CommandOutput:
        settings = factory.space_limit(table, namespace, limit, SpaceViolationPolicy(policy))
        return request_output(settings)

    run_command(ctx, command="space", fn=fn)
