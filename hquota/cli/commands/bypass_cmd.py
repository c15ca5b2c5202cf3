from __future__ import annotations

from hquota import factory

from ..click_compat import RichCommand, click
from ..context import CLIContext
from ..options import output_options
from ..runner import CommandOutput, run_command
from .throttle_cmds import request_output


@click.command(name="bypass", cls=RichCommand)
@click.argument("user", type=str)
@click.option("--off", is_flag=True, help="Subject the user to global quotas again.")
@output_options
@click.pass_obj
def bypass_cmd(ctx: CLIContext, user: str, *, off: bool) -> None:
    """Let USER bypass the global quota settings."""

    def fn(_: CLIContext, _warnings: list[str]) -> CommandOutput:
        return request_output(factory.bypass_globals(user, not off))

    run_command(ctx, command="bypass", fn=fn)
