from __future__ import annotations

import hquota

from .click_compat import RichGroup, click
from .context import CLIContext
from .logging import configure_logging, restore_logging


@click.group(
    name="hquota",
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
    cls=RichGroup,
)
@click.option(
    "--output",
    type=click.Choice(["table", "json"]),
    default="table",
)
@click.option("--json", "json_flag", is_flag=True, help="Alias for --output json.")
@click.option("-q", "--quiet", is_flag=True, help="Suppress non-essential stderr output.")
@click.option("-v", "verbose", count=True, help="Increase verbosity (-v, -vv).")
@click.version_option(version=hquota.__version__, prog_name="hquota")
@click.pass_context
def cli(
    click_ctx: click.Context,
    *,
    output: str,
    json_flag: bool,
    quiet: bool,
    verbose: int,
) -> None:
    if click_ctx.invoked_subcommand is None:
        click.echo(click_ctx.get_help())
        raise click.exceptions.Exit(0)

    out = "json" if json_flag else output
    click_ctx.obj = CLIContext(
        output=out,  # type: ignore[arg-type]
        quiet=quiet,
        verbosity=verbose,
    )

    previous_logging = configure_logging(verbosity=verbose)
    click_ctx.call_on_close(lambda: restore_logging(previous_logging))


# Register commands
from .commands.bypass_cmd import bypass_cmd as _bypass_cmd  # noqa: E402
from .commands.decode_cmd import decode_cmd as _decode_cmd  # noqa: E402
from .commands.space_cmd import space_cmd as _space_cmd  # noqa: E402
from .commands.throttle_cmds import throttle_group as _throttle_group  # noqa: E402
from .commands.version_cmd import version_cmd as _version_cmd  # noqa: E402

cli.add_command(_version_cmd)
cli.add_command(_decode_cmd)
cli.add_command(_throttle_group)
cli.add_command(_bypass_cmd)
cli.add_command(_space_cmd)
