from __future__ import annotations

from typing import IO

from hquota import factory
from hquota.types import TableName
from hquota.wire import parse_quotas

from ..click_compat import RichCommand, click
from ..context import CLIContext
from ..errors import CLIError
from ..options import output_options, scope_options
from ..runner import CommandOutput, run_command
from ..serialization import serialize_settings_for_cli


@click.command(name="decode", cls=RichCommand)
@click.argument("record", type=click.File("rb"))
@scope_options
@output_options
@click.pass_obj
def decode_cmd(
    ctx: CLIContext,
    record: IO[bytes],
    *,
    user: str | None,
    table: TableName | None,
    namespace: str | None,
) -> None:
    """Decode a JSON quota record (file path or '-' for stdin) into settings."""

    def fn(_: CLIContext, warnings: list[str]) -> CommandOutput:
        data = record.read()
        if not data.strip():
            raise CLIError(
                "Quota record is empty.", hint="Pass a file holding one JSON quota record."
            )
        quotas = parse_quotas(data)
        settings = factory.from_quotas(user, table, namespace, quotas)
        if not settings:
            warnings.append("Quota record holds no settings.")
        return CommandOutput(data=[serialize_settings_for_cli(s) for s in settings])

    run_command(ctx, command="decode", fn=fn)
