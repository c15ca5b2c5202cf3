from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from hquota.exceptions import InvalidTableNameError
from hquota.types import SpaceViolationPolicy, TableName, ThrottleType, TimeUnit

from .click_compat import click
from .context import CLIContext

F = TypeVar("F", bound=Callable[..., object])


def _override_output(ctx: click.Context, param: click.Parameter, value: str | bool | None) -> None:
    # `--output table|json` passes the format; `--json` passes True when given.
    if not value:
        return
    fmt = "json" if value is True else value
    state = ctx.find_object(CLIContext)
    if state is not None:
        state.output = fmt  # type: ignore[assignment]


def output_options(fn: F) -> F:
    """Let a single command print its result in a format other than the group's."""
    fn = click.option(
        "--output",
        type=click.Choice(["table", "json"]),
        help="Print this result as a rich table or as one JSON line.",
        callback=_override_output,
        expose_value=False,
    )(fn)
    return click.option(
        "--json",
        is_flag=True,
        help="Same as --output json.",
        callback=_override_output,
        expose_value=False,
    )(fn)


class TableNameType(click.ParamType):
    name = "table"

    def convert(
        self, value: object, param: click.Parameter | None, ctx: click.Context | None
    ) -> TableName:
        if isinstance(value, TableName):
            return value
        try:
            return TableName.parse(str(value))
        except InvalidTableNameError as e:
            self.fail(e.message, param, ctx)


TABLE_NAME = TableNameType()


def _enum_choice(values: list[str]) -> click.Choice:
    return click.Choice(values, case_sensitive=False)


THROTTLE_TYPE = _enum_choice([t.value for t in ThrottleType])
TIME_UNIT = _enum_choice([u.value for u in TimeUnit])
VIOLATION_POLICY = _enum_choice([p.value for p in SpaceViolationPolicy])


def scope_options(fn: F) -> F:
    fn = click.option("--namespace", type=str, default=None, help="Namespace name.")(fn)
    fn = click.option(
        "--table", type=TABLE_NAME, default=None, help="Table name ([namespace:]qualifier)."
    )(fn)
    fn = click.option("--user", type=str, default=None, help="User name.")(fn)
    return fn
