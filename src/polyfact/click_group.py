"""Custom Click group with automatic help display on errors.

Usage mistakes (missing folder argument, unknown option, unknown command)
print the error followed by the help of the most specific command.
"""

from typing import Any

import click

_USAGE_ERRORS = (
    click.exceptions.UsageError,
    click.exceptions.BadParameter,
    click.exceptions.MissingParameter,
)


class PolyfactGroup(click.Group):
    """Click group that shows contextual help on usage errors."""

    def invoke(self, ctx: click.Context) -> Any:
        try:
            return super().invoke(ctx)
        except _USAGE_ERRORS as e:
            click.echo(f"Error: {e.format_message()}", err=True)

            # Prefer the subcommand context when the error came from a subcommand
            error_ctx = e.ctx if getattr(e, "ctx", None) else ctx

            click.echo("", err=True)
            click.echo(error_ctx.get_help(), err=True)
            error_ctx.exit(e.exit_code)
            return None  # never reached

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        """Show help when the command is not found."""
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            # Parameter errors are handled by invoke()
            if isinstance(e, click.exceptions.MissingParameter | click.exceptions.BadParameter):
                raise
            click.echo(f"Error: {e.format_message()}", err=True)
            click.echo("", err=True)
            click.echo(ctx.get_help(), err=True)
            ctx.exit(2)
            return None, None, []  # never reached


# Subgroups created with @main.group() also use PolyfactGroup
PolyfactGroup.group_class = PolyfactGroup
