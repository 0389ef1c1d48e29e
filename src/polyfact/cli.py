"""CLI entry point for polyfact.

Commands:
    polyfact                       # Show help
    polyfact docs <folder>         # Generate (and optionally deploy) docs
    polyfact config show|set       # Inspect or change stored settings
"""

import logging

import click

from polyfact import __version__
from polyfact.click_group import PolyfactGroup
from polyfact.commands import config_group, docs_command


@click.group(
    cls=PolyfactGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["--help", "-h"]},
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.version_option(version=__version__, prog_name="polyfact")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """polyfact - generate documentation with the Polyfact API.

    \b
    COMMANDS:
        docs          Generate documentation for a folder
        config        Show or change stored settings

    \b
    EXAMPLES:
        # Generate docs for a project
        $ polyfact docs ./my-project -t <token>

        # Generate and deploy to a subdomain
        $ polyfact docs ./my-project -t <token> --deploy my-project

        # Store the token once
        $ polyfact config set token <token>

    \b
    CONFIGURATION:
        Config file: ~/.polyfact/config.toml
        Environment: POLYFACT_TOKEN, POLYFACT_ENDPOINT, POLYFACT_POLL_TIMEOUT, ...
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(message)s")
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    # Without a subcommand show help
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)


main.add_command(docs_command)
main.add_command(config_group)


if __name__ == "__main__":
    main()
