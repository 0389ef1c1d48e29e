"""`polyfact docs` command.

Generates documentation for a local folder with the Polyfact API:

    polyfact docs ./my-project -t $POLYFACT_TOKEN
    polyfact docs ./my-project --doc_id 1234 --deploy my-project
"""

import logging
from pathlib import Path

import click
from rich.console import Console

from polyfact.api_client import PolyfactAPIError
from polyfact.config import TOKEN_URL, ConfigError, ConfigManager
from polyfact.docs.errors import DocsGenerationError
from polyfact.docs.generator import DocsGenerator
from polyfact.log_sanitizer import LogSanitizer

logger = logging.getLogger(__name__)
console = Console()

MISSING_TOKEN_MESSAGE = (
    f"Please provide a polyfact token using the -t option. You can generate one here: {TOKEN_URL}"
)


@click.command(name="docs")
@click.argument("folder", type=click.Path(path_type=Path))
@click.option(
    "--name", "-n", "name", metavar="DOC_NAME", help="The name of the doc (default to id)"
)
@click.option(
    "--deploy",
    "-d",
    "subdomain",
    metavar="SUBDOMAIN",
    help="The docs will be deployed to the subdomain provided",
)
@click.option(
    "--doc_id",
    "--doc-id",
    "doc_id",
    metavar="DOC_ID",
    help="If the doc_id has already been generated, you can send it in argument here",
)
@click.option(
    "--output",
    "-o",
    "output",
    type=click.Path(file_okay=False, path_type=Path),
    metavar="OUTPUT_FOLDER",
    help="Folder where the generated stage results are written",
)
@click.option(
    "--token",
    "-t",
    "token",
    metavar="TOKEN",
    help=f"Your polyfact token. You can generate one here: {TOKEN_URL}",
)
@click.pass_context
def docs_command(
    ctx: click.Context,
    folder: Path,
    name: str | None,
    subdomain: str | None,
    doc_id: str | None,
    output: Path | None,
    token: str | None,
) -> None:
    """Generate documentation for a project.

    FOLDER is the path of the folder to generate doc from.

    \b
    EXAMPLES:
        # Generate docs for the current project
        $ polyfact docs . -t <token>

        # Resume an existing doc and deploy it to demo.<domain>
        $ polyfact docs . --doc_id abc123 --deploy demo
    """
    try:
        config = ConfigManager.load_config(token=token)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    if not config.token:
        click.echo(MISSING_TOKEN_MESSAGE, err=True)
        ctx.exit(1)

    generator = DocsGenerator(token=config.token, config=config, console=console)

    try:
        result = generator.run(
            folder,
            doc_id=doc_id,
            name=name,
            subdomain=subdomain,
            output=output,
        )
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        ctx.exit(130)
    except (DocsGenerationError, PolyfactAPIError) as e:
        message = LogSanitizer.create_safe_error_message(e, secrets=(config.token,))
        click.echo(f"Error: {message}", err=True)
        ctx.exit(1)

    logger.debug(f"Finished docs {result.doc_id} ({len(result.stages)} stages)")
    if output:
        console.print(f"[green]✓[/green] Results written to {output}")
