"""`polyfact config` command group: show and change stored settings."""

import click
from rich.console import Console
from rich.table import Table

from polyfact.click_group import PolyfactGroup
from polyfact.config import ConfigError, ConfigManager
from polyfact.log_sanitizer import LogSanitizer

console = Console()


@click.group(name="config", cls=PolyfactGroup)
def config_group():
    """Manage the polyfact configuration file (~/.polyfact/config.toml).

    \b
    EXAMPLES:
        $ polyfact config set token <token>
        $ polyfact config set poll_timeout 600
        $ polyfact config show
    """
    pass


@config_group.command(name="show")
def config_show():
    """Show the effective configuration (tokens masked)."""
    try:
        config = ConfigManager.load_config()
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    table = Table(title=f"Configuration ({ConfigManager.get_config_path()})")
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in LogSanitizer.sanitize_dict(config.to_dict()).items():
        table.add_row(key, str(value))
    if config.token is None:
        table.add_row("token", LogSanitizer.mask_token(None))

    console.print(table)


@config_group.command(name="set")
@click.argument("key")
@click.argument("value")
def config_set(key: str, value: str):
    """Store KEY=VALUE in the configuration file."""
    try:
        stored = ConfigManager.save_value(key, value)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    shown = LogSanitizer.mask_token(stored) if key == "token" else stored
    console.print(f"[green]✓[/green] {key} = {shown}")
