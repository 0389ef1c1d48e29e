"""Commands for the polyfact CLI."""

from polyfact.commands.config import config_group
from polyfact.commands.docs import docs_command

__all__ = ["config_group", "docs_command"]
