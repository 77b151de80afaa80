"""Configuration context decorator for CLI commands"""

from functools import wraps
from typing import Callable

import click
from rich.markup import escape

from ..utils.output import console
from ...api.exceptions import ConfigError
from ...constants import EMOJI_ERROR


def require_config(func: Callable) -> Callable:
    """Decorator that loads the tool configuration before the command runs

    The configuration is loaded once into ``ctx.obj.config``. An invalid
    configuration file ends the command with exit code 1.

    Args:
        func: Command function to decorate

    Returns:
        Decorated function
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        ctx = click.get_current_context()

        try:
            config = ctx.obj.config
        except ConfigError as e:
            console.print(f"{EMOJI_ERROR} [red]{escape(str(e))}[/red]", highlight=False)
            ctx.exit(1)

        if ctx.obj.debug:
            console.print(f"[dim]Checker: {config.validation.checker}, "
                          f"placeholder: {config.package.placeholder}[/dim]")

        return func(*args, **kwargs)

    return wrapper
