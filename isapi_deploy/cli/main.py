# isapi_deploy/cli/main.py
"""Main CLI entry point for isapi-deploy"""

import os
import sys
import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from ..__version__ import __version__
from ..constants import APP_NAME, LOG_FORMAT, ENV_LOG_LEVEL
from ..models import ToolConfig
from ..services import ConfigService

# Import all commands
from .commands import (
    deploy,
    validate,
    doctor,
    init,
    logs,
)

console = Console()


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Setup logging configuration

    Args:
        verbose: Enable verbose output (INFO level)
        debug: Enable debug output (DEBUG level)
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    env_level = os.environ.get(ENV_LOG_LEVEL)
    if env_level:
        level = getattr(logging, env_level.upper(), level)

    # Configure rich handler
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                show_time=debug,
                show_path=debug,
                rich_tracebacks=True,
                tracebacks_suppress=[click]
            )
        ],
        force=True
    )


class Context:
    """CLI context object with lazy configuration loading"""

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize CLI context"""
        self.config_path = config_path
        self.verbose: bool = False
        self.debug: bool = False
        self._config: Optional[ToolConfig] = None

    @property
    def config(self) -> ToolConfig:
        """Get tool configuration (lazy loading)

        Raises:
            ConfigError: If the configuration file is invalid
        """
        if self._config is None:
            self._config = ConfigService(self.config_path).load_config()
        return self._config


@click.group(name=APP_NAME)
@click.version_option(__version__, prog_name=APP_NAME)
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('-d', '--debug', is_flag=True, help='Enable debug output')
@click.option('-q', '--quiet', is_flag=True, help='Suppress all output except errors')
@click.option('-c', '--config', 'config_path', type=click.Path(dir_okay=False, path_type=Path),
              help='Configuration file (default: .isapi-deploy.yaml)')
@click.pass_context
def cli(ctx, verbose, debug, quiet, config_path):
    """isapi-deploy - Move a legacy ISAPI filter to Azure App Service

    Validates a compiled filter DLL, packages it with a rendered
    web.config, and uploads the package to an existing App Service.

    Provisioning the App Service itself is done separately, for
    example from the infrastructure templates.
    """
    # Setup logging
    if quiet:
        logging.disable(logging.CRITICAL)
    else:
        setup_logging(verbose=verbose, debug=debug)

    ctx.obj = Context(config_path)
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug


# Register commands
cli.add_command(deploy.deploy)
cli.add_command(validate.validate)
cli.add_command(doctor.doctor)
cli.add_command(init.init)
cli.add_command(logs.logs)


def main():
    """Main entry point for the CLI application

    This function handles:
    - Keyboard interrupts
    - Unexpected exceptions with proper error display
    """
    try:
        cli(prog_name=APP_NAME)

    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        if '--debug' in sys.argv or '-d' in sys.argv:
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
