"""Validate command implementation"""

import sys
from pathlib import Path

import click

from ..decorators import require_config
from ..utils.output import format_validation_result, print_error
from ...api.exceptions import ConfigError, ValidationError
from ...checkers import get_checker
from ...constants import SUPPORTED_CHECKERS
from ...core import ArtifactValidator


@click.command()
@click.argument('artifact', type=click.Path(path_type=Path))
@click.option('--checker', type=click.Choice(SUPPORTED_CHECKERS), help='Dependency checker to use')
@click.option('--architecture', type=click.Choice(['x64', 'x86', 'arm64']),
              help='Required architecture (default from config, x64)')
@click.option('--force', is_flag=True, help='Exit 0 even when the checks fail')
@click.pass_context
@require_config
def validate(ctx, artifact, checker, architecture, force):
    """Check a filter DLL locally without contacting Azure

    Examples:

        isapi-deploy validate build/Release/Filter.dll

        isapi-deploy validate Filter.dll --checker dumpbin --architecture x86
    """
    settings = ctx.obj.config.validation
    if architecture:
        settings.architecture = architecture

    try:
        validator = ArtifactValidator(get_checker(checker, settings))
    except ConfigError as e:
        print_error("Invalid configuration", e)
        sys.exit(1)

    try:
        result = validator.validate_artifact(artifact, force=force)
    except ValidationError as e:
        print_error(e.args[0])
        for message in e.messages:
            click.echo(f"  - {message}")
        sys.exit(1)

    format_validation_result(result, artifact.name)
