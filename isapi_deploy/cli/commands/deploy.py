"""Deploy command implementation"""

import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from ..decorators import require_config
from ..utils.output import format_outcome, print_error, print_outcome_json
from ...api import Deployer
from ...api.exceptions import ConfigError
from ...constants import CONFIG_TEMPLATE_FILE, EMOJI_ARROW, SUPPORTED_CHECKERS, PipelineStage
from ...models import DeploymentRequest

console = Console()


@click.command()
@click.option('-g', '--resource-group', help='Resource group of the App Service')
@click.option('-n', '--name', help='App Service name')
@click.option('-a', '--artifact', required=True,
              type=click.Path(path_type=Path), help='Compiled ISAPI filter DLL')
@click.option('-t', '--config-template', type=click.Path(path_type=Path),
              help=f'web.config template (default: {CONFIG_TEMPLATE_FILE})')
@click.option('--subscription', help='Subscription name or ID')
@click.option('--force', is_flag=True,
              help='Proceed past validation failures and restart the App Service around the upload')
@click.option('--validate-only', is_flag=True, help='Run preflight and validation only')
@click.option('--skip-validation', is_flag=True, help='Do not run the dependency checker')
@click.option('--checker', type=click.Choice(SUPPORTED_CHECKERS), help='Dependency checker to use')
@click.option('--json', 'as_json', is_flag=True, help='Print the outcome as JSON')
@click.pass_context
@require_config
def deploy(ctx, resource_group, name, artifact, config_template, subscription,
           force, validate_only, skip_validation, checker, as_json):
    """Validate, package and upload an ISAPI filter

    The App Service must already exist. The package contains the filter
    under bin/, a web.config rendered from the template with the
    placeholder replaced by the filter's file name, and a landing page.

    Examples:

        # Deploy with defaults from .isapi-deploy.yaml
        isapi-deploy deploy -a build/Release/Filter.dll

        # Validate only
        isapi-deploy deploy -g rg-legacy -n app-legacy -a Filter.dll --validate-only

        # Bounce the App Service around the upload
        isapi-deploy deploy -g rg-legacy -n app-legacy -a Filter.dll --force
    """
    config = ctx.obj.config

    resource_group = resource_group or config.resource_group
    name = name or config.name
    if not resource_group or not name:
        print_error("Resource group and App Service name are required (--resource-group/--name or config file)")
        sys.exit(1)

    config_template = config_template or config.template_path()

    request = DeploymentRequest(
        resource_group=resource_group,
        target_name=name,
        artifact_path=artifact,
        config_template_path=config_template,
        subscription=subscription or config.subscription,
        force=force,
        validate_only=validate_only,
        skip_validation=skip_validation,
    )

    if not as_json:
        _show_request(request)

    def on_stage(stage: PipelineStage, description: str) -> None:
        if not as_json:
            console.print(f"[cyan]{EMOJI_ARROW} {description}...[/cyan]", highlight=False)

    try:
        deployer = Deployer.from_config(
            config,
            subscription=request.subscription,
            checker_name=checker,
            on_stage=on_stage
        )
    except ConfigError as e:
        print_error("Invalid configuration", e)
        sys.exit(1)

    outcome = deployer.run(request)

    if as_json:
        print_outcome_json(outcome)
    else:
        console.print()
        format_outcome(outcome)

    sys.exit(outcome.exit_code)


def _show_request(request: DeploymentRequest) -> None:
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="bold")
    table.add_column("Value")

    table.add_row("Resource group", request.resource_group)
    table.add_row("App Service", request.target_name)
    table.add_row("Artifact", str(request.artifact_path))
    table.add_row("Template", str(request.config_template_path))
    if request.subscription:
        table.add_row("Subscription", request.subscription)

    options = []
    if request.force:
        options.append("force")
    if request.validate_only:
        options.append("validate only")
    if request.skip_validation:
        options.append("skip validation")
    if options:
        table.add_row("Options", ", ".join(options))

    console.print(table)
    console.print()
