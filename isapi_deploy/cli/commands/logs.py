"""Logs command implementation"""

import sys

import click
from rich.console import Console

from ..decorators import require_config
from ..utils.output import print_error
from ...api.exceptions import ClientError
from ...clients import create_client

console = Console()


@click.command()
@click.option('-g', '--resource-group', help='Resource group of the App Service')
@click.option('-n', '--name', help='App Service name')
@click.option('--subscription', help='Subscription name or ID')
@click.pass_context
@require_config
def logs(ctx, resource_group, name, subscription):
    """Stream App Service logs

    Runs until interrupted with Ctrl+C.

    Example:

        isapi-deploy logs -g rg-legacy -n app-legacy
    """
    config = ctx.obj.config
    resource_group = resource_group or config.resource_group
    name = name or config.name
    if not resource_group or not name:
        print_error("Resource group and App Service name are required (--resource-group/--name or config file)")
        sys.exit(1)

    client = create_client(config.client, subscription or config.subscription)

    console.print(f"[cyan]Streaming logs for {resource_group}/{name} (Ctrl+C to stop)[/cyan]",
                  highlight=False)
    try:
        returncode = client.tail_logs(name, resource_group)
    except ClientError as e:
        print_error("Cannot stream logs", e)
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Log streaming stopped[/yellow]")
        return

    sys.exit(returncode)
