# isapi_deploy/cli/commands/init.py
"""Init command implementation"""

import sys
from pathlib import Path

import click
from rich.console import Console

from ..utils.output import print_error, print_success, print_warning
from ...constants import PROJECT_CONFIG_FILE, CONFIG_TEMPLATE_FILE, DEFAULT_PLACEHOLDER
from ...templates import load_template
from ...utils.template_utils import render_template

console = Console()


@click.command()
@click.argument('directory', default='.', type=click.Path(file_okay=False, path_type=Path))
@click.option('-g', '--resource-group', default='rg-legacy-filter', help='Resource group to record')
@click.option('-n', '--name', default='app-legacy-filter', help='App Service name to record')
@click.option('--force', is_flag=True, help='Overwrite existing files')
def init(directory, resource_group, name, force):
    """Create a starter configuration and web.config template

    Writes .isapi-deploy.yaml and web.config.template into DIRECTORY.
    The template references the filter as IsapiFilter.dll; deploy
    replaces that name with the real artifact's file name.

    Examples:

        isapi-deploy init

        isapi-deploy init migration/ -g rg-legacy -n app-legacy
    """
    files = {
        directory / PROJECT_CONFIG_FILE: render_template(
            load_template("project", "isapi-deploy.yaml"),
            {"resource_group": resource_group, "name": name}
        ),
        directory / CONFIG_TEMPLATE_FILE: load_template("project", CONFIG_TEMPLATE_FILE),
    }

    existing = [path for path in files if path.exists()]
    if existing and not force:
        for path in existing:
            print_error(f"File already exists: {path}. Use --force to overwrite.")
        sys.exit(1)

    directory.mkdir(parents=True, exist_ok=True)
    for path, content in files.items():
        if path in existing:
            print_warning(f"Overwriting {path}")
        path.write_text(content, encoding="utf-8")
        console.print(f"  [green]✓[/green] {path}", highlight=False)

    print_success("Configuration initialized")
    console.print(
        f"\nEdit {CONFIG_TEMPLATE_FILE} to match the filter's IIS settings; "
        f"keep '{DEFAULT_PLACEHOLDER}' wherever the DLL name belongs.",
        highlight=False
    )
