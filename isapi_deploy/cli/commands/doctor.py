# isapi_deploy/cli/commands/doctor.py
"""Environment diagnostic command"""

import shutil
import sys

import click
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..decorators import require_config
from ...api.exceptions import PreflightError
from ...clients import create_client
from ...clients.base import ManagementClient
from ...core import PreflightChecker
from ...models import ToolConfig

console = Console()


class DiagnosticCheck:
    """Base class for diagnostic checks"""

    def __init__(self, name: str, description: str):
        self.name = name
        self.description = description
        self.passed = False
        self.message = ""
        self.fixes = []

    def run(self, preflight: PreflightChecker) -> 'DiagnosticCheck':
        """Run the diagnostic check"""
        raise NotImplementedError

    def _fail(self, error: PreflightError) -> None:
        self.passed = False
        self.message = str(error.args[0])
        if error.hint:
            self.fixes = [error.hint]


class ClientCheck(DiagnosticCheck):
    """Check the management client is installed"""

    def __init__(self):
        super().__init__("Azure CLI", "Verify az is installed and recent enough")

    def run(self, preflight):
        try:
            preflight.check_client()
        except PreflightError as e:
            self._fail(e)
            return self

        version = preflight.client.get_version()
        self.passed = True
        self.message = f"Version {version}" if version else "Installed (version unknown)"
        return self


class LoginCheck(DiagnosticCheck):
    """Check the operator is logged in"""

    def __init__(self):
        super().__init__("Login", "Verify an active az login")

    def run(self, preflight):
        try:
            identity = preflight.check_identity()
        except PreflightError as e:
            self._fail(e)
            return self

        self.passed = True
        self.message = identity.get_display_info()
        return self


class TargetCheck(DiagnosticCheck):
    """Check the App Service exists"""

    def __init__(self, resource_group: str, name: str):
        super().__init__("App Service", "Verify the target resource exists")
        self.resource_group = resource_group
        self.target_name = name

    def run(self, preflight):
        try:
            preflight.check_target(self.resource_group, self.target_name)
        except PreflightError as e:
            self._fail(e)
            return self

        self.passed = True
        self.message = f"{self.resource_group}/{self.target_name} exists"
        return self


class CheckerToolCheck(DiagnosticCheck):
    """Check the configured dependency checker can run"""

    def __init__(self, config: ToolConfig):
        super().__init__("Dependency checker", "Verify the configured checker can run")
        self.checker = config.validation.checker

    def run(self, preflight):
        # pe-header is built in; dumpbin needs the MSVC tools on PATH
        if self.checker == "dumpbin" and shutil.which("dumpbin") is None:
            self.passed = False
            self.message = "dumpbin not found on PATH, validation will be skipped"
            self.fixes = ["Run from a Visual Studio Developer Command Prompt or use --checker pe-header"]
        else:
            self.passed = True
            self.message = f"{self.checker} available"
        return self


def build_checks(config: ToolConfig, resource_group, name):
    checks = [ClientCheck(), LoginCheck()]
    if resource_group and name:
        checks.append(TargetCheck(resource_group, name))
    checks.append(CheckerToolCheck(config))
    return checks


@click.command()
@click.option('-g', '--resource-group', help='Resource group of the App Service')
@click.option('-n', '--name', help='App Service name')
@click.option('--subscription', help='Subscription name or ID')
@click.pass_context
@require_config
def doctor(ctx, resource_group, name, subscription):
    """Run environment diagnostics

    Runs the same read-only checks as the deploy preflight and reports
    all of them instead of stopping at the first failure.

    Examples:

        isapi-deploy doctor

        isapi-deploy doctor -g rg-legacy -n app-legacy
    """
    config = ctx.obj.config
    resource_group = resource_group or config.resource_group
    name = name or config.name

    client: ManagementClient = create_client(config.client, subscription or config.subscription)
    preflight = PreflightChecker(client, config.client.min_version)

    console.print("[bold]isapi-deploy Diagnostics[/bold]\n")

    checks = build_checks(config, resource_group, name)
    failed_checks = []
    client_ok = True

    for diagnostic_check in checks:
        # login and target lookups need a working client
        if not client_ok and isinstance(diagnostic_check, (LoginCheck, TargetCheck)):
            diagnostic_check.message = "Skipped, Azure CLI unavailable"
            failed_checks.append(diagnostic_check)
            continue

        diagnostic_check.run(preflight)
        if not diagnostic_check.passed:
            failed_checks.append(diagnostic_check)
            if isinstance(diagnostic_check, ClientCheck):
                client_ok = False

    table = Table(title="Diagnostic Results", box=box.ROUNDED)
    table.add_column("Check", style="cyan")
    table.add_column("Status", justify="center")
    table.add_column("Details")

    for diagnostic_check in checks:
        status = "[green]✓ PASS[/green]" if diagnostic_check.passed else "[red]✗ FAIL[/red]"
        table.add_row(diagnostic_check.name, status, escape(diagnostic_check.message))

    console.print(table)

    fixes = [(c.name, fix) for c in failed_checks for fix in c.fixes]
    if fixes:
        console.print("\n[bold yellow]Suggested fixes:[/bold yellow]")
        for check_name, fix in fixes:
            console.print(f"  • {check_name}: {escape(fix)}", highlight=False)

    if failed_checks:
        console.print(f"\n[red]{len(failed_checks)} check(s) failed[/red]")
        sys.exit(1)

    console.print("\n[green]All checks passed![/green]")
