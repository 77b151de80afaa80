# isapi_deploy/cli/utils/output.py
"""Output formatting utilities"""

import json
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from ...constants import EMOJI_ERROR, EMOJI_SUCCESS, EMOJI_WARNING
from ...models import DeploymentOutcome, ValidationResult

console = Console()


def format_outcome(outcome: DeploymentOutcome) -> None:
    """Format and display the final pipeline outcome"""
    if outcome.succeeded:
        title = "Validation Result" if outcome.validate_only else "Deploy Result"
        headline = (
            "[green]✓[/green] Validation completed successfully!"
            if outcome.validate_only
            else "[green]✓[/green] Deployment completed successfully!"
        )
        lines = [
            headline,
            "",
            f"[bold]Resource group:[/bold] {escape(outcome.resource_group)}",
            f"[bold]App Service:[/bold] {escape(outcome.target_name)}",
        ]
        if outcome.endpoint_url:
            lines.append(f"[bold]URL:[/bold] {escape(outcome.endpoint_url)}")

        if outcome.validation:
            if outcome.validation.skipped:
                status = "[yellow]Skipped[/yellow]"
            elif outcome.validation.passed:
                status = "[green]Passed[/green]"
            else:
                status = "[red]Failed (forced)[/red]"
            lines.append(f"[bold]Validation:[/bold] {status}")

        if outcome.warnings:
            lines.append("")
            lines.append("[bold yellow]Warnings:[/bold yellow]")
            for warning in outcome.warnings:
                lines.append(f"  [yellow]• {escape(warning)}[/yellow]")

        if outcome.duration is not None:
            lines.append("")
            lines.append(f"[dim]Duration: {outcome.duration:.2f}s[/dim]")

        console.print(Panel("\n".join(lines), title=title, border_style="green"))

        if outcome.next_steps:
            console.print("\n[bold]Next steps:[/bold]")
            for step in outcome.next_steps:
                console.print(f"  {escape(step)}", highlight=False)

    else:
        action = "Validation" if outcome.validate_only else "Deploy"
        lines = [
            f"[red]{EMOJI_ERROR} {action} failed at {outcome.stage_reached.value}[/red]",
            "",
            f"[bold]Resource group:[/bold] {escape(outcome.resource_group)}",
            f"[bold]App Service:[/bold] {escape(outcome.target_name)}",
            "",
        ]
        for error in outcome.errors:
            lines.append(escape(error))

        if outcome.warnings:
            lines.append("")
            for warning in outcome.warnings:
                lines.append(f"[yellow]• {escape(warning)}[/yellow]")

        console.print(Panel("\n".join(lines), title=f"{action} Error", border_style="red"))


def format_validation_result(result: ValidationResult, artifact_name: Optional[str] = None) -> None:
    """Format and display an artifact validation result"""
    subject = f" for {artifact_name}" if artifact_name else ""

    if result.skipped:
        console.print(f"[yellow]{EMOJI_WARNING} Validation skipped{subject}[/yellow]")
    elif result.passed:
        console.print(f"[green]{EMOJI_SUCCESS} Validation passed{subject}[/green]")
    else:
        console.print(f"[red]{EMOJI_ERROR} Validation failed{subject}[/red]")

    for message in result.messages:
        console.print(f"  • {escape(message)}", highlight=False)


def print_outcome_json(outcome: DeploymentOutcome) -> None:
    """Print outcome as plain JSON for scripting"""
    click.echo(json.dumps(outcome.to_dict(), indent=2, default=str))


def print_error(message: str, error: Optional[Exception] = None) -> None:
    """Print error message"""
    if error:
        console.print(f"[red]Error:[/red] {escape(message)}: {escape(str(error))}")
    else:
        console.print(f"[red]Error:[/red] {escape(message)}")


def print_warning(message: str) -> None:
    """Print warning message"""
    console.print(f"[yellow]Warning:[/yellow] {escape(message)}")


def print_success(message: str) -> None:
    """Print success message"""
    console.print(f"[green]Success:[/green] {escape(message)}")
