from typing import Annotated

import typer
from rich.markup import escape

from rsc_guardian.cli.console import console, exit_on_error
from rsc_guardian.core.analyze import analyze_file
from rsc_guardian.models import AnalysisResult

_RULE_WIDTH = 50


def _print_names(title: str, names: list[str]) -> None:
    console.print(f"\n[bold]{title}[/bold] ({len(names)}):")
    if not names:
        console.print("  (none)", style="dim")
        return
    for name in names:
        console.print(f"  - {name}", highlight=False)


def render_report(file: str, result: AnalysisResult) -> None:
    console.print(f"\nAnalysis for: {escape(file)}\n", highlight=False, soft_wrap=True)
    console.print("─" * _RULE_WIDTH)
    directive = "[green]✓ Present[/green]" if result.has_use_client else "[red]✗ Missing[/red]"
    console.print(f"'use client' directive: {directive}")
    _print_names("Detected Hooks", result.hooks)
    _print_names("Detected Browser Globals", result.browser_globals)
    _print_names("Detected Event Handlers", result.event_handlers)
    console.print("─" * _RULE_WIDTH)

    if result.needs_client_directive:
        console.print(
            "\n[yellow]⚠️  This file uses client-only features but is missing \"use client\" directive.[/yellow]",
            soft_wrap=True,
        )
        console.print(f"   Consider running: rsc-guardian split {escape(file)} --dry-run\n", soft_wrap=True)


def analyze(
    file: Annotated[str, typer.Argument(help="File path to analyze.")],
    language: Annotated[str | None, typer.Option(help="Grammar to parse with (js, jsx, ts, tsx).")] = None,
) -> None:
    """Analyze a file for client-only features."""
    with exit_on_error():
        result = analyze_file(file, language)
    render_report(file, result)
