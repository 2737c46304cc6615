from typing import Annotated

import typer
from rich.markup import escape

from rsc_guardian.cli.console import console, exit_on_error
from rsc_guardian.core.ast import read_source
from rsc_guardian.core.lint import RULE_NAME, apply_fixes, lint_source


def lint(
    files: Annotated[list[str], typer.Argument(help="Files to check.")],
    fix: Annotated[bool, typer.Option("--fix", help="Insert the 'use client' directive where needed.")] = False,
    suggest_split: Annotated[bool, typer.Option(help="Suggest splitting instead of adding the directive.")] = False,
    language: Annotated[str | None, typer.Option(help="Grammar to parse with (js, jsx, ts, tsx).")] = None,
) -> None:
    """Report client-only features used without the 'use client' directive."""
    problems = 0
    for file in files:
        with exit_on_error():
            absolute_path, source_bytes = read_source(file)
            diagnostics = lint_source(source_bytes, str(absolute_path), fix, suggest_split, language)

        if fix and diagnostics:
            with exit_on_error():
                absolute_path.write_bytes(apply_fixes(source_bytes, diagnostics))
            console.print(f"[green]Fixed[/green] {escape(file)}", soft_wrap=True)
            continue

        for diagnostic in diagnostics:
            location = f"{escape(file)}:{diagnostic.line}:{diagnostic.column}"
            console.print(
                f"{location}  [red]error[/red]  {escape(diagnostic.message)}  [dim]{RULE_NAME}[/dim]",
                soft_wrap=True,
            )
            if diagnostic.suggestion:
                console.print(f"    {escape(diagnostic.suggestion)}", style="dim", soft_wrap=True)
        problems += len(diagnostics)

    if problems:
        console.print(f"\n[red]✖ {problems} problem(s)[/red]")
        raise typer.Exit(code=1)
    console.print("[green]No problems found.[/green]")
