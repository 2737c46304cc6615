from typing import Annotated

import typer
from rich.markup import escape
from rich.text import Text

from rsc_guardian.cli.console import console, exit_on_error
from rsc_guardian.core.diff import render_addition_diff
from rsc_guardian.core.split import split_file, write_split


def _print_diff(diff_text: str) -> None:
    for line in diff_text.splitlines():
        if line.startswith(("+++", "---")):
            style = "bold"
        elif line.startswith("@@"):
            style = "cyan"
        else:
            style = "green"
        console.print(Text(line, style=style), soft_wrap=True)


def split(
    file: Annotated[str, typer.Argument(help="File path to split.")],
    apply: Annotated[bool, typer.Option("--apply", help="Apply the changes (write files).")] = False,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Show the diff without applying changes, even with --apply.")
    ] = False,
    language: Annotated[str | None, typer.Option(help="Grammar to parse with (js, jsx, ts, tsx).")] = None,
) -> None:
    """Split a component into server and client files."""
    with exit_on_error():
        result = split_file(file, apply=False, language=language)

    if not result.needs_split:
        console.print("No client-only features detected. No split needed.")
        return

    assert result.server_path is not None and result.server_text is not None
    assert result.client_path is not None and result.client_text is not None

    if apply and not dry_run:
        with exit_on_error():
            write_split(result)
        console.print(f"[green]✓[/green] Created {escape(result.server_path)}", soft_wrap=True)
        console.print(f"[green]✓[/green] Created {escape(result.client_path)}", soft_wrap=True)
        return

    console.print("\n--- Proposed Changes ---\n")
    _print_diff(render_addition_diff(result.server_path, result.server_text))
    console.print()
    _print_diff(render_addition_diff(result.client_path, result.client_text))
    console.print("\n--- End of diff ---")
    console.print("\nRun with --apply to write these files.\n")
