from collections.abc import Iterator
from contextlib import contextmanager

import typer
from rich.console import Console

console = Console()
err_console = Console(stderr=True)


@contextmanager
def exit_on_error() -> Iterator[None]:
    """Print input and parse failures as ``Error: ...`` and exit with status 1."""
    try:
        yield
    except (OSError, ValueError) as exc:
        err_console.print(f"[red]Error:[/red] {exc}", markup=True, highlight=False, soft_wrap=True)
        raise typer.Exit(code=1) from exc
