from typing import Annotated

import typer

from rsc_guardian.cli.analyze import analyze
from rsc_guardian.cli.lint import lint
from rsc_guardian.cli.serve import serve_app
from rsc_guardian.cli.split import split
from rsc_guardian.config import configure_logging

app = typer.Typer(
    name="rsc-guardian",
    help="Analyze and split React Server Components.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def _root(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    configure_logging(verbose)


app.command("analyze")(analyze)
app.command("split")(split)
app.command("lint")(lint)
app.add_typer(serve_app, name="serve")


def main() -> None:
    app()
