from typing import Annotated

import typer

from rsc_guardian.cli.console import console

serve_app = typer.Typer(help="Start servers.")


@serve_app.command("mcp")
def mcp(
    transport: Annotated[str, typer.Option(help="MCP transport (stdio, sse or http).")] = "stdio",
) -> None:
    """Start the MCP server."""
    from rsc_guardian.mcp.server import create_mcp_server

    server = create_mcp_server()
    console.print(f"[green]Starting MCP server (transport: {transport})[/green]")
    server.run(transport=transport)  # type: ignore[arg-type]
