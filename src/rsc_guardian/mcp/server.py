"""FastMCP server exposing rsc-guardian tools."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from fastmcp import FastMCP

from rsc_guardian.core.analyze import analyze_file, analyze_source
from rsc_guardian.core.languages import resolve_language
from rsc_guardian.core.lint import lint_file, lint_source
from rsc_guardian.core.split import split_file


def create_mcp_server() -> FastMCP:
    """Create a FastMCP server for analyzing, linting and splitting components."""

    mcp = FastMCP("rsc-guardian", instructions="Detect client-only features in React components and split them.")

    @mcp.tool()
    def analyze(path: str | None = None, code: str | None = None, language: str | None = None) -> dict[str, Any]:
        """Report hooks, browser globals and event handlers used by a component."""
        if path is None and code is None:
            raise ValueError("Either 'path' or 'code' must be provided.")
        if code is not None:
            result = analyze_source(code.encode("utf-8"), resolve_language(language or "tsx", None))
        else:
            assert path is not None
            result = analyze_file(path, language)
        return result.model_dump() | {"needs_client_directive": result.needs_client_directive}

    @mcp.tool()
    def split(path: str, apply: bool = False) -> dict[str, Any]:
        """Split a component file into server and client modules."""
        return split_file(Path(path), apply=apply).model_dump()

    @mcp.tool()
    def lint(path: str | None = None, code: str | None = None, filename: str = "component.tsx") -> list[dict[str, Any]]:
        """List client-only features used without the 'use client' directive."""
        if path is None and code is None:
            raise ValueError("Either 'path' or 'code' must be provided.")
        if code is not None:
            diagnostics = lint_source(code.encode("utf-8"), filename)
        else:
            assert path is not None
            diagnostics = lint_file(path)
        return [d.model_dump(exclude={"fix"}) for d in diagnostics]

    return mcp
