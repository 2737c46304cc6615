"""Shared fixtures and helpers for tests."""

from collections.abc import Callable
from pathlib import Path

import pytest
from tree_sitter import Parser
from tree_sitter_language_pack import get_parser

from rsc_guardian.core.ast import parse_source
from rsc_guardian.models import SyntaxNode

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag every test under tests/unit as "unit"
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        if rel.parts and rel.parts[0] == "unit":
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def parse_tsx() -> Callable[[str], tuple[bytes, SyntaxNode]]:
    """Return a helper that parses TSX source into (source_bytes, tree)."""

    def _parse(source: str) -> tuple[bytes, SyntaxNode]:
        source_bytes = source.encode("utf-8")
        return source_bytes, parse_source(source_bytes, "tsx")

    return _parse


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the component fixtures."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def tsx_parser() -> Parser:
    """Return a raw tree-sitter parser for TSX."""
    return get_parser("tsx")
