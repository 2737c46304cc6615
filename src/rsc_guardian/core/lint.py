"""Lint rule reporting client-only features in modules without the client directive."""

import logging
from collections.abc import Iterable
from pathlib import Path

from rsc_guardian.config import get_default_language
from rsc_guardian.core.ast import parse_source, read_source, top_level_statements
from rsc_guardian.core.classify import classify, has_client_directive
from rsc_guardian.core.languages import is_component_file, resolve_language
from rsc_guardian.core.names import CLIENT_DIRECTIVE
from rsc_guardian.models import LintDiagnostic, SyntaxNode, TextEdit

logger = logging.getLogger(__name__)

RULE_NAME = "no-client-in-server"

MESSAGE_TEMPLATE = (
    "Client-only feature '{name}' used in a server component. Add 'use client' or split into a client component."
)

DIRECTIVE_FIX_TEXT = f"'{CLIENT_DIRECTIVE}';\n"


def _directive_fix(tree: SyntaxNode) -> TextEdit:
    statements = top_level_statements(tree)
    offset = statements[0].start_byte if statements else 0
    return TextEdit(start_byte=offset, end_byte=offset, text=DIRECTIVE_FIX_TEXT)


def lint_source(
    source_bytes: bytes,
    filename: str,
    auto_fix: bool = False,
    suggest_split: bool = False,
    language: str | None = None,
) -> list[LintDiagnostic]:
    """Return one diagnostic per client-only feature, in document order.

    Files that are not ``.js``/``.jsx``/``.ts``/``.tsx`` and files that already
    start with the client directive produce no diagnostics.
    """
    if not is_component_file(filename):
        return []

    resolved_language = resolve_language(language or get_default_language(), Path(filename))
    tree = parse_source(source_bytes, resolved_language)
    if has_client_directive(tree):
        return []

    classification = classify(tree, filename)
    fix = _directive_fix(tree) if auto_fix else None
    suggestion = f"Run: rsc-guardian split {filename} --dry-run" if suggest_split else None

    diagnostics = []
    for feature in classification.features:
        point = feature.node.start_point
        diagnostics.append(
            LintDiagnostic(
                message=MESSAGE_TEMPLATE.format(name=feature.name),
                name=feature.name,
                kind=feature.kind,
                line=point.row + 1,
                column=point.column + 1,
                suggestion=suggestion,
                fix=fix,
            )
        )
    logger.debug("%s: %d diagnostic(s)", filename, len(diagnostics))
    return diagnostics


def lint_file(
    path: str | Path,
    auto_fix: bool = False,
    suggest_split: bool = False,
    language: str | None = None,
) -> list[LintDiagnostic]:
    absolute_path, source_bytes = read_source(path)
    return lint_source(source_bytes, str(absolute_path), auto_fix, suggest_split, language)


def apply_fixes(source_bytes: bytes, diagnostics: Iterable[LintDiagnostic]) -> bytes:
    """Apply each distinct fix once, last offset first so earlier offsets stay valid."""
    edits = {diagnostic.fix for diagnostic in diagnostics if diagnostic.fix is not None}
    fixed = source_bytes
    for edit in sorted(edits, key=lambda e: (e.start_byte, e.end_byte), reverse=True):
        fixed = fixed[: edit.start_byte] + edit.text.encode("utf-8") + fixed[edit.end_byte :]
    return fixed
