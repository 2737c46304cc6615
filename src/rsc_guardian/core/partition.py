from collections.abc import Callable

from rsc_guardian.core.ast import top_level_statements
from rsc_guardian.models import ModulePartition, NodeKind, SyntaxNode


class MultipleDefaultExportsError(ValueError):
    """Raised when a module declares more than one default export."""


def partition_module(
    tree: SyntaxNode, is_tainted: Callable[[SyntaxNode], bool]
) -> tuple[ModulePartition, bool]:
    """Bucket top-level statements into imports, the default export, and everything else.

    Returns (partition, overall_taint). Taint is decided for the module as a
    whole: any tainted non-import statement taints it.
    """
    imports: list[SyntaxNode] = []
    other: list[SyntaxNode] = []
    default_export: SyntaxNode | None = None
    overall_taint = False

    for statement in top_level_statements(tree):
        if statement.kind is NodeKind.IMPORT:
            imports.append(statement)
            continue

        if statement.kind is NodeKind.DEFAULT_EXPORT:
            if default_export is not None:
                line = statement.start_point.row + 1
                raise MultipleDefaultExportsError(f"Module has more than one default export (second at line {line})")
            default_export = statement
        else:
            other.append(statement)

        if is_tainted(statement):
            overall_taint = True

    partition = ModulePartition(imports=tuple(imports), other=tuple(other), default_export=default_export)
    return partition, overall_taint
