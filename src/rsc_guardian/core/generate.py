"""Server and client module generators.

Both generators copy carried-over code by byte range from the original
source instead of re-serializing the tree, so formatting and comments inside
re-emitted statements survive unchanged.
"""

from pathlib import Path

from rsc_guardian.core.ast import walk
from rsc_guardian.core.classify import is_directive_statement
from rsc_guardian.core.languages import component_identifier, is_typescript_path, sibling_path
from rsc_guardian.core.names import CLIENT_DIRECTIVE, FRAMEWORK_DEFAULT_IMPORT, is_framework_module
from rsc_guardian.models import ModulePartition, NodeKind, SyntaxNode


def import_source(statement: SyntaxNode) -> str | None:
    source = statement.child_by_field("source")
    if source is None or source.kind is not NodeKind.STRING:
        return None
    return source.text


def _is_framework_import(statement: SyntaxNode) -> bool:
    return is_framework_module(import_source(statement))


def client_import_name(source_path: Path) -> str:
    return f"{component_identifier(source_path)}Client"


def client_module_specifier(source_path: Path) -> str:
    client_path = sibling_path(source_path, "client")
    return f"./{client_path.name}"


def _delegate_name(default_export: SyntaxNode | None) -> str | None:
    if default_export is None:
        return None
    declaration = default_export.child_by_field("declaration")
    if declaration is None or declaration.kind is not NodeKind.FUNCTION_DECLARATION:
        return None
    name = declaration.child_by_field("name")
    return name.text if name is not None else None


def imported_names(statement: SyntaxNode) -> set[str]:
    """Local names an import declaration binds in its module."""
    names: set[str] = set()
    for node in walk(statement):
        if node.type == "import_specifier":
            local = node.child_by_field("alias")
            if local is None:
                local = node.child_by_field("name")
            if local is not None and local.text:
                names.add(local.text)
        elif node.type in ("import_clause", "namespace_import"):
            names.update(child.text for child in node.children if child.type == "identifier" and child.text)
    return names


def _free_name(name: str, taken: set[str]) -> str:
    while name in taken:
        name += "Server"
    return name


def _leading_directive(partition: ModulePartition) -> SyntaxNode | None:
    statements = [*partition.imports, *partition.other]
    if partition.default_export is not None:
        statements.append(partition.default_export)
    if not statements:
        return None
    first = min(statements, key=lambda statement: statement.start_byte)
    return first if is_directive_statement(first) else None


def generate_server(source_bytes: bytes, source_path: str | Path, partition: ModulePartition) -> str:
    """Build a delegate module that renders the client sibling with forwarded props."""
    path = Path(source_path)
    client_name = client_import_name(path)

    framework_import = next((imp for imp in partition.imports if _is_framework_import(imp)), None)
    lines = [framework_import.slice(source_bytes) if framework_import is not None else FRAMEWORK_DEFAULT_IMPORT]
    lines.append(f"import {client_name} from '{client_module_specifier(path)}';")
    carried = [imp for imp in partition.imports if not _is_framework_import(imp)]
    lines.extend(imp.slice(source_bytes) for imp in carried)
    lines.append("")

    taken = {client_name}
    if framework_import is None:
        taken.add("React")
    else:
        taken.update(imported_names(framework_import))
    for imp in carried:
        taken.update(imported_names(imp))
    function_name = _free_name(_delegate_name(partition.default_export) or component_identifier(path), taken)
    params = "props: any" if is_typescript_path(path) else "props"
    lines.append(f"export default function {function_name}({params}) {{")
    lines.append(f"  return <{client_name} {{...props}} />;")
    lines.append("}")
    return "\n".join(lines) + "\n"


def generate_client(source_bytes: bytes, source_path: str | Path, partition: ModulePartition) -> str:
    """Build the client module: the directive followed by the original module's code.

    The directive is emitted exactly once even when the source already starts
    with it.
    """
    directive = _leading_directive(partition)

    lines = [f"'{CLIENT_DIRECTIVE}';", ""]
    lines.extend(imp.slice(source_bytes) for imp in partition.imports)
    if not any(_is_framework_import(imp) for imp in partition.imports):
        lines.append(FRAMEWORK_DEFAULT_IMPORT)
    lines.append("")

    for statement in partition.other:
        if directive is not None and statement.node_id == directive.node_id:
            continue
        lines.append(statement.slice(source_bytes))
    if partition.default_export is not None:
        lines.append(partition.default_export.slice(source_bytes))
    return "\n".join(lines) + "\n"
