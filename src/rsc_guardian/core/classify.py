import codecs
import logging
import re
from dataclasses import dataclass, field

from rsc_guardian.core.ast import fold_any, top_level_statements
from rsc_guardian.core.names import CLIENT_DIRECTIVE, is_browser_global, is_event_handler, is_hook
from rsc_guardian.models import AnalysisResult, ClientFeature, FeatureKind, NodeKind, SyntaxNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Classification:
    """Outcome of one classifier pass over a module."""

    tainted: frozenset[int]
    result: AnalysisResult
    features: list[ClientFeature] = field(default_factory=list)

    def is_tainted(self, node: SyntaxNode) -> bool:
        return node.node_id in self.tainted


_BRACED_ESCAPE = re.compile(r"\\u\{([0-9a-fA-F]+)\}")


def string_value(raw: str) -> str | None:
    """Decode the escape sequences of a string literal body, or None if one is malformed."""
    if "\\" not in raw:
        return raw
    raw = _BRACED_ESCAPE.sub(lambda match: f"\\U{int(match.group(1), 16):08x}", raw)
    try:
        return codecs.decode(raw.encode("latin-1", "backslashreplace"), "unicode_escape")
    except UnicodeDecodeError:
        return None


def is_directive_statement(statement: SyntaxNode) -> bool:
    if statement.kind is not NodeKind.EXPRESSION_STATEMENT:
        return False
    expression = statement.first_named_child()
    while expression is not None and expression.type == "parenthesized_expression":
        expression = expression.first_named_child()
    if expression is None or expression.kind is not NodeKind.STRING or expression.text is None:
        return False
    return string_value(expression.text) == CLIENT_DIRECTIVE


def has_client_directive(tree: SyntaxNode) -> bool:
    """Only the module's first statement can carry the directive."""
    statements = top_level_statements(tree)
    return bool(statements) and is_directive_statement(statements[0])


def _hook_name(call: SyntaxNode) -> str | None:
    callee = call.child_by_field("function")
    if callee is None:
        return None
    if callee.kind is NodeKind.IDENTIFIER and callee.text and is_hook(callee.text):
        return callee.text
    if callee.kind is NodeKind.MEMBER:
        prop = callee.child_by_field("property")
        if prop is not None and prop.kind is NodeKind.PROPERTY_NAME and prop.text and is_hook(prop.text):
            return prop.text
    return None


def _attribute_name(attribute: SyntaxNode) -> str | None:
    name = attribute.first_named_child()
    if name is not None and name.kind is NodeKind.PROPERTY_NAME:
        return name.text
    return None


def detect_feature(node: SyntaxNode) -> ClientFeature | None:
    """Return the client-only feature ``node`` itself introduces, if any."""
    if node.kind is NodeKind.CALL:
        hook = _hook_name(node)
        if hook is not None:
            return ClientFeature(node=node, name=hook, kind=FeatureKind.HOOK)
    elif node.kind is NodeKind.IDENTIFIER:
        if node.text and is_browser_global(node.text):
            return ClientFeature(node=node, name=node.text, kind=FeatureKind.BROWSER_GLOBAL)
    elif node.kind is NodeKind.JSX_ATTRIBUTE:
        name = _attribute_name(node)
        if name and is_event_handler(name):
            return ClientFeature(node=node, name=name, kind=FeatureKind.EVENT_HANDLER)
    return None


def classify(tree: SyntaxNode, path: str | None = None) -> Classification:
    """Mark every node that contains a client-only feature and collect feature names.

    Names found inside import declarations are recorded, but imports never join
    the taint set.
    """
    features: list[ClientFeature] = []
    tainted: set[int] = set()

    def record(node: SyntaxNode) -> bool:
        feature = detect_feature(node)
        if feature is None:
            return False
        features.append(feature)
        return True

    def mark(node: SyntaxNode) -> None:
        tainted.add(node.node_id)

    module_tainted = False
    for statement in top_level_statements(tree):
        if statement.kind is NodeKind.IMPORT:
            fold_any(statement, record)
        elif fold_any(statement, record, mark):
            module_tainted = True
    if module_tainted:
        tainted.add(tree.node_id)

    by_kind: dict[FeatureKind, set[str]] = {kind: set() for kind in FeatureKind}
    for feature in features:
        by_kind[feature.kind].add(feature.name)

    result = AnalysisResult(
        path=path,
        has_use_client=has_client_directive(tree),
        hooks=sorted(by_kind[FeatureKind.HOOK]),
        browser_globals=sorted(by_kind[FeatureKind.BROWSER_GLOBAL]),
        event_handlers=sorted(by_kind[FeatureKind.EVENT_HANDLER]),
    )
    logger.debug(
        "Classified %s: %d feature(s), %d tainted node(s)", path or "<source>", len(features), len(tainted)
    )
    return Classification(tainted=frozenset(tainted), result=result, features=features)
