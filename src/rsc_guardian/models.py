from collections.abc import Iterator
from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class Position(BaseModel):
    model_config = ConfigDict(frozen=True)

    row: int
    column: int


class NodeKind(StrEnum):
    PROGRAM = "program"
    IMPORT = "import"
    DEFAULT_EXPORT = "default_export"
    EXPORT = "export"
    EXPRESSION_STATEMENT = "expression_statement"
    CALL = "call"
    MEMBER = "member"
    IDENTIFIER = "identifier"
    PROPERTY_NAME = "property_name"
    JSX_ATTRIBUTE = "jsx_attribute"
    JSX_NAME = "jsx_name"
    STRING = "string"
    FUNCTION_DECLARATION = "function_declaration"
    COMMENT = "comment"
    OTHER = "other"


class SyntaxNode(BaseModel):
    """Immutable node of a parsed module.

    ``node_id`` is the node's pre-order ordinal within its tree and serves as its
    identity; two nodes of different trees may share an id.
    """

    model_config = ConfigDict(frozen=True)

    node_id: int
    kind: NodeKind
    type: str
    field: str | None = None
    named: bool = True
    start_byte: int
    end_byte: int
    start_point: Position
    end_point: Position
    text: str | None = None
    children: tuple["SyntaxNode", ...] = ()

    def iter_children(self) -> Iterator["SyntaxNode"]:
        return iter(self.children)

    def child_by_field(self, field: str) -> "SyntaxNode | None":
        for child in self.children:
            if child.field == field:
                return child
        return None

    def first_named_child(self) -> "SyntaxNode | None":
        for child in self.children:
            if child.named:
                return child
        return None

    def slice(self, source: bytes) -> str:
        """Return the original source text covered by this node."""
        return source[self.start_byte : self.end_byte].decode("utf-8")


SyntaxNode.model_rebuild()  # necessary for recursive types


class FeatureKind(StrEnum):
    HOOK = "hook"
    BROWSER_GLOBAL = "browser-global"
    EVENT_HANDLER = "event-handler"


class ClientFeature(BaseModel):
    model_config = ConfigDict(frozen=True)

    node: SyntaxNode
    name: str
    kind: FeatureKind


class AnalysisResult(BaseModel):
    path: str | None = None
    has_use_client: bool
    hooks: list[str]
    browser_globals: list[str]
    event_handlers: list[str]

    @property
    def has_client_features(self) -> bool:
        return bool(self.hooks or self.browser_globals or self.event_handlers)

    @property
    def needs_client_directive(self) -> bool:
        return not self.has_use_client and self.has_client_features


class ModulePartition(BaseModel):
    model_config = ConfigDict(frozen=True)

    imports: tuple[SyntaxNode, ...] = ()
    other: tuple[SyntaxNode, ...] = ()
    default_export: SyntaxNode | None = None


class SplitResult(BaseModel):
    needs_split: bool
    source_path: str
    server_path: str | None = None
    client_path: str | None = None
    server_text: str | None = None
    client_text: str | None = None
    written: bool = False


class TextEdit(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_byte: int
    end_byte: int
    text: str


class LintDiagnostic(BaseModel):
    message: str
    name: str
    kind: FeatureKind
    line: int
    column: int
    suggestion: str | None = None
    fix: TextEdit | None = None
