"""Data models for parsed Lunor documents: nodes, spans, diagnostics, signatures"""

from enum import Enum, IntEnum
from typing import Annotated, Iterator, Literal, Optional, Union

from pydantic import BaseModel, Field, InstanceOf


class Span(BaseModel):
    """Zero-based source range covered by a node and its attached descendants."""
    start_line:   int
    start_column: int
    end_line:     int
    end_column:   int


class BaseNode(BaseModel):
    children: list["Node"] = Field(default_factory=list)
    span:     Optional[Span] = None


class Expression(BaseNode):
    """Opaque expression payload extracted from a {...} span; never evaluated."""
    kind: Literal["Expression"] = "Expression"
    raw:  str


# Literal JSON-like values or an Expression leaf; a dict is never coerced into an Expression
Value = Union[InstanceOf[Expression], bool, int, float, str, list, dict, None]


class Text(BaseNode):
    kind:  Literal["Text"] = "Text"
    value: Union[Expression, str] = ""


class Comment(BaseNode):
    kind: Literal["Comment"] = "Comment"
    text: str = ""


class Markdown(BaseNode):
    kind:       Literal["Markdown"] = "Markdown"
    tag:        str
    value:      Union[Expression, str, None] = None
    attributes: dict[str, Union[Expression, str]] = Field(default_factory=dict)

    @property
    def is_list(self) -> bool:
        return self.tag == 'ul'


class Component(BaseNode):
    kind:  Literal["Component"] = "Component"
    name:  str
    props: dict[str, Value] = Field(default_factory=dict)


class Data(BaseNode):
    kind:  Literal["Data"] = "Data"
    name:  str
    value: Value = None


class State(BaseNode):
    kind:  Literal["State"] = "State"
    name:  str
    value: Value = None


class For(BaseNode):
    kind:                  Literal["For"] = "For"
    loop_variable:         str
    collection_expression: str


class If(BaseNode):
    kind:                 Literal["If"] = "If"
    condition_expression: str


class Fetch(BaseNode):
    kind:                     Literal["Fetch"] = "Fetch"
    result_variable:          str
    initial_value_expression: str = ""
    url:                      Union[Expression, str] = ""
    method:                   Literal["GET", "POST", "PUT", "DELETE"] = "GET"
    headers:                  dict[str, str] = Field(default_factory=dict)
    body:                     Optional[str] = None


class InlineScript(BaseNode):
    """Raw target-language statements captured below a :js line."""
    kind:       Literal["InlineScript"] = "InlineScript"
    signature:  str = ""
    body_lines: list[str] = Field(default_factory=list)


Node = Annotated[
    Union[Markdown, Component, Data, State, For, If, Fetch, InlineScript, Comment, Text, Expression],
    Field(discriminator="kind"),
]

# Node kinds that accept indented children
CONTAINER_KINDS = (Component, For, If, InlineScript)

for _model in (BaseNode, Expression, Text, Comment, Markdown, Component, Data, State, For, If, Fetch, InlineScript):
    _model.model_rebuild()


def is_container(node: BaseNode) -> bool:
    """Return True if node becomes an attachment target for deeper lines."""
    if isinstance(node, Markdown):
        return node.is_list
    return isinstance(node, CONTAINER_KINDS)


class Parameter(BaseModel):
    name:     str
    type:     str
    optional: bool = False


class ComponentSignature(BaseModel):
    """Component name and ordered typed parameters declared on line 0."""
    name:       str
    parameters: list[Parameter] = Field(default_factory=list)


class Severity(IntEnum):
    """LSP-compatible diagnostic severity levels."""
    error       = 1
    warning     = 2
    information = 3
    hint        = 4


class DiagnosticCode(str, Enum):
    """Stable machine-readable identifiers consumed by quick-fix tooling."""
    empty_file                  = "EmptyFile"
    invalid_component_signature = "InvalidComponentSignature"
    invalid_prop_definition     = "InvalidPropDefinition"
    invalid_property            = "InvalidProperty"
    invalid_data_value          = "InvalidDataValue"
    invalid_state_value         = "InvalidStateValue"
    invalid_directive           = "InvalidDirective"


class Position(BaseModel):
    line:      int
    character: int


class Range(BaseModel):
    start: Position
    end:   Position

    @classmethod
    def on_line(cls, line: int, start: int, end: int) -> "Range":
        return cls(start=Position(line=line, character=start), end=Position(line=line, character=end))


class Diagnostic(BaseModel):
    message:  str
    severity: Severity = Severity.error
    range:    Range
    code:     Optional[DiagnosticCode] = None

    @property
    def line(self) -> int:
        """One-based line number for human-facing output."""
        return self.range.start.line + 1


class ParseResult(BaseModel):
    """Everything produced by a single parse call."""
    ast:         list[Node] = Field(default_factory=list)
    component:   Optional[ComponentSignature] = None
    diagnostics: list[Diagnostic] = Field(default_factory=list)
    imports:     list[str] = Field(default_factory=list)


class SymbolKind(IntEnum):
    """Subset of LSP symbol kinds used by the outline projection."""
    klass    = 5
    function = 12
    variable = 13


class DocumentSymbol(BaseModel):
    name:            str
    kind:            SymbolKind
    range:           Range
    selection_range: Range
    children:        list["DocumentSymbol"] = Field(default_factory=list)


DocumentSymbol.model_rebuild()


def walk(nodes: list) -> Iterator[BaseNode]:
    """Yield every node in depth-first pre-order."""
    for node in nodes:
        yield node
        yield from walk(node.children)
