"""Outline projection: a symbol tree for the component and its control nodes"""

from typing import Optional

from lunor.core.models import (
    BaseNode,
    Data,
    DocumentSymbol,
    For,
    If,
    ParseResult,
    Range,
    State,
    SymbolKind,
)
from lunor.core.parse import SOURCE_EXTENSIONS, parse_text, split_lines


def _node_range(node: BaseNode) -> Range:
    if node.span is None:
        return Range.on_line(0, 0, 0)
    span = node.span
    return Range.model_validate({
        "start": {"line": span.start_line, "character": 0},
        "end": {"line": span.end_line, "character": 0},
    })


def _symbol_for(node: BaseNode) -> Optional[DocumentSymbol]:
    """Only For, If, State, and Data nodes produce symbols."""
    if isinstance(node, For):
        name, kind = f"for {node.loop_variable} in {node.collection_expression}", SymbolKind.function
    elif isinstance(node, If):
        name, kind = f"if {node.condition_expression}", SymbolKind.function
    elif isinstance(node, (State, Data)):
        name, kind = f"{node.kind} {node.name}", SymbolKind.variable
    else:
        return None
    rng = _node_range(node)
    return DocumentSymbol(name=name, kind=kind, range=rng, selection_range=rng.model_copy(deep=True))


def _visit(node: BaseNode, parent: DocumentSymbol) -> None:
    symbol = _symbol_for(node)
    if symbol is not None:
        parent.children.append(symbol)
        parent = symbol
    for child in node.children:
        _visit(child, parent)


def project_symbols(result: ParseResult, line_count: int) -> list[DocumentSymbol]:
    """Return a single root symbol named for the component, or [] without a signature.

    Symbols found below a For or If nest under that symbol; every other node
    is transparent and its descendants attach to the nearest symbol above.
    """
    if result.component is None:
        return []
    name = result.component.name
    root = DocumentSymbol(
        name=name,
        kind=SymbolKind.klass,
        range=Range.model_validate({
            "start": {"line": 0, "character": 0},
            "end": {"line": max(line_count - 1, 0), "character": 0},
        }),
        selection_range=Range.on_line(0, 0, len(name)),
    )
    for node in result.ast:
        _visit(node, root)
    return [root]


def generate_document_symbols(text: str, uri: str) -> list[DocumentSymbol]:
    """Parse text and project its symbols; non-Lunor URIs yield []."""
    if not uri.lower().endswith(SOURCE_EXTENSIONS):
        return []
    return project_symbols(parse_text(text), len(split_lines(text)))
