"""Unit tests for core/symbols.py"""

from lunor.core.models import SymbolKind
from lunor.core.parse import parse_text
from lunor.core.symbols import generate_document_symbols, project_symbols


def test_symbols_sibling_control_nodes():
    """Sibling :for and :if lines are both direct children of the root."""
    symbols = generate_document_symbols("MainComponent()\n:for item in items\n:if condition", "file:///main.lnr")
    assert len(symbols) == 1
    root = symbols[0]
    assert root.name == "MainComponent"
    assert root.kind == SymbolKind.klass
    assert [c.name for c in root.children] == ["for item in items", "if condition"]
    assert all(c.kind == SymbolKind.function for c in root.children)


def test_symbols_nest_under_control_nodes():
    """Symbols inside a loop nest under the loop's symbol."""
    text = "C()\n:state open=false\n:for item in items\n  :Card\n    :if {item.ok}\n      :data x=1\n"
    root = generate_document_symbols(text, "c.lunor")[0]
    assert [c.name for c in root.children] == ["State open", "for item in items"]
    assert root.children[0].kind == SymbolKind.variable
    loop = root.children[1]
    assert [c.name for c in loop.children] == ["if item.ok"]
    assert [c.name for c in loop.children[0].children] == ["Data x"]


def test_symbols_ranges():
    """The root spans the document and child ranges follow node spans."""
    text = "C()\n:for a in b\n  # One\n  # Two\n"
    root = generate_document_symbols(text, "c.lnr")[0]
    assert root.range.end.line == 4
    assert root.selection_range.end.character == 1
    loop = root.children[0]
    assert (loop.range.start.line, loop.range.end.line) == (1, 3)


def test_symbols_non_lunor_uri():
    """URIs without a Lunor suffix produce no symbols."""
    assert generate_document_symbols("C()\n:for a in b\n", "file:///main.tsx") == []


def test_symbols_without_signature():
    """An empty document has no component and so no symbols."""
    assert project_symbols(parse_text(""), 1) == []
