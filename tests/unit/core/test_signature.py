"""Unit tests for core/signature.py"""

import pytest

from lunor.core.diagnostics import DiagnosticsCollector
from lunor.core.models import DiagnosticCode, Parameter
from lunor.core.signature import parse_signature, split_parameters


def _parse(line):
    diagnostics = DiagnosticsCollector()
    return parse_signature(line, 0, diagnostics), diagnostics.to_list()


def test_parse_signature_no_parameters():
    """Name() parses to an empty parameter list."""
    sig, diags = _parse("MyComp()")
    assert sig.name == "MyComp"
    assert sig.parameters == []
    assert diags == []


def test_parse_signature_typed_and_optional():
    """Parameters keep declaration order, types, and optional markers."""
    sig, diags = _parse("Card(title:string, count?: number)")
    assert sig.parameters == [
        Parameter(name="title", type="string"),
        Parameter(name="count", type="number", optional=True),
    ]
    assert diags == []


@pytest.mark.parametrize("type_text", [
    "Record<string, number>",
    "{ a: string, b: number }",
    "(x: number, y: number) => void",
    "[string, number]",
])
def test_parse_signature_nested_commas(type_text):
    """Commas nested inside brackets do not split a parameter type."""
    sig, diags = _parse(f"Chart(data:{type_text}, label:string)")
    assert [p.name for p in sig.parameters] == ["data", "label"]
    assert sig.parameters[0].type == type_text
    assert diags == []


@pytest.mark.parametrize("line", ["not a signature", "Broken(", "(x:string)"])
def test_parse_signature_invalid_line(line):
    """A malformed line reports InvalidComponentSignature and uses the text as name."""
    sig, diags = _parse(line)
    assert sig.name == line
    assert sig.parameters == []
    assert [d.code for d in diags] == [DiagnosticCode.invalid_component_signature]
    assert diags[0].range.end.character == len(line)


def test_parse_signature_invalid_parameter_skipped():
    """An untyped parameter is reported at its column and skipped."""
    sig, diags = _parse("Card(title:string, bad, ok?:boolean)")
    assert [p.name for p in sig.parameters] == ["title", "ok"]
    assert len(diags) == 1
    diag = diags[0]
    assert diag.code == DiagnosticCode.invalid_prop_definition
    assert (diag.range.start.character, diag.range.end.character) == (19, 22)


def test_parse_signature_leading_whitespace_offsets_columns():
    """Diagnostic columns account for indentation before the signature."""
    _, diags = _parse("  Card(1x:string)")
    assert diags[0].range.start.character == 7


def test_split_parameters_offsets():
    """split_parameters reports where each stripped entry starts."""
    assert split_parameters("a:string,  b:number") == [("a:string", 0), ("b:number", 11)]


def test_split_parameters_empty():
    """Empty or whitespace-only lists yield no entries."""
    assert split_parameters("") == []
    assert split_parameters("  ") == []
