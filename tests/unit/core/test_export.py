"""Unit tests for core/export.py"""

import json

from lunor.core.export import build_sidecar, output_path, write_component
from lunor.core.parse import parse_text


def test_output_path_mirrors_tree(tmp_path):
    """Output mirrors the source's location below root."""
    src = tmp_path / "src" / "views" / "Home.lnr"
    assert output_path(src, tmp_path / "src", tmp_path / "dist") == tmp_path / "dist" / "views" / "Home.tsx"


def test_output_path_outside_root(tmp_path):
    """A source outside root lands directly in the output directory."""
    src = tmp_path / "elsewhere" / "Home.lnr"
    out = output_path(src, tmp_path / "src", tmp_path / "dist", ext=".jsx")
    assert out == tmp_path / "dist" / "Home.jsx"


def test_build_sidecar_contents(tmp_path):
    """The sidecar carries the signature, diagnostics, and hoisted imports."""
    result = parse_text("Card(title:string, bad)\n:js\n  import x from 'y';\n")
    data = build_sidecar(tmp_path / "Card.lnr", result)
    assert data["component"]["name"] == "Card"
    assert [d["code"] for d in data["diagnostics"]] == ["InvalidPropDefinition"]
    assert data["imports"] == ["import x from 'y';"]
    json.dumps(data)


def test_write_component_without_sidecar(tmp_path):
    """Only the code file is written by default."""
    src = tmp_path / "App.lnr"
    code_path, json_path = write_component(src, tmp_path, tmp_path / "out", "// code\n", parse_text("App()"))
    assert code_path.read_text() == "// code\n"
    assert json_path is None


def test_write_component_with_sidecar(tmp_path):
    """sidecar=True writes a JSON file beside the code."""
    src = tmp_path / "pages" / "App.lnr"
    code_path, json_path = write_component(
        src, tmp_path, tmp_path / "out", "// code\n", parse_text("App()"), sidecar=True,
    )
    assert code_path == tmp_path / "out" / "pages" / "App.tsx"
    assert json_path == tmp_path / "out" / "pages" / "App.json"
    assert json.loads(json_path.read_text())["component"]["name"] == "App"
