"""CLI command implementations"""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer

from lunor.config import Settings, load_config
from lunor.core.models import Diagnostic, DocumentSymbol, Severity
from lunor.core.parse import parse_file, parse_text, split_lines
from lunor.core.pipeline import run_check, run_compile
from lunor.core.resolve import discover_components
from lunor.core.symbols import project_symbols
from lunor.log import configure_logging


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    configure_logging(settings.log_level)
    return settings


def _format_diagnostic(path: Path, diag: Diagnostic) -> str:
    code = f"[{diag.code.value}]" if diag.code else ""
    col = diag.range.start.character + 1
    return f"{path}:{diag.line}:{col}: {diag.severity.name}{code} {diag.message}"


def _echo_symbol(symbol: DocumentSymbol, depth: int = 0) -> None:
    typer.echo(f"{'  ' * depth}{symbol.name} ({symbol.kind.name}, line {symbol.range.start.line + 1})")
    for child in symbol.children:
        _echo_symbol(child, depth + 1)


def main_callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    ):
    """Lunor view-markup compiler."""
    configure_logging(verbose=verbose)


def compile_cmd(
    path: Annotated[str, typer.Argument(help="Source file or directory to compile")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    root: Annotated[Optional[str], typer.Option("--root", help="Workspace root for component resolution")] = None,
    ext: Annotated[Optional[str], typer.Option("--ext", help="Output suffix: .tsx or .jsx")] = None,
    sidecar: Annotated[Optional[bool], typer.Option("--sidecar/--no-sidecar", help="Write JSON sidecar per component")] = None,
    strict: Annotated[bool, typer.Option("--strict", help="Exit 1 if any file has errors")] = False,
    ):
    """Compile Lunor sources into React components."""
    settings = _settings(overrides={"output_dir": out, "output_ext": ext, "write_sidecar": sidecar})
    src = Path(path)
    if not src.exists():
        _fail(f"Path not found: {src}")
    output_dir = Path(settings.output_dir)

    try:
        outcomes = run_compile(src, settings, output_dir, Path(root) if root else None)
    except RuntimeError as e:
        _fail(str(e))
    if not outcomes:
        typer.echo("No Lunor sources found.")
        raise typer.Exit(1)

    errors = 0
    for outcome in outcomes:
        status = "failed" if outcome.failed else f"{len(outcome.diagnostics)} diagnostic(s)"
        typer.echo(f"  {outcome.source} -> {outcome.output} ({status})")
        for diag in outcome.diagnostics:
            typer.echo(f"    {_format_diagnostic(outcome.source, diag)}")
        errors += outcome.failed or any(d.severity == Severity.error for d in outcome.diagnostics)
    typer.echo(f"Compiled {len(outcomes)} component(s) to {output_dir}/")
    if strict and errors:
        raise typer.Exit(1)


def check_cmd(
    path: Annotated[str, typer.Argument(help="Source file or directory to check")],
    ):
    """Report diagnostics without generating code."""
    settings = _settings()
    try:
        results = run_check(Path(path), tuple(settings.source_extensions))
    except RuntimeError as e:
        _fail(str(e))

    total = errors = 0
    for source, diagnostics in results:
        for diag in diagnostics:
            typer.echo(_format_diagnostic(source, diag))
        total += len(diagnostics)
        errors += sum(1 for d in diagnostics if d.severity == Severity.error)
    typer.echo(f"Checked {len(results)} file(s): {total} diagnostic(s)")
    if errors:
        raise typer.Exit(1)


def ast_cmd(
    path: Annotated[str, typer.Argument(help="Source file to parse")],
    ):
    """Print the parse result (AST, signature, diagnostics) as JSON."""
    try:
        result = parse_file(Path(path))
    except (OSError, UnicodeDecodeError) as e:
        _fail(f"Cannot read {path}", e)
    typer.echo(result.model_dump_json(indent=2))


def symbols_cmd(
    path: Annotated[str, typer.Argument(help="Source file to outline")],
    ):
    """Print the document symbol outline."""
    try:
        text = Path(path).read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        _fail(f"Cannot read {path}", e)
    symbols = project_symbols(parse_text(text), len(split_lines(text)))
    if not symbols:
        typer.echo("No component signature found.")
        raise typer.Exit(1)
    for symbol in symbols:
        _echo_symbol(symbol)


def components_cmd(
    root: Annotated[str, typer.Argument(help="Workspace root to scan")] = ".",
    as_json: Annotated[bool, typer.Option("--json", help="Print the map as JSON")] = False,
    ):
    """List components discovered under a workspace root."""
    settings = _settings()
    mapping = discover_components(Path(root), settings.source_extensions)
    if as_json:
        typer.echo(json.dumps(mapping, indent=2))
        return
    if not mapping:
        typer.echo("No components found.")
        raise typer.Exit(1)
    for tag, rel in mapping.items():
        typer.echo(f"{tag}: {rel}")
