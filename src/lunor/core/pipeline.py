"""Pipeline step functions: parse, generate with fallback, compile, and check"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from lunor.config import Settings
from lunor.core.export import write_component
from lunor.core.generate import GenerationError, generate_react
from lunor.core.models import Diagnostic, ParseResult
from lunor.core.parse import discover_files, parse_file, parse_text
from lunor.core.resolve import ComponentResolver


logger = logging.getLogger(__name__)


@dataclass
class CompileOutcome:
    source:      Path
    output:      Path
    sidecar:     Optional[Path]
    diagnostics: list[Diagnostic]
    failed:      bool = False       # generation fell back to the error comment


def fallback_output(name: str, error: Exception) -> str:
    return f"// Error: failed to generate {name}: {error}\n"


def generate_with_fallback(
    result: ParseResult,
    resolver: Optional[ComponentResolver] = None,
    settings: Optional[Settings] = None,
    ) -> tuple[str, bool]:
    """Generate code for a parse result, substituting an error comment on failure.

    Returns (code, failed).
    """
    settings = settings or Settings()
    try:
        code = generate_react(
            result,
            resolver,
            indent_width=settings.indent_width,
            runtime_module=settings.runtime_module,
            router_module=settings.router_module,
            auth_token_expression=settings.auth_token_expression,
        )
    except GenerationError as e:
        name = result.component.name if result.component else "component"
        logger.error(f"generation failed for {name}: {e}")
        return fallback_output(name, e), True
    return code, False


def compile_text(
    text: str,
    resolver: Optional[ComponentResolver] = None,
    settings: Optional[Settings] = None,
    ) -> str:
    """Parse text and return generated code, or a fallback error comment."""
    code, _ = generate_with_fallback(parse_text(text), resolver, settings)
    return code


def run_compile(
    path: Path,
    settings: Settings,
    output_dir: Path,
    root: Optional[Path] = None,
    ) -> list[CompileOutcome]:
    """Compile a file or every source file under a directory into output_dir.

    The resolver is built once from root (default: path itself, or its parent
    for a single file) and shared by every file in the run.
    """
    path = Path(path)
    root = Path(root) if root else (path if path.is_dir() else path.parent)
    files = discover_files(path, settings.source_extensions)
    if not files:
        return []

    resolver = ComponentResolver.from_directory(root, settings.source_extensions)
    outcomes = []
    for source in files:
        try:
            result = parse_file(source)
        except (OSError, UnicodeDecodeError) as e:
            raise RuntimeError(f"Failed to read {source}: {e}") from e
        code, failed = generate_with_fallback(result, resolver, settings)
        code_path, json_path = write_component(
            source, root, output_dir, code, result,
            ext=settings.output_ext, sidecar=settings.write_sidecar,
        )
        logger.info(f"compiled {source} -> {code_path} ({len(result.diagnostics)} diagnostic(s))")
        outcomes.append(CompileOutcome(source, code_path, json_path, result.diagnostics, failed))
    return outcomes


def run_check(path: Path, extensions: tuple = ('.lnr', '.lunor')) -> list[tuple[Path, list[Diagnostic]]]:
    """Parse every source file under path and return its diagnostics."""
    results = []
    for source in discover_files(Path(path), extensions):
        try:
            result = parse_file(source)
        except (OSError, UnicodeDecodeError) as e:
            raise RuntimeError(f"Failed to read {source}: {e}") from e
        results.append((source, result.diagnostics))
    return results
