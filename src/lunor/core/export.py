"""Export step: write generated components and optional sidecar JSON"""

import json
from pathlib import Path
from typing import Optional

from lunor.core.models import ParseResult


def output_path(source: Path, root: Path, output_dir: Path, ext: str = '.tsx') -> Path:
    """Mirror source's location below root into output_dir with ext as suffix."""
    try:
        rel = source.relative_to(root)
    except ValueError:
        rel = Path(source.name)
    return output_dir / rel.with_suffix(ext)


def build_sidecar(source: Path, result: ParseResult) -> dict:
    """Sidecar JSON: source path, component signature, and diagnostics."""
    return {
        "source": source.as_posix(),
        "component": result.component.model_dump() if result.component else None,
        "diagnostics": [d.model_dump(mode="json") for d in result.diagnostics],
        "imports": list(result.imports),
    }


def write_component(
    source: Path,
    root: Path,
    output_dir: Path,
    code: str,
    result: ParseResult,
    ext: str = '.tsx',
    sidecar: bool = False,
    ) -> tuple[Path, Optional[Path]]:
    """Write generated code (and sidecar JSON if requested) for one source file.

    Returns (code_path, json_path) where json_path is None without a sidecar.
    """
    code_path = output_path(source, root, output_dir, ext)
    code_path.parent.mkdir(parents=True, exist_ok=True)
    code_path.write_text(code, encoding='utf-8')

    json_path = None
    if sidecar:
        json_path = code_path.with_suffix('.json')
        json_path.write_text(json.dumps(build_sidecar(source, result), indent=2), encoding='utf-8')
    return code_path, json_path
