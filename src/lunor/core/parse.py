"""Source discovery and the line-driven parse loop that builds the AST"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from lunor.core.classify.base import SourceLine
from lunor.core.classify.dispatch import classify
from lunor.core.diagnostics import DiagnosticsCollector
from lunor.core.grammar import LIST_ITEM_RE, SCRIPT_IMPORT_RE
from lunor.core.indent import IndentStack, indent_width
from lunor.core.models import BaseNode, DiagnosticCode, InlineScript, Markdown, ParseResult, Span
from lunor.core.signature import parse_signature


logger = logging.getLogger(__name__)

SOURCE_EXTENSIONS = ('.lnr', '.lunor')


@dataclass
class ParseContext:
    """Per-call parse state; the stack, diagnostics, and outputs are its only mutable parts."""
    lines:       tuple[str, ...]
    stack:       IndentStack = field(default_factory=IndentStack)
    diagnostics: DiagnosticsCollector = field(default_factory=DiagnosticsCollector)
    ast:         list = field(default_factory=list)
    imports:     list[str] = field(default_factory=list)
    script_base: dict[int, int] = field(default_factory=dict)


def split_lines(text: str) -> tuple[str, ...]:
    """Split text on newlines, normalising \\r\\n and dropping trailing \\r."""
    return tuple(line.rstrip('\r') for line in text.replace('\r\n', '\n').split('\n'))


def _extend_spans(nodes: Iterable[BaseNode], line_no: int, end_column: int) -> None:
    for node in nodes:
        if node.span is not None:
            node.span.end_line = line_no
            node.span.end_column = end_column


def _capture_script_line(ctx: ParseContext, script: InlineScript, raw: str, indent: int) -> None:
    """Record one more-indented line below a :js opener."""
    text = raw.strip()
    if SCRIPT_IMPORT_RE.match(text):
        if text not in ctx.imports:
            ctx.imports.append(text)
        return
    base = ctx.script_base.setdefault(id(script), indent)
    script.body_lines.append(raw[base:] if indent >= base else text)


def _attach(ctx: ParseContext, parent: Optional[BaseNode], node: BaseNode) -> Optional[BaseNode]:
    """Append node under parent (or at the root) and return the actual target."""
    if parent is None:
        ctx.ast.append(node)
        return None
    target = parent
    # anything other than a list item below an open list belongs to its last item
    if isinstance(parent, Markdown) and parent.is_list and parent.children:
        if not (isinstance(node, Markdown) and node.tag == 'li'):
            target = parent.children[-1]
    target.children.append(node)
    return target


def _parse_line(ctx: ParseContext, line_no: int) -> None:
    raw = ctx.lines[line_no]
    indent = indent_width(raw)
    is_list_item = bool(LIST_ITEM_RE.match(raw.strip()))
    parent = ctx.stack.resolve(indent, continue_list=is_list_item)

    if isinstance(parent, InlineScript):
        _capture_script_line(ctx, parent, raw, indent)
        _extend_spans(ctx.stack.open_nodes(), line_no, len(raw))
        return

    line = SourceLine(
        text=raw,
        number=line_no,
        indent=indent,
        in_list=is_list_item and ctx.stack.in_open_list(indent),
    )
    result = classify(line)
    if result is None:
        return
    ctx.diagnostics.extend(result.diagnostics)
    node = result.node
    if node is None:
        return

    node.span = Span(start_line=line_no, start_column=indent, end_line=line_no, end_column=len(raw))
    for child in node.children:
        child.span = node.span.model_copy()
    target = _attach(ctx, parent, node)
    if target is not None and target is not parent:
        _extend_spans([target], line_no, len(raw))
    ctx.stack.push(node, indent)
    _extend_spans(ctx.stack.open_nodes(), line_no, len(raw))


def parse_text(text: str) -> ParseResult:
    """Parse a Lunor document into its AST, component signature, and diagnostics.

    Never raises for malformed input: problems are reported as diagnostics and
    the offending line is dropped or kept in a best-effort form.
    """
    lines = split_lines(text)
    ctx = ParseContext(lines=lines)

    if not lines[0].strip():
        ctx.diagnostics.error(DiagnosticCode.empty_file, "File must not be empty", 0, 0, 0)
        return ParseResult(diagnostics=ctx.diagnostics.to_list())

    component = parse_signature(lines[0], 0, ctx.diagnostics)
    for line_no in range(1, len(lines)):
        if lines[line_no].strip():
            _parse_line(ctx, line_no)

    logger.debug(
        f"parsed {component.name}: {len(ctx.ast)} root node(s), "
        f"{len(ctx.diagnostics)} diagnostic(s), {len(ctx.imports)} hoisted import(s)"
    )
    return ParseResult(
        ast=ctx.ast,
        component=component,
        diagnostics=ctx.diagnostics.to_list(),
        imports=ctx.imports,
    )


def discover_files(path: Path, extensions: Iterable[str] = SOURCE_EXTENSIONS) -> list[Path]:
    """Return sorted Lunor source files under path, or [path] if a single file."""
    suffixes = set(extensions)
    if path.is_file():
        return [path] if path.suffix in suffixes else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix in suffixes)


def parse_file(path: Path) -> ParseResult:
    """Read and parse a single source file."""
    return parse_text(path.read_text(encoding='utf-8'))
