"""Append-only collection of parse diagnostics"""

from typing import Iterator, Optional

from lunor.core.models import Diagnostic, DiagnosticCode, Range, Severity


def make_diagnostic(
    code: DiagnosticCode,
    message: str,
    line: int,
    start: int,
    end: int,
    severity: Severity = Severity.error,
    ) -> Diagnostic:
    """Build a diagnostic covering columns [start, end) of zero-based line."""
    return Diagnostic(
        message=message,
        severity=severity,
        range=Range.on_line(line, start, end),
        code=code,
    )


class DiagnosticsCollector:
    """Accumulates diagnostics in discovery order; entries are never removed."""

    def __init__(self) -> None:
        self._items: list[Diagnostic] = []

    def add(self, diagnostic: Diagnostic) -> None:
        self._items.append(diagnostic)

    def extend(self, diagnostics: list[Diagnostic]) -> None:
        self._items.extend(diagnostics)

    def error(self, code: DiagnosticCode, message: str, line: int, start: int, end: int) -> Diagnostic:
        diagnostic = make_diagnostic(code, message, line, start, end)
        self.add(diagnostic)
        return diagnostic

    def first(self, code: DiagnosticCode) -> Optional[Diagnostic]:
        return next((d for d in self._items if d.code == code), None)

    def to_list(self) -> list[Diagnostic]:
        return list(self._items)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)
