"""Component signature parsing for the first line of a document"""

from lunor.core.diagnostics import DiagnosticsCollector
from lunor.core.grammar import PARAMETER_RE, SIGNATURE_RE
from lunor.core.models import ComponentSignature, DiagnosticCode, Parameter


OPENERS = {'(': ')', '[': ']', '{': '}', '<': '>'}
CLOSERS = set(OPENERS.values())


def split_parameters(params: str) -> list[tuple[str, int]]:
    """Split a parameter list on top-level commas.

    Returns (stripped_entry, offset) pairs where offset is the entry's start
    within params. Commas nested in (), [], {} or <> do not split.
    """
    entries: list[tuple[str, int]] = []
    depth = 0
    start = 0
    for i, ch in enumerate(params + ','):
        if ch in OPENERS:
            depth += 1
        elif ch in CLOSERS and depth:
            depth -= 1
        elif ch == ',' and not depth:
            raw = params[start:i]
            stripped = raw.strip()
            if stripped:
                entries.append((stripped, start + len(raw) - len(raw.lstrip())))
            start = i + 1
    return entries


def parse_signature(line: str, line_no: int, diagnostics: DiagnosticsCollector) -> ComponentSignature:
    """Parse `Name(p1:t1, p2?:t2)`.

    On a malformed line the whole trimmed text becomes the name with no
    parameters; a malformed parameter is reported and skipped.
    """
    text = line.strip()
    lead = len(line) - len(line.lstrip())
    m = SIGNATURE_RE.match(text)
    if not m:
        diagnostics.error(
            DiagnosticCode.invalid_component_signature,
            f"Invalid component signature: {text}",
            line_no, lead, lead + len(text),
        )
        return ComponentSignature(name=text)

    name, params = m.group(1), m.group(2)
    params_col = lead + m.start(2)
    parameters: list[Parameter] = []
    for entry, offset in split_parameters(params):
        parts = PARAMETER_RE.match(entry)
        if not parts:
            col = params_col + offset
            diagnostics.error(
                DiagnosticCode.invalid_prop_definition,
                f"Invalid prop definition: {entry}",
                line_no, col, col + len(entry),
            )
            continue
        parameters.append(Parameter(name=parts.group(1), type=parts.group(3).strip(), optional=bool(parts.group(2))))

    return ComponentSignature(name=name, parameters=parameters)
