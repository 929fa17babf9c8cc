"""Classifiers for comments, declarations, control directives, and components"""

import logging
from typing import Optional

from lunor.core.classify.base import Classification, SourceLine
from lunor.core.diagnostics import make_diagnostic
from lunor.core.expressions import coerce_prop_value, extract_expression, parse_declaration_value, tokenize_props
from lunor.core.grammar import (
    COMPONENT_RE,
    DECLARATION_RE,
    EXPRESSION_SPAN_RE,
    FETCH_RE,
    FOR_RE,
    IF_RE,
    RESERVED_DIRECTIVES,
    SCRIPT_RE,
)
from lunor.core.models import (
    Component,
    Comment,
    Data,
    DiagnosticCode,
    Fetch,
    For,
    If,
    InlineScript,
    State,
)


logger = logging.getLogger(__name__)

AUTH_HEADER = "Authorization"
# ${token} is substituted with the configured token expression by the generator
AUTH_TEMPLATE = "Bearer ${token}"


def classify_comment(line: SourceLine) -> Optional[Classification]:
    text = line.stripped
    if text.startswith('//'):
        return Classification(Comment(text=text[2:].strip()))
    return None


def classify_declaration(line: SourceLine) -> Optional[Classification]:
    """`:data name=value` or `:state name=value`."""
    m = DECLARATION_RE.match(line.stripped)
    if not m:
        return None
    keyword, name, raw = m.groups()
    raw = raw.strip()
    try:
        value = parse_declaration_value(raw)
    except ValueError as e:
        code = DiagnosticCode.invalid_state_value if keyword == 'state' else DiagnosticCode.invalid_data_value
        start = line.indent + m.start(3)
        return Classification(None, [make_diagnostic(
            code, f"Invalid value for :{keyword} {name}: {e}", line.number, start, start + len(raw),
        )])
    node_type = State if keyword == 'state' else Data
    return Classification(node_type(name=name, value=value))


def _classify_for(text: str) -> Optional[For]:
    m = FOR_RE.match(text)
    if m:
        return For(loop_variable=m.group(1), collection_expression=m.group(2))
    return None


def _classify_if(text: str) -> Optional[If]:
    m = IF_RE.match(text)
    if not m:
        return None
    condition = m.group(1).strip()
    span = EXPRESSION_SPAN_RE.search(condition)
    if span:
        condition = span.group(1).strip()
    return If(condition_expression=condition)


def _classify_fetch(text: str) -> Optional[Fetch]:
    m = FETCH_RE.match(text)
    if not m:
        return None
    variable, init, url, method, auth = m.groups()
    headers = {AUTH_HEADER: AUTH_TEMPLATE} if auth else {}
    logger.debug(f"fetch directive: variable={variable} init={init} url={url} method={method}")
    return Fetch(
        result_variable=variable,
        initial_value_expression=init.strip(),
        url=extract_expression(url.strip()),
        method=method,
        headers=headers,
    )


def _classify_script(text: str) -> Optional[InlineScript]:
    m = SCRIPT_RE.match(text)
    if m:
        return InlineScript(signature=(m.group(1) or '').strip())
    return None


def classify_directive(line: SourceLine) -> Optional[Classification]:
    """`:for`/`:forEach`, `:if`, `:fetch`, and `:js` lines."""
    text = line.stripped
    if not text.startswith(':'):
        return None
    node = (
        _classify_for(text)
        or _classify_if(text)
        or _classify_fetch(text)
        or _classify_script(text)
    )
    if node is not None:
        return Classification(node)

    keyword = COMPONENT_RE.match(text)
    if keyword and keyword.group(1) in RESERVED_DIRECTIVES:
        start = line.indent
        return Classification(None, [make_diagnostic(
            DiagnosticCode.invalid_directive,
            f"Malformed :{keyword.group(1)} directive: {text}",
            line.number, start, start + len(text),
        )])
    return None


def classify_component(line: SourceLine) -> Optional[Classification]:
    """`:Name prop=value prop2="quoted value" prop3={expr}`."""
    m = COMPONENT_RE.match(line.stripped)
    if not m:
        return None
    name, props_text = m.group(1), m.group(2)
    props = {}
    diagnostics = []
    if props_text:
        offset = line.indent + m.start(2)
        for token in tokenize_props(props_text, offset):
            key, sep, value = token.text.partition('=')
            key, value = key.strip(), value.strip()
            if not sep or not key or not value:
                diagnostics.append(make_diagnostic(
                    DiagnosticCode.invalid_property,
                    f"Invalid property: {token.text}",
                    line.number, token.start, token.end,
                ))
                continue
            props[key] = coerce_prop_value(value)
    return Classification(Component(name=name, props=props), diagnostics)
