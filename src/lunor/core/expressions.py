"""Expression extraction, property tokenization, and literal coercion"""

import json
from dataclasses import dataclass
from typing import Union

from lunor.core.grammar import CALL_OR_MEMBER_RE, EXPRESSION_RE, NUMBER_RE
from lunor.core.models import Expression, Value


QUOTES = ('"', "'")


def extract_expression(text: str) -> Union[Expression, str]:
    """Return an Expression if text is exactly one {...} span, else text unchanged.

    Nested or multiple interpolations inside one fragment are left as literal text.
    """
    m = EXPRESSION_RE.match(text)
    if m:
        return Expression(raw=m.group(1).strip())
    return text


@dataclass(frozen=True)
class PropToken:
    text:  str
    start: int      # column of the first character within the source line

    @property
    def end(self) -> int:
        return self.start + len(self.text)


def tokenize_props(text: str, offset: int = 0) -> list[PropToken]:
    """Split text on whitespace that is outside quotes and {...} spans.

    offset is the column where text begins in the source line, so each
    token's start points back into that line.
    """
    tokens: list[PropToken] = []
    quote = None
    depth = 0
    start = None

    for i, ch in enumerate(text):
        if start is None:
            if ch.isspace():
                continue
            start = i
        if quote:
            if ch == quote:
                quote = None
        elif ch in QUOTES:
            quote = ch
        elif ch == '{':
            depth += 1
        elif ch == '}' and depth:
            depth -= 1
        elif ch.isspace() and not depth:
            tokens.append(PropToken(text[start:i], offset + start))
            start = None

    if start is not None:
        tokens.append(PropToken(text[start:], offset + start))
    return tokens


def _unquote(value: str) -> tuple[str, bool]:
    if len(value) >= 2 and value[0] in QUOTES and value[-1] == value[0]:
        return value[1:-1], True
    return value, False


def coerce_prop_value(value: str) -> Value:
    """Convert a raw property value into an Expression, bool, number, or string."""
    expr = extract_expression(value)
    if isinstance(expr, Expression):
        return expr
    text, quoted = _unquote(value)
    if quoted:
        return text
    if text in ('true', 'false'):
        return text == 'true'
    if NUMBER_RE.match(text):
        number = float(text)
        return int(number) if number.is_integer() and '.' not in text and 'e' not in text.lower() else number
    return text


def parse_declaration_value(value: str) -> Value:
    """Parse a :data/:state value.

    Bare call/member shapes and exact {...} spans become Expressions; anything
    else must parse as JSON once single quotes are normalised to double quotes.
    Raises ValueError when none of these apply.
    """
    value = value.strip()
    if CALL_OR_MEMBER_RE.match(value):
        return Expression(raw=value)
    try:
        return json.loads(value.replace("'", '"'))
    except json.JSONDecodeError as e:
        expr = extract_expression(value)
        if isinstance(expr, Expression):
            return expr
        raise ValueError(str(e)) from e
