"""React/TSX code generation from a parsed Lunor AST

The generator is a direct tree-to-text transform. Rendering markup fills
three side accumulators on an Emitter (runtime imports, declarations, and
inline-script functions) which are assembled around the returned markup.
"""

import json
import re
from dataclasses import dataclass, field
from typing import Callable, Optional

from lunor.core.models import (
    BaseNode,
    Comment,
    Component,
    ComponentSignature,
    Data,
    Expression,
    Fetch,
    For,
    If,
    InlineScript,
    Markdown,
    ParseResult,
    State,
    Text,
    walk,
)
from lunor.core.resolve import ComponentResolver, is_intrinsic


HEADER = "// AUTO-GENERATED by lunor"
DEFAULT_COMPONENT = "App"
DEFAULT_AUTH_TOKEN = 'localStorage.getItem("token")'

ELEMENT_PROP = 'element'
JSX_TAG_RE = re.compile(r'<([A-Z]\w*)')
TOKEN_PLACEHOLDER = '${token}'
JSX_ESCAPE_RE = re.compile(r'[{}<>]')
JSX_ESCAPES = {'{': '{"{"}', '}': '{"}"}', '<': '&lt;', '>': '&gt;'}

# Markup render starts inside `return (` and the wrapping fragment
BODY_LEVEL = 3


class GenerationError(ValueError):
    """Raised when the AST violates an invariant the generator relies on."""


@dataclass
class Emitter:
    unit:         str = "  "
    auth_token:   str = DEFAULT_AUTH_TOKEN
    runtime:      list[str] = field(default_factory=list)
    declarations: list[str] = field(default_factory=list)
    functions:    list[str] = field(default_factory=list)

    def use(self, name: str) -> None:
        if name not in self.runtime:
            self.runtime.append(name)

    def pad(self, level: int) -> str:
        return self.unit * level


# --- literal helpers ---

def setter_name(name: str) -> str:
    return f"set{name[:1].upper()}{name[1:]}"


def escape_jsx_text(text: str) -> str:
    """Escape characters that JSX would otherwise interpret inside element text."""
    return JSX_ESCAPE_RE.sub(lambda m: JSX_ESCAPES[m.group()], text)


def js_value(value) -> str:
    """Serialize a literal or Expression as a JavaScript expression."""
    if isinstance(value, Expression):
        return value.raw
    return json.dumps(value, ensure_ascii=False)


def _content(value) -> str:
    if isinstance(value, Expression):
        return f"{{{value.raw}}}"
    if value is None:
        return ''
    return escape_jsx_text(str(value))


def _camel(prop: str) -> str:
    head, *rest = prop.strip().split('-')
    return head + ''.join(p[:1].upper() + p[1:] for p in rest)


def style_object(css: str) -> str:
    """Convert `color: red; font-size: 2px` into a JSX style object literal."""
    pairs = []
    for decl in css.split(';'):
        name, sep, val = decl.partition(':')
        if sep and name.strip() and val.strip():
            pairs.append(f"{_camel(name)}: {json.dumps(val.strip())}")
    return "{{ " + ", ".join(pairs) + " }}" if pairs else "{{}}"


def _attribute(key: str, value) -> str:
    name = 'className' if key == 'class' else key
    if isinstance(value, Expression):
        return f"{name}={{{value.raw}}}"
    if key == 'style':
        return f"{name}={style_object(value)}"
    return f'{name}="{str(value).replace(chr(34), "&quot;")}"'


def _attributes(attributes: dict) -> str:
    keys = sorted(attributes, key=lambda k: k == 'style')
    return ''.join(' ' + _attribute(k, attributes[k]) for k in keys)


def _prop(value) -> str:
    if isinstance(value, Expression):
        return f"{{{value.raw}}}"
    if isinstance(value, str) and '"' not in value and '\n' not in value:
        return f'"{value}"'
    return f"{{{json.dumps(value, ensure_ascii=False)}}}"


# --- node renderers ---

def _render_children(children: list, level: int, em: Emitter) -> list[str]:
    rendered = (render_node(child, level, em) for child in children)
    return [code for code in rendered if code]


def _render_markdown(node: Markdown, level: int, em: Emitter) -> str:
    pad = em.pad(level)
    tag = node.tag
    attrs = _attributes(node.attributes)
    if tag == 'img':
        return f"{pad}<img{attrs} />"

    inner = _content(node.value)
    inline = [c for c in node.children if isinstance(c, Text)]
    if len(inline) == len(node.children):
        inner += ''.join(_content(c.value) for c in inline)
        return f"{pad}<{tag}{attrs}>{inner}</{tag}>"

    lines = [f"{pad}<{tag}{attrs}>"]
    if inner:
        lines.append(em.pad(level + 1) + inner)
    lines.extend(_render_children(node.children, level + 1, em))
    lines.append(f"{pad}</{tag}>")
    return "\n".join(lines)


def _render_component(node: Component, level: int, em: Emitter) -> str:
    pad = em.pad(level)
    props = ' '.join(f"{key}={_prop(value)}" for key, value in node.props.items())
    opening = f"<{node.name} {props}" if props else f"<{node.name}"
    children = _render_children(node.children, level + 1, em)
    if not children:
        return f"{pad}{opening} />"
    return "\n".join([f"{pad}{opening}>", *children, f"{pad}</{node.name}>"])


def _render_data(node: Data, level: int, em: Emitter) -> str:
    em.declarations.append(f"const {node.name} = {js_value(node.value)};")
    return ''


def _render_state(node: State, level: int, em: Emitter) -> str:
    em.use('useState')
    em.declarations.append(
        f"const [{node.name}, {setter_name(node.name)}] = useState({js_value(node.value)});"
    )
    return ''


def fetch_initial_state(annotation: str) -> tuple[Optional[str], str]:
    """Return (type_argument, initial_value) for a fetch init annotation."""
    annotation = annotation.strip()
    if not annotation:
        return None, 'null'
    if annotation.endswith('[]'):
        return annotation, '[]'
    try:
        json.loads(annotation.replace("'", '"'))
        return None, annotation
    except json.JSONDecodeError:
        return f"{annotation} | null", 'null'


def _header_value(value: str, auth_token: str) -> str:
    value = value.replace('`', '\\`').replace(TOKEN_PLACEHOLDER, f"${{{auth_token}}}")
    return f"`{value}`"


def _render_fetch(node: Fetch, level: int, em: Emitter) -> str:
    if isinstance(node.url, str) and not node.url.strip():
        raise GenerationError(f"Fetch node for '{node.result_variable}' must have a URL")
    em.use('useState')
    em.use('useEffect')

    type_arg, initial = fetch_initial_state(node.initial_value_expression)
    generic = f"<{type_arg}>" if type_arg else ''
    setter = setter_name(node.result_variable)
    em.declarations.append(f"const [{node.result_variable}, {setter}] = useState{generic}({initial});")

    url = node.url.raw if isinstance(node.url, Expression) else json.dumps(node.url)
    if node.headers:
        entries = ', '.join(f"{json.dumps(k)}: {_header_value(v, em.auth_token)}" for k, v in node.headers.items())
        headers = f"{{ {entries} }}"
    else:
        headers = '{}'
    body = f"JSON.stringify({node.body})" if node.body else 'null'

    u = em.unit
    em.declarations.append("\n".join([
        "useEffect(() => {",
        f"{u}fetch({url}, {{",
        f"{u * 2}method: {json.dumps(node.method)},",
        f"{u * 2}headers: {headers},",
        f"{u * 2}body: {body},",
        f"{u}}})",
        f"{u * 2}.then((response) => response.json())",
        f"{u * 2}.then((result) => {setter}(result))",
        f"{u * 2}.catch((error) => console.error(\"Fetch error:\", error));",
        "}, []);",
    ]))
    return ''


def _render_for(node: For, level: int, em: Emitter) -> str:
    em.use('Fragment')
    pad, inner = em.pad(level), em.pad(level + 1)
    index = f"{node.loop_variable}Index"
    return "\n".join([
        f"{pad}{{{node.collection_expression}.map(({node.loop_variable}, {index}) => (",
        f"{inner}<Fragment key={{{index}}}>",
        *_render_children(node.children, level + 2, em),
        f"{inner}</Fragment>",
        f"{pad}))}}",
    ])


def _render_if(node: If, level: int, em: Emitter) -> str:
    pad, inner = em.pad(level), em.pad(level + 1)
    return "\n".join([
        f"{pad}{{{node.condition_expression} && (",
        f"{inner}<>",
        *_render_children(node.children, level + 2, em),
        f"{inner}</>",
        f"{pad})}}",
    ])


def _render_comment(node: Comment, level: int, em: Emitter) -> str:
    text = node.text.replace("*/", "*\\/")
    return f"{em.pad(level)}{{/* {text} */}}"


def _render_script(node: InlineScript, level: int, em: Emitter) -> str:
    if node.signature:
        body = [f"function {node.signature} {{", *(em.unit + line for line in node.body_lines), "}"]
    else:
        body = list(node.body_lines)
    if body:
        em.functions.append("\n".join(body))
    return ''


def _render_text(node: Text, level: int, em: Emitter) -> str:
    return em.pad(level) + _content(node.value)


def _render_expression(node: Expression, level: int, em: Emitter) -> str:
    return f"{em.pad(level)}{{{node.raw}}}"


RENDERERS: dict[type, Callable[..., str]] = {
    Markdown:     _render_markdown,
    Component:    _render_component,
    Data:         _render_data,
    State:        _render_state,
    Fetch:        _render_fetch,
    For:          _render_for,
    If:           _render_if,
    Comment:      _render_comment,
    InlineScript: _render_script,
    Text:         _render_text,
    Expression:   _render_expression,
}


def render_node(node: BaseNode, level: int, em: Emitter) -> str:
    """Render node at nesting level; declaration-like nodes render as ''."""
    renderer = RENDERERS.get(type(node))
    if renderer is None:
        raise GenerationError(f"No renderer for node kind {type(node).__name__}")
    return renderer(node, level, em)


# --- assembly ---

def collect_component_names(ast: list) -> list[str]:
    """Distinct component names referenced in the tree, in first-use order.

    Includes tags referenced from `element={<Tag ... />}` props.
    """
    names: list[str] = []
    for node in walk(ast):
        if not isinstance(node, Component):
            continue
        found = [node.name]
        element = node.props.get(ELEMENT_PROP)
        if isinstance(element, Expression):
            found.extend(JSX_TAG_RE.findall(element.raw))
        names.extend(n for n in found if n not in names)
    return names


def _identifier(name: str) -> str:
    ident = re.sub(r'\W', '_', name).strip('_')
    if not ident or ident[0].isdigit():
        return DEFAULT_COMPONENT
    return ident


def _props_type(signature: ComponentSignature, name: str, unit: str) -> str:
    fields = [
        f"{unit}{re.sub(r'[^A-Za-z0-9_]', '_', p.name)}{'?' if p.optional else ''}: {p.type};"
        for p in signature.parameters
    ]
    return "\n".join([f"type {name}Props = {{", *fields, "};"])


def build_imports(
    names: list[str],
    component_name: str,
    resolver: ComponentResolver,
    hoisted: list[str],
    runtime: list[str],
    runtime_module: str,
    router_module: str,
    ) -> list[str]:
    """Import section: local components, hoisted script imports, router tags, runtime."""
    local = [n for n in names if not is_intrinsic(n) and not resolver.is_well_known(n) and n != component_name]
    router = [n for n in names if resolver.is_well_known(n)]
    lines = [f"import {n} from '{resolver.import_path(n)}';" for n in local]
    lines.extend(dict.fromkeys(hoisted))
    if router:
        lines.append(f"import {{ {', '.join(router)} }} from '{router_module}';")
    if runtime:
        lines.append(f"import {{ {', '.join(runtime)} }} from '{runtime_module}';")
    return lines


def generate_react(
    result: ParseResult,
    resolver: Optional[ComponentResolver] = None,
    indent_width: int = 2,
    runtime_module: str = 'react',
    router_module: str = 'react-router-dom',
    auth_token_expression: str = DEFAULT_AUTH_TOKEN,
    ) -> str:
    """Emit a React function component (TSX) reproducing the parsed document.

    Raises GenerationError on AST invariant violations; callers are expected
    to substitute a fallback output.
    """
    resolver = resolver or ComponentResolver()
    em = Emitter(unit=' ' * indent_width, auth_token=auth_token_expression)
    signature = result.component or ComponentSignature(name=DEFAULT_COMPONENT)
    name = _identifier(signature.name)
    u = em.unit

    body = _render_children(result.ast, BODY_LEVEL, em)
    imports = build_imports(
        collect_component_names(result.ast), name, resolver,
        result.imports, em.runtime, runtime_module, router_module,
    )

    parts = [HEADER, *imports, ""]
    if signature.parameters:
        parts.extend([_props_type(signature, name, u), ""])
        params = ', '.join(re.sub(r'[^A-Za-z0-9_]', '_', p.name) for p in signature.parameters)
        parts.append(f"export default function {name}({{ {params} }}: {name}Props) {{")
    else:
        parts.append(f"export default function {name}() {{")

    for block in em.declarations + em.functions:
        parts.extend(u + line if line else line for line in block.split("\n"))
    if em.declarations or em.functions:
        parts.append("")

    parts.extend([f"{u}return (", f"{u * 2}<>", *body, f"{u * 2}</>", f"{u});", "}", ""])
    return "\n".join(parts)
