"""Read-only table of compiled line patterns for the Lunor grammar"""

import re


# Line 0
SIGNATURE_RE = re.compile(r'^(\w+)\((.*)\)$')
PARAMETER_RE = re.compile(r'^([A-Za-z_]\w*)(\?)?\s*:\s*(\S.*)$')

# Directives
DECLARATION_RE = re.compile(r'^:(data|state)\s+(\w+)\s*=\s*(.+)$')
FOR_RE = re.compile(r'^:(?:for|forEach)\s+(\w+)\s+in\s+([\w.]+)$')
IF_RE = re.compile(r'^:if\s+(.+)$')
FETCH_RE = re.compile(
    r'^:fetch\s+(\w+)\s*\(\s*(.+?)\s*\)\s+from\s+"([^"]+)"\s+(GET|POST|PUT|DELETE)(?:\s+(auth))?\s*$'
)
SCRIPT_RE = re.compile(r'^:js(?:\s+(.+))?$')
COMPONENT_RE = re.compile(r'^:([A-Za-z_]\w*)(?:\s+(.*))?$')
SCRIPT_IMPORT_RE = re.compile(r'^import\s.+;?$')

# Keywords that never fall through to a component invocation
RESERVED_DIRECTIVES = {'data', 'state', 'for', 'forEach', 'if', 'fetch', 'js'}

# Values and expressions
EXPRESSION_RE = re.compile(r'^\{([^{}]+)\}$')
EXPRESSION_SPAN_RE = re.compile(r'\{([^{}]+)\}')
CALL_OR_MEMBER_RE = re.compile(r'^[A-Za-z_$][\w$]*(?:\([^()]*\)|\.[A-Za-z_$][\w$]*)+$')
NUMBER_RE = re.compile(r'^-?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$')

# Markdown
BOLD_RE = re.compile(r'^\*\*(.+?)\*\*$')
ITALIC_RE = re.compile(r'^\*(.+?)\*$')
LINK_RE = re.compile(r'^\[([^\]]*)\]\(([^)]+)\)$')
IMAGE_RE = re.compile(r'^!\[([^\]]*)\]\(([^)]+)\)$')
HEADER_RE = re.compile(r'^(#{1,6})\s+(.+)$')
LIST_ITEM_RE = re.compile(r'^-\s+(.+)$')
STYLE_SUFFIX_RE = re.compile(r'^(.*?)\s*\bstyle="([^"]*)"\s*$')
