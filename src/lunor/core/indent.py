"""Indentation stack: decides which open container a new line attaches to"""

from dataclasses import dataclass
from typing import Optional

from lunor.core.models import BaseNode, Markdown, is_container


def indent_width(line: str) -> int:
    """Return the number of leading whitespace characters in line."""
    return len(line) - len(line.lstrip())


@dataclass
class Frame:
    node:   BaseNode
    indent: int


class IndentStack:
    """Stack of open containers paired with the indent they were opened at.

    A line nests only under a strictly shallower frame: every frame whose
    indent is greater than or equal to the new line's indent is closed first.
    The one exception is a list item at the same indent as an open list,
    which keeps that list open so consecutive items become siblings.
    """

    def __init__(self) -> None:
        self._frames: list[Frame] = []

    def resolve(self, indent: int, continue_list: bool = False) -> Optional[BaseNode]:
        """Pop closed frames for a line at indent and return its parent, if any."""
        while self._frames and self._frames[-1].indent >= indent:
            top = self._frames[-1]
            if continue_list and top.indent == indent and isinstance(top.node, Markdown) and top.node.is_list:
                break
            self._frames.pop()
        return self.top

    def push(self, node: BaseNode, indent: int) -> bool:
        """Open node as a candidate parent if it is a container kind."""
        if not is_container(node):
            return False
        self._frames.append(Frame(node, indent))
        return True

    @property
    def top(self) -> Optional[BaseNode]:
        return self._frames[-1].node if self._frames else None

    @property
    def top_indent(self) -> Optional[int]:
        return self._frames[-1].indent if self._frames else None

    def open_nodes(self) -> list[BaseNode]:
        """Return open containers from outermost to innermost."""
        return [f.node for f in self._frames]

    def in_open_list(self, indent: int) -> bool:
        """True if the innermost frame is a list opened at exactly indent."""
        top = self._frames[-1] if self._frames else None
        return bool(top and top.indent == indent and isinstance(top.node, Markdown) and top.node.is_list)

    def __len__(self) -> int:
        return len(self._frames)
