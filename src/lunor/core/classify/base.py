"""Shared types for line classifiers"""

from dataclasses import dataclass, field
from typing import Optional

from lunor.core.models import BaseNode, Diagnostic


@dataclass(frozen=True)
class SourceLine:
    """A non-blank physical line plus the read-only context classifiers may consult."""
    text:    str                # raw line, trailing \r removed
    number:  int                # zero-based line number
    indent:  int
    in_list: bool = False       # innermost open container is a list at this indent

    @property
    def stripped(self) -> str:
        return self.text.strip()


@dataclass
class Classification:
    """Result of a classifier that claimed a line.

    node is None when the line was recognised but dropped after a diagnostic.
    """
    node:        Optional[BaseNode] = None
    diagnostics: list[Diagnostic] = field(default_factory=list)
