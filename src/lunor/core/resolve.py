"""Workspace component discovery and tag-to-import-path resolution"""

import logging
from pathlib import Path
from typing import Iterable, Mapping, Optional

from lunor.core.grammar import SIGNATURE_RE
from lunor.core.parse import SOURCE_EXTENSIONS, discover_files


logger = logging.getLogger(__name__)

# Router primitives imported from the router package instead of local files
WELL_KNOWN_TAGS = ('BrowserRouter', 'HashRouter', 'Routes', 'Route', 'Link', 'NavLink', 'Navigate', 'Outlet')


def _declared_tag(path: Path) -> Optional[str]:
    """Read only the first line of path and return its declared component name."""
    with path.open(encoding='utf-8') as f:
        first = f.readline().strip()
    m = SIGNATURE_RE.match(first)
    return m.group(1) if m else None


def discover_components(root: Path, extensions: Iterable[str] = SOURCE_EXTENSIONS) -> dict[str, str]:
    """Map each declared component name under root to its relative path without extension.

    Unreadable files are skipped. When two files declare the same name the
    first in sorted path order wins.
    """
    root = Path(root)
    if not root.is_dir():
        return {}
    mapping: dict[str, str] = {}
    for path in discover_files(root, extensions):
        try:
            tag = _declared_tag(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"skipping unreadable {path}: {e}")
            continue
        if tag is None:
            continue
        rel = path.relative_to(root).with_suffix('').as_posix()
        if tag in mapping:
            logger.warning(f"component {tag} declared in both {mapping[tag]} and {rel}; keeping {mapping[tag]}")
            continue
        mapping[tag] = rel
    logger.debug(f"discovered {len(mapping)} component(s) under {root}")
    return mapping


def is_intrinsic(tag: str) -> bool:
    """Lowercase-initial tags are plain markup elements and never imported."""
    return not tag[:1].isupper()


class ComponentResolver:
    """Resolves component tag names to import paths using a discovery map."""

    def __init__(self, mapping: Optional[Mapping[str, str]] = None, well_known: Iterable[str] = WELL_KNOWN_TAGS):
        self.mapping = dict(mapping or {})
        self.well_known = frozenset(well_known)

    @classmethod
    def from_directory(cls, root: Path, extensions: Iterable[str] = SOURCE_EXTENSIONS) -> "ComponentResolver":
        return cls(discover_components(root, extensions))

    def is_well_known(self, tag: str) -> bool:
        return tag in self.well_known

    def import_path(self, tag: str) -> str:
        """Relative import path for tag; unresolved names fall back to the bare name."""
        return f"./{self.mapping.get(tag, tag)}"
