from __future__ import annotations

"""
Folder Structure Data Models.

Provides the node types produced by the structure parser and consumed by
the scaffold generator, plus the archive entry record emitted during
scaffold planning.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

class NodeKind(str, Enum):
    """Classification of a parsed entry."""
    FILE = "file"
    DIRECTORY = "dir"


@dataclass
class StructureNode:
    """
    One entry (file or directory) of a parsed folder structure.

    Attributes:
        name: Cleaned display name (no glyphs, comment, icon or trailing slash).
        kind: File or directory classification.
        depth: Indentation level computed from the source line.
        children: Ordered child nodes. Always empty for files.
    """
    name: str
    kind: NodeKind
    depth: int = 0
    children: List["StructureNode"] = field(default_factory=list)

    @property
    def is_dir(self) -> bool:
        return self.kind is NodeKind.DIRECTORY

    @property
    def extension(self) -> str:
        """Lower-cased text after the last dot, empty when there is none."""
        if "." not in self.name:
            return ""
        return self.name.rsplit(".", 1)[1].lower()

    @property
    def base_name(self) -> str:
        """Name with its last extension removed."""
        if "." not in self.name:
            return self.name
        return self.name.rsplit(".", 1)[0]


@dataclass(frozen=True)
class ParseResult:
    """
    Outcome of a structure parse.

    Attributes:
        roots: Top-level nodes (a forest) in input order.
        file_count: Number of file nodes encountered.
        dir_count: Number of directory nodes encountered.
    """
    roots: List[StructureNode] = field(default_factory=list)
    file_count: int = 0
    dir_count: int = 0

    @property
    def is_empty(self) -> bool:
        """True when the input held nothing to parse."""
        return not self.roots

    def max_nesting(self) -> int:
        """Deepest structural level of the forest (roots are 0, -1 if empty)."""
        deepest = -1
        stack = [(node, 0) for node in self.roots]
        while stack:
            node, level = stack.pop()
            deepest = max(deepest, level)
            stack.extend((child, level + 1) for child in node.children)
        return deepest


@dataclass(frozen=True)
class ArchiveEntry:
    """A single file to be written into the scaffold archive."""
    path: str
    content: str
