from __future__ import annotations

"""
Folder Structure Parser.

Rebuilds a hierarchical structure from human-authored text. Accepts both
`tree` style listings drawn with box connectors and plain indentation,
tolerating inline `#` comments and decorative icons. The reconstruction is
best-effort: inconsistent indentation attaches entries to the nearest open
directory instead of failing.
"""

import logging
import re
from typing import List, Optional, Tuple

from gitsense.domain.constants import DECORATIVE_ICONS, DEFAULT_INDENT_WIDTH, TREE_GLYPHS
from gitsense.domain.structure_models import NodeKind, ParseResult, StructureNode

logger = logging.getLogger(__name__)

_VARIATION_SELECTOR = "\ufe0f"

_LEADING_RX = re.compile(rf"^[{TREE_GLYPHS}\s]*")
_GLYPHS_ONLY_RX = re.compile(rf"^[{TREE_GLYPHS}\s]*$")
_COMMENT_RX = re.compile(r"\s*#.*$")


def _compile_icon_pattern() -> re.Pattern:
    """Match every allow-listed icon, with or without its variation selector."""
    variants = set()
    for icon in DECORATIVE_ICONS:
        variants.add(icon)
        bare = icon.replace(_VARIATION_SELECTOR, "")
        if bare:
            variants.add(bare)
    # Longest first so multi code point icons are consumed whole
    ordered = sorted(variants, key=len, reverse=True)
    return re.compile("|".join(re.escape(v) for v in ordered) + "|" + _VARIATION_SELECTOR)


_ICON_RX = _compile_icon_pattern()

# Stack frame: (children list receiving new nodes, depth of the owning directory)
_Frame = Tuple[List[StructureNode], int]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def parse_structure(text: Optional[str], *, indent_width: int = DEFAULT_INDENT_WIDTH) -> ParseResult:
    """
    Convert a textual folder listing into an ordered forest of nodes.

    Uses an explicit frame stack seeded with a sentinel root at level -1.
    For every entry, frames at the same or deeper level are popped, the node
    is appended to the remaining top frame and, if it is a directory, its own
    frame is pushed so deeper lines nest inside it.

    Args:
        text: Raw multi-line input. None or blank input yields an empty result.
        indent_width: Characters per indentation level after connector
                      normalization.

    Returns:
        ParseResult: Root nodes plus file and directory totals.

    Raises:
        ValueError: If indent_width is lower than 1.
    """
    if indent_width < 1:
        raise ValueError(f"indent_width must be >= 1, received {indent_width}.")

    roots: List[StructureNode] = []
    if not text:
        return ParseResult(roots=roots)

    frames: List[_Frame] = [(roots, -1)]
    file_count = 0
    dir_count = 0

    for line in text.splitlines():
        if not line.strip() or _GLYPHS_ONLY_RX.match(line):
            continue

        depth = compute_depth(line, indent_width)
        node = _build_node(line, depth)
        if node is None:
            continue

        # The sentinel frame is never popped
        while len(frames) > 1 and frames[-1][1] >= depth:
            frames.pop()

        frames[-1][0].append(node)

        if node.is_dir:
            dir_count += 1
            frames.append((node.children, depth))
        else:
            file_count += 1

    logger.debug(f"Parsed structure: {file_count} files, {dir_count} directories, {len(roots)} roots.")
    return ParseResult(roots=roots, file_count=file_count, dir_count=dir_count)

# -----------------------------------------------------------------------------
# LINE-LEVEL HELPERS
# -----------------------------------------------------------------------------

def compute_depth(line: str, indent_width: int = DEFAULT_INDENT_WIDTH) -> int:
    """
    Derive the indentation level of a single line.

    Connector glyphs and tabs count as a full level width, any other
    leading whitespace as a single character.
    """
    match = _LEADING_RX.match(line)
    prefix = match.group(0) if match else ""

    width = 0
    for ch in prefix:
        if ch in TREE_GLYPHS or ch == "\t":
            width += indent_width
        else:
            width += 1
    return width // indent_width


def clean_name(line: str) -> str:
    """Strip connectors, inline comment and decorative icons from a line."""
    name = _LEADING_RX.sub("", line, count=1)
    name = _COMMENT_RX.sub("", name, count=1)
    name = _ICON_RX.sub("", name)
    return name.strip()


def classify(name: str) -> Tuple[str, NodeKind]:
    """
    Resolve the display name and kind of a cleaned token.

    A trailing slash or a last path segment without a dot marks a
    directory. Extensionless files such as `Dockerfile` are therefore
    classified as directories.
    """
    explicit_dir = name.endswith("/")
    display = name.rstrip("/")
    last_segment = display.rsplit("/", 1)[-1]

    if explicit_dir or "." not in last_segment:
        return display, NodeKind.DIRECTORY
    return display, NodeKind.FILE


def _build_node(line: str, depth: int) -> Optional[StructureNode]:
    name = clean_name(line)
    if not name:
        return None

    display, kind = classify(name)
    if not display:
        return None

    return StructureNode(name=display, kind=kind, depth=depth)
