from __future__ import annotations

"""
Remote Structure Adapter.

Turns the item tree returned by the GitHub collaborator into the same
forest the text parser produces, so a remote layout can be previewed and
scaffolded without a text round-trip. Item kinds come from the API 'type'
field, not from the name heuristic.
"""

from typing import Any, Dict, List, Tuple

from gitsense.domain.structure_models import NodeKind, ParseResult, StructureNode


def structure_from_items(items: List[Dict[str, Any]]) -> ParseResult:
    """
    Convert API items (with optional 'children') into a ParseResult.

    Args:
        items: Top-level items as returned by get_directory_tree.

    Returns:
        ParseResult: Forest with file and directory totals.
    """
    roots: List[StructureNode] = []
    file_count = 0
    dir_count = 0

    # Explicit stack of (source items, destination list, depth)
    stack: List[Tuple[List[Dict[str, Any]], List[StructureNode], int]] = [(items, roots, 0)]

    while stack:
        source, target, depth = stack.pop()
        for item in source:
            name = str(item.get("name", "")).strip()
            if not name:
                continue

            if item.get("type") == "dir":
                node = StructureNode(name=name, kind=NodeKind.DIRECTORY, depth=depth)
                dir_count += 1
                stack.append((item.get("children") or [], node.children, depth + 1))
            else:
                node = StructureNode(name=name, kind=NodeKind.FILE, depth=depth)
                file_count += 1

            target.append(node)

    return ParseResult(roots=roots, file_count=file_count, dir_count=dir_count)
