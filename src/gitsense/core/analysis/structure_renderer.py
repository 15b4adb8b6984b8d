from __future__ import annotations

"""
Structure Renderer.

Converts a parsed forest back into a visual ASCII preview. Directories are
suffixed with a slash so the preview can be fed back into the parser
without changing any classification.
"""

from typing import List, Optional

from gitsense.domain.structure_models import StructureNode

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_structure(
        roots: List[StructureNode],
        lines: Optional[List[str]] = None,
        prefix: str = "",
        show_item_counts: bool = False,
) -> List[str]:
    """
    Recursively transform the forest into a list of preview lines.

    Roots are emitted flush left; their descendants use the standard
    connectors (├──, └──) and keep the stored sibling order.

    Args:
        roots: Nodes to render at the current level.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the current recursion level.
        show_item_counts: Append `# N items` to non-empty directories.

    Returns:
        List[str]: The accumulator, for convenience.
    """
    if lines is None:
        lines = []

    for node in roots:
        lines.append(_label(node, show_item_counts))
        _render_children(node.children, lines, prefix, show_item_counts)

    return lines


def _render_children(
        children: List[StructureNode],
        lines: List[str],
        prefix: str,
        show_item_counts: bool,
) -> None:
    total = len(children)

    for i, node in enumerate(children):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "
        lines.append(f"{prefix}{connector}{_label(node, show_item_counts)}")

        if node.children:
            new_prefix = prefix + ("    " if is_last else "│   ")
            _render_children(node.children, lines, new_prefix, show_item_counts)


def _label(node: StructureNode, show_item_counts: bool) -> str:
    if not node.is_dir:
        return node.name

    label = f"{node.name}/"
    # Rendered as a comment so the parser drops it on re-read
    if show_item_counts and node.children:
        label += f"  # {len(node.children)} items"
    return label
