"""
Itinera Kernel — Layout Graph

Text tree of a layout's static structure, annotated with the block that was
rendered last and the blocks expected next. Diagnostic only.

  [Layout: 行程规划]
  ├── routeTitle
  ├── overview <== current
  ├── days <== next
  │   ├── Route overview title
  │   └── Day details (loop)
  └── tips
"""

from __future__ import annotations

from collections.abc import Sequence

from itinera.kernel.types import GraphNode, Layout, PlaceholderLayout

CURRENT_MARKER = " <== current"
NEXT_MARKER = " <== next"


def render_layout_graph(
    layout: Layout | PlaceholderLayout | None,
    current_id: str | None = None,
    next_ids: Sequence[str] = (),
) -> str:
    if layout is None:
        return ""

    graph = f"[Layout: {layout.name}]\n"
    blocks = layout.blocks
    for index, block in enumerate(blocks):
        is_last = index == len(blocks) - 1
        line = ("└── " if is_last else "├── ") + block.id
        if block.id == current_id:
            line += CURRENT_MARKER
        if block.id in next_ids:
            line += NEXT_MARKER
        graph += line + "\n"
        if block.graph:
            graph += _build_tree(block.graph, "    " if is_last else "│   ")
    return graph


def _build_tree(nodes: Sequence[GraphNode], prefix: str) -> str:
    tree = ""
    for index, node in enumerate(nodes):
        is_last = index == len(nodes) - 1
        tree += prefix + ("└── " if is_last else "├── ") + node.name + "\n"
        if node.children:
            tree += _build_tree(node.children, prefix + ("    " if is_last else "│   "))
    return tree
