"""
Itinera Kernel — Block Dispatcher

Pure function: (parsed data, layout) → DispatchResult.

For each block in declared order, the first top-level key accepted by the
block's matcher is rendered. Unmatched blocks are skipped. A failing renderer
only costs its own block: the error is logged and, depending on policy, an
inline marker takes its place.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from itinera.kernel.errors import BlockRenderError
from itinera.kernel.renderer import render
from itinera.kernel.types import (
    COLLECTION_NODES,
    EMIT_MARKER,
    Block,
    BlockFragment,
    DispatchResult,
    Layout,
    PlaceholderLayout,
    as_node_sequence,
)

logger = logging.getLogger(__name__)


def dispatch(
    data: Mapping[str, Any],
    layout: Layout | PlaceholderLayout,
    on_block_error: str = EMIT_MARKER,
) -> DispatchResult:
    """
    Render every matchable block of `layout` against `data`.

    last_block is the last block (in declaration order) that matched a key,
    whether or not its render succeeded. A matcher that raises is reported
    like a render failure, and its block does not count as matched.
    """
    result = DispatchResult()
    keys = list(data)
    parts: list[str] = []

    for block in layout.blocks:
        key = None
        try:
            key = find_matching_key(block, keys)
            if key is None:
                continue
            html = render_block(block, data[key])
            fragment = BlockFragment(block_id=block.id, key=key, html=html)
        except Exception as e:
            error = BlockRenderError(block.id, e)
            logger.error("dispatch: %s", error, exc_info=True)
            html = error_marker(block.id) if on_block_error == EMIT_MARKER else ""
            fragment = BlockFragment(block_id=block.id, key=key or "", html=html, error=str(error))

        parts.append(fragment.html)
        result.fragments.append(fragment)
        if key is not None:
            result.last_block = block
            result.last_key = key

    result.html = "".join(parts)
    return result


def find_matching_key(block: Block, keys: list[str]) -> str | None:
    """First key (in data order) the block's matcher accepts."""
    for key in keys:
        if block.matcher.matches(key):
            return key
    return None


def render_block(block: Block, value: Any) -> str:
    """
    Render one block's value.

    Lists are rendered element by element with the first mapping entry, unless
    the mapping is a collection node that takes the whole list.
    """
    mapping = block.mapping
    if isinstance(value, list) and not isinstance(mapping, COLLECTION_NODES):
        nodes = as_node_sequence(mapping)
        if not nodes:
            return ""
        return "".join(_invoke(block, item, nodes[0]) for item in value)
    return _invoke(block, value, mapping)


def error_marker(block_id: str) -> str:
    return f"<!-- Render Error in block: {block_id} -->"


def _invoke(block: Block, value: Any, mapping: Any) -> str:
    if block.renderer is not None:
        return block.renderer(value, mapping)
    return render(mapping, value)
