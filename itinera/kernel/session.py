"""
Itinera Kernel — Incremental Render Session

Stateful driver for streamed JSON. Each call to `process` takes the whole text
received so far, repairs and parses it, resolves the layout for its `type`,
dispatches the blocks and predicts which block(s) will become renderable next.

Phases:
  idle: nothing rendered (initial, after reset, after a parse/layout failure)
  layout_pending: `type` parsed, layout being resolved (may await a module import)
  rendering: layout resolved, blocks dispatched

Parse and layout failures never raise here: they become a placeholder layout.

Reset policies:
  per_chunk: state is cleared before every call; html_output is exactly
    what the latest text renders to
  per_session: each block renders into its own `wrapper-<id>` container;
    containers rendered by earlier chunks persist until the
    block re-renders, the layout changes, or reset() is called

Calls on one session must be awaited one at a time.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from itinera.kernel.dispatch import dispatch
from itinera.kernel.errors import LayoutLoadFailed, LayoutNotFound, NoLayoutConfigured
from itinera.kernel.layout_graph import render_layout_graph
from itinera.kernel.loader import LayoutLoader
from itinera.kernel.repair import ends_with_dangling_comma, repair_json
from itinera.kernel.types import (
    PER_CHUNK,
    Block,
    Layout,
    PlaceholderLayout,
    SessionOptions,
    SessionState,
)

logger = logging.getLogger(__name__)

PHASE_IDLE = "idle"
PHASE_LAYOUT_PENDING = "layout_pending"
PHASE_RENDERING = "rendering"

PARSE_FAILED = "JSON parse failed"
MISSING_TYPE = "Missing type field"
NO_MATCHING_LAYOUT = "No matching layout"


def no_layout_configured(type_name: str) -> str:
    return f"No layout configured: {type_name}"


def layout_load_failed(type_name: str) -> str:
    return f"Layout load failed: {type_name}"


class RenderSession:
    """One stream → one session. Owns its SessionState exclusively."""

    def __init__(self, loader: LayoutLoader, options: SessionOptions | None = None) -> None:
        self.loader = loader
        self.options = options or SessionOptions()
        self.state = SessionState()
        self.buffer = ""
        self.phase = PHASE_IDLE
        self._active_layout: Layout | None = None

    def reset(self) -> None:
        """Forget everything: rendered output, buffer and active layout."""
        self.state.clear()
        self.buffer = ""
        self.phase = PHASE_IDLE
        self._active_layout = None

    async def feed(self, delta: str) -> SessionState:
        """Append a chunk to the session buffer and re-render the whole buffer."""
        self.buffer += delta
        return await self.process(self.buffer)

    async def process(self, text: str) -> SessionState:
        """Render the text received so far (a possibly truncated JSON document)."""
        state = self.state
        if self.options.reset_policy == PER_CHUNK:
            state.clear()
        state.last_processed_block = None
        state.next_possible_nodes = []
        state.layout_changed = False

        state.completed_json = repair_json(text)
        try:
            data = json.loads(state.completed_json)
        except json.JSONDecodeError as e:
            # Expected mid-stream: the text usually stops inside a key or string
            logger.debug("session: repaired text not parseable yet: %s", e)
            self._placeholder(PARSE_FAILED)
            return state

        type_name = data.get("type") if isinstance(data, dict) else None
        if not isinstance(type_name, str) or not type_name:
            self._placeholder(MISSING_TYPE)
            return state

        self.phase = PHASE_LAYOUT_PENDING
        layout = await self._resolve(type_name)
        if layout is None:
            return state

        if layout is not self._active_layout:
            if self._active_layout is not None:
                logger.info("session: layout changed %r → %r", self._active_layout.name, layout.name)
            state.layout_changed = True
            state.block_html = {}
            self._active_layout = layout
        state.current_layout = layout

        result = dispatch(data, layout, self.options.on_block_error)
        if self.options.reset_policy == PER_CHUNK:
            state.html_output = result.html
        else:
            for fragment in result.fragments:
                state.block_html[fragment.block_id] = fragment.html
            state.html_output = _join_containers(layout, state.block_html)

        state.last_processed_block = result.last_block
        if result.last_block is not None:
            state.next_possible_nodes = predict_next_nodes(result.last_block, data[result.last_key], text)

        self.phase = PHASE_RENDERING
        return state

    def snapshot(self) -> dict[str, Any]:
        """Published view of the session for UIs and transports."""
        state = self.state
        current = state.last_processed_block.id if state.last_processed_block else None
        return {
            "phase": self.phase,
            "layout": state.current_layout.name if state.current_layout else None,
            "current_node": current,
            "next_nodes": list(state.next_possible_nodes),
            "html": state.html_output,
            "completed_json": state.completed_json,
            "layout_changed": state.layout_changed,
            "layout_graph": render_layout_graph(state.current_layout, current, state.next_possible_nodes),
        }

    async def _resolve(self, type_name: str) -> Layout | None:
        try:
            return await self.loader.load(type_name)
        except NoLayoutConfigured:
            self._placeholder(no_layout_configured(type_name))
        except LayoutLoadFailed:
            self._placeholder(layout_load_failed(type_name))
        except LayoutNotFound:
            self._placeholder(NO_MATCHING_LAYOUT)
        return None

    def _placeholder(self, name: str) -> None:
        self.state.current_layout = PlaceholderLayout(name)
        self.phase = PHASE_IDLE


def predict_next_nodes(last_block: Block, value: Any, raw_text: str) -> list[str]:
    """
    Block ids expected next.

    A list value followed by a dangling comma means more elements of the same
    block are still arriving; the block's declared successors follow.
    """
    nodes: list[str] = []
    if isinstance(value, list) and ends_with_dangling_comma(raw_text):
        nodes.append(last_block.id)
    nodes.extend(last_block.next)
    return list(dict.fromkeys(nodes))


def _join_containers(layout: Layout, block_html: dict[str, str]) -> str:
    return "".join(
        f'<div id="wrapper-{block.id}">{block_html[block.id]}</div>'
        for block in layout.blocks
        if block.id in block_html
    )
