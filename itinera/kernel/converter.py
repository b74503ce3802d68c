"""
Itinera Kernel — Converter

Embeddable, one-shot API:
  convert(json_string, layout)      → HTML (synchronous, raises on bad input)
  HtmlFactory(loader).create(json)  → HTML (async, resolves the layout from `type`)

Unlike the streaming session, every failure here is raised to the caller.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from itinera.kernel.dispatch import dispatch
from itinera.kernel.errors import InvalidArgumentsError, MissingTypeError, ParseError
from itinera.kernel.loader import LayoutLoader
from itinera.kernel.repair import repair_json
from itinera.kernel.types import EMIT_MARKER, Layout

logger = logging.getLogger(__name__)


def convert(json_string: str, layout: Layout, on_block_error: str = EMIT_MARKER) -> str:
    """
    Convert a (possibly truncated) JSON document to HTML with the given layout.

    Raises:
        InvalidArgumentsError: empty text, or a layout without blocks
        ParseError: the text is not valid JSON even after repair
    """
    if not json_string or layout is None or not getattr(layout, "blocks", None):
        raise InvalidArgumentsError("A valid JSON string and layout object are required.")

    data = parse_document(json_string)
    if not isinstance(data, dict):
        raise ParseError(f"Expected a JSON object, got {type(data).__name__}")

    if data.get("type") != layout.name:
        logger.warning(
            "converter: JSON type %r does not match layout name %r, rendering may be incomplete",
            data.get("type"),
            layout.name,
        )

    return dispatch(data, layout, on_block_error).html


def parse_document(json_string: str) -> Any:
    """Repair then parse. Raises ParseError with the parser's message."""
    try:
        return json.loads(repair_json(json_string))
    except json.JSONDecodeError as e:
        raise ParseError(f"Failed to parse JSON string: {e}") from e


class HtmlFactory:
    """Resolves the layout from the document's `type`, then converts."""

    def __init__(self, loader: LayoutLoader, on_block_error: str = EMIT_MARKER) -> None:
        self.loader = loader
        self.on_block_error = on_block_error

    async def create(self, json_string: str) -> str:
        """
        Raises:
            ParseError: invalid JSON
            MissingTypeError: no `type` property
            NoLayoutConfigured / LayoutLoadFailed / LayoutNotFound: layout resolution
        """
        layout = await self.resolve(json_string)
        return convert(json_string, layout, self.on_block_error)

    async def resolve(self, json_string: str) -> Layout:
        data = parse_document(json_string)
        type_name = data.get("type") if isinstance(data, dict) else None
        if not type_name or not isinstance(type_name, str):
            raise MissingTypeError("The provided JSON must have a `type` property.")
        return await self.loader.load(type_name)
