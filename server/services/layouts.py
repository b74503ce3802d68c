"""
Process-wide layout registry and loader.

Shared read-only by every request and WebSocket session; template modules are
imported once per process.
"""

from __future__ import annotations

import logging

from itinera.kernel.converter import HtmlFactory
from itinera.kernel.errors import LayoutResolutionError
from itinera.kernel.loader import LayoutLoader
from itinera.kernel.registry import LayoutRegistry
from itinera.kernel.session import RenderSession
from server.config import settings

logger = logging.getLogger(__name__)

registry = LayoutRegistry()
loader = LayoutLoader(registry)


def new_session() -> RenderSession:
    """A fresh session configured from settings."""
    return RenderSession(loader, settings.session_options())


def html_factory(on_block_error: str | None = None) -> HtmlFactory:
    return HtmlFactory(loader, on_block_error or settings.ON_BLOCK_ERROR)


async def preload_layouts() -> list[str]:
    """Import every configured template module. Returns the types that loaded."""
    loaded = []
    for type_name in loader.layout_config:
        try:
            await loader.load(type_name)
            loaded.append(type_name)
        except LayoutResolutionError as e:
            logger.warning("layouts: could not preload %r: %s", type_name, e)
    return loaded
