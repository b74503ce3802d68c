"""
Itinera Kernel — Layout Loader

Resolves a JSON `type` to a Layout, importing the template module that
provides it on first use.

Resolution order:
  1. Registry hit → return it
  2. type → module table (LAYOUT_CONFIG) miss → NoLayoutConfigured
  3. Import the module (once per module path), read its `layout` export,
     register it → LayoutLoadFailed on import error or missing export
  4. Registry lookup again → LayoutNotFound if the module registered another name

The import is the only suspension point of a render pass: it runs off the
event loop, and its result is memoised for the lifetime of the loader.
"""

from __future__ import annotations

import asyncio
import importlib
import logging
from collections.abc import Mapping
from types import ModuleType

from itinera.kernel.errors import LayoutLoadFailed, LayoutNotFound, NoLayoutConfigured
from itinera.kernel.registry import LayoutRegistry
from itinera.kernel.types import Layout

logger = logging.getLogger(__name__)


class LayoutLoader:
    """Lazy, memoised type → Layout resolution backed by a registry."""

    def __init__(self, registry: LayoutRegistry, layout_config: Mapping[str, str] | None = None) -> None:
        if layout_config is None:
            from itinera.templates import LAYOUT_CONFIG

            layout_config = LAYOUT_CONFIG
        self.registry = registry
        self.layout_config = dict(layout_config)
        self._modules: dict[str, ModuleType] = {}

    async def load(self, type_name: str) -> Layout:
        """
        Return the layout for `type_name`, importing its module if needed.

        Raises:
            NoLayoutConfigured: type not in the layout table
            LayoutLoadFailed: module import failed or it exports no `layout`
            LayoutNotFound: module loaded but no layout is registered for the type
        """
        layout = self.registry.find_by_type(type_name)
        if layout is not None:
            return layout

        module_path = self.layout_config.get(type_name)
        if not module_path:
            raise NoLayoutConfigured(f'No layout configured for type: "{type_name}"', type_name)

        module = await self._import(module_path, type_name)

        exported = getattr(module, "layout", None)
        if not isinstance(exported, Layout):
            raise LayoutLoadFailed(f"Module {module_path} does not export a 'layout' object", type_name)
        self.registry.register(exported)

        layout = self.registry.find_by_type(type_name)
        if layout is None:
            raise LayoutNotFound(f'Module {module_path} provides no layout for type "{type_name}"', type_name)
        return layout

    def is_loaded(self, module_path: str) -> bool:
        return module_path in self._modules

    async def _import(self, module_path: str, type_name: str) -> ModuleType:
        module = self._modules.get(module_path)
        if module is not None:
            return module

        try:
            module = await asyncio.to_thread(importlib.import_module, module_path)
        except Exception as e:
            logger.error("loader: failed to import layout module %s: %s", module_path, e)
            raise LayoutLoadFailed(f'Could not load layout for type "{type_name}"', type_name) from e

        logger.info("loader: loaded layout module %s for type %r", module_path, type_name)
        return self._modules.setdefault(module_path, module)
