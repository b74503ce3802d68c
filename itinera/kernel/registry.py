"""
Itinera Kernel — Layout Registry

Holds named layouts. Populated once (at startup or by the loader), then read by
any number of sessions. Registration is insert-if-absent: the first layout
registered under a name wins, so concurrent registration is never observable.
"""

from __future__ import annotations

import logging

from itinera.kernel.types import Layout

logger = logging.getLogger(__name__)


class LayoutRegistry:
    """Name → Layout lookup. No removal."""

    def __init__(self, layouts: list[Layout] | None = None) -> None:
        self._layouts: dict[str, Layout] = {}
        for layout in layouts or []:
            self.register(layout)

    def register(self, layout: Layout) -> bool:
        """
        Register a layout under its name.

        Returns True if it was added, False if the name was already taken
        (the existing layout is kept).
        """
        existing = self._layouts.setdefault(layout.name, layout)
        if existing is not layout:
            logger.debug("registry: layout %r already registered, keeping first", layout.name)
            return False
        logger.debug("registry: registered layout %r with %d blocks", layout.name, len(layout.blocks))
        return True

    def find_by_type(self, type_name: str) -> Layout | None:
        return self._layouts.get(type_name)

    def names(self) -> list[str]:
        return list(self._layouts)

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._layouts

    def __len__(self) -> int:
        return len(self._layouts)
