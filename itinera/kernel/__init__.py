"""
Itinera Kernel — the pure engine.

Four components:
  repair: truncated JSON prefix → closed, parseable text
  registry: named layouts (+ loader: lazy type → template module import)
  dispatch: (data, layout) → HTML, block by block
  session: incremental driver: re-render per chunk, predict the next block

One-shot helpers (from converter): convert, HtmlFactory
"""

from itinera.kernel.converter import HtmlFactory, convert
from itinera.kernel.dispatch import dispatch
from itinera.kernel.loader import LayoutLoader
from itinera.kernel.registry import LayoutRegistry
from itinera.kernel.renderer import render, render_element
from itinera.kernel.repair import repair_json
from itinera.kernel.session import RenderSession

__all__ = [
    "repair_json",
    "LayoutRegistry",
    "LayoutLoader",
    "dispatch",
    "render",
    "render_element",
    "RenderSession",
    "convert",
    "HtmlFactory",
]
