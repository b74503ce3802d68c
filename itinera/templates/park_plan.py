"""园区内规划 (in-park plan): route title, overview, numbered stops, tips."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from itinera.kernel.renderer import escape, render_element
from itinera.kernel.types import (
    Block,
    ElementNode,
    ExactKey,
    GraphNode,
    Layout,
    OverviewField,
    OverviewNode,
    TitledBlockNode,
)


def _overview_field(json_key: str, label: str) -> OverviewField:
    return OverviewField(
        json_key=json_key,
        class_name="park-overview-item",
        label=ElementNode(tag="strong", static_text=label),
        value=ElementNode(tag="span"),
    )


# Applied to each element of the `stops` array
STOP_ITEM = ElementNode(
    tag="div",
    class_name="park-stop-item",
    children=(
        ElementNode(
            tag="div",
            class_name="stop-header",
            children=(
                ElementNode(tag="span", class_name="stop-num", data_key="stopNum"),
                ElementNode(tag="h3", class_name="stop-name", data_key="stopName"),
            ),
        ),
        ElementNode(tag="p", class_name="stop-description", data_key="description"),
    ),
)


def render_stop(stop: Any, item: ElementNode) -> str:
    """One stop card. The time line puts the bare value after static text, which an element tree cannot."""
    if not isinstance(stop, Mapping) or not stop:
        return ""
    children = "".join(render_element(child, stop) for child in item.children)
    estimated_time = stop.get("estimated_time")
    if estimated_time:
        children += f'<div class="stop-time">预计用时: {escape(estimated_time)}</div>'
    return f'<div class="{item.class_name}">{children}</div>'


layout = Layout(
    name="园区内规划",
    blocks=(
        Block(
            id="routeTitle",
            matcher=ExactKey("routeTitle"),
            mapping=ElementNode(tag="div", class_name="park-route-title"),
            next=("overview",),
        ),
        Block(
            id="overview",
            matcher=ExactKey("overview"),
            mapping=OverviewNode(
                title=ElementNode(tag="div", class_name="park-overview-container"),
                fields=(
                    _overview_field("duration", "游览时长: "),
                    _overview_field("theme", "主题: "),
                    _overview_field("suggested_for", "适合人群: "),
                ),
            ),
            next=("stops",),
        ),
        Block(
            id="stops",
            matcher=ExactKey("stops"),
            mapping=STOP_ITEM,
            renderer=render_stop,
            next=("tips",),
            graph=(
                GraphNode(
                    "站点 (循环)",
                    (GraphNode("站点头部 (序号/名称)"), GraphNode("描述"), GraphNode("预计用时")),
                ),
            ),
        ),
        Block(
            id="tips",
            matcher=ExactKey("tips"),
            mapping=TitledBlockNode(
                title=ElementNode(tag="h4", static_text="游览提示"),
                content=ElementNode(tag="div", class_name="park-tips"),
            ),
        ),
    ),
)
