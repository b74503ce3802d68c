"""行程规划 (trip plan): route title, overview, day-by-day plan, tips, food map."""

from __future__ import annotations

from itinera.kernel.types import (
    Block,
    DayListNode,
    ElementNode,
    ExactKey,
    GraphNode,
    Layout,
    OverviewField,
    OverviewNode,
    ProductNode,
    TitledBlockNode,
)

SECTION_TITLE_CLASS = "trip-plan-overview route-plan-overview"


def _overview_field(json_key: str, icon: str, label: str) -> OverviewField:
    return OverviewField(
        json_key=json_key,
        class_name="overview-item",
        icon=ElementNode(tag="i", class_name=f"iconfont {icon} overview-item-icon"),
        label=ElementNode(tag="span", class_name="overview-item-label", static_text=label),
        value=ElementNode(tag="span", class_name="overview-item-text"),
    )


def _titled(title: str) -> TitledBlockNode:
    return TitledBlockNode(
        title=ElementNode(tag="div", class_name=SECTION_TITLE_CLASS, static_text=title),
        content=ElementNode(tag="div", class_name="plan-other-info"),
    )


layout = Layout(
    name="行程规划",
    blocks=(
        Block(
            id="routeTitle",
            matcher=ExactKey("routeTitle"),
            mapping=ElementNode(tag="div", class_name="route-plan-title"),
            next=("overview",),
        ),
        Block(
            id="overview",
            matcher=ExactKey("overview"),
            mapping=OverviewNode(
                title=ElementNode(tag="div", class_name="trip-plan-overview", static_text="行程总览"),
                fields=(
                    _overview_field("days", "iconxj-tianshu", "天数："),
                    _overview_field("play", "iconxj-youwan", "游玩："),
                    _overview_field("budget", "iconxj-yusuan", "预算："),
                ),
            ),
            next=("days",),
        ),
        Block(
            id="days",
            matcher=ExactKey("days"),
            mapping=DayListNode(
                overview=ElementNode(tag="div", class_name=SECTION_TITLE_CLASS, static_text="线路概览"),
                item_product=ProductNode(),
            ),
            next=("tips",),
            graph=(
                GraphNode("线路概览标题"),
                GraphNode("每日概要链接 (循环)"),
                GraphNode(
                    "每日详情 (循环)",
                    (
                        GraphNode("头部 (日期/标题)"),
                        GraphNode(
                            "行程项 (循环)",
                            (
                                GraphNode("时间与介绍"),
                                GraphNode("关联产品", (GraphNode("产品主图与名称"), GraphNode("子产品列表 (循环)"))),
                            ),
                        ),
                    ),
                ),
            ),
        ),
        Block(id="tips", matcher=ExactKey("tips"), mapping=_titled("&#x2757; 注意事项"), next=("foodMap",)),
        Block(id="foodMap", matcher=ExactKey("foodMap"), mapping=_titled("&#x1F372; 美食地图")),
    ),
)
