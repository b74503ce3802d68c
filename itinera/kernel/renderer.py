"""
Itinera Kernel — Renderer

Pure function: (render node, data fragment) → HTML fragment string.
No IO. Deterministic: same input → same output, always.

One entry point, `render`, dispatches over the closed set of node kinds:
  ElementNode: recursive element mapping (tag/class/static text/data key)
  OverviewNode: static title + labelled fields read from an object
  DayListNode: day links + per-day details (collection: takes the whole list)
  ProductNode: product card with sub-products
  TitledBlockNode: static title + multi-line text

Data-derived text is HTML-escaped. Static text is authored in the template
modules and emitted verbatim (it may carry entities such as &#x2757;).
"""

from __future__ import annotations

from collections.abc import Mapping
from html import escape as _html_escape
from typing import Any

import chevron

from itinera.kernel.types import (
    DayListNode,
    ElementNode,
    OverviewNode,
    ProductNode,
    RenderNode,
    TitledBlockNode,
)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def render(node: RenderNode | None, data: Any) -> str:
    """Render any node kind against a data fragment."""
    if node is None:
        return ""
    if isinstance(node, (tuple, list)):
        # A node sequence is not an element of its own
        return ""
    if isinstance(node, ElementNode):
        return render_element(node, data)
    if isinstance(node, OverviewNode):
        return _render_overview(node, data)
    if isinstance(node, DayListNode):
        return _render_day_list(node, data)
    if isinstance(node, ProductNode):
        return render_product(node, data)
    if isinstance(node, TitledBlockNode):
        return _render_titled_block(node, data)
    raise TypeError(f"Unknown render node: {type(node).__name__}")


def render_element(node: ElementNode | None, data: Any) -> str:
    """
    Render one element mapping recursively.

    Precedence:
      1. static_text: emitted as-is (wrapped in the tag when one is given)
      2. no tag or falsy fragment: empty string
      3. data_key: content is data[data_key]; a leaf with no value is omitted
      4. otherwise: a scalar fragment is the content itself
    Children always render against the same fragment.
    """
    if node is None:
        return ""

    if node.static_text:
        if not node.tag:
            return node.static_text
        return _wrap(node, data, node.static_text)

    if not node.tag or not data:
        return ""

    if node.data_key:
        value = data.get(node.data_key) if isinstance(data, Mapping) else None
        content = _scalar_text(value)
        if not content and not node.children:
            return ""
    else:
        content = _scalar_text(data)

    return _wrap(node, data, content)


def escape(text: Any) -> str:
    """HTML-escape user content."""
    return _html_escape(str(text), quote=True)


# ---------------------------------------------------------------------------
# Element helpers
# ---------------------------------------------------------------------------


def _wrap(node: ElementNode, data: Any, content: str) -> str:
    children_html = "".join(render_element(child, data) for child in node.children)
    return f"<{node.tag}{_attributes(node, data)}>{content}{children_html}</{node.tag}>"


def _attributes(node: ElementNode, data: Any) -> str:
    attrs = ""
    if node.class_name:
        attrs += f' class="{escape(node.class_name)}"'
    if isinstance(data, Mapping):
        if node.href_key and data.get(node.href_key):
            attrs += f' href="{escape(data[node.href_key])}"'
        if node.src_key and data.get(node.src_key):
            attrs += f' src="{escape(data[node.src_key])}"'
    return attrs


def _scalar_text(value: Any) -> str:
    """Escaped text for a truthy scalar; empty for falsy values, objects and lists."""
    if isinstance(value, bool) or not value:
        return ""
    if isinstance(value, (str, int, float)):
        return escape(value)
    return ""


# ---------------------------------------------------------------------------
# Overview
# ---------------------------------------------------------------------------


def _render_overview(node: OverviewNode, data: Any) -> str:
    if not isinstance(data, Mapping):
        raise TypeError(f"overview expects an object, got {type(data).__name__}")

    parts = [render_element(node.title, None)]
    for field in node.fields:
        value = data.get(field.json_key)
        if not value:
            continue
        icon_html = render_element(field.icon, None) if field.icon else ""
        label_html = render_element(field.label, None)
        value_html = render_element(field.value, value)
        parts.append(f'<div class="{escape(field.class_name)}">{icon_html}{label_html}{value_html}</div>')
    return "".join(parts)


# ---------------------------------------------------------------------------
# Day list and products (Mustache templates)
# ---------------------------------------------------------------------------

DAY_LIST_TEMPLATE = (
    "{{{overview}}}"
    "{{#days}}"
    '<div class="trip-plan-day"><span class="day-num">{{dayNum}}</span>'
    '<span class="day-detail">{{dayTitle}}</span></div>'
    "{{/days}}"
    '<div class="plan-fgx"></div>'
    "{{#days}}"
    '<div class="day-item-header">'
    '<div class="day-item-num"><div class="day-title">{{numTitle}}</div><div class="day-sort">{{numSort}}</div></div>'
    '<div class="day-item-info">{{dayTitle}}</div>'
    "</div>"
    "{{#items}}"
    '<div class="day-item-main">'
    '<div class="day-item-name"><div class="item-circle"><span class="big-circle"><span class="small-circle"></span>'
    '</span></div><div class="item-name">{{name}}</div></div>'
    '<div class="day-item-content"><div class="day-item-time">{{time}}</div>'
    '<div class="day-item-intro">{{intro}}</div>{{{product}}}</div>'
    "</div>"
    "{{/items}}"
    "{{/days}}"
)

PRODUCT_TEMPLATE = (
    '<div class="{{container_class}}">'
    '<img src="{{img}}" class="{{img_class}}">'
    '<div class="{{info_class}}">'
    '<div class="{{name_class}}"><span class="pro-name">{{name}}</span></div>'
    "{{#has_subs}}"
    '<div class="{{sub_product_container_class}}">'
    '{{#subs}}<div class="{{sub_product_class}}">{{name}} - ¥{{price}}</div>{{/subs}}'
    "</div>"
    "{{/has_subs}}"
    "</div>"
    "</div>"
)


def _render_day_list(node: DayListNode, data: Any) -> str:
    if not isinstance(data, list):
        raise TypeError(f"day list expects an array, got {type(data).__name__}")

    days = []
    for day in data:
        # "第1天 D1" → title "第1天", sort "D1"
        num_parts = _text(day.get("dayNum")).split(" ")
        items = []
        for item in day.get("items") or []:
            product = item.get("product")
            name = (isinstance(product, Mapping) and _text(product.get("productName"))) or _text(item.get("intro"))
            items.append(
                {
                    "name": name,
                    "time": _text(item.get("time")),
                    "intro": _text(item.get("intro")),
                    "product": render_product(node.item_product, product) if product else "",
                }
            )
        days.append(
            {
                "dayNum": _text(day.get("dayNum")),
                "dayTitle": _text(day.get("dayTitle")),
                "numTitle": num_parts[0],
                "numSort": num_parts[1] if len(num_parts) > 1 else "",
                "items": items,
            }
        )

    context = {"overview": render_element(node.overview, None), "days": days}
    return chevron.render(DAY_LIST_TEMPLATE, context)


def render_product(node: ProductNode, data: Any) -> str:
    """Product card. Missing, nameless and placeholder products render nothing."""
    if not isinstance(data, Mapping):
        return ""
    name = _text(data.get("productName"))
    if not name or (node.skip_name and name == node.skip_name):
        return ""

    subs = [
        {"name": _text(sub.get("productName")), "price": _text(sub.get("price"))}
        for sub in data.get("productDetailList") or []
    ]
    context = {
        "container_class": node.container_class,
        "img_class": node.img_class,
        "info_class": node.info_class,
        "name_class": node.name_class,
        "sub_product_container_class": node.sub_product_container_class,
        "sub_product_class": node.sub_product_class,
        "img": _text(data.get("linkMobileImg")),
        "name": name,
        "has_subs": bool(subs),
        "subs": subs,
    }
    return chevron.render(PRODUCT_TEMPLATE, context)


def _text(value: Any) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value)


# ---------------------------------------------------------------------------
# Titled block
# ---------------------------------------------------------------------------


def _render_titled_block(node: TitledBlockNode, data: Any) -> str:
    if not isinstance(data, str):
        raise TypeError(f"titled block expects a string, got {type(data).__name__}")

    title_html = render_element(node.title, None)
    if not data or not node.content.tag:
        return title_html

    body = escape(data).replace("\n", "<br>")
    class_attr = f' class="{escape(node.content.class_name)}"' if node.content.class_name else ""
    return f"{title_html}<{node.content.tag}{class_attr}>{body}</{node.content.tag}>"
