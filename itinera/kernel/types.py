"""
Itinera Kernel — Shared Types

Data classes used across the registry, dispatcher, renderer and session.
These are the contracts that bind the kernel together.

- Matchers are a closed variant: ExactKey | Predicate
- Render nodes are a closed set: element, overview, day list, product, titled block
- Layouts and blocks are frozen once built and shared read-only between sessions
- SessionState is mutable and owned by exactly one RenderSession
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Union

from itinera.kernel.errors import LayoutError

# ---------------------------------------------------------------------------
# Option values
# ---------------------------------------------------------------------------

EMIT_MARKER = "emit_marker"
SILENT = "silent"
BLOCK_ERROR_POLICIES: set[str] = {EMIT_MARKER, SILENT}

PER_CHUNK = "per_chunk"
PER_SESSION = "per_session"
RESET_POLICIES: set[str] = {PER_CHUNK, PER_SESSION}


@dataclass(frozen=True)
class SessionOptions:
    """How a session reacts to block errors and whether output survives between chunks."""

    on_block_error: str = EMIT_MARKER
    reset_policy: str = PER_CHUNK

    def __post_init__(self) -> None:
        if self.on_block_error not in BLOCK_ERROR_POLICIES:
            raise ValueError(
                f"Unknown block error policy: {self.on_block_error!r}. Valid: {sorted(BLOCK_ERROR_POLICIES)}"
            )
        if self.reset_policy not in RESET_POLICIES:
            raise ValueError(f"Unknown reset policy: {self.reset_policy!r}. Valid: {sorted(RESET_POLICIES)}")


# ---------------------------------------------------------------------------
# Matchers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ExactKey:
    """Matches one top-level key by equality."""

    key: str

    def matches(self, key: str) -> bool:
        return key == self.key

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "exact", "key": self.key}


@dataclass(frozen=True)
class Predicate:
    """Matches any key the function accepts. `description` names it for diagnostics."""

    fn: Callable[[str], bool]
    description: str = "predicate"

    def matches(self, key: str) -> bool:
        return bool(self.fn(key))

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "predicate", "description": self.description}


Matcher = Union[ExactKey, Predicate]


# ---------------------------------------------------------------------------
# Render nodes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ElementNode:
    """
    One HTML element.

    static_text overrides data-derived content. No tag and no static text
    renders to the empty string. Children render against the same data fragment.
    """

    tag: str | None = None
    class_name: str | None = None
    static_text: str | None = None
    data_key: str | None = None
    href_key: str | None = None
    src_key: str | None = None
    children: tuple[ElementNode, ...] = ()


@dataclass(frozen=True)
class OverviewField:
    """One labelled value of an overview block, read from `json_key`."""

    json_key: str
    class_name: str
    label: ElementNode
    value: ElementNode
    icon: ElementNode | None = None


@dataclass(frozen=True)
class OverviewNode:
    title: ElementNode
    fields: tuple[OverviewField, ...] = ()


@dataclass(frozen=True)
class ProductNode:
    """Class names for a linked product card."""

    container_class: str = "plan-pro"
    img_class: str = "plan-pro-img"
    info_class: str = "plan-pro-info"
    name_class: str = "plan-pro-name"
    sub_product_container_class: str = "sub-product-list"
    sub_product_class: str = "sub-product-item"
    # Placeholder products carrying this name are not rendered
    skip_name: str | None = "酒店推荐"


@dataclass(frozen=True)
class DayListNode:
    """Collection node: receives the whole list of days, not one day at a time."""

    overview: ElementNode
    item_product: ProductNode = field(default_factory=ProductNode)


@dataclass(frozen=True)
class TitledBlockNode:
    """A static title above a multi-line text value (newlines become <br>)."""

    title: ElementNode
    content: ElementNode


RenderNode = Union[ElementNode, OverviewNode, DayListNode, ProductNode, TitledBlockNode]
BlockMapping = Union[RenderNode, tuple[RenderNode, ...]]
Renderer = Callable[[Any, Any], str]

# Node kinds that take a whole list instead of being applied per element
COLLECTION_NODES: tuple[type, ...] = (DayListNode,)


# ---------------------------------------------------------------------------
# Layouts
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GraphNode:
    """Static structure of a block, drawn in the layout graph."""

    name: str
    children: tuple[GraphNode, ...] = ()


@dataclass(frozen=True)
class Block:
    """
    One ordered unit of a layout: maps a top-level key to an HTML fragment.

    renderer=None means the polymorphic kernel renderer.
    """

    id: str
    matcher: Matcher
    mapping: BlockMapping
    next: tuple[str, ...] = ()
    renderer: Renderer | None = None
    graph: tuple[GraphNode, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "next", tuple(self.next))
        object.__setattr__(self, "graph", tuple(self.graph))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "matcher": self.matcher.to_dict(),
            "next": list(self.next),
        }


@dataclass(frozen=True)
class Layout:
    """Named, ordered collection of blocks. `name` equals the JSON `type` it renders."""

    name: str
    blocks: tuple[Block, ...] = ()

    def __post_init__(self) -> None:
        blocks = tuple(self.blocks)
        object.__setattr__(self, "blocks", blocks)
        seen: set[str] = set()
        for block in blocks:
            if block.id in seen:
                raise LayoutError(f"Duplicate block id {block.id!r} in layout {self.name!r}")
            seen.add(block.id)

    def block(self, block_id: str) -> Block | None:
        for block in self.blocks:
            if block.id == block_id:
                return block
        return None

    @property
    def block_ids(self) -> list[str]:
        return [b.id for b in self.blocks]

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "blocks": [b.to_dict() for b in self.blocks]}


@dataclass(frozen=True)
class PlaceholderLayout:
    """Stand-in layout for error/status states. Carries a name and nothing else."""

    name: str
    blocks: tuple[Block, ...] = ()


# ---------------------------------------------------------------------------
# Dispatch and session state
# ---------------------------------------------------------------------------


@dataclass
class BlockFragment:
    """Output of one matched block in a dispatch pass."""

    block_id: str
    key: str
    html: str
    error: str | None = None


@dataclass
class DispatchResult:
    html: str = ""
    last_block: Block | None = None
    last_key: str | None = None
    fragments: list[BlockFragment] = field(default_factory=list)


@dataclass
class SessionState:
    """
    Everything a session publishes.

    block_html holds per-block container contents (per_session reset policy).
    """

    current_layout: Layout | PlaceholderLayout | None = None
    last_processed_block: Block | None = None
    next_possible_nodes: list[str] = field(default_factory=list)
    html_output: str = ""
    completed_json: str = ""
    block_html: dict[str, str] = field(default_factory=dict)
    layout_changed: bool = False

    def clear(self) -> None:
        self.current_layout = None
        self.last_processed_block = None
        self.next_possible_nodes = []
        self.html_output = ""
        self.completed_json = ""
        self.block_html = {}
        self.layout_changed = False


def as_node_sequence(mapping: BlockMapping) -> Sequence[RenderNode]:
    """A single node counts as a one-entry mapping sequence."""
    if isinstance(mapping, (tuple, list)):
        return mapping
    return (mapping,)
