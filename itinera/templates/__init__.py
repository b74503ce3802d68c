"""
Template modules, one per JSON `type`.

Each module exports `layout: Layout`. The loader imports a module the first
time its type is seen; nothing here is imported eagerly.
"""

# JSON `type` → template module. Every type that can arrive needs an entry.
LAYOUT_CONFIG: dict[str, str] = {
    "行程规划": "itinera.templates.trip_plan",
    "园区内规划": "itinera.templates.park_plan",
}
