"""Layout registry tests: insert-if-absent registration and lookup by type."""

import logging

from itinera.kernel.registry import LayoutRegistry
from itinera.kernel.types import Block, ElementNode, ExactKey, Layout


def make_layout(name, block_id="A"):
    return Layout(name=name, blocks=(Block(id=block_id, matcher=ExactKey(block_id), mapping=ElementNode(tag="p")),))


class TestRegistry:
    def test_register_and_find(self):
        registry = LayoutRegistry()
        layout = make_layout("行程规划")

        assert registry.register(layout) is True
        assert registry.find_by_type("行程规划") is layout
        assert "行程规划" in registry
        assert len(registry) == 1

    def test_unknown_type(self):
        registry = LayoutRegistry()
        assert registry.find_by_type("unknown") is None
        assert "unknown" not in registry

    def test_first_registration_wins(self):
        registry = LayoutRegistry()
        first = make_layout("t", "A")
        second = make_layout("t", "B")

        registry.register(first)
        assert registry.register(second) is False

        assert registry.find_by_type("t") is first
        assert len(registry) == 1

    def test_reregistering_same_layout_is_noop(self):
        registry = LayoutRegistry()
        layout = make_layout("t")

        registry.register(layout)
        assert registry.register(layout) is False
        assert registry.find_by_type("t") is layout

    def test_initial_layouts(self):
        a, b = make_layout("a"), make_layout("b")
        registry = LayoutRegistry([a, b])

        assert registry.names() == ["a", "b"]

    def test_registries_are_independent(self):
        one, two = LayoutRegistry(), LayoutRegistry()
        one.register(make_layout("t"))

        assert two.find_by_type("t") is None

    def test_duplicate_is_logged(self, caplog):
        registry = LayoutRegistry([make_layout("t")])
        with caplog.at_level(logging.DEBUG, logger="itinera.kernel.registry"):
            registry.register(make_layout("t", "B"))

        assert "already registered" in caplog.text
