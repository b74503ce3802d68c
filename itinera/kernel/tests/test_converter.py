"""
Converter tests.

convert() is the synchronous, one-shot counterpart of the render session: the
same output for good input, but every failure is raised.
"""

import logging

import pytest

from itinera.kernel.converter import HtmlFactory, convert, parse_document
from itinera.kernel.errors import InvalidArgumentsError, MissingTypeError, NoLayoutConfigured, ParseError
from itinera.kernel.types import SILENT, PlaceholderLayout
from itinera.templates import park_plan, trip_plan

PARK_DOC = '{"type":"园区内规划","routeTitle":"迪士尼一日游","stops":[{"stopNum":1,"stopName":"米奇大街"}]}'


class TestConvert:
    def test_park_document(self):
        html = convert(PARK_DOC, park_plan.layout)

        assert html == (
            '<div class="park-route-title">迪士尼一日游</div>'
            '<div class="park-stop-item">'
            '<div class="stop-header"><span class="stop-num">1</span><h3 class="stop-name">米奇大街</h3></div>'
            "</div>"
        )

    def test_truncated_document_is_repaired(self):
        html = convert('{"type":"园区内规划","routeTitle":"迪士尼","stops":[', park_plan.layout)
        assert html == '<div class="park-route-title">迪士尼</div>'

    def test_example_renders_every_block(self, trip_json):
        html = convert(trip_json, trip_plan.layout)

        assert html.startswith('<div class="route-plan-title">杭州西湖经典5日游</div>')
        assert "美食地图" in html

    @pytest.mark.parametrize("text", ["", None])
    def test_missing_text(self, text):
        with pytest.raises(InvalidArgumentsError):
            convert(text, trip_plan.layout)

    @pytest.mark.parametrize("layout", [None, PlaceholderLayout("x")])
    def test_missing_layout(self, layout):
        with pytest.raises(InvalidArgumentsError, match="A valid JSON string and layout object are required"):
            convert('{"type":"x"}', layout)

    def test_unparseable(self):
        with pytest.raises(ParseError, match="Failed to parse JSON string") as exc_info:
            convert('{"type":"行程', trip_plan.layout)

        assert exc_info.value.__cause__ is not None

    def test_non_object(self):
        with pytest.raises(ParseError):
            convert("[1, 2]", trip_plan.layout)

    def test_type_mismatch_warns_and_renders(self, caplog):
        with caplog.at_level(logging.WARNING, logger="itinera.kernel.converter"):
            html = convert('{"type":"别的","routeTitle":"X"}', trip_plan.layout)

        assert html == '<div class="route-plan-title">X</div>'
        assert "does not match layout name" in caplog.text

    def test_block_error_policy(self):
        text = '{"type":"行程规划","tips":{"a":1}}'

        assert convert(text, trip_plan.layout) == "<!-- Render Error in block: tips -->"
        assert convert(text, trip_plan.layout, SILENT) == ""

    def test_parse_document(self):
        assert parse_document('{"a":[1,') == {"a": [1]}


class TestHtmlFactory:
    @pytest.mark.asyncio
    async def test_create_resolves_layout(self, loader):
        factory = HtmlFactory(loader)
        assert await factory.create(PARK_DOC) == convert(PARK_DOC, park_plan.layout)

    @pytest.mark.asyncio
    async def test_missing_type(self, loader):
        with pytest.raises(MissingTypeError, match="must have a `type` property"):
            await HtmlFactory(loader).create('{"routeTitle":"X"}')

    @pytest.mark.asyncio
    async def test_unknown_type(self, loader):
        with pytest.raises(NoLayoutConfigured):
            await HtmlFactory(loader).create('{"type":"未知"}')

    @pytest.mark.asyncio
    async def test_parse_error(self, loader):
        with pytest.raises(ParseError):
            await HtmlFactory(loader).create("{{")
