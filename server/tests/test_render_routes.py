"""Integration tests for the one-shot render routes."""

from __future__ import annotations

import pytest

from itinera.kernel.converter import convert
from itinera.templates import LAYOUT_CONFIG, park_plan

pytestmark = pytest.mark.asyncio

PARK_DOC = '{"type":"园区内规划","routeTitle":"迪士尼一日游","tips":"带水"}'


# ── layouts ─────────────────────────────────────────────────────────────────


class TestLayoutRoutes:
    """Tests for GET /api/layouts."""

    async def test_lists_configured_types(self, async_client):
        res = await async_client.get("/api/layouts")
        assert res.status_code == 200
        data = res.json()
        assert data["configured_types"] == list(LAYOUT_CONFIG)
        assert set(data["registered"]) <= set(LAYOUT_CONFIG)

    async def test_registered_after_convert(self, async_client):
        await async_client.post("/api/convert", json={"json_text": PARK_DOC})
        res = await async_client.get("/api/layouts")
        assert "园区内规划" in res.json()["registered"]


# ── repair ──────────────────────────────────────────────────────────────────


class TestRepairRoute:
    """Tests for POST /api/repair."""

    async def test_repairs_prefix(self, async_client):
        res = await async_client.post("/api/repair", json={"text": '{"type":"行程规划","overview":{"days":"5天"'})
        assert res.status_code == 200
        assert res.json() == {
            "completed_json": '{"type":"行程规划","overview":{"days":"5天"}}',
            "parsed": True,
        }

    async def test_reports_unparseable(self, async_client):
        res = await async_client.post("/api/repair", json={"text": '{"a":"open'})
        assert res.status_code == 200
        assert res.json()["parsed"] is False

    async def test_empty_text(self, async_client):
        res = await async_client.post("/api/repair", json={"text": ""})
        assert res.json() == {"completed_json": "", "parsed": False}

    async def test_rejects_unknown_fields(self, async_client):
        res = await async_client.post("/api/repair", json={"text": "{", "extra": 1})
        assert res.status_code == 422


# ── convert ─────────────────────────────────────────────────────────────────


class TestConvertRoute:
    """Tests for POST /api/convert."""

    async def test_converts_document(self, async_client):
        res = await async_client.post("/api/convert", json={"json_text": PARK_DOC})
        assert res.status_code == 200
        data = res.json()
        assert data["layout"] == "园区内规划"
        assert data["html"] == convert(PARK_DOC, park_plan.layout)

    async def test_converts_truncated_document(self, async_client):
        res = await async_client.post("/api/convert", json={"json_text": '{"type":"园区内规划","routeTitle":"迪士尼"'})
        assert res.status_code == 200
        assert res.json()["html"] == '<div class="park-route-title">迪士尼</div>'

    async def test_block_error_policy_override(self, async_client):
        body = '{"type":"园区内规划","tips":{"not":"text"}}'

        marked = await async_client.post("/api/convert", json={"json_text": body})
        silent = await async_client.post("/api/convert", json={"json_text": body, "on_block_error": "silent"})

        assert marked.json()["html"] == "<!-- Render Error in block: tips -->"
        assert silent.json()["html"] == ""

    async def test_unparseable(self, async_client):
        res = await async_client.post("/api/convert", json={"json_text": '{"type":"园区'})
        assert res.status_code == 422
        assert "Failed to parse JSON string" in res.json()["detail"]

    async def test_missing_type(self, async_client):
        res = await async_client.post("/api/convert", json={"json_text": '{"routeTitle":"X"}'})
        assert res.status_code == 404
        assert "type" in res.json()["detail"]

    async def test_unknown_type(self, async_client):
        res = await async_client.post("/api/convert", json={"json_text": '{"type":"未知类型"}'})
        assert res.status_code == 404
        assert "未知类型" in res.json()["detail"]

    async def test_empty_text_rejected(self, async_client):
        res = await async_client.post("/api/convert", json={"json_text": ""})
        assert res.status_code == 422

    async def test_invalid_policy_rejected(self, async_client):
        res = await async_client.post("/api/convert", json={"json_text": PARK_DOC, "on_block_error": "explode"})
        assert res.status_code == 422
