"""Tests for the health endpoint and app wiring."""

from __future__ import annotations

from fastapi.testclient import TestClient

from server.main import app


def test_health():
    """GET /health → 200 {"status": "ok"}."""
    with TestClient(app) as client:
        res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


def test_startup_preloads_layouts():
    """Lifespan imports every configured template module."""
    from server.services import layouts

    with TestClient(app):
        for type_name in layouts.loader.layout_config:
            assert type_name in layouts.registry


def test_docs_disabled():
    client = TestClient(app)
    assert client.get("/docs").status_code == 404
