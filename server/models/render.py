"""Request/response models for the render API."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class RepairRequest(BaseModel):
    """What the client sends to POST /api/repair."""

    model_config = {"extra": "forbid"}

    text: str


class RepairResponse(BaseModel):
    completed_json: str
    parsed: bool


class ConvertRequest(BaseModel):
    """What the client sends to POST /api/convert."""

    model_config = {"extra": "forbid"}

    json_text: str = Field(min_length=1, max_length=500_000)
    on_block_error: Literal["emit_marker", "silent"] | None = None


class ConvertResponse(BaseModel):
    html: str
    layout: str


class LayoutsResponse(BaseModel):
    configured_types: list[str]
    registered: list[str]


class SessionSnapshot(BaseModel):
    """State pushed over the stream WebSocket after every processed chunk."""

    type: Literal["state"] = "state"
    phase: str
    layout: str | None
    current_node: str | None
    next_nodes: list[str]
    html: str
    completed_json: str
    layout_changed: bool
    layout_graph: str

    @classmethod
    def from_session(cls, snapshot: dict[str, Any]) -> SessionSnapshot:
        return cls(**snapshot)
