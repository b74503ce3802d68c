"""
Pydantic models for the Itinera API.

All request/response shapes defined here. No imports from routes or services.
"""

from server.models.render import (
    ConvertRequest,
    ConvertResponse,
    LayoutsResponse,
    RepairRequest,
    RepairResponse,
    SessionSnapshot,
)

__all__ = [
    "ConvertRequest",
    "ConvertResponse",
    "LayoutsResponse",
    "RepairRequest",
    "RepairResponse",
    "SessionSnapshot",
]
