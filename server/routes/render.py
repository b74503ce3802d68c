"""One-shot render routes: repair, convert, layout listing."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, HTTPException

from itinera.kernel.converter import convert as convert_document
from itinera.kernel.errors import InvalidArgumentsError, LayoutResolutionError, ParseError
from itinera.kernel.repair import repair_json
from server.models.render import (
    ConvertRequest,
    ConvertResponse,
    LayoutsResponse,
    RepairRequest,
    RepairResponse,
)
from server.services import layouts

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["render"])


@router.get("/layouts", response_model=LayoutsResponse)
async def list_layouts() -> LayoutsResponse:
    """Types with a configured template module, and layouts loaded so far."""
    return LayoutsResponse(
        configured_types=list(layouts.loader.layout_config),
        registered=layouts.registry.names(),
    )


@router.post("/repair", response_model=RepairResponse)
async def repair(req: RepairRequest) -> RepairResponse:
    """Close a truncated JSON prefix and report whether it parses."""
    completed = repair_json(req.text)
    try:
        json.loads(completed)
        parsed = True
    except json.JSONDecodeError:
        parsed = False
    return RepairResponse(completed_json=completed, parsed=parsed)


@router.post("/convert", response_model=ConvertResponse)
async def convert(req: ConvertRequest) -> ConvertResponse:
    """Render a (possibly truncated) document with the layout for its `type`."""
    factory = layouts.html_factory(req.on_block_error)
    try:
        layout = await factory.resolve(req.json_text)
        html = convert_document(req.json_text, layout, factory.on_block_error)
    except (ParseError, InvalidArgumentsError) as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except LayoutResolutionError as e:
        logger.info("render: no layout for type=%r: %s", e.type_name, e)
        raise HTTPException(status_code=404, detail=str(e)) from e

    return ConvertResponse(html=html, layout=layout.name)
