"""
WebSocket endpoint for incremental rendering.

Accepts connections at /ws/stream. Each connection owns one RenderSession and
receives the session state after every processed chunk.

Protocol (client → server):
  {"type": "chunk", "text": "..."}    append text to the session buffer
  {"type": "text", "text": "..."}     replace: render this whole buffer
  {"type": "reset"}                   clear the session
  {"type": "simulate", "example": "trip-plan", "chunk_size": 5, "profile": "instant", "message_id": "..."}
                                      play an example back chunk by chunk

Server → client:
  {"type": "state", ...}              SessionSnapshot
  {"type": "stream.start" | "stream.end", "message_id": ...}
  {"type": "error", "detail": "..."}
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from itinera.kernel.mock_stream import MockStream
from itinera.kernel.session import RenderSession
from server.config import settings
from server.models.render import SessionSnapshot
from server.services import layouts

logger = logging.getLogger(__name__)

router = APIRouter(tags=["websocket"])

mock_stream = MockStream()


async def _send_state(websocket: WebSocket, session: RenderSession) -> None:
    snapshot = SessionSnapshot.from_session(session.snapshot())
    await websocket.send_json(snapshot.model_dump())


async def _send_error(websocket: WebSocket, detail: str) -> None:
    await websocket.send_json({"type": "error", "detail": detail})


async def _handle_simulate(websocket: WebSocket, session: RenderSession, msg: dict[str, Any]) -> None:
    """Reset the session and stream an example document through it."""
    example = msg.get("example", "")
    message_id = msg.get("message_id")
    chunk_size = msg.get("chunk_size") or settings.STREAM_CHUNK_SIZE
    profile = msg.get("profile") or settings.STREAM_PROFILE

    if example not in mock_stream.list_examples():
        await _send_error(websocket, f"Unknown example: {example!r}")
        return
    if not isinstance(chunk_size, int) or chunk_size < 1:
        await _send_error(websocket, f"Invalid chunk_size: {chunk_size!r}")
        return

    session.reset()
    await websocket.send_json({"type": "stream.start", "message_id": message_id, "example": example})

    start = time.monotonic()
    chunks = 0
    try:
        async for chunk in mock_stream.stream(example, profile=profile, chunk_size=chunk_size):
            await session.feed(chunk)
            await _send_state(websocket, session)
            chunks += 1
    except ValueError as e:
        await _send_error(websocket, str(e))
        return

    elapsed_ms = int((time.monotonic() - start) * 1000)
    logger.info("ws: simulated example=%s chunks=%d elapsed_ms=%d", example, chunks, elapsed_ms)
    await websocket.send_json(
        {"type": "stream.end", "message_id": message_id, "chunks": chunks, "elapsed_ms": elapsed_ms}
    )


@router.websocket("/ws/stream")
async def stream_endpoint(websocket: WebSocket) -> None:
    await websocket.accept()
    session = layouts.new_session()

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                await _send_error(websocket, "Messages must be JSON objects")
                continue
            if not isinstance(msg, dict):
                await _send_error(websocket, "Messages must be JSON objects")
                continue

            msg_type = msg.get("type")
            if msg_type == "chunk":
                await session.feed(str(msg.get("text", "")))
                await _send_state(websocket, session)
            elif msg_type == "text":
                session.buffer = str(msg.get("text", ""))
                await session.process(session.buffer)
                await _send_state(websocket, session)
            elif msg_type == "reset":
                session.reset()
                await _send_state(websocket, session)
            elif msg_type == "simulate":
                await _handle_simulate(websocket, session, msg)
            else:
                await _send_error(websocket, f"Unknown message type: {msg_type!r}")
    except WebSocketDisconnect:
        logger.debug("ws: client disconnected")
