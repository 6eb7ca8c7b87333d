"""
WebSocket progress streaming endpoints.

Pushes processing events to connected clients.

Routes:
- WS /ws/uploads/{job_id} - events for one job; closes after the terminal event
- WS /ws/uploads - events for every job

Dependencies: docflow.core.progress_broker, docflow.models.streaming
System role: Push channel HTTP API
"""

import asyncio
import json
import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from docflow.api.deps import get_progress_broker
from docflow.core.progress_broker import ALL_JOBS, ProgressBroker
from docflow.models.streaming import ClientEventType, ProgressEventType

logger = logging.getLogger(__name__)
router = APIRouter(tags=["streaming"])


@router.websocket("/ws/uploads/{job_id}")
async def websocket_job_progress(
    websocket: WebSocket,
    job_id: str,
    broker: ProgressBroker = Depends(get_progress_broker),
) -> None:
    """
    Stream progress events for one job.

    Server sends:
        {"event": "connected", "data": {"jobId": "..."}}
        {"event": "processingStarting", "data": {"jobId": "...", "message": "..."}}
        {"event": "progressUpdate", "data": {"jobId": "...", "progress": 50, ...}}
        {"event": "finalizing", "data": {"jobId": "...", "message": "..."}}
        {"event": "completed", "data": {"jobId": "...", "result": ...}}
        {"event": "error", "data": {"jobId": "...", "message": "..."}}
    """
    await _stream(websocket, broker, job_id)


@router.websocket("/ws/uploads")
async def websocket_all_progress(
    websocket: WebSocket,
    broker: ProgressBroker = Depends(get_progress_broker),
) -> None:
    """Stream progress events for every job; clients filter by jobId."""
    await _stream(websocket, broker, ALL_JOBS)


async def _stream(websocket: WebSocket, broker: ProgressBroker, job_id: str | None) -> None:
    await websocket.accept()
    logger.info(
        "Progress WebSocket connected",
        extra={"job_id": job_id or "*", "client_host": str(websocket.client)},
    )

    queue = broker.subscribe(job_id)
    await websocket.send_json({
        "event": ProgressEventType.CONNECTED.value,
        "data": {"jobId": job_id},
    })

    sender = asyncio.create_task(_forward_events(websocket, queue, close_on_terminal=job_id is not None))
    receiver = asyncio.create_task(_answer_pings(websocket))
    try:
        done, pending = await asyncio.wait(
            {sender, receiver}, return_when=asyncio.FIRST_COMPLETED
        )
        for task in pending:
            task.cancel()
        client_gone = False
        for task in done:
            exc = task.exception()
            if exc is None:
                client_gone = client_gone or task is receiver
            elif isinstance(exc, WebSocketDisconnect):
                client_gone = True
            else:
                logger.error(
                    "Progress WebSocket task failed",
                    extra={"job_id": job_id or "*", "error": str(exc)},
                )
        if not client_gone:
            await websocket.close()
    finally:
        broker.unsubscribe(queue, job_id)
        logger.info("Progress WebSocket closed", extra={"job_id": job_id or "*"})


async def _forward_events(
    websocket: WebSocket,
    queue: asyncio.Queue,
    close_on_terminal: bool,
) -> None:
    while True:
        event = await queue.get()
        await websocket.send_json(event.to_dict())
        if close_on_terminal and event.is_terminal:
            return


async def _answer_pings(websocket: WebSocket) -> None:
    """Answer client pings until the client disconnects; other frames are ignored."""
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            logger.info("Progress WebSocket client disconnected")
            return

        try:
            data = json.loads(message.get("text") or "")
        except ValueError:
            logger.debug("Ignoring non-JSON WebSocket frame")
            continue
        if isinstance(data, dict) and data.get("event") == ClientEventType.PING.value:
            await websocket.send_json({"event": "pong"})
