from fastapi import APIRouter, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import StreamingResponse
from datetime import datetime, timedelta
from storyhub.routers.auth import require_admin
from storyhub.services.realtime import EventBuffer, is_public_event
from storyhub.state import AppState, get_state
import asyncio
import json
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["realtime"])

HEARTBEAT_SECONDS = 30.0

def event_stream_response(request: Request, events: EventBuffer, public_only: bool) -> StreamingResponse:
    """Server-sent events for every new activity event"""
    async def generate():
        queue = events.subscribe()
        try:
            while True:
                if await request.is_disconnected():
                    break

                try:
                    event = await asyncio.wait_for(queue.get(), timeout=HEARTBEAT_SECONDS)
                except asyncio.TimeoutError:
                    yield f"data: {json.dumps({'type': 'heartbeat'})}\n\n"
                    continue

                if public_only and not is_public_event(event):
                    continue
                yield f"data: {json.dumps(jsonable_encoder(event))}\n\n"
        finally:
            events.unsubscribe(queue)

    return StreamingResponse(
        generate(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
        }
    )

@router.get("/realtime-events")
async def get_public_events(state: AppState = Depends(get_state)):
    """Recent public events for visitors, newest first"""
    return state.events.visitor_view()

@router.get("/realtime-events/stream")
async def stream_public_events(request: Request, state: AppState = Depends(get_state)):
    return event_stream_response(request, state.events, public_only=True)

@router.get("/admin/realtime-events")
async def get_admin_events(token: str = Depends(require_admin), state: AppState = Depends(get_state)):
    """Every buffered event, newest first"""
    return state.events.admin_view()

@router.get("/admin/realtime-events/stream")
async def stream_admin_events(
    request: Request,
    token: str = Depends(require_admin),
    state: AppState = Depends(get_state)
):
    return event_stream_response(request, state.events, public_only=False)

@router.get("/realtime-visitors")
async def get_realtime_visitors(state: AppState = Depends(get_state)):
    """Visitors active within the configured window"""
    cutoff = datetime.utcnow() - timedelta(minutes=state.settings.visitor_active_minutes)
    active_visitors = await state.visitors.active_since(cutoff)
    comment_counts = await state.comments.count_by_visitor()

    return {
        "active_visitors": [
            {**visitor, "comment_count": comment_counts.get(visitor.get("name"), 0)}
            for visitor in active_visitors
        ],
        "total_visitors": await state.visitors.count_visitors()
    }
