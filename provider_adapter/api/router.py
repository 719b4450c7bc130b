from fastapi import APIRouter, HTTPException, Query, Request
from .schemas import HandleResponse, ResponseListResponse
from ..event_models import Event
from ..errors import UnknownActionError
from ..config import get_settings

router = APIRouter(prefix="/v1")
settings = get_settings()


@router.post("/events", response_model=HandleResponse)
async def handle_event(event: Event, request: Request):
    if len(await request.body()) > settings.MAX_EVENT_SIZE:
        raise HTTPException(413, detail="Event too large")

    dispatcher = request.app.state.dispatcher
    try:
        response = await dispatcher.handle(event)
    except UnknownActionError as exc:
        raise HTTPException(422, detail=str(exc))

    if response is None:
        return HandleResponse(corr_id=event.corr_id, posted=False)
    return HandleResponse(corr_id=response.corr_id, status=response.status.value, posted=True)


@router.get("/responses", response_model=ResponseListResponse)
async def list_responses(request: Request, limit: int = Query(25, ge=1, le=1000)):
    events = [e for e in await request.app.state.sink.list_recent(limit=limit)]
    return ResponseListResponse(total=len(events), events=events)
