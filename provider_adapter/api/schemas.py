from pydantic import BaseModel
from typing import List
from ..event_models import Event

class HandleResponse(BaseModel):
    corr_id: str
    status: str | None = None
    posted: bool

class ResponseListResponse(BaseModel):
    total: int
    events: List[Event]
