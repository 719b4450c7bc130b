from pydantic import BaseModel, Field
from typing import Any, Dict, List
from enum import Enum
import uuid, time

HEALTH_ACTION = "HEALTH"


def _now_ms() -> int:
    return int(time.time() * 1000)


class Status(str, Enum):
    """Lifecycle status carried by an event."""
    NEW = "NEW"
    PROVIDER_ACCEPTED = "PROVIDER_ACCEPTED"
    ADAPTER_ACCEPTED = "ADAPTER_ACCEPTED"
    ADAPTER_REJECTED = "ADAPTER_REJECTED"
    ADAPTER_RESPONSE = "ADAPTER_RESPONSE"
    PROVIDER_RESPONSE = "PROVIDER_RESPONSE"
    TEMP_UPSTREAM_QUEUE = "TEMP_UPSTREAM_QUEUE"


class HealthStatus(str, Enum):
    APPLICATION_HEALTHY = "APPLICATION_HEALTHY"
    APPLICATION_UNHEALTHY = "APPLICATION_UNHEALTHY"


class Relation(BaseModel):
    """Directed link from a resource to another resource, by lookup key."""
    name: str = Field(..., description="Relation name, e.g. 'rettighet'")
    type: str = Field(..., description="Type tag of the target resource")
    field: str = Field(..., description="Lookup field on the target")
    value: str = Field(..., description="Lookup value on the target")

    @property
    def link(self) -> str:
        return f"${{{self.type}}}/{self.field}/{self.value}"


class Resource(BaseModel):
    type: str = Field(..., description="Type tag of the resource")
    system_id: str = Field(..., description="Identifier of the resource")
    attributes: Dict[str, Any] = Field(default_factory=dict)
    relations: List[Relation] = Field(default_factory=list)

    def add_relation(self, name: str, type: str, field: str, value: str) -> "Resource":
        self.relations.append(Relation(name=name, type=type, field=field, value=value))
        return self


class Health(BaseModel):
    component: str
    status: HealthStatus
    message: str | None = None
    time: int = Field(default_factory=_now_ms)


class Event(BaseModel):
    """
    Envelope for one request/response unit of work.

    Responses are never built by mutating the inbound event; use
    derive_response() which keeps the correlation identity and resets
    status, message and data.
    """
    corr_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    org_id: str | None = None
    source: str | None = None
    client: str | None = None
    action: str | None = None
    status: Status = Status.NEW
    time: int = Field(default_factory=_now_ms)
    message: str | None = None
    query: str | None = None
    health_check: bool = False
    data: List[Resource | Health] = Field(default_factory=list)

    def is_health_check(self) -> bool:
        return self.health_check or self.action == HEALTH_ACTION

    def derive_response(self, status: Status) -> "Event":
        return Event(
            corr_id=self.corr_id,
            org_id=self.org_id,
            source=self.source,
            client=self.client,
            action=self.action,
            query=self.query,
            health_check=self.health_check,
            status=status,
        )

    def add_data(self, record: Resource | Health) -> None:
        self.data.append(record)
