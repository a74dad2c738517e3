"""Request and response bodies for the JSON API.

Field names are snake_case in Python and camelCase on the wire. Request
bodies are deliberately loose (everything optional, recurrence type as a
plain string) so that missing or invalid values reach the service layer and
are reported as a 400 with a readable message.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.models.event import Event, RecurrenceType


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Recurrence(CamelModel):
    """Embedded repetition rule of an event."""

    type: str = RecurrenceType.NONE.value
    interval: int | None = None
    until: datetime | None = None


class EventCreate(CamelModel):
    title: str | None = None
    description: str | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    participants: list[str] | None = None
    recurrence: Recurrence | None = None
    series_id: str | None = None


class EventUpdate(CamelModel):
    """Partial update. Only fields present in the request body are applied."""

    title: str | None = None
    description: str | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    participants: list[str] | None = None
    recurrence: Recurrence | None = None
    # Any JSON value; unrecognized ones fall back to thisEvent
    update_scope: Any = None


class EventDelete(CamelModel):
    delete_scope: Any = None


class EventRead(CamelModel):
    id: UUID
    title: str
    description: str | None
    start_time: datetime
    end_time: datetime | None
    creator_id: UUID
    participants: list[str]
    recurrence: Recurrence
    series_id: str
    created_at: datetime

    @classmethod
    def from_event(cls, event: Event) -> "EventRead":
        return cls(
            id=event.id,
            title=event.title,
            description=event.description,
            start_time=event.start_time,
            end_time=event.end_time,
            creator_id=event.creator_id,
            participants=event.participant_emails,
            recurrence=Recurrence(
                type=event.recurrence_type,
                interval=event.recurrence_interval,
                until=event.recurrence_until,
            ),
            series_id=event.series_id,
            created_at=event.created_at,
        )


class EventCreated(CamelModel):
    message: str
    event: EventRead


class EventList(CamelModel):
    message: str
    events: list[EventRead]


class MutationResult(CamelModel):
    message: str
    scope: str


class RegisterRequest(CamelModel):
    username: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(CamelModel):
    email: str | None = None
    password: str | None = None
