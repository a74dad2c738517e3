"""Event model for calendar occurrences and recurring series.

This module defines the Event model which represents a single stored
occurrence. Occurrences generated from the same recurring definition share
a series_id, which is how the API scopes updates and deletes to one
occurrence, the following occurrences, or a whole series.
"""

from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from app.models.participant import Participant


class RecurrenceType(str, Enum):
    """How often a recurring event repeats."""

    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class Event(SQLModel, table=True):
    """A single calendar occurrence, standalone or part of a series.

    The recurrence value is embedded as three columns rather than a separate
    table since it is always read and replaced as a whole.

    Attributes:
        id: Unique identifier (UUID), assigned on insert.
        title: Event title, never empty.
        description: Optional free text.
        start_time: When the occurrence starts. Also orders occurrences
            within a series for "this and following" mutations.
        end_time: When the occurrence ends, if known.
        creator_id: Identity of the user who created the event. Only this
            user may update or delete it. Never changes after creation.
        recurrence_type: One of the RecurrenceType values.
        recurrence_interval: Repeat every N units of recurrence_type.
        recurrence_until: Optional bound for the series.
        series_id: Group key. Unique to the event for standalone events
            ("evt_" prefix), shared by every occurrence of a recurring
            definition ("ser_" prefix). Assigned once, never reassigned.
        created_at: Timestamp of insertion.
        participants: People who can see the event, matched by email.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str
    description: str | None = None
    start_time: datetime = Field(index=True)
    end_time: datetime | None = None
    creator_id: UUID = Field(index=True)
    recurrence_type: str = Field(default=RecurrenceType.NONE.value)
    recurrence_interval: int | None = None
    recurrence_until: datetime | None = None
    series_id: str = Field(index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    # Relationship
    participants: list["Participant"] = Relationship(back_populates="event")

    @property
    def is_recurring(self) -> bool:
        return self.recurrence_type != RecurrenceType.NONE.value

    @property
    def participant_emails(self) -> list[str]:
        return [p.email for p in self.participants]
