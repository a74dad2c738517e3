"""Participant model for people who can see an event.

This module defines the Participant model which stores one row per
(event, email) pair. Participants get read access to an event through
listing, but never the right to change it.
"""

from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from app.models.event import Event


class Participant(SQLModel, table=True):
    """A person invited to an event.

    Attributes:
        id: Unique identifier (UUID).
        event_id: Foreign key to the parent Event.
        email: Email address of the participant, stored lowercase so
            listing can match the caller's email case-insensitively.
        event: Reference to the parent Event object.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    event_id: UUID = Field(foreign_key="event.id", index=True)
    email: str = Field(index=True)

    # Relationship
    event: Optional["Event"] = Relationship(back_populates="participants")
