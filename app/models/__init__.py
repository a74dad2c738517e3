from app.models.event import Event, RecurrenceType
from app.models.participant import Participant
from app.models.user import User

__all__ = ["Event", "RecurrenceType", "Participant", "User"]
