"""Creator-only authorization for event mutations."""
import logging
from enum import Enum
from uuid import UUID

from app.core.exceptions import ForbiddenError
from app.models.event import Event

logger = logging.getLogger(__name__)


class AccessDecision(str, Enum):
    ALLOWED = "allowed"
    DENIED = "denied"


def authorize(event: Event, caller_id: UUID) -> AccessDecision:
    """Decide whether the caller may mutate the event.

    Only the creator may update or delete. Participants can read an event
    through listing but are denied here like anyone else.
    """
    if event.creator_id != caller_id:
        return AccessDecision.DENIED
    return AccessDecision.ALLOWED


def ensure_creator(
    event: Event, caller_id: UUID, action: str, resource: str = "event"
) -> None:
    """Raise ForbiddenError unless the caller created the event.

    Args:
        event: The loaded target event.
        caller_id: Identity of the authenticated caller.
        action: Verb used in the error message ("update", "delete", ...).
        resource: Noun used in the error message.
    """
    if authorize(event, caller_id) is AccessDecision.DENIED:
        logger.warning(f"User {caller_id} denied {action} on event {event.id}")
        raise ForbiddenError(action, resource)
