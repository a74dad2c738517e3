"""Mutation scopes for recurring event series.

An update or delete targets one stored occurrence and declares how far the
change reaches:

    thisEvent         only the target occurrence (default)
    thisAndFollowing  the target and every occurrence of its series that
                      starts at the same time or later
    allEvents         every occurrence of the target's series

Occurrences carry no sequence number, so "following" is defined by
start_time. Two occurrences of one series that start at the same instant
are both "following" and always move together.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import assert_never

from sqlalchemy import ColumnElement, and_

from app.models.event import Event

logger = logging.getLogger(__name__)


class MutationScope(str, Enum):
    THIS_EVENT = "thisEvent"
    THIS_AND_FOLLOWING = "thisAndFollowing"
    ALL_EVENTS = "allEvents"


class MutationAction(str, Enum):
    UPDATE = "update"
    DELETE = "delete"


DEFAULT_SCOPE = MutationScope.THIS_EVENT

SCOPE_MESSAGES = {
    (MutationScope.THIS_EVENT, MutationAction.UPDATE): "Event updated successfully.",
    (MutationScope.THIS_EVENT, MutationAction.DELETE): "Event deleted successfully.",
    (MutationScope.THIS_AND_FOLLOWING, MutationAction.UPDATE): (
        "This event and all following events updated successfully."
    ),
    (MutationScope.THIS_AND_FOLLOWING, MutationAction.DELETE): (
        "This event and all following events deleted successfully."
    ),
    (MutationScope.ALL_EVENTS, MutationAction.UPDATE): (
        "All events in the series updated successfully."
    ),
    (MutationScope.ALL_EVENTS, MutationAction.DELETE): (
        "All events in the series deleted successfully."
    ),
}


@dataclass(frozen=True)
class ScopeSelection:
    """The resolved scope and the WHERE clause selecting the affected events."""

    scope: MutationScope
    predicate: ColumnElement[bool]

    def message(self, action: MutationAction) -> str:
        return scope_message(self.scope, action)


def parse_scope(value: object) -> MutationScope:
    """Map a requested scope value to a MutationScope.

    Only the three scope names are recognized. A missing value, an unknown
    string or a non-string JSON value (number, boolean, list, object) falls
    back to DEFAULT_SCOPE instead of being rejected, so a client that sends
    no scope, or a malformed one, only ever touches the single targeted
    occurrence.
    """
    if value is None:
        return DEFAULT_SCOPE
    if not isinstance(value, str):
        logger.debug(f"Non-string scope {value!r}, using {DEFAULT_SCOPE.value}")
        return DEFAULT_SCOPE
    try:
        return MutationScope(value)
    except ValueError:
        logger.debug(f"Unrecognized scope {value!r}, using {DEFAULT_SCOPE.value}")
        return DEFAULT_SCOPE


def resolve_scope(event: Event, requested_scope: object) -> ScopeSelection:
    """Build the selection for a mutation targeted at ``event``.

    Args:
        event: The loaded target occurrence.
        requested_scope: Raw scope value from the request, may be None or
            any JSON value. See parse_scope for the fallback.

    Returns:
        ScopeSelection whose predicate can be used directly in
        ``update(Event).where(...)`` or ``delete(Event).where(...)``.
    """
    scope = parse_scope(requested_scope)

    if scope is MutationScope.ALL_EVENTS:
        predicate = Event.series_id == event.series_id
    elif scope is MutationScope.THIS_AND_FOLLOWING:
        predicate = and_(
            Event.series_id == event.series_id,
            Event.start_time >= event.start_time,
        )
    elif scope is MutationScope.THIS_EVENT:
        predicate = Event.id == event.id
    else:
        assert_never(scope)

    return ScopeSelection(scope=scope, predicate=predicate)


def scope_message(scope: MutationScope, action: MutationAction) -> str:
    return SCOPE_MESSAGES[(scope, action)]
