"""Event operations: create, scoped update, scoped delete, listing.

Every mutation follows the same steps inside one session transaction:
load the target event, check the caller created it, resolve the requested
scope into a predicate, apply one batch statement, commit. Store errors
roll the transaction back and propagate to the HTTP layer.
"""
import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import delete, or_, update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from app.core.exceptions import NotFoundError, ValidationError
from app.core.security import CurrentUser
from app.models import Event, Participant, RecurrenceType
from app.models.schemas import EventCreate, EventUpdate, Recurrence
from app.scheduling.access import ensure_creator
from app.scheduling.keys import generate_series_id, is_series_key
from app.scheduling.scope import ScopeSelection, resolve_scope

logger = logging.getLogger(__name__)

RECURRENCE_TYPES = [t.value for t in RecurrenceType]

# Columns a partial update may set directly
UPDATABLE_FIELDS = ("title", "description", "start_time", "end_time")


def to_utc(value: datetime | None) -> datetime | None:
    """Normalize a timestamp to UTC. Naive values are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def normalize_participants(emails: Sequence[str]) -> list[str]:
    """Lowercase, strip and de-duplicate participant emails, keeping order."""
    seen: dict[str, None] = {}
    for email in emails:
        email = email.strip().lower()
        if email:
            seen.setdefault(email, None)
    return list(seen)


def validate_recurrence(recurrence: Recurrence) -> None:
    if recurrence.type not in RECURRENCE_TYPES:
        raise ValidationError(
            "Invalid recurrence type. Must be one of: none, daily, weekly, monthly.",
            field="recurrence.type",
        )
    if recurrence.interval is not None and recurrence.interval < 1:
        raise ValidationError(
            "Recurrence interval must be a positive integer.",
            field="recurrence.interval",
        )


def _warn_if_ends_before_start(start: datetime | None, end: datetime | None) -> None:
    # Accepted as-is; only logged.
    if start is not None and end is not None and to_utc(end) < to_utc(start):
        logger.warning(f"Event ends before it starts: {start} > {end}")


def get_event(session: Session, event_id: UUID | str) -> Event:
    """Load one event by id.

    Raises:
        NotFoundError: If the id is malformed or no such event exists.
    """
    try:
        key = event_id if isinstance(event_id, UUID) else UUID(str(event_id))
    except ValueError:
        raise NotFoundError("Event", event_id)

    event = session.get(Event, key)
    if not event:
        raise NotFoundError("Event", event_id)
    return event


def assign_series_id(
    session: Session,
    caller: CurrentUser,
    recurrence_type: str,
    requested: str | None,
) -> str:
    """Pick the series_id for a new event.

    Without an explicit ``requested`` key a fresh one is generated. An
    explicit key attaches a new occurrence to an existing series and is
    only accepted for recurring events, for series that already exist,
    and when the caller created that series.
    """
    if requested is None:
        return generate_series_id(recurrence_type)

    if recurrence_type == RecurrenceType.NONE.value:
        raise ValidationError(
            "seriesId can only be given for recurring events.", field="seriesId"
        )
    if not is_series_key(requested):
        raise ValidationError("Invalid seriesId.", field="seriesId")

    existing = session.exec(
        select(Event).where(Event.series_id == requested).limit(1)
    ).first()
    if existing is None:
        raise ValidationError("Series not found.", field="seriesId")

    ensure_creator(existing, caller.id, "add occurrences to", resource="series")
    return requested


def create_event(session: Session, caller: CurrentUser, payload: EventCreate) -> Event:
    """Create one event record owned by the caller."""
    title = (payload.title or "").strip()
    if not title or payload.start_time is None:
        raise ValidationError(
            "Title and startTime are required fields.",
            field="title" if not title else "startTime",
        )

    recurrence = payload.recurrence or Recurrence()
    validate_recurrence(recurrence)
    _warn_if_ends_before_start(payload.start_time, payload.end_time)

    series_id = assign_series_id(session, caller, recurrence.type, payload.series_id)

    event = Event(
        title=title,
        description=payload.description.strip() if payload.description else None,
        start_time=to_utc(payload.start_time),
        end_time=to_utc(payload.end_time),
        creator_id=caller.id,
        recurrence_type=recurrence.type,
        recurrence_interval=recurrence.interval,
        recurrence_until=to_utc(recurrence.until),
        series_id=series_id,
        participants=[
            Participant(email=email)
            for email in normalize_participants(payload.participants or [])
        ],
    )
    try:
        session.add(event)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Failed to create event for {caller.id}: {e}")
        raise
    session.refresh(event)

    logger.info(f"Created event {event.id} in series {event.series_id}")
    return event


def _build_update_values(payload: EventUpdate) -> tuple[dict, list[str] | None]:
    """Translate the fields present in an update request into column values.

    Returns:
        Tuple of (column values, replacement participant list or None when
        participants were not part of the request).
    """
    changes = payload.model_dump(exclude_unset=True, exclude={"update_scope"})
    values = {field: changes[field] for field in UPDATABLE_FIELDS if field in changes}

    if "title" in values:
        title = (values["title"] or "").strip()
        if not title:
            raise ValidationError("Title cannot be empty.", field="title")
        values["title"] = title
    if values.get("description"):
        values["description"] = values["description"].strip()
    if "start_time" in values:
        if values["start_time"] is None:
            raise ValidationError("startTime cannot be empty.", field="startTime")
        values["start_time"] = to_utc(values["start_time"])
    if "end_time" in values:
        values["end_time"] = to_utc(values["end_time"])

    if "recurrence" in changes:
        recurrence = payload.recurrence or Recurrence()
        validate_recurrence(recurrence)
        values["recurrence_type"] = recurrence.type
        values["recurrence_interval"] = recurrence.interval
        values["recurrence_until"] = to_utc(recurrence.until)

    participants = None
    if "participants" in changes:
        participants = normalize_participants(payload.participants or [])

    return values, participants


def update_event(
    session: Session, caller: CurrentUser, event_id: UUID | str, payload: EventUpdate
) -> ScopeSelection:
    """Merge the fields present in ``payload`` into every event in scope.

    Returns:
        The resolved selection, for building the response message.
    """
    event = get_event(session, event_id)
    ensure_creator(event, caller.id, "update")

    values, participants = _build_update_values(payload)
    _warn_if_ends_before_start(
        values.get("start_time", event.start_time), values.get("end_time", event.end_time)
    )
    selection = resolve_scope(event, payload.update_scope)

    try:
        # Participants first: a start_time change could move events out of
        # a thisAndFollowing predicate.
        if participants is not None:
            matched_ids = session.exec(select(Event.id).where(selection.predicate)).all()
            session.execute(
                delete(Participant).where(col(Participant.event_id).in_(matched_ids))
            )
            session.add_all(
                Participant(event_id=matched_id, email=email)
                for matched_id in matched_ids
                for email in participants
            )
        if values:
            session.execute(
                update(Event)
                .where(selection.predicate)
                .values(**values)
                .execution_options(synchronize_session="fetch")
            )
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Failed to update event {event_id}: {e}")
        raise

    logger.info(f"Updated event {event_id} (scope: {selection.scope.value})")
    return selection


def delete_event(
    session: Session,
    caller: CurrentUser,
    event_id: UUID | str,
    delete_scope: object = None,
) -> ScopeSelection:
    """Physically remove every event in scope along with its participants."""
    event = get_event(session, event_id)
    ensure_creator(event, caller.id, "delete")

    selection = resolve_scope(event, delete_scope)
    matched_ids = select(Event.id).where(selection.predicate)

    try:
        session.execute(
            delete(Participant).where(col(Participant.event_id).in_(matched_ids))
        )
        result = session.execute(
            delete(Event)
            .where(selection.predicate)
            .execution_options(synchronize_session="fetch")
        )
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Failed to delete event {event_id}: {e}")
        raise

    logger.info(
        f"Deleted {result.rowcount} event(s) from {event_id} (scope: {selection.scope.value})"
    )
    return selection


def list_visible_events(session: Session, caller: CurrentUser) -> Sequence[Event]:
    """Events the caller created or is listed on as a participant.

    Creators are matched by identity, participants by lowercased email.
    """
    participant_of = select(Participant.event_id).where(
        Participant.email == (caller.email or "").lower()
    )
    statement = (
        select(Event)
        .where(or_(Event.creator_id == caller.id, col(Event.id).in_(participant_of)))
        .order_by(Event.start_time)
    )
    return session.exec(statement).all()
