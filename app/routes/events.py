"""Event routes for creating, changing and listing events."""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.core.database import get_session
from app.core.security import CurrentUser, get_current_user
from app.models.schemas import (
    EventCreate,
    EventCreated,
    EventDelete,
    EventList,
    EventRead,
    EventUpdate,
    MutationResult,
)
from app.scheduling.scope import MutationAction
from app.scheduling.service import (
    create_event,
    delete_event,
    list_visible_events,
    update_event,
)

router = APIRouter(
    prefix="/api/events",
    tags=["events"],
    dependencies=[Depends(get_current_user)],
)


@router.get("/myevents", response_model=EventList)
async def my_events(
    user: CurrentUser = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """
    List events visible to the caller.

    Returns events the caller created plus events that list the caller's
    email as a participant, ordered by start time.
    """
    events = list_visible_events(session, user)
    return EventList(
        message="Events retrieved successfully",
        events=[EventRead.from_event(event) for event in events],
    )


@router.post("", response_model=EventCreated, status_code=status.HTTP_201_CREATED)
async def create(
    payload: EventCreate,
    user: CurrentUser = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """
    Create one event owned by the caller.

    A recurring event gets a new series key unless the body names an
    existing series (seriesId) created by the same caller.
    """
    event = create_event(session, user, payload)
    return EventCreated(
        message="Event created successfully",
        event=EventRead.from_event(event),
    )


@router.put("/{event_id}", response_model=MutationResult)
async def update(
    event_id: str,
    payload: EventUpdate,
    user: CurrentUser = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """
    Update an event, optionally across its series.

    updateScope is one of thisEvent (default), thisAndFollowing or
    allEvents. Only fields present in the body are changed.
    """
    selection = update_event(session, user, event_id, payload)
    return MutationResult(
        message=selection.message(MutationAction.UPDATE),
        scope=selection.scope.value,
    )


@router.delete("/{event_id}", response_model=MutationResult)
async def delete(
    event_id: str,
    payload: EventDelete | None = None,
    user: CurrentUser = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """
    Delete an event, optionally across its series.

    The optional body carries deleteScope, with the same values and default
    as updateScope. Deletion is permanent.
    """
    delete_scope = payload.delete_scope if payload else None
    selection = delete_event(session, user, event_id, delete_scope)
    return MutationResult(
        message=selection.message(MutationAction.DELETE),
        scope=selection.scope.value,
    )
