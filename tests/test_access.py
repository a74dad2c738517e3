"""Tests for creator-only authorization."""

import pytest

from app.core.exceptions import ForbiddenError, NotFoundError
from app.core.security import CurrentUser
from app.models import Event
from app.scheduling.access import AccessDecision, authorize, ensure_creator


class TestAuthorize:
    def test_creator_allowed(self, standalone_event: Event, alice: CurrentUser):
        assert authorize(standalone_event, alice.id) is AccessDecision.ALLOWED

    def test_participant_denied(self, standalone_event: Event, bob: CurrentUser):
        """Participants can read an event but not change it."""
        assert "bob@example.com" in standalone_event.participant_emails
        assert authorize(standalone_event, bob.id) is AccessDecision.DENIED


class TestEnsureCreator:
    def test_raises_forbidden(self, standalone_event: Event, bob: CurrentUser):
        with pytest.raises(ForbiddenError) as exc_info:
            ensure_creator(standalone_event, bob.id, "delete")

        assert exc_info.value.message == "You are not authorized to delete this event."
        assert not isinstance(exc_info.value, NotFoundError)

    def test_creator_passes(self, standalone_event: Event, alice: CurrentUser):
        ensure_creator(standalone_event, alice.id, "update")
