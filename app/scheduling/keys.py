"""Series key generation.

Key format: {prefix}_{uuid4 hex}
- evt: standalone event, the key belongs to that one event only
- ser: recurring series, the key is shared by every occurrence

Both forms come from random UUID4 values, so the prefix alone tells the two
apart and a standalone key can never equal a series key.
"""
import re
from uuid import uuid4

from app.models.event import RecurrenceType

STANDALONE_PREFIX = "evt"
SERIES_PREFIX = "ser"

SERIES_KEY_PATTERN = re.compile(rf"^{SERIES_PREFIX}_[0-9a-f]{{32}}$")


def generate_series_id(recurrence_type: str | None = None) -> str:
    """Return the series_id for a newly created event.

    Args:
        recurrence_type: The event's recurrence type. None is treated as
            "none" (a standalone event).
    """
    if recurrence_type is None or recurrence_type == RecurrenceType.NONE.value:
        prefix = STANDALONE_PREFIX
    else:
        prefix = SERIES_PREFIX
    return f"{prefix}_{uuid4().hex}"


def is_series_key(value: str) -> bool:
    """Check whether a key is a shared recurring-series key."""
    return bool(SERIES_KEY_PATTERN.match(value))
