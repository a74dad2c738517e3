"""User account model for issuing bearer tokens.

This module defines the User model which stores registered accounts. The
event endpoints never read this table: they trust the identity carried in
the signed token, so a user row only matters at register and login time.
"""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


class User(SQLModel, table=True):
    """A registered account.

    Attributes:
        id: Unique identifier (UUID). Becomes creator_id on events.
        username: Display name.
        email: Login name, stored lowercase and unique.
        password_hash: Salted PBKDF2 hash, see app.core.security.
        created_at: Registration timestamp.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    username: str
    email: str = Field(index=True, unique=True)
    password_hash: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
