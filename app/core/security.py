"""Bearer token verification and password hashing.

Tokens are HS256 JWTs carrying the caller identity (id, username, email).
Event endpoints trust a valid token without looking the user up, so the
identity in the token is the identity used for authorization and listing.
"""
import hashlib
import hmac
import logging
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from app.core.config import settings
from app.core.exceptions import UnauthenticatedError

logger = logging.getLogger(__name__)

PASSWORD_HASH_ALGORITHM = "pbkdf2_sha256"
PASSWORD_HASH_ITERATIONS = 260_000

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    """Authenticated caller identity."""

    id: UUID
    username: str
    email: str


def create_access_token(
    user_id: UUID, username: str, email: str, expires_in: timedelta | None = None
) -> str:
    """Sign a bearer token for the given identity."""
    now = datetime.now(UTC)
    if expires_in is None:
        expires_in = timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "id": str(user_id),
        "username": username,
        "email": email,
        "iat": now,
        "exp": now + expires_in,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> CurrentUser:
    """Verify a bearer token and return the identity it carries.

    Raises:
        UnauthenticatedError: If the signature, expiry or claims are invalid.
    """
    try:
        payload = jwt.decode(
            token, settings.secret_key, algorithms=[settings.jwt_algorithm]
        )
        return CurrentUser(
            id=UUID(payload["id"]),
            username=payload.get("username", ""),
            email=payload.get("email", ""),
        )
    except (JWTError, KeyError, TypeError, ValueError) as e:
        logger.warning(f"Rejected bearer token: {e}")
        raise UnauthenticatedError("Token is not valid") from e


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> CurrentUser:
    """Dependency resolving the caller from the Authorization header."""
    if credentials is None:
        if not request.headers.get("Authorization"):
            raise UnauthenticatedError("No token provided, authorization denied")
        raise UnauthenticatedError("Invalid token format. Expected: Bearer <token>")
    return decode_access_token(credentials.credentials)


def hash_password(password: str) -> str:
    """Hash a password as ``pbkdf2_sha256$<iterations>$<salt>$<hex digest>``."""
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode(), salt.encode(), PASSWORD_HASH_ITERATIONS
    )
    return f"{PASSWORD_HASH_ALGORITHM}${PASSWORD_HASH_ITERATIONS}${salt}${digest.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    try:
        algorithm, iterations, salt, expected = password_hash.split("$")
    except ValueError:
        return False
    if algorithm != PASSWORD_HASH_ALGORITHM:
        return False
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode(), salt.encode(), int(iterations)
    )
    return hmac.compare_digest(digest.hex(), expected)
