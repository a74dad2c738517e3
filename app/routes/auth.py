"""Account routes issuing bearer tokens."""
import logging

from fastapi import APIRouter, Depends, status
from sqlmodel import Session, select

from app.core.database import get_session
from app.core.exceptions import ValidationError
from app.core.security import create_access_token, hash_password, verify_password
from app.models import User
from app.models.schemas import LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, session: Session = Depends(get_session)):
    """
    Register a new account.

    Returns a bearer token for the new account. Emails are unique and
    compared case-insensitively.
    """
    if not payload.username or not payload.email or not payload.password:
        raise ValidationError("Please enter all fields")

    email = payload.email.strip().lower()
    existing = session.exec(select(User).where(User.email == email)).first()
    if existing:
        raise ValidationError("User already exists", field="email")

    user = User(
        username=payload.username.strip(),
        email=email,
        password_hash=hash_password(payload.password),
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info(f"Registered user {user.id}")

    return {
        "message": "User registered successfully",
        "token": create_access_token(user.id, user.username, user.email),
    }


@router.post("/login")
async def login(payload: LoginRequest, session: Session = Depends(get_session)):
    """
    Log in with email and password.

    Unknown emails and wrong passwords get the same 400 response.
    """
    email = (payload.email or "").strip().lower()
    user = session.exec(select(User).where(User.email == email)).first()
    if not user or not verify_password(payload.password or "", user.password_hash):
        logger.warning(f"Failed login for {email!r}")
        raise ValidationError("Invalid credentials")

    return {
        "message": "Logged in successfully",
        "id": str(user.id),
        "username": user.username,
        "email": user.email,
        "token": create_access_token(user.id, user.username, user.email),
    }
