from fastapi import Depends, Header, HTTPException, status
from sqlmodel import Session, select
from database import get_session
from models.auth import Token, User
from settings import logger
from datetime import datetime, timezone
from typing import Optional
import hashlib


def hash_password(password: str) -> str:
    """Hash a plain text password for storage and comparison."""
    return hashlib.sha256(password.encode()).hexdigest()


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=message,
        headers={"WWW-Authenticate": "Bearer"}
    )


def _as_utc(moment: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


async def get_auth_token(
    authorization: Optional[str] = Header(default=None),
    db_session: Session = Depends(get_session)
) -> Token:
    """Resolve the bearer token from the Authorization header."""
    if not authorization:
        raise _unauthorized("No authorization header provided")

    if not authorization.startswith("Bearer "):
        raise _unauthorized("Invalid authorization header format. Expected: Bearer <token>")

    access_token = authorization[len("Bearer "):].strip()
    if not access_token:
        raise _unauthorized("No token provided")

    statement = select(Token).where(Token.access_token == access_token)
    token = db_session.exec(statement).first()

    if not token or token.is_revoked:
        raise _unauthorized("Invalid or expired token")

    if _as_utc(token.expires_at) <= datetime.now(timezone.utc):
        logger.info("Rejected expired token", extra={"token_id": token.id})
        raise _unauthorized("Invalid or expired token")

    return token


async def require_user(token: Token, db_session: Session) -> User:
    """Return the active user the token belongs to."""
    statement = select(User).where(User.id == token.user_id)
    user = db_session.exec(statement).first()

    if not user or not user.is_active:
        raise _unauthorized("Invalid or expired token")

    return user
