from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session, select
from database import get_session
from models.auth import User, Token
from .schemas.auth import LoginRequest, LoginResponse, SignupRequest, UserResponse, MessageResponse
from helpers.auth import get_auth_token, hash_password
from settings import TOKEN_EXPIRE_HOURS, logger

from datetime import datetime, timedelta, timezone
from models.helper import id_generator

router = APIRouter(prefix="/auth", tags=["authentication"])


def _issue_token(user: User, db_session: Session) -> LoginResponse:
    """Create and persist a fresh token pair for the user."""
    access_token = id_generator('tkn', 32)()
    refresh_token = id_generator('ref', 32)()
    expires_at = datetime.now(timezone.utc) + timedelta(hours=TOKEN_EXPIRE_HOURS)

    new_token = Token(
        user_id=user.id,
        access_token=access_token,
        refresh_token=refresh_token,
        expires_at=expires_at
    )

    db_session.add(new_token)
    db_session.commit()

    return LoginResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        token_type="bearer",
        expires_at=expires_at,
        user=UserResponse.model_validate(user)
    )


@router.post("/signup")
async def signup(
    signup_data: SignupRequest,
    db_session: Session = Depends(get_session)
) -> LoginResponse:
    """Register a new account and log it in."""
    existing = db_session.exec(select(User).where(User.email == signup_data.email)).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    new_user = User(
        email=signup_data.email,
        full_name=signup_data.full_name.strip() if signup_data.full_name else None,
        hashed_password=hash_password(signup_data.password),
        is_active=True
    )

    db_session.add(new_user)
    db_session.commit()
    db_session.refresh(new_user)

    logger.info("User signed up", extra={"user_id": new_user.id})

    return _issue_token(new_user, db_session)


@router.post("/token")
async def login(
    login_data: LoginRequest,
    db_session: Session = Depends(get_session)
) -> LoginResponse:
    """Exchange email and password for a bearer token."""
    user_statement = select(User).where(
        User.email == login_data.email.strip().lower(),
        User.is_active == True  # noqa: E712
    )
    user = db_session.exec(user_statement).first()

    # Don't reveal whether the email or the password was wrong
    if not user or user.hashed_password != hash_password(login_data.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials"
        )

    return _issue_token(user, db_session)


@router.post("/logout")
async def logout(
    token: Token = Depends(get_auth_token),
    db_session: Session = Depends(get_session)
) -> MessageResponse:
    """Revoke the token used for this request."""
    token.is_revoked = True
    db_session.add(token)
    db_session.commit()

    return MessageResponse(message="Logged out successfully")
