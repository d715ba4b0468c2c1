from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session, select
from database import get_session
from models.auth import User, Token
from models.tasks import Task
from .schemas.auth import UpdateProfileRequest, UserResponse, ProfileEnvelope, DeleteProfileResponse
from helpers.auth import get_auth_token, require_user
from settings import logger

router = APIRouter(prefix="/user", tags=["user"])


@router.get("")
async def get_profile(
    token: Token = Depends(get_auth_token),
    db_session: Session = Depends(get_session)
) -> UserResponse:
    """Get the current user's profile."""
    user = await require_user(token=token, db_session=db_session)
    return UserResponse.model_validate(user)


@router.put("")
async def update_profile(
    profile_data: UpdateProfileRequest,
    token: Token = Depends(get_auth_token),
    db_session: Session = Depends(get_session)
) -> ProfileEnvelope:
    """Update email, display name or metadata of the current user."""
    user = await require_user(token=token, db_session=db_session)

    if profile_data.email is None and profile_data.full_name is None and profile_data.metadata is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No fields provided to update"
        )

    if profile_data.email is not None:
        email = profile_data.email.strip().lower()
        if not email:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email cannot be empty"
            )

        taken_statement = select(User).where(User.email == email, User.id != user.id)
        if db_session.exec(taken_statement).first():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email already in use"
            )
        user.email = email

    if profile_data.full_name is not None or profile_data.metadata is not None:
        # JSON columns aren't change-tracked, assign a new dict
        merged = dict(user.user_metadata or {})
        if profile_data.full_name is not None:
            user.full_name = profile_data.full_name.strip()
            merged["full_name"] = user.full_name
        if profile_data.metadata:
            merged.update(profile_data.metadata)
        user.user_metadata = merged

    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)

    logger.info("Profile updated", extra={"user_id": user.id})

    return ProfileEnvelope(message="Profile updated successfully", user=UserResponse.model_validate(user))


@router.delete("")
async def delete_profile(
    token: Token = Depends(get_auth_token),
    db_session: Session = Depends(get_session)
) -> DeleteProfileResponse:
    """Delete the current user's account together with their tasks and tokens."""
    user = await require_user(token=token, db_session=db_session)
    user_id = user.id

    for task in db_session.exec(select(Task).where(Task.user_id == user_id)).all():
        db_session.delete(task)

    for user_token in db_session.exec(select(Token).where(Token.user_id == user_id)).all():
        db_session.delete(user_token)

    db_session.delete(user)
    db_session.commit()

    logger.warning("User account deleted", extra={"user_id": user_id})

    return DeleteProfileResponse(message="User account deleted successfully", deleted=True)
