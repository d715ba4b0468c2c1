from sqlmodel import SQLModel, Field, Column
from sqlalchemy import JSON
from typing import Optional, Dict, Any
from datetime import datetime
from .helper import id_generator, utcnow


class User(SQLModel, table=True):
    """Account that owns tasks."""
    id: str = Field(default_factory=id_generator('user', 10), primary_key=True)
    email: str = Field(unique=True, index=True)
    full_name: Optional[str] = Field(default=None)
    user_metadata: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    hashed_password: str
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utcnow)


class Token(SQLModel, table=True):
    """Bearer token issued to a user at signup or login."""
    id: str = Field(default_factory=id_generator('token', 10), primary_key=True)
    user_id: str = Field(foreign_key="user.id", index=True)
    token_type: str = Field(default="bearer")
    access_token: str = Field(unique=True, index=True)
    refresh_token: Optional[str] = Field(default=None, unique=True, index=True)
    expires_at: datetime
    created_at: datetime = Field(default_factory=utcnow)
    is_revoked: bool = Field(default=False)
