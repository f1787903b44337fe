"""User and profile models."""
from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class CurrentUser(BaseModel):
    """The caller resolved from a verified bearer token."""
    id: str
    access_token: str


class Profile(BaseModel):
    """Row of the profiles table."""
    user_id: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None


class ProfileResponse(BaseModel):
    success: bool
    profile: Optional[Profile] = None
    error: Optional[str] = None
