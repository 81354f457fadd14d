from typing import Optional

from pydantic import BaseModel


class User(BaseModel):
    user_id: str
    email: Optional[str] = None


class UserProfile(BaseModel):
    """Snapshot of the fields copied onto posts and comments"""
    user_id: str
    display_name: str
    avatar_ref: Optional[str] = None
