"""Staff and developer schemas: role changes, user logs, statistics, settings."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel


class RoleChangeRequest(BaseModel):
    # Optional so a missing field reaches the workflow's own validation message
    role: Optional[str] = None
    password: Optional[str] = None


class UserLogResponse(BaseModel):
    id: int
    actor_id: int
    target_user_id: int
    action: str
    detail: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True


class StatisticsResponse(BaseModel):
    total_articles: int
    total_users: int
    total_comments: int
    pending_comments: int
    total_likes: int
    total_bookmarks: int


class SiteSettingWrite(BaseModel):
    key: str
    value: Any = None
    description: Optional[str] = None


class SiteSettingResponse(BaseModel):
    id: int
    key: str
    value: Any
    description: Optional[str]
    updated_at: datetime

    class Config:
        from_attributes = True
