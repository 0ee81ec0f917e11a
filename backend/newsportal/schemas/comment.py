"""Comment schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from newsportal.schemas.article import AuthorSummary


class CommentCreate(BaseModel):
    # Length and blank checks live in comment_service so they report 400
    content: str


class CommentResponse(BaseModel):
    id: int
    content: str
    author_id: int
    article_id: int
    is_approved: bool
    created_at: datetime
    updated_at: datetime
    author: Optional[AuthorSummary] = None

    class Config:
        from_attributes = True


class CommentCreatedResponse(BaseModel):
    message: str
    comment: CommentResponse
