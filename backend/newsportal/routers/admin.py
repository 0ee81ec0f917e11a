"""Admin router: comment moderation queue and statistics (ADMIN or DEVELOPER)."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from newsportal.database import get_db
from newsportal.middleware.auth import require_admin
from newsportal.models.user import User
from newsportal.schemas.admin import StatisticsResponse
from newsportal.schemas.auth import MessageResponse
from newsportal.schemas.comment import CommentResponse
from newsportal.services import article_service, comment_service

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/comments", response_model=list[CommentResponse])
def list_all_comments(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    return [CommentResponse.model_validate(c) for c in comment_service.list_all_comments(db)]


@router.get("/comments/pending", response_model=list[CommentResponse])
def list_pending_comments(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Comments held by auto-moderation, waiting for a moderator."""
    return [CommentResponse.model_validate(c) for c in comment_service.list_pending_comments(db)]


@router.put("/comments/{comment_id}/approve", response_model=MessageResponse)
def approve_comment(
    comment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    comment_service.approve_comment(db, comment_id)
    return MessageResponse(message="Komentar berhasil disetujui")


@router.delete("/comments/{comment_id}", response_model=MessageResponse)
def delete_comment(
    comment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    comment_service.delete_comment(db, comment_id)
    return MessageResponse(message="Komentar berhasil dihapus")


@router.get("/statistics", response_model=StatisticsResponse)
def statistics(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    return StatisticsResponse(**article_service.get_statistics(db))
