"""Comment service: creation through auto-moderation, and staff moderation."""

from sqlalchemy.orm import Session, joinedload

from newsportal.config import settings
from newsportal.errors import NotFoundError, ValidationError
from newsportal.models.article import Article
from newsportal.models.comment import Comment
from newsportal.services.moderation import ModerationPolicy


def validate_content(content: str) -> str:
    if not content or not content.strip():
        raise ValidationError("Komentar tidak boleh kosong")
    if len(content) > settings.COMMENT_MAX_LENGTH:
        raise ValidationError(f"Komentar maksimal {settings.COMMENT_MAX_LENGTH} karakter")
    return content


def create_comment(
    db: Session,
    policy: ModerationPolicy,
    author_id: int,
    article_id: int,
    content: str,
) -> Comment:
    """Insert a comment whose approval flag comes from the moderation policy."""
    content = validate_content(content)

    article = db.query(Article).filter(Article.id == article_id).first()
    if not article:
        raise NotFoundError("Artikel tidak ditemukan")

    comment = Comment(
        content=content,
        author_id=author_id,
        article_id=article_id,
        is_approved=policy.is_approved(content),
    )
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return comment


def get_comment(db: Session, comment_id: int) -> Comment:
    comment = db.query(Comment).filter(Comment.id == comment_id).first()
    if not comment:
        raise NotFoundError("Komentar tidak ditemukan")
    return comment


def list_article_comments(db: Session, article_id: int) -> list[Comment]:
    """Public view: approved comments only, newest first."""
    return (
        db.query(Comment)
        .options(joinedload(Comment.author))
        .filter(Comment.article_id == article_id, Comment.is_approved.is_(True))
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .all()
    )


def list_all_comments(db: Session) -> list[Comment]:
    return (
        db.query(Comment)
        .options(joinedload(Comment.author), joinedload(Comment.article))
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .all()
    )


def list_pending_comments(db: Session) -> list[Comment]:
    return (
        db.query(Comment)
        .options(joinedload(Comment.author), joinedload(Comment.article))
        .filter(Comment.is_approved.is_(False))
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .all()
    )


def approve_comment(db: Session, comment_id: int) -> Comment:
    """Mark a comment approved. Approving an approved comment changes nothing."""
    comment = get_comment(db, comment_id)
    if not comment.is_approved:
        comment.is_approved = True
        db.commit()
        db.refresh(comment)
    return comment


def delete_comment(db: Session, comment_id: int) -> None:
    comment = get_comment(db, comment_id)
    db.delete(comment)
    db.commit()
