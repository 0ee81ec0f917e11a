"""Articles router: CRUD, comments, likes and bookmarks."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from newsportal.database import get_db
from newsportal.middleware.auth import get_current_user, require_admin
from newsportal.models.article import Article
from newsportal.models.user import User
from newsportal.schemas.article import (
    ArticleCounts,
    ArticleCreate,
    ArticleListResponse,
    ArticleResponse,
    ArticleUpdate,
    BookmarkResponse,
    LikeResponse,
)
from newsportal.schemas.auth import MessageResponse
from newsportal.schemas.comment import CommentCreate, CommentCreatedResponse, CommentResponse
from newsportal.services import article_service, comment_service
from newsportal.services.moderation import ModerationPolicy, get_moderation_policy

router = APIRouter(prefix="/api/articles", tags=["articles"])


def articles_to_response(db: Session, articles: list[Article]) -> list[ArticleResponse]:
    """Convert Article ORM rows to responses with like/comment/bookmark counts."""
    counts = article_service.article_counts(db, [a.id for a in articles])
    return [
        ArticleResponse.model_validate(a).model_copy(update={"counts": ArticleCounts(**counts[a.id])})
        for a in articles
    ]


@router.get("", response_model=ArticleListResponse)
def list_articles(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    published: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """List articles. ``published=false`` includes drafts (admin views)."""
    result = article_service.list_articles(
        db,
        page=page,
        limit=limit,
        category_slug=category,
        search=search,
        published_only=published != "false",
    )
    return ArticleListResponse(
        articles=articles_to_response(db, result["articles"]),
        total=result["total"],
        page=result["page"],
        limit=result["limit"],
        total_pages=result["total_pages"],
    )


@router.get("/{slug}", response_model=ArticleResponse)
def get_article(slug: str, db: Session = Depends(get_db)):
    article = article_service.get_article_by_slug(db, slug)
    return articles_to_response(db, [article])[0]


@router.post("", response_model=ArticleResponse, status_code=201)
def create_article(
    req: ArticleCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Create an article (admin only)."""
    article = article_service.create_article(
        db,
        author_id=current_user.id,
        title=req.title,
        excerpt=req.excerpt,
        content=req.content,
        category_id=req.category_id,
        cover_image=req.cover_image,
        is_published=req.is_published,
    )
    return articles_to_response(db, [article])[0]


@router.put("/{article_id}", response_model=ArticleResponse)
def update_article(
    article_id: int,
    req: ArticleUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    article = article_service.update_article(db, article_id, **req.model_dump(exclude_unset=True))
    return articles_to_response(db, [article])[0]


@router.delete("/{article_id}", response_model=MessageResponse)
def delete_article(
    article_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    article_service.delete_article(db, article_id)
    return MessageResponse(message="Artikel berhasil dihapus")


# ── Comments ──────────────────────────────────────────────────────────────────

@router.get("/{article_id}/comments", response_model=list[CommentResponse])
def list_comments(article_id: int, db: Session = Depends(get_db)):
    """Approved comments of an article, newest first."""
    comments = comment_service.list_article_comments(db, article_id)
    return [CommentResponse.model_validate(c) for c in comments]


@router.post("/{article_id}/comments", response_model=CommentCreatedResponse, status_code=201)
def create_comment(
    article_id: int,
    req: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    policy: ModerationPolicy = Depends(get_moderation_policy),
):
    """Post a comment. Auto-moderation decides whether it is visible at once."""
    comment = comment_service.create_comment(
        db,
        policy,
        author_id=current_user.id,
        article_id=article_id,
        content=req.content,
    )
    if comment.is_approved:
        message = "Komentar berhasil dikirim"
    else:
        message = "Komentar berhasil dikirim dan menunggu moderasi"
    return CommentCreatedResponse(message=message, comment=CommentResponse.model_validate(comment))


# ── Likes & bookmarks ─────────────────────────────────────────────────────────

@router.post("/{article_id}/like", response_model=LikeResponse)
def toggle_like(
    article_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    is_liked = article_service.toggle_like(db, current_user.id, article_id)
    return LikeResponse(
        is_liked=is_liked,
        message="Artikel disukai" if is_liked else "Like dibatalkan",
    )


@router.post("/{article_id}/bookmark", response_model=BookmarkResponse)
def toggle_bookmark(
    article_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    is_bookmarked = article_service.toggle_bookmark(db, current_user.id, article_id)
    return BookmarkResponse(
        is_bookmarked=is_bookmarked,
        message="Artikel dibookmark" if is_bookmarked else "Bookmark dibatalkan",
    )
