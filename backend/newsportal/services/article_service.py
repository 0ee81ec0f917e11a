"""Article service: categories, articles, likes, bookmarks and statistics."""

import logging
import math
import re
import unicodedata
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from newsportal.errors import ConflictError, NotFoundError
from newsportal.models.article import Article, Category
from newsportal.models.comment import Comment
from newsportal.models.engagement import Bookmark, Like
from newsportal.models.user import User

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    {"name": "Nasional", "slug": "nasional", "description": "Berita nasional Indonesia", "color": "#DC2626"},
    {"name": "Ekonomi", "slug": "ekonomi", "description": "Berita ekonomi dan bisnis", "color": "#059669"},
    {"name": "Olahraga", "slug": "olahraga", "description": "Berita olahraga", "color": "#2563EB"},
    {"name": "Teknologi", "slug": "teknologi", "description": "Berita teknologi dan inovasi", "color": "#7C3AED"},
    {"name": "Budaya", "slug": "budaya", "description": "Berita budaya dan seni", "color": "#DC2626"},
]


def slugify(text: str) -> str:
    """ASCII, lower-case, hyphen-separated slug."""
    normalized = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^a-z0-9]+", "-", normalized.lower()).strip("-")
    return slug or "artikel"


# ── Categories ────────────────────────────────────────────────────────────────

def list_categories(db: Session) -> list[Category]:
    return db.query(Category).order_by(Category.name).all()


def get_category(db: Session, category_id: int) -> Category:
    category = db.query(Category).filter(Category.id == category_id).first()
    if not category:
        raise NotFoundError("Kategori tidak ditemukan")
    return category


def create_category(
    db: Session,
    name: str,
    slug: Optional[str] = None,
    description: Optional[str] = None,
    color: str = "#DC2626",
) -> Category:
    slug = slug or slugify(name)
    existing = (
        db.query(Category)
        .filter(or_(Category.name == name, Category.slug == slug))
        .first()
    )
    if existing:
        raise ConflictError("Kategori sudah ada")

    category = Category(name=name, slug=slug, description=description, color=color)
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def ensure_default_categories(db: Session) -> int:
    """Seed the default categories when the table is empty. Returns rows added."""
    if db.query(Category).count() > 0:
        return 0
    for data in DEFAULT_CATEGORIES:
        db.add(Category(**data))
    db.commit()
    logger.info("Default categories created")
    return len(DEFAULT_CATEGORIES)


# ── Articles ──────────────────────────────────────────────────────────────────

def _unique_slug(db: Session, title: str, exclude_id: Optional[int] = None) -> str:
    base = slugify(title)
    slug = base
    suffix = 2
    while True:
        query = db.query(Article.id).filter(Article.slug == slug)
        if exclude_id is not None:
            query = query.filter(Article.id != exclude_id)
        if not query.first():
            return slug
        slug = f"{base}-{suffix}"
        suffix += 1


def article_counts(db: Session, article_ids: list[int]) -> dict[int, dict]:
    """Likes, approved comments and bookmarks per article id."""
    counts = {aid: {"likes": 0, "comments": 0, "bookmarks": 0} for aid in article_ids}
    if not article_ids:
        return counts

    like_rows = (
        db.query(Like.article_id, func.count(Like.id))
        .filter(Like.article_id.in_(article_ids))
        .group_by(Like.article_id)
    )
    comment_rows = (
        db.query(Comment.article_id, func.count(Comment.id))
        .filter(Comment.article_id.in_(article_ids), Comment.is_approved.is_(True))
        .group_by(Comment.article_id)
    )
    bookmark_rows = (
        db.query(Bookmark.article_id, func.count(Bookmark.id))
        .filter(Bookmark.article_id.in_(article_ids))
        .group_by(Bookmark.article_id)
    )
    for key, rows in (("likes", like_rows), ("comments", comment_rows), ("bookmarks", bookmark_rows)):
        for article_id, n in rows:
            counts[article_id][key] = n
    return counts


def _escape_like(text: str) -> str:
    """Make LIKE wildcards in user text match literally (escape char ``\\``)."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def list_articles(
    db: Session,
    page: int = 1,
    limit: int = 10,
    category_slug: Optional[str] = None,
    search: Optional[str] = None,
    published_only: bool = True,
) -> dict:
    """Paginated articles, newest first."""
    page = max(page, 1)
    limit = max(min(limit, 100), 1)

    query = db.query(Article)
    if published_only:
        query = query.filter(Article.is_published.is_(True))
    if category_slug:
        query = query.join(Category, Article.category_id == Category.id).filter(Category.slug == category_slug)
    if search:
        pattern = f"%{_escape_like(search.lower())}%"
        query = query.filter(
            or_(
                func.lower(Article.title).like(pattern, escape="\\"),
                func.lower(Article.excerpt).like(pattern, escape="\\"),
                func.lower(Article.content).like(pattern, escape="\\"),
            )
        )

    total = query.count()
    articles = (
        query.options(joinedload(Article.author), joinedload(Article.category))
        .order_by(Article.created_at.desc(), Article.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return {
        "articles": articles,
        "total": total,
        "page": page,
        "limit": limit,
        "total_pages": math.ceil(total / limit) if total else 0,
    }


def get_article(db: Session, article_id: int) -> Article:
    article = db.query(Article).filter(Article.id == article_id).first()
    if not article:
        raise NotFoundError("Artikel tidak ditemukan")
    return article


def get_article_by_slug(db: Session, slug: str) -> Article:
    article = (
        db.query(Article)
        .options(joinedload(Article.author), joinedload(Article.category))
        .filter(Article.slug == slug)
        .first()
    )
    if not article:
        raise NotFoundError("Artikel tidak ditemukan")
    return article


def create_article(
    db: Session,
    author_id: int,
    title: str,
    excerpt: str,
    content: str,
    category_id: int,
    cover_image: Optional[str] = None,
    is_published: bool = False,
) -> Article:
    get_category(db, category_id)
    article = Article(
        title=title,
        slug=_unique_slug(db, title),
        excerpt=excerpt,
        content=content,
        cover_image=cover_image,
        author_id=author_id,
        category_id=category_id,
        is_published=is_published,
        published_at=datetime.now(timezone.utc) if is_published else None,
    )
    db.add(article)
    db.commit()
    db.refresh(article)
    return article


def update_article(db: Session, article_id: int, **updates) -> Article:
    """Apply a partial update. ``None`` values are ignored."""
    article = get_article(db, article_id)
    updates = {k: v for k, v in updates.items() if v is not None}

    if "category_id" in updates:
        get_category(db, updates["category_id"])
    if "title" in updates and updates["title"] != article.title:
        article.slug = _unique_slug(db, updates["title"], exclude_id=article.id)
    if updates.get("is_published") and not article.is_published:
        article.published_at = datetime.now(timezone.utc)

    for field in ("title", "excerpt", "content", "cover_image", "category_id", "is_published"):
        if field in updates:
            setattr(article, field, updates[field])

    db.commit()
    db.refresh(article)
    return article


def delete_article(db: Session, article_id: int) -> None:
    article = get_article(db, article_id)
    db.delete(article)
    db.commit()


# ── Likes & bookmarks ─────────────────────────────────────────────────────────

def toggle_like(db: Session, user_id: int, article_id: int) -> bool:
    """Like the article, or remove an existing like. Returns the new state."""
    get_article(db, article_id)
    existing = db.query(Like).filter(Like.user_id == user_id, Like.article_id == article_id).first()
    if existing:
        db.delete(existing)
        db.commit()
        return False
    db.add(Like(user_id=user_id, article_id=article_id))
    db.commit()
    return True


def toggle_bookmark(db: Session, user_id: int, article_id: int) -> bool:
    """Bookmark the article, or remove an existing bookmark. Returns the new state."""
    get_article(db, article_id)
    existing = (
        db.query(Bookmark)
        .filter(Bookmark.user_id == user_id, Bookmark.article_id == article_id)
        .first()
    )
    if existing:
        db.delete(existing)
        db.commit()
        return False
    db.add(Bookmark(user_id=user_id, article_id=article_id))
    db.commit()
    return True


def list_user_bookmarks(db: Session, user_id: int, page: int = 1, limit: int = 10) -> dict:
    page = max(page, 1)
    limit = max(min(limit, 100), 1)
    query = (
        db.query(Article)
        .join(Bookmark, Bookmark.article_id == Article.id)
        .filter(Bookmark.user_id == user_id)
    )
    total = query.count()
    articles = (
        query.options(joinedload(Article.author), joinedload(Article.category))
        .order_by(Bookmark.created_at.desc(), Bookmark.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return {"bookmarks": articles, "total": total}


# ── Statistics ────────────────────────────────────────────────────────────────

def get_statistics(db: Session) -> dict:
    return {
        "total_articles": db.query(Article).count(),
        "total_users": db.query(User).count(),
        "total_comments": db.query(Comment).count(),
        "pending_comments": db.query(Comment).filter(Comment.is_approved.is_(False)).count(),
        "total_likes": db.query(Like).count(),
        "total_bookmarks": db.query(Bookmark).count(),
    }
