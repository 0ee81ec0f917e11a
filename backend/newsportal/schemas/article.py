"""Category, article and engagement schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    slug: Optional[str] = None
    description: Optional[str] = None
    color: str = "#DC2626"


class CategoryResponse(BaseModel):
    id: int
    name: str
    slug: str
    description: Optional[str]
    color: str

    class Config:
        from_attributes = True


class AuthorSummary(BaseModel):
    id: int
    username: str
    full_name: str
    avatar: Optional[str] = None

    class Config:
        from_attributes = True


class ArticleCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    excerpt: str = Field(min_length=1)
    content: str = Field(min_length=1)
    category_id: int
    cover_image: Optional[str] = None
    is_published: bool = False


class ArticleUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    excerpt: Optional[str] = None
    content: Optional[str] = None
    category_id: Optional[int] = None
    cover_image: Optional[str] = None
    is_published: Optional[bool] = None


class ArticleCounts(BaseModel):
    likes: int = 0
    comments: int = 0
    bookmarks: int = 0


class ArticleResponse(BaseModel):
    id: int
    title: str
    slug: str
    excerpt: str
    content: str
    cover_image: Optional[str]
    is_published: bool
    published_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime
    author: AuthorSummary
    category: CategoryResponse
    counts: ArticleCounts = ArticleCounts()

    class Config:
        from_attributes = True


class ArticleListResponse(BaseModel):
    articles: list[ArticleResponse]
    total: int
    page: int
    limit: int
    total_pages: int


class BookmarkListResponse(BaseModel):
    bookmarks: list[ArticleResponse]
    total: int


class LikeResponse(BaseModel):
    is_liked: bool
    message: str


class BookmarkResponse(BaseModel):
    is_bookmarked: bool
    message: str
