"""SQLAlchemy ORM models."""

from newsportal.models.user import User, Role
from newsportal.models.article import Article, Category
from newsportal.models.comment import Comment
from newsportal.models.engagement import Like, Bookmark
from newsportal.models.site_setting import SiteSetting
from newsportal.models.audit_log import UserLog

__all__ = [
    "User",
    "Role",
    "Article",
    "Category",
    "Comment",
    "Like",
    "Bookmark",
    "SiteSetting",
    "UserLog",
]
