"""User router: own profile and bookmarks."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from newsportal.database import get_db
from newsportal.middleware.auth import get_current_user
from newsportal.models.user import User
from newsportal.routers.articles import articles_to_response
from newsportal.schemas.article import BookmarkListResponse
from newsportal.schemas.auth import ProfileUpdateRequest, UserResponse
from newsportal.services import article_service, user_service

router = APIRouter(prefix="/api/user", tags=["user"])


@router.get("/profile", response_model=UserResponse)
def get_profile(current_user: User = Depends(get_current_user)):
    return UserResponse.model_validate(current_user)


@router.put("/profile", response_model=UserResponse)
def update_profile(
    req: ProfileUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update name/email; changing the password requires the current one."""
    user = user_service.update_profile(
        db,
        current_user.id,
        full_name=req.full_name,
        email=req.email,
        current_password=req.current_password,
        new_password=req.new_password,
    )
    return UserResponse.model_validate(user)


@router.get("/bookmarks", response_model=BookmarkListResponse)
def my_bookmarks(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    result = article_service.list_user_bookmarks(db, current_user.id, page=page, limit=limit)
    return BookmarkListResponse(
        bookmarks=articles_to_response(db, result["bookmarks"]),
        total=result["total"],
    )
