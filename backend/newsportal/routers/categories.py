"""Categories router."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from newsportal.database import get_db
from newsportal.middleware.auth import require_admin
from newsportal.models.user import User
from newsportal.schemas.article import CategoryCreate, CategoryResponse
from newsportal.services import article_service

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=list[CategoryResponse])
def list_categories(db: Session = Depends(get_db)):
    return [CategoryResponse.model_validate(c) for c in article_service.list_categories(db)]


@router.post("", response_model=CategoryResponse, status_code=201)
def create_category(
    req: CategoryCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Create a category (admin only)."""
    category = article_service.create_category(
        db,
        name=req.name,
        slug=req.slug,
        description=req.description,
        color=req.color,
    )
    return CategoryResponse.model_validate(category)
