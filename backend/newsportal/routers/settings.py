"""Public site settings router."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from newsportal.database import get_db
from newsportal.schemas.admin import SiteSettingResponse
from newsportal.services import settings_service

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("/{key}", response_model=SiteSettingResponse)
def get_setting(key: str, db: Session = Depends(get_db)):
    return SiteSettingResponse.model_validate(settings_service.get_setting(db, key))
