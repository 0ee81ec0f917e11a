"""Developer router: user roles, the role audit trail and site settings.

Every endpoint requires the DEVELOPER role.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from newsportal.database import get_db
from newsportal.middleware.auth import require_developer
from newsportal.models.user import User
from newsportal.schemas.admin import (
    RoleChangeRequest,
    SiteSettingResponse,
    SiteSettingWrite,
    UserLogResponse,
)
from newsportal.schemas.auth import MessageResponse, UserResponse
from newsportal.services import audit_service, role_service, settings_service, user_service

router = APIRouter(prefix="/api/dev", tags=["dev"])


@router.get("/users", response_model=list[UserResponse])
def list_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_developer),
):
    return [UserResponse.model_validate(u) for u in user_service.list_users(db)]


@router.post("/users/{user_id}/role", response_model=UserResponse)
def change_role(
    user_id: int,
    req: RoleChangeRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_developer),
):
    """Change a user's role. The caller must re-enter their own password."""
    user = role_service.change_user_role(
        db,
        actor_id=current_user.id,
        target_user_id=user_id,
        new_role=req.role,
        password=req.password,
    )
    return UserResponse.model_validate(user)


@router.get("/user-logs", response_model=list[UserLogResponse])
def list_user_logs(
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_developer),
):
    """Role-change audit trail, most recent first."""
    logs = audit_service.list_user_logs(db, page=page, limit=limit)
    return [UserLogResponse.model_validate(log) for log in logs]


@router.get("/settings", response_model=list[SiteSettingResponse])
def list_settings(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_developer),
):
    return [SiteSettingResponse.model_validate(s) for s in settings_service.list_settings(db)]


@router.post("/settings", response_model=SiteSettingResponse)
def save_setting(
    req: SiteSettingWrite,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_developer),
):
    setting = settings_service.set_setting(db, req.key, req.value, req.description)
    return SiteSettingResponse.model_validate(setting)


@router.delete("/settings/{key}", response_model=MessageResponse)
def delete_setting(
    key: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_developer),
):
    settings_service.delete_setting(db, key)
    return MessageResponse(message="Pengaturan berhasil dihapus")
