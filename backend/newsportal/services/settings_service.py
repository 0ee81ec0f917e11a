"""Site settings service: runtime key/value configuration."""

from typing import Any, Optional

from sqlalchemy.orm import Session

from newsportal.errors import NotFoundError, ValidationError
from newsportal.models.site_setting import SiteSetting


def get_setting(db: Session, key: str) -> SiteSetting:
    setting = db.query(SiteSetting).filter(SiteSetting.key == key).first()
    if not setting:
        raise NotFoundError("Pengaturan tidak ditemukan")
    return setting


def list_settings(db: Session) -> list[SiteSetting]:
    return db.query(SiteSetting).order_by(SiteSetting.key).all()


def set_setting(db: Session, key: str, value: Any, description: Optional[str] = None) -> SiteSetting:
    """Insert or overwrite a setting."""
    if not key or not key.strip():
        raise ValidationError("Key pengaturan diperlukan")
    if value is None:
        raise ValidationError("Value pengaturan diperlukan")

    setting = db.query(SiteSetting).filter(SiteSetting.key == key).first()
    if setting:
        setting.value = value
        if description is not None:
            setting.description = description
    else:
        setting = SiteSetting(key=key, value=value, description=description)
        db.add(setting)
    db.commit()
    db.refresh(setting)
    return setting


def delete_setting(db: Session, key: str) -> None:
    setting = get_setting(db, key)
    db.delete(setting)
    db.commit()
