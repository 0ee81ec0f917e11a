"""Audit service: append-only user log writer and reader."""

from typing import Optional

from sqlalchemy.orm import Session

from newsportal.models.audit_log import UserLog

CHANGE_ROLE = "change_role"
# Page size used when a page is requested without a limit
DEFAULT_PAGE_SIZE = 50


def record_user_log(
    db: Session,
    actor_id: int,
    target_user_id: int,
    action: str,
    detail: Optional[str] = None,
) -> UserLog:
    """Stage one audit row in the caller's transaction.

    Flushes so the row gets an id, but never commits: the caller commits the
    audited change and its log row together.
    """
    log = UserLog(
        actor_id=actor_id,
        target_user_id=target_user_id,
        action=action,
        detail=detail,
    )
    db.add(log)
    db.flush()
    return log


def list_user_logs(
    db: Session,
    page: Optional[int] = None,
    limit: Optional[int] = None,
) -> list[UserLog]:
    """User logs, most recent first.

    Unpaged when neither ``page`` nor ``limit`` is given.
    """
    query = db.query(UserLog).order_by(UserLog.created_at.desc(), UserLog.id.desc())
    if page is not None or limit is not None:
        limit = limit or DEFAULT_PAGE_SIZE
        page = max(page or 1, 1)
        query = query.offset((page - 1) * limit).limit(limit)
    return query.all()


def count_user_logs(db: Session) -> int:
    return db.query(UserLog).count()
