"""Role service: password-confirmed role changes with an audit trail."""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from newsportal.errors import AuthenticationError, NotFoundError, ValidationError
from newsportal.middleware.auth import verify_password
from newsportal.models.user import Role, User
from newsportal.services import audit_service, user_service

logger = logging.getLogger(__name__)


def change_user_role(
    db: Session,
    actor_id: int,
    target_user_id: int,
    new_role: Optional[str],
    password: Optional[str],
) -> User:
    """Change ``target_user_id``'s role after re-authenticating the actor.

    Steps:
    1. Validate the requested role and that a password was given
    2. Load the actor and check the password against their stored hash
    3. Load the target user
    4. Write the new role
    5. Insert the ``change_role`` user log
    Steps 4 and 5 commit as one transaction; nothing is written if any
    earlier step fails. A change to the same role is still applied and logged.
    """
    if not new_role or not password:
        raise ValidationError("Role dan password diperlukan")
    try:
        role = Role(new_role)
    except ValueError:
        raise ValidationError("Role tidak valid")

    actor = user_service.get_user_by_id(db, actor_id)
    if not actor:
        raise AuthenticationError("User tidak ditemukan")
    if not verify_password(password, actor.password_hash):
        logger.warning("Role change by user %s rejected: wrong password", actor_id)
        raise AuthenticationError("Password salah")

    target = user_service.get_user_by_id(db, target_user_id)
    if not target:
        raise NotFoundError("User target tidak ditemukan")

    old_role = target.role
    try:
        user_service.update_user_role(db, target.id, role)
        audit_service.record_user_log(
            db,
            actor_id=actor.id,
            target_user_id=target.id,
            action=audit_service.CHANGE_ROLE,
            detail=f"from {old_role.value} to {role.value}",
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(target)
    logger.info(
        "User %s changed role of user %s from %s to %s",
        actor.id, target.id, old_role.value, role.value,
    )
    return target
