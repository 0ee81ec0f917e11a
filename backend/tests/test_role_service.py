"""Tests for the password-confirmed role change workflow."""

import pytest

from newsportal.errors import AuthenticationError, NotFoundError, ValidationError
from newsportal.models.audit_log import UserLog
from newsportal.models.user import Role
from newsportal.services import audit_service, role_service, user_service


@pytest.fixture
def five_users(make_user):
    """Actor id=1 (DEVELOPER, password admin123) and plain users 2..5."""
    actor = make_user(role=Role.DEVELOPER, password="admin123", username="dev")
    others = [make_user() for _ in range(4)]
    return actor, others


class TestSuccessfulChange:
    """Correct password, existing target, valid role."""

    def test_reference_scenario(self, db, five_users):
        actor, _ = five_users
        assert actor.id == 1

        user = role_service.change_user_role(db, 1, 5, "ADMIN", "admin123")

        assert user.id == 5
        assert user.role == Role.ADMIN
        logs = db.query(UserLog).all()
        assert len(logs) == 1
        assert logs[0].actor_id == 1
        assert logs[0].target_user_id == 5
        assert logs[0].action == "change_role"
        assert logs[0].detail == "from USER to ADMIN"

    def test_role_is_persisted(self, db, five_users):
        role_service.change_user_role(db, 1, 3, "DEVELOPER", "admin123")
        db.expire_all()
        assert user_service.get_user_by_id(db, 3).role == Role.DEVELOPER

    def test_accepts_enum_member(self, db, five_users):
        user = role_service.change_user_role(db, 1, 2, Role.ADMIN, "admin123")
        assert user.role == Role.ADMIN

    def test_demotion_is_allowed(self, db, make_user):
        make_user(role=Role.DEVELOPER, password="admin123")
        admin = make_user(role=Role.ADMIN)
        user = role_service.change_user_role(db, 1, admin.id, "USER", "admin123")
        assert user.role == Role.USER
        assert db.query(UserLog).one().detail == "from ADMIN to USER"

    def test_same_role_is_still_logged(self, db, make_user):
        make_user(role=Role.DEVELOPER, password="admin123")
        admin = make_user(role=Role.ADMIN)
        role_service.change_user_role(db, 1, admin.id, "ADMIN", "admin123")
        assert db.query(UserLog).one().detail == "from ADMIN to ADMIN"

    def test_actor_can_change_own_role(self, db, five_users):
        user = role_service.change_user_role(db, 1, 1, "ADMIN", "admin123")
        assert user.role == Role.ADMIN
        assert db.query(UserLog).one().target_user_id == 1

    def test_each_change_appends_one_row(self, db, five_users):
        role_service.change_user_role(db, 1, 2, "ADMIN", "admin123")
        role_service.change_user_role(db, 1, 2, "USER", "admin123")
        details = [log.detail for log in audit_service.list_user_logs(db)]
        assert details == ["from ADMIN to USER", "from USER to ADMIN"]


class TestRejectedChange:
    """Every failure aborts before anything is written."""

    def _assert_untouched(self, db, user_id=5, role=Role.USER):
        db.expire_all()
        assert user_service.get_user_by_id(db, user_id).role == role
        assert audit_service.count_user_logs(db) == 0

    def test_wrong_password(self, db, five_users):
        with pytest.raises(AuthenticationError, match="Password salah"):
            role_service.change_user_role(db, 1, 5, "ADMIN", "salah-total")
        self._assert_untouched(db)

    def test_password_checked_against_actor_not_target(self, db, make_user):
        make_user(role=Role.DEVELOPER, password="admin123")
        target = make_user(password="punya-target")
        with pytest.raises(AuthenticationError):
            role_service.change_user_role(db, 1, target.id, "ADMIN", "punya-target")
        self._assert_untouched(db, user_id=target.id)

    def test_missing_target(self, db, five_users):
        with pytest.raises(NotFoundError, match="User target tidak ditemukan"):
            role_service.change_user_role(db, 1, 999, "ADMIN", "admin123")
        assert audit_service.count_user_logs(db) == 0

    def test_missing_actor(self, db, five_users):
        with pytest.raises(AuthenticationError, match="User tidak ditemukan"):
            role_service.change_user_role(db, 999, 5, "ADMIN", "admin123")
        self._assert_untouched(db)

    def test_password_checked_before_target_lookup(self, db, five_users):
        with pytest.raises(AuthenticationError):
            role_service.change_user_role(db, 1, 999, "ADMIN", "salah")

    @pytest.mark.parametrize("role,password", [
        (None, "admin123"),
        ("", "admin123"),
        ("ADMIN", None),
        ("ADMIN", ""),
    ])
    def test_missing_role_or_password(self, db, five_users, role, password):
        with pytest.raises(ValidationError, match="Role dan password diperlukan"):
            role_service.change_user_role(db, 1, 5, role, password)
        self._assert_untouched(db)

    @pytest.mark.parametrize("role", ["SUPERUSER", "admin", "Developer"])
    def test_invalid_role(self, db, five_users, role):
        with pytest.raises(ValidationError, match="Role tidak valid"):
            role_service.change_user_role(db, 1, 5, role, "admin123")
        self._assert_untouched(db)


class TestAtomicity:
    """The role write and its audit row commit together or not at all."""

    def test_audit_failure_rolls_back_role(self, db, five_users, monkeypatch):
        def broken_log(*args, **kwargs):
            raise RuntimeError("audit store unavailable")

        monkeypatch.setattr(audit_service, "record_user_log", broken_log)

        with pytest.raises(RuntimeError):
            role_service.change_user_role(db, 1, 5, "ADMIN", "admin123")

        db.expire_all()
        assert user_service.get_user_by_id(db, 5).role == Role.USER
        assert db.query(UserLog).count() == 0


class TestUpdateUserRole:
    """The repository-level role writer."""

    def test_rejects_unknown_role(self, db, five_users):
        with pytest.raises(ValidationError):
            user_service.update_user_role(db, 2, "ROOT")

    def test_rejects_missing_user(self, db, five_users):
        with pytest.raises(NotFoundError):
            user_service.update_user_role(db, 42, "ADMIN")

    def test_does_not_commit(self, db, five_users):
        user_service.update_user_role(db, 2, "ADMIN")
        db.rollback()
        assert user_service.get_user_by_id(db, 2).role == Role.USER
