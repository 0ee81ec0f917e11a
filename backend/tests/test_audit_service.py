"""Tests for the user log writer and reader."""

from newsportal.models.user import Role
from newsportal.services import audit_service


class TestRecordUserLog:
    """Writing stages a row inside the caller's transaction."""

    def test_row_is_flushed_with_id(self, db, make_user):
        actor = make_user(role=Role.DEVELOPER)
        target = make_user()
        log = audit_service.record_user_log(db, actor.id, target.id, "change_role", "from USER to ADMIN")
        assert log.id is not None
        assert log.created_at is not None

    def test_row_disappears_without_commit(self, db, make_user):
        actor = make_user(role=Role.DEVELOPER)
        target = make_user()
        audit_service.record_user_log(db, actor.id, target.id, "change_role", "from USER to ADMIN")
        db.rollback()
        assert audit_service.count_user_logs(db) == 0


class TestListUserLogs:
    """Most recent first, with optional paging."""

    def _write(self, db, actor, target, n):
        for i in range(n):
            audit_service.record_user_log(db, actor.id, target.id, "change_role", f"entry {i}")
        db.commit()

    def test_empty(self, db):
        assert audit_service.list_user_logs(db) == []

    def test_newest_first(self, db, make_user):
        actor = make_user(role=Role.DEVELOPER)
        target = make_user()
        self._write(db, actor, target, 3)
        details = [log.detail for log in audit_service.list_user_logs(db)]
        assert details == ["entry 2", "entry 1", "entry 0"]

    def test_pagination(self, db, make_user):
        actor = make_user(role=Role.DEVELOPER)
        target = make_user()
        self._write(db, actor, target, 5)

        first = audit_service.list_user_logs(db, page=1, limit=2)
        second = audit_service.list_user_logs(db, page=2, limit=2)
        last = audit_service.list_user_logs(db, page=3, limit=2)

        assert [log.detail for log in first] == ["entry 4", "entry 3"]
        assert [log.detail for log in second] == ["entry 2", "entry 1"]
        assert [log.detail for log in last] == ["entry 0"]

    def test_relationships_resolve(self, db, make_user):
        actor = make_user(role=Role.DEVELOPER, username="pengembang")
        target = make_user(username="pembaca")
        self._write(db, actor, target, 1)
        log = audit_service.list_user_logs(db)[0]
        assert log.actor.username == "pengembang"
        assert log.target_user.username == "pembaca"

    def test_page_without_limit_uses_default_size(self, db, make_user, monkeypatch):
        monkeypatch.setattr(audit_service, "DEFAULT_PAGE_SIZE", 2)
        actor = make_user(role=Role.DEVELOPER)
        target = make_user()
        self._write(db, actor, target, 3)

        first = audit_service.list_user_logs(db, page=1)
        second = audit_service.list_user_logs(db, page=2)
        assert [log.detail for log in first] == ["entry 2", "entry 1"]
        assert [log.detail for log in second] == ["entry 0"]

    def test_limit_without_page_is_first_page(self, db, make_user):
        actor = make_user(role=Role.DEVELOPER)
        target = make_user()
        self._write(db, actor, target, 3)
        assert [log.detail for log in audit_service.list_user_logs(db, limit=1)] == ["entry 2"]
