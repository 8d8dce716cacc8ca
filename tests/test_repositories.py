"""
Tests for the async repositories against a temporary SQLite database.
"""

import asyncio

import pytest

from devconnect.db import Database
from devconnect.errors import InvalidReferenceError, ProfileNotFoundError
from devconnect.repositories import ProfileRepository, UserRepository, coerce_id


def _run(settings, scenario):
    """Run ``scenario(session)`` inside a committed session, then dispose the engine."""

    async def main():
        database = Database(settings)
        try:
            await database.create_all_tables()
            async with database.session() as session:
                return await scenario(session)
        finally:
            await database.dispose()

    return asyncio.run(main())


class TestCoerceId:
    def test_accepts_int_and_digit_strings(self):
        assert coerce_id(7) == 7
        assert coerce_id("42") == 42

    @pytest.mark.parametrize("value", ["abc", "", "5e3a", "-1", 0, None, True, 1.5, "\u00b2"])
    def test_rejects_malformed(self, value):
        with pytest.raises(InvalidReferenceError):
            coerce_id(value)

    @pytest.mark.parametrize("value", [2**63, "99999999999999999999999"])
    def test_rejects_values_beyond_id_range(self, value):
        with pytest.raises(InvalidReferenceError):
            coerce_id(value)

    def test_accepts_largest_id(self):
        assert coerce_id(str(2**63 - 1)) == 2**63 - 1


class TestProfileRepository:
    def test_upsert_creates_then_updates(self, test_settings):
        async def scenario(session):
            user = await UserRepository(session).create(name="Ada", email="ada@example.com")
            repo = ProfileRepository(session)

            created = await repo.upsert(user.id, {"status": "Dev", "skills": ["c"], "company": "X"})
            updated = await repo.upsert(user.id, {"status": "Lead", "skills": ["go"]})
            return created.id, updated, await repo.count()

        created_id, updated, total = _run(test_settings, scenario)

        assert total == 1
        assert updated.id == created_id
        assert updated.status == "Lead"
        assert updated.skills == ["go"]
        assert updated.company == "X"
        assert updated.user.name == "Ada"

    def test_upsert_raises_when_row_cannot_be_read_back(self, test_settings, monkeypatch):
        async def missing(self, user_id):
            return None

        async def scenario(session):
            user = await UserRepository(session).create(name="Ada", email="ada@example.com")
            monkeypatch.setattr(ProfileRepository, "get_by_user_id", missing)
            await ProfileRepository(session).upsert(user.id, {"status": "Dev", "skills": ["c"]})

        with pytest.raises(ProfileNotFoundError):
            _run(test_settings, scenario)

    def test_prepend_and_remove_entries(self, test_settings):
        async def scenario(session):
            user = await UserRepository(session).create(name="Ada", email="ada@example.com")
            repo = ProfileRepository(session)
            await repo.upsert(user.id, {"status": "Dev", "skills": ["c"]})

            await repo.prepend_entry(user.id, "experience", {"id": "e1", "title": "First"})
            await repo.prepend_entry(user.id, "experience", {"id": "e2", "title": "Second"})
            after_unknown = await repo.remove_entry(user.id, "experience", "missing")
            order_after_unknown = [entry["id"] for entry in after_unknown.experience]
            after_remove = await repo.remove_entry(user.id, "experience", "e2")
            return order_after_unknown, [entry["id"] for entry in after_remove.experience]

        order_after_unknown, order_after_remove = _run(test_settings, scenario)

        assert order_after_unknown == ["e2", "e1"]
        assert order_after_remove == ["e1"]

    def test_entries_require_a_profile(self, test_settings):
        async def scenario(session):
            user = await UserRepository(session).create(name="Ada", email="ada@example.com")
            await ProfileRepository(session).prepend_entry(user.id, "education", {"id": "x"})

        with pytest.raises(ProfileNotFoundError):
            _run(test_settings, scenario)

    def test_get_by_malformed_user_id(self, test_settings):
        async def scenario(session):
            await ProfileRepository(session).get_by_user_id("not-an-id")

        with pytest.raises(InvalidReferenceError):
            _run(test_settings, scenario)

    def test_delete_by_user_id_reports_absence(self, test_settings):
        async def scenario(session):
            return await ProfileRepository(session).delete_by_user_id(123)

        assert _run(test_settings, scenario) is False


class TestUserRepository:
    def test_get_by_email_and_delete(self, test_settings):
        async def scenario(session):
            repo = UserRepository(session)
            user = await repo.create(name="Linus", email="linus@example.com")
            found = await repo.get_by_email("linus@example.com")
            by_id = await repo.get_by_id(str(user.id))
            deleted = await repo.delete(user.id)
            remaining = await repo.count()
            return found is by_id, deleted, remaining

        same, deleted, remaining = _run(test_settings, scenario)

        assert same is True
        assert deleted is True
        assert remaining == 0
