"""Profile repository."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import selectinload

from devconnect.errors import ProfileNotFoundError
from devconnect.logging import get_logger
from devconnect.models import Profile

from .base import BaseRepository, coerce_id

logger = get_logger("repository.profile")

SECTIONS = ("experience", "education")

_UPSERT_DIALECTS = {
    "sqlite": sqlite_insert,
    "postgresql": postgresql_insert,
}


class ProfileRepository(BaseRepository[Profile]):
    """Repository for Profile operations. Every read loads the owner alongside."""

    model = Profile

    def _select(self):
        return select(Profile).options(selectinload(Profile.user))

    async def get_by_user_id(self, user_id: int | str) -> Profile | None:
        """
        Get profile by owner ID.

        Raises:
            InvalidReferenceError: If ``user_id`` is not a well-formed reference.
        """
        stmt = (
            self._select()
            .where(Profile.user_id == coerce_id(user_id))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_with_owners(self) -> list[Profile]:
        """Get every profile with its owner loaded."""
        result = await self.session.execute(self._select().order_by(Profile.id))
        return list(result.scalars().all())

    async def upsert(self, user_id: int, fields: dict[str, Any]) -> Profile:
        """
        Create the owner's profile or apply ``fields`` to the existing one.

        Runs as a single INSERT ... ON CONFLICT (user_id) DO UPDATE where the
        dialect supports it. Columns not in ``fields`` are left untouched.
        """
        now = datetime.now(timezone.utc)
        dialect = self.session.get_bind().dialect.name
        insert = _UPSERT_DIALECTS.get(dialect)

        if insert is not None:
            stmt = insert(Profile).values(user_id=user_id, **fields)
            stmt = stmt.on_conflict_do_update(
                index_elements=[Profile.user_id],
                set_={**fields, "updated_at": now},
            )
            await self.session.execute(stmt)
        else:
            logger.debug("profile_upsert_fallback", dialect=dialect)
            profile = await self.get_by_user_id(user_id)
            if profile is None:
                self.session.add(Profile(user_id=user_id, **fields))
            else:
                for key, value in fields.items():
                    setattr(profile, key, value)
                profile.updated_at = now
            await self.session.flush()

        profile = await self.get_by_user_id(user_id)
        if profile is None:
            raise ProfileNotFoundError(user_id)
        return profile

    async def prepend_entry(self, user_id: int, section: str, entry: dict[str, Any]) -> Profile:
        """Insert ``entry`` at the front of the ``experience`` or ``education`` list."""
        profile = await self._require(user_id, section)
        setattr(profile, section, [entry, *(getattr(profile, section) or [])])
        profile.updated_at = datetime.now(timezone.utc)
        await self.session.flush()
        return profile

    async def remove_entry(self, user_id: int, section: str, entry_id: str) -> Profile:
        """Drop the entry with ``entry_id`` from a section. Unknown IDs are ignored."""
        profile = await self._require(user_id, section)
        entries = getattr(profile, section) or []
        remaining = [entry for entry in entries if entry.get("id") != entry_id]
        if len(remaining) != len(entries):
            setattr(profile, section, remaining)
            profile.updated_at = datetime.now(timezone.utc)
            await self.session.flush()
        return profile

    async def delete_by_user_id(self, user_id: int) -> bool:
        """Delete the owner's profile. Returns False when there was none."""
        result = await self.session.execute(
            delete(Profile).where(Profile.user_id == coerce_id(user_id))
        )
        return bool(result.rowcount)

    async def _require(self, user_id: int, section: str) -> Profile:
        if section not in SECTIONS:
            raise ValueError(f"Unknown profile section: {section}")
        profile = await self.get_by_user_id(user_id)
        if profile is None:
            raise ProfileNotFoundError(user_id)
        return profile
