"""Base repository class with common async CRUD operations."""

from typing import Any, Generic, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from devconnect.db import Base
from devconnect.errors import InvalidReferenceError

T = TypeVar("T", bound=Base)


# Largest value a signed 64-bit INTEGER column can hold
MAX_ID = 2**63 - 1


def coerce_id(value: Any) -> int:
    """
    Coerce a path or token value into a primary-key reference.

    Raises:
        InvalidReferenceError: If the value is not a positive integer reference
            within the range of the ID columns.
    """
    if isinstance(value, bool):
        raise InvalidReferenceError(value)
    if isinstance(value, int):
        ref = value
    elif isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        ref = int(value.strip())
    else:
        raise InvalidReferenceError(value)
    if not 0 < ref <= MAX_ID:
        raise InvalidReferenceError(value)
    return ref


class BaseRepository(Generic[T]):
    """
    Base repository providing common CRUD operations.

    Usage:
        class UserRepository(BaseRepository[User]):
            model = User

        repo = UserRepository(session)
        user = await repo.get_by_id(1)
    """

    model: type[T]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: int | str) -> T | None:
        """Get a single record by ID."""
        return await self.session.get(self.model, coerce_id(id))

    async def create(self, **kwargs) -> T:
        """Create a new record."""
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        return instance

    async def delete(self, id: int | str) -> bool:
        """Delete a record by ID. Returns False when nothing matched."""
        result = await self.session.execute(
            delete(self.model).where(self.model.id == coerce_id(id))  # type: ignore[attr-defined]
        )
        return bool(result.rowcount)

    async def count(self) -> int:
        """Get count of records."""
        result = await self.session.execute(
            select(func.count()).select_from(self.model)
        )
        return result.scalar_one()
