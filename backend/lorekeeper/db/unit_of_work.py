"""Unit of work: one transaction around a check-then-act service method."""

from types import TracebackType
from typing import Optional, Type

from sqlalchemy.ext.asyncio import AsyncSession


class UnitOfWork:
    """Commit on clean exit, roll back when the block raises.

    Usage:
        async with UnitOfWork(db) as uow:
            existing = await repo.get_by_name(uow.session, name)
            ...
            await repo.create(uow.session, obj_in=data)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Wrap an existing session."""
        self.session = session
        self._committed = False

    async def __aenter__(self) -> "UnitOfWork":
        """Enter the transaction scope."""
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        """Commit or roll back. Exceptions always propagate."""
        if exc_type is not None:
            await self.rollback()
            return
        if not self._committed:
            await self.commit()

    async def commit(self) -> None:
        """Commit the transaction."""
        await self.session.commit()
        self._committed = True

    async def rollback(self) -> None:
        """Roll back the transaction."""
        await self.session.rollback()
