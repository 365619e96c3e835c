import asyncio
import logging
from uuid import UUID

from sqlalchemy import literal, select, text, union_all
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.config import Settings
from app.models import RestrictedModule, RestrictedUser

logger = logging.getLogger(__name__)


class RegistryUnavailableError(Exception):
    """Raised when the ban registry cannot be queried."""


class BanRegistry:
    """Read-only view over the restricted users and modules relations."""

    def __init__(
        self,
        settings: Settings,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        self.timeout = settings.ban_check_timeout
        self._session_factory = session_factory

    async def check_restricted(self, author_id: UUID | str, module_id: UUID | str) -> bool:
        matches = union_all(
            select(RestrictedUser.id).where(RestrictedUser.id == str(author_id)),
            select(RestrictedModule.id).where(RestrictedModule.id == str(module_id)),
        ).subquery()
        stmt = select(literal(1)).select_from(matches).limit(1)

        try:
            async with self._session_factory() as session:
                result = await asyncio.wait_for(session.execute(stmt), timeout=self.timeout)
                row = result.first()
        except asyncio.TimeoutError as exc:
            raise RegistryUnavailableError(
                f"Ban registry query timed out after {self.timeout}s"
            ) from exc
        except (SQLAlchemyError, OSError) as exc:
            raise RegistryUnavailableError("Ban registry query failed") from exc
        return row is not None

    async def ping(self) -> bool:
        try:
            async with self._session_factory() as session:
                await asyncio.wait_for(session.execute(text("SELECT 1")), timeout=self.timeout)
        except (SQLAlchemyError, OSError, asyncio.TimeoutError):
            logger.warning("Ban registry connectivity check failed", exc_info=True)
            return False
        return True
