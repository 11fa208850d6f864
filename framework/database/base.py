from abc import ABC, abstractmethod
from typing import AsyncIterator
from sqlmodel.ext.asyncio.session import AsyncSession


class BaseDatabaseDriver(ABC):
    """Lifecycle and session contract shared by SQL backends."""

    @abstractmethod
    async def connect(self) -> None:
        """Verify the backend is reachable."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Release pooled connections."""

    @abstractmethod
    async def create_all(self) -> None:
        """Create missing tables for registered models."""

    @abstractmethod
    def get_session(self) -> AsyncIterator[AsyncSession]:
        """Yield one session; closed when the caller is done."""
