"""
Unit of Work: shares one session across repositories and owns the commit.
"""

from typing import Dict, Optional, Type, TypeVar
from sqlmodel.ext.asyncio.session import AsyncSession
from .base import BaseRepository

R = TypeVar("R", bound=BaseRepository)


class UnitOfWork:
    """
    Groups repositories over a single session; staged changes are persisted
    together by commit_changes().

    There is no rollback: after a failed commit, discard the unit of work.
    """

    def __init__(self, session: Optional[AsyncSession] = None):
        """Initialize UnitOfWork; session must be provided."""
        if session is None:
            raise ValueError("Session must be provided.")

        self.session = session
        self._repositories: Dict[type, BaseRepository] = {}

    def get_repository(self, repo_class: Type[R]) -> R:
        """Get or create a repository instance (one per class, cached)."""
        if repo_class not in self._repositories:
            self._repositories[repo_class] = repo_class(self.session)
        return self._repositories[repo_class]

    async def commit_changes(self) -> None:
        """Commit all staged creates, updates and removals."""
        await self.session.commit()
