"""
Repository abstract base class and generic implementation.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar, Optional, List, Set, Type, Iterable
from sqlalchemy import ColumnElement
from sqlmodel import select, col, func
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlmodel.sql.expression import SelectOfScalar
from framework.exceptions.errors import StrategyNotSupportedError
from framework.pagination import PaginationParameters
from .entity import EntityBase, utc_now
from .options import QueryOptions, RemoveStrategy

T = TypeVar("T", bound=EntityBase)


class IRepository(ABC, Generic[T]):
    """Repository interface; defines standard data access API."""

    @abstractmethod
    def query(self, options: QueryOptions) -> SelectOfScalar[T]:
        """Build a composable statement honoring visibility, ordered by id."""
        pass

    @abstractmethod
    async def query_multiple(self, options: Optional[QueryOptions] = None) -> List[T]:
        """Materialize query(), paginated when options carry pagination."""
        pass

    @abstractmethod
    async def query_multiple_by_predicate(
        self, predicate: ColumnElement[bool], options: Optional[QueryOptions] = None
    ) -> List[T]:
        """Same as query_multiple() with an extra filter."""
        pass

    @abstractmethod
    async def find_by_id(self, key: int, options: Optional[QueryOptions] = None) -> Optional[T]:
        """Get entity by primary key."""
        pass

    @abstractmethod
    async def find_by_predicate(
        self, predicate: ColumnElement[bool], options: Optional[QueryOptions] = None
    ) -> Optional[T]:
        """Get first matching entity in id order."""
        pass

    @abstractmethod
    async def create(self, entity: T) -> T:
        """Stage entity for insert."""
        pass

    @abstractmethod
    async def update(self, entity: T) -> T:
        """Stage entity for update."""
        pass

    @abstractmethod
    async def remove_by_id(
        self, key: int, strategy: RemoveStrategy = RemoveStrategy.DELETE
    ) -> Optional[T]:
        """Stage removal of entity by primary key."""
        pass

    @abstractmethod
    async def remove_by_predicate(
        self, predicate: ColumnElement[bool], strategy: RemoveStrategy = RemoveStrategy.DELETE
    ) -> List[T]:
        """Stage removal of all matching entities."""
        pass


class BaseRepository(IRepository[T]):
    """
    Generic repository over SQLModel entities.

    Write operations only stage changes on the session; UnitOfWork.commit_changes()
    persists them. Subclasses can add custom queries.
    """

    def __init__(self, session: AsyncSession, model: Type[T]):
        """Initialize repository with session and model."""
        self.session = session
        self.model = model

    # --- Queries ---

    def query(self, options: QueryOptions) -> SelectOfScalar[T]:
        return self._query(options)

    async def fetch_all(self, statement: SelectOfScalar[T], options: Optional[QueryOptions] = None) -> List[T]:
        """Execute a statement built from query() (optionally composed further)."""
        if options is None:
            options = QueryOptions.default()

        loaded = self._loaded()
        result = await self.session.exec(statement)
        entities = list(result.all())
        if not options.track_changes:
            self._detach(entities, loaded)
        return entities

    async def query_multiple(self, options: Optional[QueryOptions] = None) -> List[T]:
        if options is None:
            options = QueryOptions.default_paginated()

        statement = self._query(options)
        if options.pagination is not None:
            statement = self._paginate(statement, options.pagination)
        return await self.fetch_all(statement, options)

    async def query_multiple_by_predicate(
        self, predicate: ColumnElement[bool], options: Optional[QueryOptions] = None
    ) -> List[T]:
        if predicate is None:
            raise ValueError("predicate must not be None")
        if options is None:
            options = QueryOptions.default_paginated()

        statement = self._query(options, [predicate])
        if options.pagination is not None:
            statement = self._paginate(statement, options.pagination)
        return await self.fetch_all(statement, options)

    async def find_by_id(self, key: int, options: Optional[QueryOptions] = None) -> Optional[T]:
        if options is None:
            options = QueryOptions.default()

        loaded = self._loaded()
        entity = await self._get(key)
        if entity is None:
            return None
        if entity.hidden and not options.include_hidden_entities:
            return None

        if not options.track_changes:
            self._detach([entity], loaded)
        return entity

    async def find_by_predicate(
        self, predicate: ColumnElement[bool], options: Optional[QueryOptions] = None
    ) -> Optional[T]:
        if predicate is None:
            raise ValueError("predicate must not be None")
        if options is None:
            options = QueryOptions.default()

        statement = self._query(options, [predicate]).limit(1)
        entities = await self.fetch_all(statement, options)
        return entities[0] if entities else None

    async def count(
        self, options: Optional[QueryOptions] = None, predicate: Optional[ColumnElement[bool]] = None
    ) -> int:
        """Count visible entities, optionally filtered; pagination is ignored."""
        if options is None:
            options = QueryOptions.default()

        statement = select(func.count(col(self.model.id)))
        if not options.include_hidden_entities:
            statement = statement.where(col(self.model.hidden) == False)
        if predicate is not None:
            statement = statement.where(predicate)

        result = await self.session.exec(statement)
        return result.one()

    # --- Staged writes ---

    async def create(self, entity: T) -> T:
        if entity is None:
            raise ValueError("entity must not be None")
        self.session.add(entity)
        return entity

    async def update(self, entity: T) -> T:
        """Stage full update; last write wins."""
        if entity is None:
            raise ValueError("entity must not be None")
        entity.updated_at = utc_now()
        self.session.add(entity)
        return entity

    async def remove_by_id(
        self, key: int, strategy: RemoveStrategy = RemoveStrategy.DELETE
    ) -> Optional[T]:
        """
        Remove entity by key.

        The lookup ignores the hidden flag, so an already hidden row can still
        be physically deleted. Returns None when no row exists or its delete
        is already staged.
        """
        strategy = self._ensure_supported(strategy)

        entity = await self._get(key)
        if entity is None:
            return None

        await self._remove(entity, strategy)
        return entity

    async def remove_by_predicate(
        self, predicate: ColumnElement[bool], strategy: RemoveStrategy = RemoveStrategy.DELETE
    ) -> List[T]:
        """Remove every visible entity matching predicate; returns affected entities."""
        if predicate is None:
            raise ValueError("predicate must not be None")
        strategy = self._ensure_supported(strategy)

        options = QueryOptions(track_changes=True)
        entities = await self.fetch_all(self._query(options, [predicate]), options)
        for entity in entities:
            await self._remove(entity, strategy)
        return entities

    # --- Implementation details ---

    def _query(
        self, options: QueryOptions, predicates: Iterable[ColumnElement[bool]] = ()
    ) -> SelectOfScalar[T]:
        if options is None:
            raise ValueError("options must not be None")

        statement = select(self.model)
        if not options.include_hidden_entities:
            statement = statement.where(col(self.model.hidden) == False)
        for predicate in predicates:
            statement = statement.where(predicate)

        # Stable order keeps pages consistent across calls
        return statement.order_by(col(self.model.id))

    @staticmethod
    def _paginate(statement: SelectOfScalar[T], pagination: PaginationParameters) -> SelectOfScalar[T]:
        return statement.offset(pagination.skip).limit(pagination.take)

    async def _remove(self, entity: T, strategy: RemoveStrategy) -> None:
        if strategy == RemoveStrategy.DELETE:
            await self.session.delete(entity)
        elif strategy == RemoveStrategy.HIDE:
            entity.hidden = True
            entity.updated_at = utc_now()
            self.session.add(entity)
        else:
            raise StrategyNotSupportedError(strategy)

    @staticmethod
    def _ensure_supported(strategy) -> RemoveStrategy:
        try:
            return RemoveStrategy(strategy)
        except ValueError:
            raise StrategyNotSupportedError(strategy) from None

    async def _get(self, key: int) -> Optional[T]:
        """Primary key lookup that treats a staged delete as already gone."""
        entity = await self.session.get(self.model, key)
        if entity is None or entity in self.session.deleted:
            return None
        return entity

    def _loaded(self) -> Set[int]:
        """Identities of objects the session already holds, before a read."""
        return {id(entity) for entity in self.session.identity_map.values()}

    def _detach(self, entities: Iterable[T], loaded: Set[int]) -> None:
        """
        Expunge untracked results this read brought into the session.

        Objects that were already attached (e.g. loaded by another caller with
        track_changes=True) and objects with staged changes stay attached.
        """
        staged = (self.session.new, self.session.dirty, self.session.deleted)
        for entity in entities:
            if id(entity) in loaded or entity not in self.session:
                continue
            if not any(entity in pending for pending in staged):
                self.session.expunge(entity)
