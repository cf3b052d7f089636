from abc import ABC, abstractmethod
from typing import TypeVar, Generic

from .handler_resolver import HandlerResolver


class Query(ABC):
    """Base class for all queries (read-only requests)."""
    pass


TQuery = TypeVar('TQuery', bound=Query)
TResult = TypeVar('TResult')


class QueryHandler(ABC, Generic[TQuery, TResult]):
    """Base class for all query handlers."""

    @abstractmethod
    def handle(self, query: TQuery) -> TResult:
        pass


class QueryBus(HandlerResolver):
    """Query bus that resolves handlers by convention."""

    def query(self, query: Query) -> TResult:  # type: ignore
        """Execute a query with the handler registered for its type."""
        return self.resolve(query).handle(query)
