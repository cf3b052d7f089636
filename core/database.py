from contextlib import contextmanager
from abc import ABC, abstractmethod
from typing import TypeVar, Generic, Type, Optional, List, Generator, Any, Iterable
from sqlalchemy.orm import Session
from sqlalchemy import create_engine, func
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy.exc import IntegrityError
import logging

from core.config import settings
from core.base import Base
from src.framework.domain.errors import NotFoundError, OperationFailedError

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict:
    """Pool options per backend (SQLite is only used for local runs and tests)."""
    if url.startswith("sqlite"):
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
            "echo": False,
        }
    return {
        "pool_size": 20,
        "max_overflow": 30,
        "pool_timeout": 30,
        "pool_recycle": 3600,
        "pool_pre_ping": True,
        "echo": False,
    }


# Database engine configuration
engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Generic type for entities
T = TypeVar('T')


def get_db() -> Generator[Session, None, None]:
    """Dependency that provides a database session."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def transaction(session: Session) -> Generator[Session, None, None]:
    """Run a unit of work: commit on success, roll back everything on failure.

    Store-level constraint violations are surfaced as OperationFailedError,
    domain errors propagate unchanged.
    """
    try:
        yield session
        session.commit()
    except IntegrityError as e:
        session.rollback()
        logger.error(f"Transaction aborted by constraint violation: {e.orig}")
        raise OperationFailedError(f"Database constraint violated: {e.orig}") from e
    except Exception:
        session.rollback()
        raise


class RepositoryInterface(ABC, Generic[T]):
    """Generic interface for repositories."""

    @abstractmethod
    def create(self, entity: T) -> T:
        """Create a new entity."""
        pass

    @abstractmethod
    def get_by_id(self, entity_id: int) -> Optional[T]:
        """Get entity by ID."""
        pass

    @abstractmethod
    def get_by_ids(self, entity_ids: Iterable[int]) -> List[T]:
        """Get all entities matching the given IDs."""
        pass

    @abstractmethod
    def update(self, entity_id: int, entity_data: dict[str, Any]) -> Optional[T]:
        """Update an entity."""
        pass

    @abstractmethod
    def delete(self, entity_id: int) -> bool:
        """Delete an entity."""
        pass


class BaseRepository(RepositoryInterface[T]):
    """Base repository implementation.

    Repositories only flush: the surrounding unit of work owns the commit.
    Models with a ``deleted_at`` column are soft-deleted and hidden from reads.
    """

    entity_name = "Entity"

    def __init__(self, session: Session, model: Type[T]):
        self.session = session
        self.model = model

    @property
    def _soft_delete(self) -> bool:
        return hasattr(self.model, "deleted_at")

    def _query(self):
        query = self.session.query(self.model)
        if self._soft_delete:
            query = query.filter(self.model.deleted_at.is_(None))  # type: ignore
        return query

    def create(self, entity: T) -> T:
        self.session.add(entity)
        self.session.flush()
        self.session.refresh(entity)
        return entity

    def get_by_id(self, entity_id: int) -> Optional[T]:
        return self._query().filter(
            self.model.id == entity_id  # type: ignore
        ).first()

    def get_or_raise(self, entity_id: int) -> T:
        entity = self.get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(f"{self.entity_name} {entity_id} not found")
        return entity

    def get_by_ids(self, entity_ids: Iterable[int]) -> List[T]:
        ids = list(entity_ids)
        if not ids:
            return []
        return self._query().filter(
            self.model.id.in_(ids)  # type: ignore
        ).all()

    def update(self, entity_id: int, entity_data: dict[str, Any]) -> Optional[T]:
        entity = self.get_by_id(entity_id)
        if entity:
            for key, value in entity_data.items():
                setattr(entity, key, value)
            self.session.flush()
            self.session.refresh(entity)
            return entity
        return None

    def delete(self, entity_id: int) -> bool:
        entity = self.get_by_id(entity_id)
        if not entity:
            return False
        if self._soft_delete:
            entity.deleted_at = func.now()  # type: ignore
        else:
            self.session.delete(entity)
        self.session.flush()
        return True



def init_db() -> None:
    """Create all tables registered in the models package (local runs and tests)."""
    import models  # noqa: F401  registers every model on Base.metadata

    Base.metadata.create_all(bind=engine)
