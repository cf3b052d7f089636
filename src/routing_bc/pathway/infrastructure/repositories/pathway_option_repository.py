import logging
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from core.database import BaseRepository
from src.routing_bc.pathway.domain.entities import PathwayOption
from src.routing_bc.pathway.infrastructure.models import PathwayOptionModel

logger = logging.getLogger(__name__)


class PathwayOptionRepository(BaseRepository[PathwayOptionModel]):
    """Persistence for pathway options (soft-deleted rows are invisible)."""

    entity_name = "Pathway option"

    def __init__(self, session: Session):
        super().__init__(session, PathwayOptionModel)

    def find_by_ids(self, ids: Iterable[int]) -> List[PathwayOption]:
        return [PathwayOption.from_model(m) for m in self.get_by_ids(set(ids))]

    def find_by_pathway_id(self, pathway_id: int) -> List[PathwayOption]:
        models = (
            self._query()
            .filter(PathwayOptionModel.pathway_id == pathway_id)
            .order_by(PathwayOptionModel.sequence.nulls_last(), PathwayOptionModel.id)
            .all()
        )
        return [PathwayOption.from_model(m) for m in models]

    def find_one(self, option_id: int) -> Optional[PathwayOption]:
        model = self.get_by_id(option_id)
        return PathwayOption.from_model(model) if model else None

    def create_option(self, pathway_id: int, data: Dict[str, Any]) -> PathwayOption:
        model = self.create(PathwayOptionModel(pathway_id=pathway_id, **data))
        return PathwayOption.from_model(model)

    def update_option(self, option_id: int, data: Dict[str, Any]) -> PathwayOption:
        model = self.update(option_id, data)
        if model is None:
            self.get_or_raise(option_id)
        return PathwayOption.from_model(model)

    def soft_delete(self, option_id: int) -> bool:
        return self.delete(option_id)

    def set_default_option(self, pathway_id: int, option_id: int) -> None:
        """Move the default flag to ``option_id``.

        The previous default is cleared in its own statement before the new one
        is set, so the single-default unique index never sees two live defaults.
        """
        live = self._query().filter(PathwayOptionModel.pathway_id == pathway_id)

        live.filter(
            PathwayOptionModel.is_default.is_(True),
            PathwayOptionModel.id != option_id,
        ).update({PathwayOptionModel.is_default: False}, synchronize_session=False)

        live.filter(PathwayOptionModel.id == option_id).update(
            {PathwayOptionModel.is_default: True}, synchronize_session=False
        )

        self.session.expire_all()
        logger.debug(f"Pathway {pathway_id}: default option is now {option_id}")
