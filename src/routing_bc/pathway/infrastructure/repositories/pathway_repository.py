from sqlalchemy.orm import Session

from core.database import BaseRepository
from src.framework.domain.errors import NotFoundError
from src.routing_bc.pathway.domain.entities import Pathway
from src.routing_bc.pathway.infrastructure.models import PathwayModel


class PathwayRepository(BaseRepository[PathwayModel]):
    entity_name = "Pathway"

    def __init__(self, session: Session):
        super().__init__(session, PathwayModel)

    def find_one(self, pathway_id: int) -> Pathway:
        return Pathway.from_model(self.get_or_raise(pathway_id))

    def find_one_for_update(self, pathway_id: int) -> Pathway:
        """Load the pathway and lock its row until the transaction ends.

        Concurrent option changes on the same pathway queue up behind this lock
        (SELECT ... FOR UPDATE; a no-op on SQLite).
        """
        model = (
            self._query()
            .filter(PathwayModel.id == pathway_id)
            .with_for_update()
            .first()
        )
        if model is None:
            raise NotFoundError(f"Pathway {pathway_id} not found")
        return Pathway.from_model(model)
