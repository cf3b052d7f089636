from collections import defaultdict
from typing import Dict, Iterable, List, Sequence

from sqlalchemy.orm import Session

from core.database import BaseRepository
from src.routing_bc.pathway.domain.entities import PathwayOptionToll
from src.routing_bc.pathway.domain.value_objects import TollInput
from src.routing_bc.pathway.infrastructure.models import PathwayOptionTollModel


class PathwayOptionTollRepository(BaseRepository[PathwayOptionTollModel]):
    entity_name = "Pathway option toll"

    def __init__(self, session: Session):
        super().__init__(session, PathwayOptionTollModel)

    def find_by_option_id(self, option_id: int) -> List[PathwayOptionToll]:
        models = (
            self._query()
            .filter(PathwayOptionTollModel.pathway_option_id == option_id)
            .order_by(PathwayOptionTollModel.sequence)
            .all()
        )
        return [PathwayOptionToll.from_model(m) for m in models]

    def find_by_option_ids(self, option_ids: Iterable[int]) -> Dict[int, List[PathwayOptionToll]]:
        ids = list(option_ids)
        grouped: Dict[int, List[PathwayOptionToll]] = defaultdict(list)
        if not ids:
            return grouped

        models = (
            self._query()
            .filter(PathwayOptionTollModel.pathway_option_id.in_(ids))
            .order_by(PathwayOptionTollModel.pathway_option_id, PathwayOptionTollModel.sequence)
            .all()
        )
        for model in models:
            grouped[model.pathway_option_id].append(PathwayOptionToll.from_model(model))
        return grouped

    def replace_for_option(self, option_id: int, tolls: Sequence[TollInput]) -> List[PathwayOptionToll]:
        """Drop every toll of the option and insert ``tolls`` with sequence 1..N in list order."""
        self._query().filter(
            PathwayOptionTollModel.pathway_option_id == option_id
        ).delete(synchronize_session="fetch")
        self.session.flush()

        models = [
            PathwayOptionTollModel(
                pathway_option_id=option_id,
                node_id=toll.node_id,
                sequence=position,
                pass_time_min=toll.pass_time_min,
                distance=toll.distance,
            )
            for position, toll in enumerate(tolls, start=1)
        ]
        self.session.add_all(models)
        self.session.flush()
        return [PathwayOptionToll.from_model(m) for m in models]
