from typing import Iterable, List

from sqlalchemy.orm import Session

from core.database import BaseRepository
from src.routing_bc.node.domain.entities import Node
from src.routing_bc.node.infrastructure.models import NodeModel


class NodeRepository(BaseRepository[NodeModel]):
    """Read access to nodes referenced by pathways and toll lists."""

    entity_name = "Node"

    def __init__(self, session: Session):
        super().__init__(session, NodeModel)

    def find_by_ids(self, ids: Iterable[int]) -> List[Node]:
        """Batch existence lookup; missing or deleted ids are simply absent."""
        return [Node.from_model(m) for m in self.get_by_ids(set(ids))]
