from dataclasses import dataclass
from typing import List

from src.framework.application import Query, QueryHandler
from src.routing_bc.pathway.domain.entities import PathwayOption
from src.routing_bc.pathway.domain.pathway_entity import PathwayEntity


@dataclass(frozen=True)
class GetPathwayQuery(Query):
    pathway_id: int


@dataclass(frozen=True)
class ListPathwayOptionsQuery(Query):
    pathway_id: int


class _PathwayQueryHandler:
    def __init__(self, pathway_repository, pathway_option_repository, pathway_option_toll_repository):
        self.pathway_repository = pathway_repository
        self.pathway_option_repository = pathway_option_repository
        self.pathway_option_toll_repository = pathway_option_toll_repository

    def _load(self, pathway_id: int) -> PathwayEntity:
        pathway = self.pathway_repository.find_one(pathway_id)
        return PathwayEntity(pathway, self.pathway_option_repository, self.pathway_option_toll_repository)


class GetPathwayHandler(_PathwayQueryHandler, QueryHandler[GetPathwayQuery, PathwayEntity]):
    """Pathway with its live options and their tolls."""

    def handle(self, query: GetPathwayQuery) -> PathwayEntity:
        entity = self._load(query.pathway_id)
        entity.options
        return entity


class ListPathwayOptionsHandler(_PathwayQueryHandler, QueryHandler[ListPathwayOptionsQuery, List[PathwayOption]]):
    def handle(self, query: ListPathwayOptionsQuery) -> List[PathwayOption]:
        return self._load(query.pathway_id).options
