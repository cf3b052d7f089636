from sqlalchemy.orm import Session

from src.routing_bc.pathway.domain.pathway_entity import PathwayEntity


class PathwayCommandHandlerMixin:
    """Shared plumbing for handlers that change a pathway's options."""

    def __init__(
        self,
        session: Session,
        pathway_repository,
        pathway_option_repository,
        pathway_option_toll_repository,
    ):
        self.session = session
        self.pathway_repository = pathway_repository
        self.pathway_option_repository = pathway_option_repository
        self.pathway_option_toll_repository = pathway_option_toll_repository

    def _load_locked(self, pathway_id: int) -> PathwayEntity:
        """Lock the pathway row and build its aggregate.

        Writers on the same pathway are serialized until the transaction ends.
        """
        pathway = self.pathway_repository.find_one_for_update(pathway_id)
        return PathwayEntity(pathway, self.pathway_option_repository, self.pathway_option_toll_repository)

    @staticmethod
    def _loaded(entity: PathwayEntity) -> PathwayEntity:
        # Materialize the option list before the transaction closes.
        entity.options
        return entity
