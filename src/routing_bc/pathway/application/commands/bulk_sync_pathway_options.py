import logging
from dataclasses import dataclass
from typing import Tuple

from core.database import transaction
from src.framework.application import Command, CommandHandler
from src.routing_bc.pathway.domain.pathway_entity import PathwayEntity
from src.routing_bc.pathway.domain.value_objects import OptionInput
from .base import PathwayCommandHandlerMixin

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BulkSyncPathwayOptionsCommand(Command):
    """Replace the whole option list of a pathway with ``options``."""

    pathway_id: int
    options: Tuple[OptionInput, ...]


class BulkSyncPathwayOptionsHandler(
    PathwayCommandHandlerMixin,
    CommandHandler[BulkSyncPathwayOptionsCommand, PathwayEntity],
):
    def __init__(self, session, pathway_repository, pathway_option_repository,
                 pathway_option_toll_repository, sync_service):
        super().__init__(session, pathway_repository, pathway_option_repository, pathway_option_toll_repository)
        self.sync_service = sync_service

    def handle(self, command: BulkSyncPathwayOptionsCommand) -> PathwayEntity:
        logger.debug(f"Bulk sync of {len(command.options)} options for pathway {command.pathway_id}")
        with transaction(self.session):
            entity = self._load_locked(command.pathway_id)
            entity = self.sync_service.bulk_sync_options(entity, command.options)
            return self._loaded(entity)
