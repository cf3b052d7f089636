"""Single-option commands on a pathway."""

from dataclasses import dataclass

from core.database import transaction
from src.framework.application import Command, CommandHandler
from src.routing_bc.pathway.domain.pathway_entity import PathwayEntity
from src.routing_bc.pathway.domain.value_objects import OptionInput
from .base import PathwayCommandHandlerMixin


@dataclass(frozen=True)
class AddPathwayOptionCommand(Command):
    pathway_id: int
    option: OptionInput


@dataclass(frozen=True)
class UpdatePathwayOptionCommand(Command):
    pathway_id: int
    option_id: int
    option: OptionInput


@dataclass(frozen=True)
class RemovePathwayOptionCommand(Command):
    pathway_id: int
    option_id: int


@dataclass(frozen=True)
class SetDefaultPathwayOptionCommand(Command):
    pathway_id: int
    option_id: int


class AddPathwayOptionHandler(PathwayCommandHandlerMixin, CommandHandler[AddPathwayOptionCommand, PathwayEntity]):
    def handle(self, command: AddPathwayOptionCommand) -> PathwayEntity:
        with transaction(self.session):
            entity = self._load_locked(command.pathway_id).add_option(command.option)
            return self._loaded(entity)


class UpdatePathwayOptionHandler(PathwayCommandHandlerMixin, CommandHandler[UpdatePathwayOptionCommand, PathwayEntity]):
    def handle(self, command: UpdatePathwayOptionCommand) -> PathwayEntity:
        """Update fields, then tolls and the default flag when the payload sets them."""
        option = command.option
        with transaction(self.session):
            entity = self._load_locked(command.pathway_id)
            entity = entity.update_option(command.option_id, option)
            if option.tolls is not None:
                entity = entity.sync_option_tolls(command.option_id, option.tolls)
            if option.is_default is True:
                entity = entity.set_default_option(command.option_id)
            return self._loaded(entity)


class RemovePathwayOptionHandler(PathwayCommandHandlerMixin, CommandHandler[RemovePathwayOptionCommand, PathwayEntity]):
    def handle(self, command: RemovePathwayOptionCommand) -> PathwayEntity:
        with transaction(self.session):
            entity = self._load_locked(command.pathway_id).remove_option(command.option_id)
            return self._loaded(entity)


class SetDefaultPathwayOptionHandler(
    PathwayCommandHandlerMixin,
    CommandHandler[SetDefaultPathwayOptionCommand, PathwayEntity],
):
    def handle(self, command: SetDefaultPathwayOptionCommand) -> PathwayEntity:
        with transaction(self.session):
            entity = self._load_locked(command.pathway_id).set_default_option(command.option_id)
            return self._loaded(entity)
