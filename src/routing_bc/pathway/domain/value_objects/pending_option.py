from dataclasses import dataclass, field
from typing import List, Optional, Union

from src.routing_bc.pathway.domain.entities import PathwayOption
from .option_input import OptionInput


@dataclass(frozen=True)
class CreateOption:
    """Option to insert; ``temp_id`` correlates it with its real id after insert."""

    temp_id: int
    fields: OptionInput

    @property
    def is_default(self) -> bool:
        return self.fields.is_default is True


@dataclass(frozen=True)
class UpdateOption:
    """Persisted option to update in place."""

    id: int
    fields: OptionInput

    @property
    def is_default(self) -> bool:
        return self.fields.is_default is True


PendingOption = Union[CreateOption, UpdateOption]


@dataclass
class CategorizedOperations:
    """Diff between the desired option list and the persisted one."""

    to_create: List[CreateOption] = field(default_factory=list)
    to_update: List[UpdateOption] = field(default_factory=list)
    to_delete: List[PathwayOption] = field(default_factory=list)

    @property
    def pending(self) -> List[PendingOption]:
        return [*self.to_create, *self.to_update]

    def new_default(self) -> Optional[PendingOption]:
        """The pending option flagged as default, updates taking precedence."""
        for op in self.to_update:
            if op.is_default:
                return op
        for op in self.to_create:
            if op.is_default:
                return op
        return None
