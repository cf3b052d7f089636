"""Pathway aggregate.

Wraps a persisted Pathway together with the repositories of the current
session. Every mutation validates that the option belongs to this pathway,
writes through the repositories and returns a fresh aggregate whose option
list is reloaded on first access.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from src.framework.domain.errors import FieldValidationError
from src.routing_bc.pathway.domain import errors as pathway_errors
from src.routing_bc.pathway.domain.entities import Pathway, PathwayOption, PathwayOptionToll
from src.routing_bc.pathway.domain.services.option_rules import (
    calculate_avg_speed,
    merge_update_fields,
    validate_option_rules,
)
from src.routing_bc.pathway.domain.value_objects import OptionInput, TollInput

logger = logging.getLogger(__name__)


class PathwayEntity:
    def __init__(self, pathway: Pathway, option_repository, toll_repository):
        self.pathway = pathway
        self._option_repository = option_repository
        self._toll_repository = toll_repository
        self._options: Optional[List[PathwayOption]] = None

    @property
    def id(self) -> int:
        return self.pathway.id

    @property
    def active(self) -> bool:
        return self.pathway.active

    @property
    def options(self) -> List[PathwayOption]:
        """Live options ordered by sequence, each with its tolls (loaded once per instance)."""
        if self._options is None:
            options = self._option_repository.find_by_pathway_id(self.pathway.id)
            tolls = self._toll_repository.find_by_option_ids([o.id for o in options])
            for option in options:
                option.tolls = list(tolls.get(option.id, []))
            self._options = options
        return list(self._options)

    @property
    def default_option(self) -> Optional[PathwayOption]:
        return next((o for o in self.options if o.is_default), None)

    def _fresh(self) -> "PathwayEntity":
        return PathwayEntity(self.pathway, self._option_repository, self._toll_repository)

    def _require_option(self, option_id: int) -> PathwayOption:
        option = self._option_repository.find_one(option_id)
        if option is None:
            raise FieldValidationError([pathway_errors.option_not_found(option_id)])
        if option.pathway_id != self.pathway.id:
            raise FieldValidationError([
                pathway_errors.option_belongs_to_different_pathway(option_id, self.pathway.id, option.pathway_id)
            ])
        return option

    # Writes

    def add_option(self, option: OptionInput) -> "PathwayEntity":
        """Add one option.

        The option becomes default when it asks to, or when the pathway has no
        options yet and the flag was left unset. Given tolls are stored too.
        """
        should_be_default = option.is_default if option.is_default is not None else not self.options

        entity, created = self.add_options([option])
        new_option = created[0]
        if should_be_default:
            entity = entity.set_default_option(new_option.id)
        if option.tolls is not None:
            entity = entity.sync_option_tolls(new_option.id, option.tolls)
        return entity

    def add_options(self, options: Sequence[OptionInput]) -> Tuple["PathwayEntity", List[PathwayOption]]:
        """Insert options as non-default, returning them in submission order."""
        created = []
        for option in options:
            data = _prepare_create(option)
            created.append(self._option_repository.create_option(self.pathway.id, data))
        logger.debug(f"Pathway {self.pathway.id}: created options {[o.id for o in created]}")
        return self._fresh(), created

    def update_option(self, option_id: int, option: OptionInput) -> "PathwayEntity":
        """Apply the provided fields of ``option``; the default flag is left alone."""
        current = self._require_option(option_id)
        self._option_repository.update_option(option_id, _prepare_update(current, option))
        return self._fresh()

    def remove_option(self, option_id: int) -> "PathwayEntity":
        option = self._require_option(option_id)
        if option.is_default:
            raise FieldValidationError([pathway_errors.cannot_remove_default_option(option_id)])
        if self.pathway.active and len(self.options) == 1:
            raise FieldValidationError([pathway_errors.cannot_remove_last_option()])

        self._option_repository.soft_delete(option_id)
        return self._fresh()

    def set_default_option(self, option_id: int) -> "PathwayEntity":
        option = self._require_option(option_id)
        if option.is_default:
            return self
        self._option_repository.set_default_option(self.pathway.id, option_id)
        return self._fresh()

    def sync_option_tolls(self, option_id: int, tolls: Sequence[TollInput]) -> "PathwayEntity":
        """Replace the option's toll list with ``tolls`` (an empty list clears it)."""
        self._require_option(option_id)
        self._toll_repository.replace_for_option(option_id, tolls)
        return self._fresh()

    def get_option_tolls(self, option_id: int) -> List[PathwayOptionToll]:
        self._require_option(option_id)
        return self._toll_repository.find_by_option_id(option_id)


def _prepare_create(option: OptionInput) -> Dict[str, Any]:
    data = option.option_fields()
    found = validate_option_rules({**data, "is_default": option.is_default}, require_metrics=True)
    if found:
        raise FieldValidationError(found)

    data["avg_speed_kmh"] = calculate_avg_speed(data["distance_km"], data["typical_time_min"], data["avg_speed_kmh"])
    data["is_default"] = False
    return data


def _prepare_update(current: PathwayOption, option: OptionInput) -> Dict[str, Any]:
    """Column changes for an update: unset fields keep their stored value."""
    data, merged = merge_update_fields(current, option)
    found = validate_option_rules(merged, require_metrics=False)
    if found:
        raise FieldValidationError(found)

    metrics_changed = "distance_km" in data or "typical_time_min" in data
    if metrics_changed and option.avg_speed_kmh is None:
        if merged["distance_km"] and merged["typical_time_min"]:
            data["avg_speed_kmh"] = calculate_avg_speed(merged["distance_km"], merged["typical_time_min"])
    return data
