"""Bulk synchronization of a pathway's options.

A bulk sync receives the complete desired option list of a pathway and
reconciles it against the stored one:

- validate the payload (every problem is reported at once)
- resolve which option ends up as the default
- diff desired vs. stored options into create/update/delete operations
- reject results that break the pathway invariants
- apply the operations in an order that never leaves two live defaults
- replace the toll lists of the options that supplied one

The caller owns the transaction: nothing here commits, so a failure at any
step leaves the stored pathway untouched once the caller rolls back.
"""

import logging
from dataclasses import replace
from typing import Dict, List, Optional, Sequence, Tuple

from src.framework.domain.errors import FieldError, FieldErrorCollector
from src.routing_bc.pathway.domain import errors as pathway_errors
from src.routing_bc.pathway.domain.entities import Pathway, PathwayOption
from src.routing_bc.pathway.domain.pathway_entity import PathwayEntity
from src.routing_bc.pathway.domain.services.option_rules import merge_update_fields, validate_option_rules
from src.routing_bc.pathway.domain.services.toll_validator import validate_option_tolls
from src.routing_bc.pathway.domain.value_objects import (
    CategorizedOperations,
    CreateOption,
    OptionInput,
    PendingOption,
    UpdateOption,
)

logger = logging.getLogger(__name__)


def check_toll_nodes_exist(options: Sequence[OptionInput], node_repository) -> List[FieldError]:
    """Check every toll node referenced by the payload with a single lookup."""
    node_ids = {toll.node_id for option in options for toll in (option.tolls or ())}
    if not node_ids:
        return []

    existing = {node.id for node in node_repository.find_by_ids(node_ids)}
    missing = sorted(node_ids - existing)
    if missing:
        return [pathway_errors.toll_nodes_not_found(missing)]
    return []


def assign_default_option_if_needed(
    options: Sequence[OptionInput],
    current_options: Sequence[PathwayOption],
) -> List[OptionInput]:
    """Return a copy of ``options`` with the default flag resolved.

    1. An option explicitly flagged as default wins.
    2. Otherwise the current default stays default if it is still in the list.
    3. Otherwise, if the current default is being dropped, nothing is assigned;
       the invariant guard rejects the payload.
    4. Otherwise (the pathway has no default yet) the first option becomes default.
    """
    options = list(options)
    if not options:
        return options

    explicit = next((i for i, o in enumerate(options) if o.is_default is True), None)
    if explicit is not None:
        return _with_single_default(options, explicit)

    current_default = next((o for o in current_options if o.is_default), None)
    if current_default is not None:
        kept = next((i for i, o in enumerate(options) if o.id == current_default.id), None)
        if kept is not None:
            return _with_single_default(options, kept)
        return options

    return _with_single_default(options, 0)


def _with_single_default(options: List[OptionInput], index: int) -> List[OptionInput]:
    return [replace(option, is_default=(i == index)) for i, option in enumerate(options)]


def categorize_operations(
    options: Sequence[OptionInput],
    current_options: Sequence[PathwayOption],
) -> CategorizedOperations:
    """Diff the desired options against the stored ones (pure, no I/O)."""
    operations = CategorizedOperations()
    next_temp_id = 1
    input_ids = set()

    for option in options:
        if option.id is None:
            operations.to_create.append(CreateOption(temp_id=next_temp_id, fields=option))
            next_temp_id += 1
        else:
            operations.to_update.append(UpdateOption(id=option.id, fields=option))
            input_ids.add(option.id)

    operations.to_delete = [o for o in current_options if o.id not in input_ids]
    return operations


def ensure_minimum_options_and_default_presence(
    pathway: Pathway,
    current_options: Sequence[PathwayOption],
    operations: CategorizedOperations,
) -> None:
    """Reject operations that empty an active pathway or drop the default without a replacement.

    Raises:
        FieldValidationError: with every violated rule
    """
    collector = FieldErrorCollector()

    final_count = len(current_options) - len(operations.to_delete) + len(operations.to_create)
    if pathway.active and final_count == 0:
        collector.extend([pathway_errors.cannot_remove_all_options_from_active_pathway()])

    removed_default = next((o for o in operations.to_delete if o.is_default), None)
    if removed_default is not None and operations.new_default() is None:
        collector.extend([pathway_errors.cannot_remove_default_option(removed_default.id)])

    collector.throw_if_errors()


def _without_default(operation: PendingOption) -> OptionInput:
    return replace(operation.fields, is_default=None)


def _real_id(operation: PendingOption, temp_id_map: Dict[int, int]) -> int:
    if isinstance(operation, CreateOption):
        return temp_id_map[operation.temp_id]
    return operation.id


def execute_bulk_sync_operations(
    entity: PathwayEntity,
    operations: CategorizedOperations,
) -> Tuple[PathwayEntity, Dict[int, int]]:
    """Apply categorized operations; returns the new aggregate and the temp id -> real id map.

    Order: create (as non-default), update, move the default flag, delete
    non-default options, delete the previous default.
    """
    # The default flag moves in its own step below
    entity, created = entity.add_options([_without_default(op) for op in operations.to_create])
    temp_id_map = {op.temp_id: option.id for op, option in zip(operations.to_create, created)}

    for op in operations.to_update:
        entity = entity.update_option(op.id, _without_default(op))

    new_default = operations.new_default()
    if new_default is not None:
        entity = entity.set_default_option(_real_id(new_default, temp_id_map))

    previous_default: Optional[PathwayOption] = None
    for option in operations.to_delete:
        if option.is_default:
            previous_default = option
            continue
        entity = entity.remove_option(option.id)

    if previous_default is not None:
        entity = entity.remove_option(previous_default.id)

    return entity, temp_id_map


def sync_all_option_tolls(
    entity: PathwayEntity,
    pending_options: Sequence[PendingOption],
    temp_id_map: Dict[int, int],
) -> PathwayEntity:
    """Replace tolls of every option that supplied a list; ``None`` keeps the stored ones."""
    for op in pending_options:
        if op.fields.tolls is None:
            continue
        entity = entity.sync_option_tolls(_real_id(op, temp_id_map), op.fields.tolls)
    return entity


class PathwayOptionSyncService:
    """Validates and applies bulk option syncs for one session."""

    def __init__(self, pathway_option_repository, node_repository, max_options: Optional[int] = None):
        self.pathway_option_repository = pathway_option_repository
        self.node_repository = node_repository
        self.max_options = max_options

    def validate_bulk_sync_payload(self, pathway_id: int, options: Sequence[OptionInput]) -> None:
        """Run every payload check and raise one FieldValidationError with all failures."""
        collector = FieldErrorCollector()

        if not options:
            collector.extend([pathway_errors.empty_options()])
        elif self.max_options is not None and len(options) > self.max_options:
            collector.extend([pathway_errors.too_many_options(len(options), self.max_options)])

        defaults = [o for o in options if o.is_default is True]
        if len(defaults) > 1:
            collector.extend([pathway_errors.multiple_defaults(len(defaults))])

        stored = self._find_referenced_options(options)

        collector.extend(self._check_duplicate_names(options))
        collector.extend(self._check_option_ownership(pathway_id, options, stored))
        collector.extend(check_toll_nodes_exist(options, self.node_repository))

        for index, option in enumerate(options):
            if option.tolls is not None:
                collector.extend(validate_option_tolls(option.tolls, index))

        for index, option in enumerate(options):
            collector.extend(self._check_option_rules(option, stored.get(option.id)), prefix=f"options[{index}]")

        if collector.has_errors():
            codes = sorted({e.code for e in collector.errors})
            logger.info(f"Bulk sync payload for pathway {pathway_id} rejected: {codes}")
        collector.throw_if_errors()

    def _find_referenced_options(self, options: Sequence[OptionInput]) -> Dict[int, PathwayOption]:
        ids = {o.id for o in options if o.id is not None}
        if not ids:
            return {}
        return {o.id: o for o in self.pathway_option_repository.find_by_ids(ids)}

    @staticmethod
    def _check_duplicate_names(options: Sequence[OptionInput]) -> List[FieldError]:
        seen = set()
        duplicates = []
        for option in options:
            key = option.normalized_name
            if key in seen and option.name.strip() not in duplicates:
                duplicates.append(option.name.strip())
            seen.add(key)
        if duplicates:
            return [pathway_errors.duplicate_option_names(duplicates)]
        return []

    @staticmethod
    def _check_option_ownership(
        pathway_id: int,
        options: Sequence[OptionInput],
        stored: Dict[int, PathwayOption],
    ) -> List[FieldError]:
        ids = {o.id for o in options if o.id is not None}
        found_errors = []

        missing = sorted(ids - set(stored))
        if missing:
            found_errors.append(pathway_errors.options_not_found(missing))

        foreign = sorted(o.id for o in stored.values() if o.pathway_id != pathway_id)
        if foreign:
            found_errors.append(pathway_errors.options_from_different_pathway(foreign))
        return found_errors

    @staticmethod
    def _check_option_rules(option: OptionInput, current: Optional[PathwayOption]) -> List[FieldError]:
        # New options need full metrics; updates are checked against their stored values.
        if option.id is None:
            return validate_option_rules({**option.option_fields(), "is_default": option.is_default})
        if current is None:
            # Unknown id, already reported by the ownership check
            return []

        _, merged = merge_update_fields(current, option)
        return validate_option_rules(merged, require_metrics=False)

    def bulk_sync_options(self, entity: PathwayEntity, options: Sequence[OptionInput]) -> PathwayEntity:
        """Reconcile the pathway's stored options with ``options``.

        Raises:
            FieldValidationError: payload or invariant violations, before any write
        """
        options = list(options)
        self.validate_bulk_sync_payload(entity.id, options)

        current_options = entity.options
        resolved = assign_default_option_if_needed(options, current_options)
        operations = categorize_operations(resolved, current_options)
        logger.debug(
            f"Pathway {entity.id}: {len(operations.to_create)} to create, "
            f"{len(operations.to_update)} to update, {len(operations.to_delete)} to delete"
        )

        ensure_minimum_options_and_default_presence(entity.pathway, current_options, operations)

        entity, temp_id_map = execute_bulk_sync_operations(entity, operations)
        entity = sync_all_option_tolls(entity, operations.pending, temp_id_map)

        logger.info(
            f"Synced options of pathway {entity.id}: "
            f"created={len(operations.to_create)} updated={len(operations.to_update)} "
            f"deleted={len(operations.to_delete)}"
        )
        return entity
