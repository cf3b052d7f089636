"""Structural checks for one option's toll booth list."""

from typing import List, Sequence

from src.framework.domain.errors import FieldError
from src.routing_bc.pathway.domain import errors as pathway_errors
from src.routing_bc.pathway.domain.value_objects import TollInput


def validate_no_duplicate_toll_nodes(tolls: Sequence[TollInput]) -> List[FieldError]:
    """A node may appear at most once in the list."""
    seen = set()
    duplicates = []
    for toll in tolls:
        if toll.node_id in seen and toll.node_id not in duplicates:
            duplicates.append(toll.node_id)
        seen.add(toll.node_id)

    if duplicates:
        return [pathway_errors.duplicate_toll_nodes(duplicates)]
    return []


def validate_no_consecutive_duplicates(tolls: Sequence[TollInput]) -> List[FieldError]:
    """Two neighbouring entries may not reference the same node."""
    found = []
    for position in range(1, len(tolls)):
        if tolls[position].node_id == tolls[position - 1].node_id:
            found.append(pathway_errors.consecutive_duplicate_tolls(position, tolls[position].node_id))
    return found


def validate_tolls(tolls: Sequence[TollInput]) -> List[FieldError]:
    return [
        *validate_no_duplicate_toll_nodes(tolls),
        *validate_no_consecutive_duplicates(tolls),
    ]


def validate_option_tolls(tolls: Sequence[TollInput], option_index: int) -> List[FieldError]:
    """Toll checks for the option at ``option_index`` of a bulk payload (``options[i].tolls``)."""
    prefix = f"options[{option_index}]"
    return [error.with_prefix(prefix) for error in validate_tolls(tolls)]
