"""Pathway and pathway option error catalogue.

Each helper builds a field-scoped FieldError; callers decide whether to
collect it or raise right away.
"""

from typing import Any, Iterable

from src.framework.domain.errors import FieldError


class ErrorCode:
    REQUIRED = "REQUIRED"
    TOO_MANY_OPTIONS = "TOO_MANY_OPTIONS"
    MULTIPLE_DEFAULTS = "MULTIPLE_DEFAULTS"
    DUPLICATE_NAMES = "DUPLICATE_NAMES"
    OPTIONS_NOT_FOUND = "OPTIONS_NOT_FOUND"
    WRONG_PATHWAY = "WRONG_PATHWAY"
    NODES_NOT_FOUND = "NODES_NOT_FOUND"
    DUPLICATE_NODES = "DUPLICATE_NODES"
    CONSECUTIVE_DUPLICATES = "CONSECUTIVE_DUPLICATES"
    INVALID_OPERATION = "INVALID_OPERATION"
    BUSINESS_RULE_VIOLATION = "BUSINESS_RULE_VIOLATION"
    NOT_FOUND = "NOT_FOUND"
    INVALID_REFERENCE = "INVALID_REFERENCE"


PATHWAY_ERRORS = {
    "EMPTY_OPTIONS": "At least one option is required",
    "TOO_MANY_OPTIONS": "Too many options for a single pathway",
    "MULTIPLE_DEFAULTS": "Only one option can be marked as default",
    "DUPLICATE_NAMES": "Option names must be unique within a pathway",
    "OPTIONS_NOT_FOUND": "Pathway options not found",
    "WRONG_PATHWAY": "Options belong to a different pathway",
    "NODES_NOT_FOUND": "Toll nodes not found",
    "DUPLICATE_NODES": "A toll node can only appear once per option",
    "CONSECUTIVE_DUPLICATES": "The same toll node cannot appear in consecutive positions",
    "CANNOT_REMOVE_ALL_OPTIONS": "Cannot remove all options from an active pathway",
    "CANNOT_REMOVE_DEFAULT_OPTION": "Cannot remove the default option. Set another option as default first.",
    "CANNOT_REMOVE_LAST_OPTION": "Cannot remove the last option from an active pathway",
    "OPTION_NOT_FOUND": "Pathway option not found",
    "OPTION_BELONGS_TO_DIFFERENT_PATHWAY": "Option belongs to a different pathway",
    "DISTANCE_REQUIRED": "Distance in km is required and must be greater than 0",
    "TIME_REQUIRED": "Typical time in minutes is required and must be greater than 0",
    "PASS_THROUGH_REQUIRES_TIME": "Pass-through options require a pass-through time greater than 0",
    "PASS_THROUGH_TIME_WITHOUT_FLAG": "Pass-through time can only be set on pass-through options",
    "DEFAULT_REQUIRES_ACTIVE": "The default option must be active",
}


def _join(ids: Iterable[Any]) -> str:
    return ", ".join(str(i) for i in ids)


def empty_options() -> FieldError:
    return FieldError("options", ErrorCode.REQUIRED, PATHWAY_ERRORS["EMPTY_OPTIONS"], None)


def too_many_options(count: int, limit: int) -> FieldError:
    return FieldError(
        "options",
        ErrorCode.TOO_MANY_OPTIONS,
        f"{PATHWAY_ERRORS['TOO_MANY_OPTIONS']} (max {limit})",
        count,
    )


def multiple_defaults(count: int) -> FieldError:
    return FieldError("options", ErrorCode.MULTIPLE_DEFAULTS, PATHWAY_ERRORS["MULTIPLE_DEFAULTS"], count)


def duplicate_option_names(names: Iterable[str]) -> FieldError:
    return FieldError("options", ErrorCode.DUPLICATE_NAMES, PATHWAY_ERRORS["DUPLICATE_NAMES"], _join(names))


def options_not_found(ids: Iterable[int]) -> FieldError:
    return FieldError("options", ErrorCode.OPTIONS_NOT_FOUND, PATHWAY_ERRORS["OPTIONS_NOT_FOUND"], _join(ids))


def options_from_different_pathway(ids: Iterable[int]) -> FieldError:
    return FieldError("options", ErrorCode.WRONG_PATHWAY, PATHWAY_ERRORS["WRONG_PATHWAY"], _join(ids))


def toll_nodes_not_found(node_ids: Iterable[int]) -> FieldError:
    return FieldError("options.tolls", ErrorCode.NODES_NOT_FOUND, PATHWAY_ERRORS["NODES_NOT_FOUND"], _join(node_ids))


def duplicate_toll_nodes(node_ids: Iterable[int]) -> FieldError:
    return FieldError("tolls", ErrorCode.DUPLICATE_NODES, PATHWAY_ERRORS["DUPLICATE_NODES"], _join(node_ids))


def consecutive_duplicate_tolls(position: int, node_id: int) -> FieldError:
    return FieldError(
        "tolls",
        ErrorCode.CONSECUTIVE_DUPLICATES,
        PATHWAY_ERRORS["CONSECUTIVE_DUPLICATES"],
        {"position": position, "nodeId": node_id},
    )


def cannot_remove_all_options_from_active_pathway() -> FieldError:
    return FieldError("options", ErrorCode.INVALID_OPERATION, PATHWAY_ERRORS["CANNOT_REMOVE_ALL_OPTIONS"], None)


def cannot_remove_default_option(option_id: int) -> FieldError:
    return FieldError(
        "optionId",
        ErrorCode.BUSINESS_RULE_VIOLATION,
        f"{PATHWAY_ERRORS['CANNOT_REMOVE_DEFAULT_OPTION']} (option {option_id})",
        option_id,
    )


def cannot_remove_last_option() -> FieldError:
    return FieldError("active", ErrorCode.BUSINESS_RULE_VIOLATION, PATHWAY_ERRORS["CANNOT_REMOVE_LAST_OPTION"], True)


def option_not_found(option_id: int) -> FieldError:
    return FieldError("optionId", ErrorCode.NOT_FOUND, PATHWAY_ERRORS["OPTION_NOT_FOUND"], option_id)


def option_belongs_to_different_pathway(option_id: int, expected_pathway_id: int, actual_pathway_id: int) -> FieldError:
    return FieldError(
        "optionId",
        ErrorCode.INVALID_REFERENCE,
        PATHWAY_ERRORS["OPTION_BELONGS_TO_DIFFERENT_PATHWAY"],
        {
            "optionId": option_id,
            "expectedPathwayId": expected_pathway_id,
            "actualPathwayId": actual_pathway_id,
        },
    )


def distance_required(value: Any) -> FieldError:
    return FieldError("distanceKm", ErrorCode.REQUIRED, PATHWAY_ERRORS["DISTANCE_REQUIRED"], value)


def time_required(value: Any) -> FieldError:
    return FieldError("typicalTimeMin", ErrorCode.REQUIRED, PATHWAY_ERRORS["TIME_REQUIRED"], value)


def pass_through_requires_time(value: Any) -> FieldError:
    return FieldError(
        "passThroughTimeMin",
        ErrorCode.BUSINESS_RULE_VIOLATION,
        PATHWAY_ERRORS["PASS_THROUGH_REQUIRES_TIME"],
        value,
    )


def pass_through_time_without_flag(value: Any) -> FieldError:
    return FieldError(
        "passThroughTimeMin",
        ErrorCode.BUSINESS_RULE_VIOLATION,
        PATHWAY_ERRORS["PASS_THROUGH_TIME_WITHOUT_FLAG"],
        value,
    )


def default_requires_active(value: Any) -> FieldError:
    return FieldError("active", ErrorCode.BUSINESS_RULE_VIOLATION, PATHWAY_ERRORS["DEFAULT_REQUIRES_ACTIVE"], value)
