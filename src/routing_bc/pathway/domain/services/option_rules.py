"""Business rules for a single pathway option."""

from typing import Any, Dict, List, Optional, Tuple

from src.framework.domain.errors import FieldError, FieldValidationError
from src.routing_bc.pathway.domain import errors as pathway_errors
from src.routing_bc.pathway.domain.entities import PathwayOption
from src.routing_bc.pathway.domain.value_objects import OptionInput


def validate_metrics(
    distance_km: Optional[float],
    typical_time_min: Optional[int],
    required: bool = True,
) -> List[FieldError]:
    """Distance and typical time must be positive; when not required only given values are checked."""
    found = []
    if (required or distance_km is not None) and (not distance_km or distance_km <= 0):
        found.append(pathway_errors.distance_required(distance_km))
    if (required or typical_time_min is not None) and (not typical_time_min or typical_time_min <= 0):
        found.append(pathway_errors.time_required(typical_time_min))
    return found


def validate_pass_through_rule(
    is_pass_through: Optional[bool],
    pass_through_time_min: Optional[int],
) -> List[FieldError]:
    found = []
    if is_pass_through is True and (not pass_through_time_min or pass_through_time_min <= 0):
        found.append(pathway_errors.pass_through_requires_time(pass_through_time_min))
    if is_pass_through is False and pass_through_time_min is not None:
        found.append(pathway_errors.pass_through_time_without_flag(pass_through_time_min))
    return found


def validate_default_active_rule(is_default: Optional[bool], active: Optional[bool]) -> List[FieldError]:
    """Only an explicit default flag is checked; an inactive option may still become default by fallback."""
    if is_default is True and active is False:
        return [pathway_errors.default_requires_active(active)]
    return []


def validate_option_rules(data: Dict[str, Any], require_metrics: bool = True) -> List[FieldError]:
    """All single-option rules over a dict of option column values."""
    return [
        *validate_metrics(data.get("distance_km"), data.get("typical_time_min"), required=require_metrics),
        *validate_pass_through_rule(data.get("is_pass_through"), data.get("pass_through_time_min")),
        *validate_default_active_rule(data.get("is_default"), data.get("active")),
    ]


def merge_update_fields(current: PathwayOption, option: OptionInput) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """Split an update into the column changes and the resulting option values.

    Unset fields keep their stored value. Turning pass-through off without a
    time clears the stored time. The merged values carry the sent default
    flag, not the stored one.
    """
    changes = {key: value for key, value in option.option_fields().items() if value is not None}
    if changes.get("is_pass_through") is False and option.pass_through_time_min is None:
        changes["pass_through_time_min"] = None

    merged = {
        "distance_km": current.distance_km,
        "typical_time_min": current.typical_time_min,
        "is_pass_through": current.is_pass_through,
        "pass_through_time_min": current.pass_through_time_min,
        "active": current.active,
        **changes,
        "is_default": option.is_default,
    }
    return changes, merged


def calculate_avg_speed(
    distance_km: Optional[float],
    typical_time_min: Optional[int],
    avg_speed_kmh: Optional[float] = None,
) -> float:
    """Average speed in km/h, derived from distance and time unless given explicitly.

    Raises:
        FieldValidationError: if distance or time are missing or not positive
    """
    found = validate_metrics(distance_km, typical_time_min)
    if found:
        raise FieldValidationError(found)

    if avg_speed_kmh is not None:
        return avg_speed_kmh
    return round(distance_km * 60 / typical_time_min, 2)
