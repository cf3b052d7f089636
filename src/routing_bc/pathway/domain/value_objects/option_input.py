from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class TollInput:
    """Desired toll booth entry; sequence is reassigned from list order on save."""

    node_id: int
    pass_time_min: int
    sequence: Optional[int] = None
    distance: Optional[float] = None


@dataclass(frozen=True)
class OptionInput:
    """Desired state of one pathway option in a sync or single-option request.

    ``tolls is None`` keeps whatever tolls are stored, an empty tuple clears them.
    """

    name: str
    is_pass_through: bool = False
    active: bool = True
    id: Optional[int] = None
    description: Optional[str] = None
    distance_km: Optional[float] = None
    typical_time_min: Optional[int] = None
    avg_speed_kmh: Optional[float] = None
    is_default: Optional[bool] = None
    pass_through_time_min: Optional[int] = None
    sequence: Optional[int] = None
    tolls: Optional[Tuple[TollInput, ...]] = None

    @property
    def normalized_name(self) -> str:
        return (self.name or "").strip().lower()

    def option_fields(self) -> Dict[str, Any]:
        """Column values written on create/update; the default flag is managed separately."""
        return {
            "name": self.name,
            "description": self.description,
            "distance_km": self.distance_km,
            "typical_time_min": self.typical_time_min,
            "avg_speed_kmh": self.avg_speed_kmh,
            "is_pass_through": self.is_pass_through,
            "pass_through_time_min": self.pass_through_time_min,
            "sequence": self.sequence,
            "active": self.active,
        }
