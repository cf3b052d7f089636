from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class PathwayOptionToll:
    """A toll booth stop on an option's route."""

    id: int
    pathway_option_id: int
    node_id: int
    sequence: int  # 1-based
    pass_time_min: int
    distance: Optional[float] = None

    @classmethod
    def from_model(cls, model) -> "PathwayOptionToll":
        return cls(
            id=model.id,
            pathway_option_id=model.pathway_option_id,
            node_id=model.node_id,
            sequence=model.sequence,
            pass_time_min=model.pass_time_min,
            distance=model.distance,
        )


@dataclass
class PathwayOption:
    """One alternative route profile (distance, time, tolls) of a pathway."""

    id: int
    pathway_id: int
    name: Optional[str]
    description: Optional[str] = None
    distance_km: Optional[float] = None
    typical_time_min: Optional[int] = None
    avg_speed_kmh: Optional[float] = None
    is_default: bool = False
    is_pass_through: bool = False
    pass_through_time_min: Optional[int] = None
    sequence: Optional[int] = None
    active: bool = True
    tolls: List[PathwayOptionToll] = field(default_factory=list)

    @classmethod
    def from_model(cls, model, tolls: Optional[List[PathwayOptionToll]] = None) -> "PathwayOption":
        return cls(
            id=model.id,
            pathway_id=model.pathway_id,
            name=model.name,
            description=model.description,
            distance_km=model.distance_km,
            typical_time_min=model.typical_time_min,
            avg_speed_kmh=model.avg_speed_kmh,
            is_default=bool(model.is_default),
            is_pass_through=bool(model.is_pass_through),
            pass_through_time_min=model.pass_through_time_min,
            sequence=model.sequence,
            active=bool(model.active),
            tolls=list(tolls or []),
        )


@dataclass
class Pathway:
    """A named route between two nodes of the network."""

    id: int
    origin_node_id: int
    destination_node_id: int
    name: str
    code: str
    description: Optional[str] = None
    is_sellable: bool = False
    is_empty_trip: bool = False
    active: bool = False

    @classmethod
    def from_model(cls, model) -> "Pathway":
        return cls(
            id=model.id,
            origin_node_id=model.origin_node_id,
            destination_node_id=model.destination_node_id,
            name=model.name,
            code=model.code,
            description=model.description,
            is_sellable=bool(model.is_sellable),
            is_empty_trip=bool(model.is_empty_trip),
            active=bool(model.active),
        )
