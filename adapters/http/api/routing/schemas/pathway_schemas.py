"""Pathway and pathway option request/response schemas.

JSON uses camelCase (``distanceKm``, ``isDefault``...), Python code uses
snake_case; both names are accepted on input.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.routing_bc.pathway.domain.entities import PathwayOption, PathwayOptionToll
from src.routing_bc.pathway.domain.pathway_entity import PathwayEntity
from src.routing_bc.pathway.domain.value_objects import OptionInput, TollInput


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# Requests

class TollPayload(CamelModel):
    node_id: int
    sequence: int  # informative only, stored order follows the list
    pass_time_min: int = Field(ge=0)
    distance: Optional[float] = None

    def to_toll_input(self) -> TollInput:
        return TollInput(
            node_id=self.node_id,
            pass_time_min=self.pass_time_min,
            sequence=self.sequence,
            distance=self.distance,
        )


class PathwayOptionPayload(CamelModel):
    """One option of a bulk sync; without ``id`` it is created."""

    id: Optional[int] = None
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    distance_km: Optional[float] = None
    typical_time_min: Optional[int] = None
    avg_speed_kmh: Optional[float] = None
    is_default: Optional[bool] = None
    is_pass_through: bool
    pass_through_time_min: Optional[int] = None
    sequence: Optional[int] = None
    active: bool
    # Omitted keeps the stored tolls, an empty list clears them
    tolls: Optional[List[TollPayload]] = None

    def to_option_input(self) -> OptionInput:
        tolls = None
        if self.tolls is not None:
            tolls = tuple(toll.to_toll_input() for toll in self.tolls)

        return OptionInput(
            id=self.id,
            name=self.name,
            description=self.description,
            distance_km=self.distance_km,
            typical_time_min=self.typical_time_min,
            avg_speed_kmh=self.avg_speed_kmh,
            is_default=self.is_default,
            is_pass_through=self.is_pass_through,
            pass_through_time_min=self.pass_through_time_min,
            sequence=self.sequence,
            active=self.active,
            tolls=tolls,
        )


class BulkSyncOptionsRequest(CamelModel):
    options: List[PathwayOptionPayload]

    def to_option_inputs(self) -> tuple:
        return tuple(option.to_option_input() for option in self.options)


# Responses

class PathwayOptionTollResponse(CamelModel):
    id: int
    node_id: int
    sequence: int
    pass_time_min: int
    distance: Optional[float] = None

    @classmethod
    def from_toll(cls, toll: PathwayOptionToll) -> "PathwayOptionTollResponse":
        return cls(
            id=toll.id,
            node_id=toll.node_id,
            sequence=toll.sequence,
            pass_time_min=toll.pass_time_min,
            distance=toll.distance,
        )


class PathwayOptionResponse(CamelModel):
    id: int
    pathway_id: int
    name: Optional[str]
    description: Optional[str] = None
    distance_km: Optional[float] = None
    typical_time_min: Optional[int] = None
    avg_speed_kmh: Optional[float] = None
    is_default: bool
    is_pass_through: bool
    pass_through_time_min: Optional[int] = None
    sequence: Optional[int] = None
    active: bool
    tolls: List[PathwayOptionTollResponse] = []

    @classmethod
    def from_option(cls, option: PathwayOption) -> "PathwayOptionResponse":
        return cls(
            id=option.id,
            pathway_id=option.pathway_id,
            name=option.name,
            description=option.description,
            distance_km=option.distance_km,
            typical_time_min=option.typical_time_min,
            avg_speed_kmh=option.avg_speed_kmh,
            is_default=option.is_default,
            is_pass_through=option.is_pass_through,
            pass_through_time_min=option.pass_through_time_min,
            sequence=option.sequence,
            active=option.active,
            tolls=[PathwayOptionTollResponse.from_toll(t) for t in option.tolls],
        )


class PathwayResponse(CamelModel):
    id: int
    origin_node_id: int
    destination_node_id: int
    name: str
    code: str
    description: Optional[str] = None
    is_sellable: bool
    is_empty_trip: bool
    active: bool
    options: List[PathwayOptionResponse] = []

    @classmethod
    def from_entity(cls, entity: PathwayEntity) -> "PathwayResponse":
        pathway = entity.pathway
        return cls(
            id=pathway.id,
            origin_node_id=pathway.origin_node_id,
            destination_node_id=pathway.destination_node_id,
            name=pathway.name,
            code=pathway.code,
            description=pathway.description,
            is_sellable=pathway.is_sellable,
            is_empty_trip=pathway.is_empty_trip,
            active=pathway.active,
            options=[PathwayOptionResponse.from_option(o) for o in entity.options],
        )
