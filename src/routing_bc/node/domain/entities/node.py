from dataclasses import dataclass
from typing import Optional


@dataclass
class Node:
    """A location in the network that pathways and toll lists point at."""

    id: int
    code: str
    name: str
    city_id: Optional[int] = None
    is_tollbooth: bool = False

    @classmethod
    def from_model(cls, model) -> "Node":
        return cls(
            id=model.id,
            code=model.code,
            name=model.name,
            city_id=model.city_id,
            is_tollbooth=bool(model.is_tollbooth),
        )
