from .pathway_repository import PathwayRepository
from .pathway_option_repository import PathwayOptionRepository
from .pathway_option_toll_repository import PathwayOptionTollRepository

__all__ = [
    "PathwayRepository",
    "PathwayOptionRepository",
    "PathwayOptionTollRepository",
]
