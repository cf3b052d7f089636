from .pathway_model import PathwayModel
from .pathway_option_model import PathwayOptionModel
from .pathway_option_toll_model import PathwayOptionTollModel

__all__ = [
    "PathwayModel",
    "PathwayOptionModel",
    "PathwayOptionTollModel",
]
