from .pathway import Pathway, PathwayOption, PathwayOptionToll

__all__ = ["Pathway", "PathwayOption", "PathwayOptionToll"]
