from .pathway_queries import (
    GetPathwayQuery,
    GetPathwayHandler,
    ListPathwayOptionsQuery,
    ListPathwayOptionsHandler,
)

__all__ = [
    "GetPathwayQuery", "GetPathwayHandler",
    "ListPathwayOptionsQuery", "ListPathwayOptionsHandler",
]
