"""API schemas for routing endpoints."""

from .pathway_schemas import (
    TollPayload,
    PathwayOptionPayload,
    BulkSyncOptionsRequest,
    PathwayOptionTollResponse,
    PathwayOptionResponse,
    PathwayResponse,
)

__all__ = [
    "TollPayload",
    "PathwayOptionPayload",
    "BulkSyncOptionsRequest",
    "PathwayOptionTollResponse",
    "PathwayOptionResponse",
    "PathwayResponse",
]
