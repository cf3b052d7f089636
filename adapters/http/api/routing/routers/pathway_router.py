"""Pathway option endpoints.

Every write goes through the command bus; the handler owns the transaction
and locks the pathway row while it runs.
"""

from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from core.containers import PathwayContainer
from core.database import get_db
from core.rate_limiter import limiter, RateLimits
from src.framework.application import CommandBus, QueryBus
from src.routing_bc.pathway.application.commands import (
    AddPathwayOptionCommand,
    BulkSyncPathwayOptionsCommand,
    RemovePathwayOptionCommand,
    SetDefaultPathwayOptionCommand,
    UpdatePathwayOptionCommand,
)
from src.routing_bc.pathway.application.queries import GetPathwayQuery, ListPathwayOptionsQuery
from adapters.http.api.routing.schemas import (
    BulkSyncOptionsRequest,
    PathwayOptionPayload,
    PathwayOptionResponse,
    PathwayResponse,
)


router = APIRouter(prefix="/pathways", tags=["pathways"])


def get_command_bus(db: Session = Depends(get_db)) -> CommandBus:
    return CommandBus(PathwayContainer(session=db))


def get_query_bus(db: Session = Depends(get_db)) -> QueryBus:
    return QueryBus(PathwayContainer(session=db))


@router.get("/{pathway_id}", response_model=PathwayResponse)
@limiter.limit(RateLimits.PATHWAYS)
def get_pathway(request: Request, pathway_id: int, bus: QueryBus = Depends(get_query_bus)):
    """Get a pathway with its options and their tolls."""
    return PathwayResponse.from_entity(bus.query(GetPathwayQuery(pathway_id=pathway_id)))


@router.get("/{pathway_id}/options", response_model=List[PathwayOptionResponse])
@limiter.limit(RateLimits.PATHWAYS)
def list_pathway_options(request: Request, pathway_id: int, bus: QueryBus = Depends(get_query_bus)):
    options = bus.query(ListPathwayOptionsQuery(pathway_id=pathway_id))
    return [PathwayOptionResponse.from_option(o) for o in options]


@router.put("/{pathway_id}/options/bulk-sync", response_model=PathwayResponse)
@limiter.limit(RateLimits.BULK_SYNC)
def bulk_sync_options(
    request: Request,
    pathway_id: int,
    payload: BulkSyncOptionsRequest,
    bus: CommandBus = Depends(get_command_bus),
):
    """Replace the pathway's option list with the given one.

    Options with ``id`` are updated, options without one are created and
    stored options missing from the list are deleted. Omitting ``tolls`` on
    an option keeps its stored tolls, an empty list clears them.
    """
    command = BulkSyncPathwayOptionsCommand(pathway_id=pathway_id, options=payload.to_option_inputs())
    return PathwayResponse.from_entity(bus.dispatch(command))


@router.post("/{pathway_id}/options", response_model=PathwayResponse, status_code=201)
@limiter.limit(RateLimits.OPTION_WRITE)
def add_pathway_option(
    request: Request,
    pathway_id: int,
    payload: PathwayOptionPayload,
    bus: CommandBus = Depends(get_command_bus),
):
    """Add one option; it becomes default if flagged or if it is the pathway's first."""
    command = AddPathwayOptionCommand(pathway_id=pathway_id, option=payload.to_option_input())
    return PathwayResponse.from_entity(bus.dispatch(command))


@router.put("/{pathway_id}/options/{option_id}", response_model=PathwayResponse)
@limiter.limit(RateLimits.OPTION_WRITE)
def update_pathway_option(
    request: Request,
    pathway_id: int,
    option_id: int,
    payload: PathwayOptionPayload,
    bus: CommandBus = Depends(get_command_bus),
):
    command = UpdatePathwayOptionCommand(
        pathway_id=pathway_id,
        option_id=option_id,
        option=payload.to_option_input(),
    )
    return PathwayResponse.from_entity(bus.dispatch(command))


@router.delete("/{pathway_id}/options/{option_id}", response_model=PathwayResponse)
@limiter.limit(RateLimits.OPTION_WRITE)
def remove_pathway_option(
    request: Request,
    pathway_id: int,
    option_id: int,
    bus: CommandBus = Depends(get_command_bus),
):
    command = RemovePathwayOptionCommand(pathway_id=pathway_id, option_id=option_id)
    return PathwayResponse.from_entity(bus.dispatch(command))


@router.put("/{pathway_id}/options/{option_id}/set-default", response_model=PathwayResponse)
@limiter.limit(RateLimits.OPTION_WRITE)
def set_default_pathway_option(
    request: Request,
    pathway_id: int,
    option_id: int,
    bus: CommandBus = Depends(get_command_bus),
):
    command = SetDefaultPathwayOptionCommand(pathway_id=pathway_id, option_id=option_id)
    return PathwayResponse.from_entity(bus.dispatch(command))
