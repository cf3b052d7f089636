from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from core.config import settings
from src.framework.application import CommandBus, QueryBus

# Repositories
from src.routing_bc.node.infrastructure.repositories import NodeRepository
from src.routing_bc.pathway.infrastructure.repositories import (
    PathwayRepository, PathwayOptionRepository, PathwayOptionTollRepository,
)

# Domain services
from src.routing_bc.pathway.domain.services.pathway_option_sync_service import PathwayOptionSyncService

# Command Handlers
from src.routing_bc.pathway.application.commands import (
    BulkSyncPathwayOptionsHandler, AddPathwayOptionHandler,
    UpdatePathwayOptionHandler, RemovePathwayOptionHandler,
    SetDefaultPathwayOptionHandler,
)

# Query Handlers
from src.routing_bc.pathway.application.queries import GetPathwayHandler, ListPathwayOptionsHandler


class PathwayContainer(containers.DeclarativeContainer):
    """Dependency injection container for the routing bounded context.

    Built once per request around that request's session.

    Handler naming convention for CommandBus/QueryBus:
    - BulkSyncPathwayOptionsCommand -> bulk_sync_pathway_options_command_handler
    - GetPathwayQuery -> get_pathway_query_handler
    """

    session = providers.Dependency(instance_of=Session)

    # ===== Repositories =====
    node_repository = providers.Factory(NodeRepository, session=session)

    pathway_repository = providers.Factory(PathwayRepository, session=session)

    pathway_option_repository = providers.Factory(PathwayOptionRepository, session=session)

    pathway_option_toll_repository = providers.Factory(PathwayOptionTollRepository, session=session)

    # ===== Domain Services =====
    pathway_option_sync_service = providers.Factory(
        PathwayOptionSyncService,
        pathway_option_repository=pathway_option_repository,
        node_repository=node_repository,
        max_options=settings.sync.MAX_OPTIONS_PER_PATHWAY,
    )

    # ===== Command Handlers =====
    bulk_sync_pathway_options_command_handler = providers.Factory(
        BulkSyncPathwayOptionsHandler,
        session=session,
        pathway_repository=pathway_repository,
        pathway_option_repository=pathway_option_repository,
        pathway_option_toll_repository=pathway_option_toll_repository,
        sync_service=pathway_option_sync_service,
    )

    add_pathway_option_command_handler = providers.Factory(
        AddPathwayOptionHandler,
        session=session,
        pathway_repository=pathway_repository,
        pathway_option_repository=pathway_option_repository,
        pathway_option_toll_repository=pathway_option_toll_repository,
    )

    update_pathway_option_command_handler = providers.Factory(
        UpdatePathwayOptionHandler,
        session=session,
        pathway_repository=pathway_repository,
        pathway_option_repository=pathway_option_repository,
        pathway_option_toll_repository=pathway_option_toll_repository,
    )

    remove_pathway_option_command_handler = providers.Factory(
        RemovePathwayOptionHandler,
        session=session,
        pathway_repository=pathway_repository,
        pathway_option_repository=pathway_option_repository,
        pathway_option_toll_repository=pathway_option_toll_repository,
    )

    set_default_pathway_option_command_handler = providers.Factory(
        SetDefaultPathwayOptionHandler,
        session=session,
        pathway_repository=pathway_repository,
        pathway_option_repository=pathway_option_repository,
        pathway_option_toll_repository=pathway_option_toll_repository,
    )

    # ===== Query Handlers =====
    get_pathway_query_handler = providers.Factory(
        GetPathwayHandler,
        pathway_repository=pathway_repository,
        pathway_option_repository=pathway_option_repository,
        pathway_option_toll_repository=pathway_option_toll_repository,
    )

    list_pathway_options_query_handler = providers.Factory(
        ListPathwayOptionsHandler,
        pathway_repository=pathway_repository,
        pathway_option_repository=pathway_option_repository,
        pathway_option_toll_repository=pathway_option_toll_repository,
    )


def build_buses(session: Session):
    """Command and query buses bound to a container for ``session``."""
    container = PathwayContainer(session=session)
    return CommandBus(container), QueryBus(container)
