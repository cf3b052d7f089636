from .bulk_sync_pathway_options import BulkSyncPathwayOptionsCommand, BulkSyncPathwayOptionsHandler
from .pathway_option_commands import (
    AddPathwayOptionCommand,
    AddPathwayOptionHandler,
    UpdatePathwayOptionCommand,
    UpdatePathwayOptionHandler,
    RemovePathwayOptionCommand,
    RemovePathwayOptionHandler,
    SetDefaultPathwayOptionCommand,
    SetDefaultPathwayOptionHandler,
)

__all__ = [
    "BulkSyncPathwayOptionsCommand", "BulkSyncPathwayOptionsHandler",
    "AddPathwayOptionCommand", "AddPathwayOptionHandler",
    "UpdatePathwayOptionCommand", "UpdatePathwayOptionHandler",
    "RemovePathwayOptionCommand", "RemovePathwayOptionHandler",
    "SetDefaultPathwayOptionCommand", "SetDefaultPathwayOptionHandler",
]
