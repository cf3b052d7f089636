# Models registry for Alembic autogenerate
# Import all SQLAlchemy models here so Alembic can detect them

# Node models
from src.routing_bc.node.infrastructure.models import NodeModel

# Pathway models
from src.routing_bc.pathway.infrastructure.models import (
    PathwayModel,
    PathwayOptionModel,
    PathwayOptionTollModel,
)

__all__ = [
    "NodeModel",
    "PathwayModel",
    "PathwayOptionModel",
    "PathwayOptionTollModel",
]
