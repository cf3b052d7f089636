"""Pytest configuration and fixtures.

Tests run against an in-memory SQLite database; the engine must be
configured before the application modules are imported.
"""

import os

os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite://")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
from fastapi.testclient import TestClient

from app import app
from core.base import Base
from core.database import SessionLocal, engine, get_db
import models  # noqa: F401  registers every model on Base.metadata
from src.routing_bc.node.infrastructure.models import NodeModel
from src.routing_bc.node.infrastructure.repositories import NodeRepository
from src.routing_bc.pathway.domain.pathway_entity import PathwayEntity
from src.routing_bc.pathway.domain.services.pathway_option_sync_service import PathwayOptionSyncService
from src.routing_bc.pathway.infrastructure.models import (
    PathwayModel,
    PathwayOptionModel,
    PathwayOptionTollModel,
)
from src.routing_bc.pathway.infrastructure.repositories import (
    PathwayRepository,
    PathwayOptionRepository,
    PathwayOptionTollRepository,
)


@pytest.fixture
def db_session():
    """Fresh schema and session per test."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """Create a test client for the FastAPI app bound to the test session."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def api_base_url():
    """Base URL for pathway endpoints."""
    return "/api/v1/pathways"


@pytest.fixture
def node_ids(db_session):
    """Two terminals followed by four toll booths."""
    nodes = [
        NodeModel(code=f"NODE-{i}", name=f"Node {i}", is_tollbooth=i > 2)
        for i in range(1, 7)
    ]
    db_session.add_all(nodes)
    db_session.commit()
    return [n.id for n in nodes]


def _add_pathway(db_session, node_ids, code, active):
    pathway = PathwayModel(
        origin_node_id=node_ids[0],
        destination_node_id=node_ids[1],
        name=f"Pathway {code}",
        code=code,
        active=active,
    )
    db_session.add(pathway)
    db_session.commit()
    return pathway.id


def _add_option(db_session, pathway_id, name, is_default=False, sequence=None):
    option = PathwayOptionModel(
        pathway_id=pathway_id,
        name=name,
        distance_km=120.0,
        typical_time_min=90,
        avg_speed_kmh=80.0,
        is_default=is_default,
        is_pass_through=False,
        sequence=sequence,
        active=True,
    )
    db_session.add(option)
    db_session.commit()
    return option.id


@pytest.fixture
def pathway_id(db_session, node_ids):
    """Active pathway without options."""
    return _add_pathway(db_session, node_ids, "PW-ACTIVE", active=True)


@pytest.fixture
def inactive_pathway_id(db_session, node_ids):
    return _add_pathway(db_session, node_ids, "PW-INACTIVE", active=False)


@pytest.fixture
def seeded_options(db_session, pathway_id, node_ids):
    """Options A (default, one toll on node 3) and B on the active pathway."""
    option_a = _add_option(db_session, pathway_id, "Highway", is_default=True, sequence=1)
    option_b = _add_option(db_session, pathway_id, "Coastal", sequence=2)
    db_session.add(PathwayOptionTollModel(
        pathway_option_id=option_a,
        node_id=node_ids[2],
        sequence=1,
        pass_time_min=5,
    ))
    db_session.commit()
    return {"A": option_a, "B": option_b}


@pytest.fixture
def other_pathway_option_id(db_session, node_ids):
    """An option that belongs to a second pathway."""
    other_id = _add_pathway(db_session, node_ids, "PW-OTHER", active=True)
    return _add_option(db_session, other_id, "Elsewhere", is_default=True)


@pytest.fixture
def load_entity(db_session):
    """Build a fresh PathwayEntity for a pathway id."""

    def _load(pathway_id):
        pathway = PathwayRepository(db_session).find_one(pathway_id)
        return PathwayEntity(
            pathway,
            PathwayOptionRepository(db_session),
            PathwayOptionTollRepository(db_session),
        )

    return _load


@pytest.fixture
def sync_service(db_session):
    return PathwayOptionSyncService(
        pathway_option_repository=PathwayOptionRepository(db_session),
        node_repository=NodeRepository(db_session),
        max_options=10,
    )
