"""
Pytest configuration and shared fixtures
"""
import pytest
from unittest.mock import Mock
from fastapi.testclient import TestClient

from pmos.models import CurriculumSnapshot, Module, ModuleResource, Resource, Track


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset singleton clients before each test"""
    from pmos.core.supabase_client import reset_supabase_client
    reset_supabase_client()
    yield
    reset_supabase_client()


@pytest.fixture
def make_resource():
    """Build a Resource with sensible defaults; override any field by keyword."""
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        fields = {
            "id": f"res_{counter['n']}",
            "title": f"Resource {counter['n']}",
            "topics": [],
            "difficulty": "intermediate",
            "estimated_minutes": 30,
            "status": "queued",
        }
        fields.update(overrides)
        return Resource(**fields)

    return _make


@pytest.fixture
def sample_snapshot():
    """
    One track with three modules:
    - mod_1: two resources, both completed
    - mod_2: one resource, queued
    - mod_3: one resource, queued
    """
    track = Track(id="track_1", name="Product Discovery", order=1)
    other_track = Track(id="track_2", name="Delivery", order=0)
    modules = [
        Module(id="mod_3", track_id="track_1", name="Synthesis", order=3),
        Module(id="mod_1", track_id="track_1", name="Interviews", order=1),
        Module(id="mod_2", track_id="track_1", name="Mapping", order=2),
    ]
    resources = [
        Resource(id="r1", title="The Mom Test", topics=["interviewing"], status="completed",
                 estimated_minutes=10, completion_date="2024-01-02T10:00:00+00:00"),
        Resource(id="r2", title="CustDev Interviews", topics=["user-research"], status="completed",
                 estimated_minutes=45, completion_date="2024-01-03T10:00:00+00:00"),
        Resource(id="r3", title="Empathy Mapping", topics=["empathy", "user-research"],
                 prerequisite_topics=["interviewing"], status="queued", estimated_minutes=20),
        Resource(id="r4", title="Affinity Diagrams", topics=["synthesis"],
                 prerequisite_topics=["empathy"], status="queued", estimated_minutes=12),
    ]
    links = [
        ModuleResource(id="l1", module_id="mod_1", resource_id="r2", sequence_order=2),
        ModuleResource(id="l2", module_id="mod_1", resource_id="r1", sequence_order=1),
        ModuleResource(id="l3", module_id="mod_2", resource_id="r3", sequence_order=1),
        ModuleResource(id="l4", module_id="mod_3", resource_id="r4", sequence_order=1),
    ]
    return CurriculumSnapshot(
        tracks=[track, other_track], modules=modules, resources=resources, module_resources=links
    )


class DummyCurriculumStore:
    """In-memory stand-in for CurriculumStore used by API tests."""

    def __init__(self, snapshot: CurriculumSnapshot):
        self.snapshot = snapshot
        self.deleted: list[str] = []
        self.created: list = []
        self.updated: list = []

    def load_snapshot(self):
        return self.snapshot

    def load_resources(self):
        return list(self.snapshot.resources)

    def get_track(self, track_id):
        return next((t for t in self.snapshot.tracks if t.id == track_id), None)

    def get_module(self, module_id):
        return next((m for m in self.snapshot.modules if m.id == module_id), None)

    def get_resource(self, resource_id):
        return next((r for r in self.snapshot.resources if r.id == resource_id), None)

    def toggle_resource_status(self, resource):
        new_status = "in-progress" if resource.status == "completed" else "completed"
        return resource.model_copy(update={"status": new_status})

    def update_resource(self, resource_id, payload):
        self.updated.append((resource_id, payload))
        resource = self.get_resource(resource_id)
        return resource.model_copy(update=payload.changes())

    def delete_resource(self, resource_id):
        self.deleted.append(resource_id)
        return sum(1 for link in self.snapshot.module_resources if link.resource_id == resource_id)

    def create_resource(self, payload):
        self.created.append(payload)
        return Resource(id="res_new", status="queued", **payload.model_dump())

    def seed_demo_data(self):
        return not self.snapshot.tracks

    def reset_all(self):
        return {"tracks": len(self.snapshot.tracks), "resources": len(self.snapshot.resources)}


@pytest.fixture
def dummy_store(sample_snapshot):
    return DummyCurriculumStore(sample_snapshot)


@pytest.fixture
def client(dummy_store):
    """FastAPI test client with the curriculum store overridden"""
    from fastapi import FastAPI
    from pmos.api.curriculum import router as curriculum_router
    from pmos.api.dashboard import router as dashboard_router
    from pmos.api.insights import router as insights_router
    from pmos.api.maintenance import router as maintenance_router
    from pmos.api.resources import router as resources_router
    from pmos.api.routes import router
    from pmos.config import settings
    from pmos.utils.db_helpers import get_curriculum_store

    test_app = FastAPI(title=settings.app_name, debug=settings.debug)
    test_app.include_router(router, prefix="/api")
    test_app.include_router(insights_router, prefix="/api/insights")
    test_app.include_router(curriculum_router, prefix="/api/curriculum")
    test_app.include_router(resources_router, prefix="/api/resources")
    test_app.include_router(dashboard_router, prefix="/api/dashboard")
    test_app.include_router(maintenance_router, prefix="/api/maintenance")
    test_app.dependency_overrides[get_curriculum_store] = lambda: dummy_store

    return TestClient(test_app)


@pytest.fixture
def mock_supabase_client(monkeypatch):
    """
    Mock Supabase client with one query chain per table.

    Set rows with `mock_supabase_client.rows["resources"] = [...]`; every
    chain method returns the chain and execute() returns those rows.
    """
    mock_client = Mock()
    mock_client.rows = {}
    mock_client.chains = {}

    def create_query_chain(name):
        chain = Mock()
        chain.select = Mock(return_value=chain)
        chain.eq = Mock(return_value=chain)
        chain.neq = Mock(return_value=chain)
        chain.order = Mock(return_value=chain)
        chain.insert = Mock(return_value=chain)
        chain.update = Mock(return_value=chain)
        chain.delete = Mock(return_value=chain)
        chain.execute = Mock(side_effect=lambda: Mock(data=mock_client.rows.get(name, [])))
        return chain

    def table(name):
        if name not in mock_client.chains:
            mock_client.chains[name] = create_query_chain(name)
        return mock_client.chains[name]

    mock_client.table = Mock(side_effect=table)

    monkeypatch.setattr("pmos.core.supabase_client._supabase_client", mock_client)

    return mock_client
