# tests/conftest.py
import pytest

from infra.db.base import init_db, make_engine, make_session_factory
from infra.services import build_service_graph


@pytest.fixture
def session():
    # separate in-memory DB for tests
    engine = make_engine("sqlite:///:memory:")
    init_db(engine)
    TestingSessionLocal = make_session_factory(engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def services(session):
    return build_service_graph(session).as_dict()


@pytest.fixture(autouse=True)
def _clean_engine_env(monkeypatch):
    for name in ("PM_EVM_ASSUMED_CPI", "PM_REPORTING_INTERVAL"):
        monkeypatch.delenv(name, raising=False)


def task_row(activity_id, start, end, **extra):
    row = {"id": activity_id, "name": f"Task {activity_id}", "type": "task", "start": start, "end": end}
    row.update(extra)
    return row


@pytest.fixture
def make_row():
    return task_row


@pytest.fixture
def sample_rows():
    """
    Two phases in a single chain:
    1.1 (3d) -> 1.2 (4d) -> 2.1 (5d) -> 2.2 (milestone)
    """
    return [
        {"id": "1", "name": "Design", "type": "phase"},
        task_row("1.1", "2024-01-01", "2024-01-04", project="1", cost=100, progress=50,
                 resource="Architect (Labor)"),
        task_row("1.2", "2024-01-04", "2024-01-08", project="1", cost=300, progress=10,
                 resource="Steel (Material)", dependencies=["1.1"]),
        {"id": "2", "name": "Build", "type": "phase"},
        task_row("2.1", "2024-01-08", "2024-01-13", project="2", cost=600, progress=0,
                 resource="Crane (Equipment)", dependencies=["1.2"]),
        {"id": "2.2", "name": "Handover", "type": "milestone", "start": "2024-01-13", "end": "2024-01-13",
         "project": "2", "dependencies": "2.1"},
    ]
