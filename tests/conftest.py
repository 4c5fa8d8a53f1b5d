import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite:///./workforce-attendance-test.db")
os.environ.setdefault("ATLAS_APP_CODE", "WORKFORCE_ATTENDANCE_TEST")
os.environ["ENCRYPTION_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ATTENDANCE_TIMEZONE"] = "UTC"

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from atams.exceptions import setup_exception_handlers
from workforce_attendance.db.init_db import create_tables
from workforce_attendance.repositories.attendance_event_repository import AttendanceEventRepository


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'attendance.db'}",
        connect_args={"check_same_thread": False},
        execution_options={"schema_translate_map": {"workforce": None}},
    )
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def add_event(db):
    """Append an event with an explicit timestamp, bypassing the service clock"""
    repo = AttendanceEventRepository()

    def _add(user_id, event_type, timestamp):
        return repo.append_event(db, {
            "ae_user_id": user_id,
            "ae_event_type": event_type,
            "ae_timestamp": timestamp,
        })

    return _add


@pytest.fixture
def current_user():
    return {"user_id": 1, "role_level": 1}


@pytest.fixture
def client(session_factory, current_user):
    from workforce_attendance.api.deps import require_auth
    from workforce_attendance.api.v1.api import api_router
    from workforce_attendance.db.session import get_db

    app = FastAPI()
    setup_exception_handlers(app)
    app.include_router(api_router, prefix="/api/v1")

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[require_auth] = lambda: current_user

    with TestClient(app) as test_client:
        yield test_client
