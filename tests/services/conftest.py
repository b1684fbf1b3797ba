# tests/services/conftest.py
from __future__ import annotations
import pytest
from sqlalchemy.orm import Session
from starlette.testclient import TestClient

from tagvocab.database.models import Tenant
from tagvocab.services.api.app import create_app
from tagvocab.services.api.deps import transactional_session


@pytest.fixture()
def api_session(db_engine):
    """One connection/transaction for the whole test, rolled back at the end."""
    conn = db_engine.connect()
    trans = conn.begin()
    session = Session(bind=conn, future=True)
    try:
        yield session
    finally:
        session.close()
        trans.rollback()
        conn.close()


@pytest.fixture()
def api_client(api_session):
    """
    A TestClient whose FastAPI dependency `transactional_session` is overridden
    to yield the test's single Session, so POST -> GET sees the same data.
    """
    app = create_app()

    def _override():
        yield api_session

    app.dependency_overrides[transactional_session] = _override

    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def tenant_id(api_session):
    t = Tenant(name="api-tenant")
    api_session.add(t)
    api_session.flush()
    return t.id
