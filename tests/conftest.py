# tests/conftest.py
from __future__ import annotations
import pytest
from sqlalchemy.engine import Engine

from tagvocab.common.settings import get_settings
from tagvocab.database.core.main import build_engine
from tagvocab.database.models import Base  # <-- imports the models/metadata


def _with_tables(engine: Engine):
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="session")
def _postgres_container():
    postgres = pytest.importorskip("testcontainers.postgres")
    try:
        container = postgres.PostgresContainer(get_settings().test_db_image)
        container.start()
    except Exception as e:  # no Docker daemon on this machine
        pytest.skip(f"Postgres testcontainer unavailable: {e}")
    try:
        # Force psycopg (v3) driver in the URL returned by testcontainers (it defaults to psycopg2)
        yield container.get_connection_url().replace("psycopg2", "psycopg")
    finally:
        container.stop()


@pytest.fixture(scope="session")
def sqlite_engine(tmp_path_factory) -> Engine:
    # File-backed SQLite: savepoints and FK cascades are switched on by build_engine.
    path = tmp_path_factory.mktemp("db") / "tagvocab.sqlite3"
    yield from _with_tables(build_engine(f"sqlite:///{path}"))


@pytest.fixture(scope="session")
def pg_engine(_postgres_container) -> Engine:
    yield from _with_tables(build_engine(_postgres_container))


@pytest.fixture(
    scope="session",
    params=["sqlite", pytest.param("pg", marks=pytest.mark.postgres)],
)
def db_engine(request) -> Engine:
    """Every database test runs on SQLite and, when Docker is available, on Postgres."""
    return request.getfixturevalue(f"{request.param}_engine")
