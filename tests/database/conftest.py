# tests/database/conftest.py
from __future__ import annotations

from typing import Callable

import pytest
from sqlalchemy.orm import Session

from tagvocab.common.naming.normalizer import NameNormalizer
from tagvocab.database.models import Tenant
from tagvocab.database.repos.tag_repo import SqlAlchemyTagStore


@pytest.fixture()
def db(db_engine) -> Session:
    """
    Per-test SQLAlchemy Session bound to a transaction (rolled back after each test).
    Uses the engine provided by the top-level conftest.
    """
    connection = db_engine.connect()
    trans = connection.begin()

    session = Session(bind=connection, future=True)
    try:
        yield session
    finally:
        session.close()
        trans.rollback()
        connection.close()


def _mk_tenant(db: Session, name: str) -> Tenant:
    t = Tenant(name=name)
    db.add(t)
    db.flush()
    return t


@pytest.fixture()
def tenant(db) -> Tenant:
    return _mk_tenant(db, "acme")


@pytest.fixture()
def other_tenant(db) -> Tenant:
    return _mk_tenant(db, "globex")


@pytest.fixture()
def make_store(db) -> Callable[..., SqlAlchemyTagStore]:
    def _make(strict: bool = False) -> SqlAlchemyTagStore:
        return SqlAlchemyTagStore(db, NameNormalizer.from_flag(strict))
    return _make
