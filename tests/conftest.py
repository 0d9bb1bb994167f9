from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from tasktracker.adapters.repo_sql import (
    SQLAlchemyTaskListRepository,
    SQLAlchemyTaskRepository,
    SQLAlchemyUserRepository,
)
from tasktracker.app.config import Settings, get_settings
from tasktracker.app.db import create_db_engine, get_db, init_db

AUTH_HEADERS = {"username": "tester", "password": "s3cret"}


@pytest.fixture()
def engine(tmp_path: Path):
    """A fresh SQLite file per test, foreign keys enforced."""
    eng = create_db_engine(f"sqlite:///{tmp_path / 'tasks.sqlite3'}")
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def users(db_session) -> SQLAlchemyUserRepository:
    return SQLAlchemyUserRepository(db_session)


@pytest.fixture()
def task_lists(db_session) -> SQLAlchemyTaskListRepository:
    return SQLAlchemyTaskListRepository(db_session)


@pytest.fixture()
def tasks(db_session) -> SQLAlchemyTaskRepository:
    return SQLAlchemyTaskRepository(db_session)


@pytest.fixture()
def test_settings() -> Settings:
    return Settings(api_username=AUTH_HEADERS["username"], api_password=AUTH_HEADERS["password"])


@pytest.fixture()
def anonymous_client(session_factory, test_settings):
    """TestClient bound to the per-test database, without credentials."""
    from tasktracker.main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def client(anonymous_client):
    anonymous_client.headers.update(AUTH_HEADERS)
    return anonymous_client
