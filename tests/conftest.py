from datetime import date
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from app.core.database import Base, build_engine, get_db
from app.services import entity_store
from main import app as api, get_today

TODAY = date(2025, 6, 10)


@pytest.fixture()
def engine(tmp_path: Path):
    """Fresh SQLite file per test, foreign keys switched on like production."""
    engine = build_engine(f"sqlite:///{tmp_path / 'tracker.sqlite3'}", echo=False)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory) -> Session:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory) -> TestClient:
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    api.dependency_overrides[get_db] = override_get_db
    api.dependency_overrides[get_today] = lambda: TODAY
    try:
        yield TestClient(api)
    finally:
        api.dependency_overrides.clear()


@pytest.fixture()
def program(db):
    return entity_store.create_program(db, "Computer Science", "Engineering", "Fall 2025")


@pytest.fixture()
def course(db, program):
    return entity_store.create_course(db, program.id, "CS101", "Intro to Programming")
