"""Pytest fixtures: in-memory sqlite, fresh tables per test."""

import os

# Set before app imports so the engine is created with sqlite
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["DATABASE_NAME"] = ""
os.environ["LASTFM_USERNAME"] = ""
os.environ["LASTFM_API_KEY"] = ""
os.environ["TIMEZONE"] = "UTC"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.client.api import DashboardClient  # noqa: E402
from app.db import Base, SessionLocal, engine  # noqa: E402
from app.main import app  # noqa: E402


@pytest.fixture
def client():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(client):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def dashboard(client):
    # TestClient is an httpx.Client, so the real data-access layer runs in-process
    return DashboardClient(http=client)
