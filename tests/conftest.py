"""Shared fixtures: an in-memory database per test and an authenticated client."""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import tiger.db.models  # noqa: F401
from tiger.db.models import User
from tiger.db.session import Base, get_db
from tiger.main import app


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def user(db):
    owner = User(email="owner@example.com", name="Owner", hashed_password="not-a-real-hash")
    db.add(owner)
    db.commit()
    db.refresh(owner)
    return owner


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def register_and_login(client, email, password="correct-horse"):
    resp = client.post("/auth/register", json={"name": email.split("@")[0], "email": email, "password": password})
    assert resp.status_code == 201, resp.text
    resp = client.post("/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture()
def auth_headers(client):
    return register_and_login(client, "alice@example.com")


@pytest.fixture()
def other_headers(client):
    return register_and_login(client, "bob@example.com")


@pytest.fixture()
def login(client):
    return lambda email, password="correct-horse": register_and_login(client, email, password)
