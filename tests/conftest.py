import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("KINOPOISK_API_KEY", "test-key")
os.environ.setdefault("ENVIRONMENT", "test")

import random

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from crud.history_crud import HistoryStore, get_history_store
from database import get_db, init_db
from main import app
from routers.recommendation_router import get_catalog_client, get_random_source
from utils.errors import NoResultsError


def make_movie(i, rating=7.0, votes=5000, genres=("драма",), description=None, **overrides):
    movie = {
        "id": 1000 + i,
        "name": f"Фильм {i}",
        "alternativeName": f"Movie {i}",
        "enName": None,
        "year": 2015,
        "rating": {"kp": rating, "imdb": rating},
        "votes": {"kp": votes, "imdb": votes},
        "genres": [{"name": g} for g in genres],
        "poster": {"url": f"https://posters.example.com/{i}.jpg"},
        "description": description if description is not None else f"Описание фильма {i}",
    }
    movie.update(overrides)
    return movie


class StubCatalog:
    """Stands in for KinopoiskClient; answers with ``docs`` or raises ``error``."""

    def __init__(self, docs=None, error=None):
        self.docs = docs or []
        self.error = error
        self.queries = []

    def find_movies(self, query):
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        if not self.docs:
            raise NoResultsError()
        return list(self.docs)


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def store(session_factory):
    return HistoryStore(session_factory)


@pytest.fixture()
def catalog():
    ratings = [6.1, 6.5, 6.9, 7.0, 7.2, 7.4, 7.5, 7.6, 7.8, 8.0, 8.1, 8.3, 8.5, 8.8, 9.0]
    return StubCatalog([make_movie(i, rating=r) for i, r in enumerate(ratings)])


@pytest.fixture()
def client(session_factory, store, catalog):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_history_store] = lambda: store
    app.dependency_overrides[get_catalog_client] = lambda: catalog
    app.dependency_overrides[get_random_source] = lambda: random.Random(7)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers(client):
    resp = client.post(
        "/users/signup",
        json={"email": "anna@example.com", "username": "anna", "password": "secret123"},
    )
    assert resp.status_code == 201, resp.text
    token = resp.json()["tokens"]["access_token"]
    return {"Authorization": f"Bearer {token}"}
