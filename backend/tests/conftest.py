"""
Configuration partagée pour tous les tests.
Override la dépendance get_db pour éviter toute connexion réelle à PostgreSQL.
Les tests de bout en bout utilisent une base SQLite en mémoire.
"""

import os

# Avant tout import de app.* : Settings est lu à l'import
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["SESSION_BACKEND"] = "memory"

from datetime import datetime  # noqa: E402
from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.database import Base, SessionLocal, engine, get_db, init_db  # noqa: E402
from app.dependencies import get_current_user  # noqa: E402
from app.main import app  # noqa: E402
from app.models.user import User  # noqa: E402
from app.services.seed_service import seed_demo_data  # noqa: E402


def make_user(**kwargs) -> User:
    u = MagicMock(spec=User)
    u.id = kwargs.get("id", 1)
    u.username = kwargs.get("username", "somchai")
    u.password = kwargs.get("password", "hash.salt")
    u.role = kwargs.get("role", "student")
    u.first_name = kwargs.get("first_name", "Somchai")
    u.last_name = kwargs.get("last_name", "Dee")
    u.class_level = kwargs.get("class_level", "M.1/1")
    u.student_number = kwargs.get("student_number", 101)
    u.points = kwargs.get("points", 0)
    u.created_at = kwargs.get("created_at", datetime(2024, 1, 1, 8, 0))
    return u


@pytest.fixture
def mock_db():
    return MagicMock()


@pytest.fixture
def client(mock_db):
    """Client HTTP de test avec la BDD mockée."""
    app.dependency_overrides[get_db] = lambda: mock_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def login_as():
    """Court-circuite la session : la requête est authentifiée avec l'utilisateur donné."""
    def _login(user):
        app.dependency_overrides[get_current_user] = lambda: user
        return user
    return _login


@pytest.fixture
def live_client():
    """Client HTTP sur une base SQLite en mémoire, réinitialisée et seedée."""
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=engine)
    init_db()
    with SessionLocal() as db:
        seed_demo_data(db)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
