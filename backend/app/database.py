"""
Configuration de la connexion à la base de données.
PostgreSQL en production, SQLite accepté en local et pour les tests.
"""

import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import settings

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict:
    if not url.startswith("sqlite"):
        return {"pool_pre_ping": True}
    options = {"connect_args": {"check_same_thread": False}}
    # Base en mémoire : une seule connexion partagée, sinon chaque connexion voit une base vide
    if url in ("sqlite://", "sqlite:///:memory:"):
        options["poolclass"] = StaticPool
    return options


engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Dépendance FastAPI — fournit une session BDD et la ferme après usage."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """
    Crée les tables si elles n'existent pas encore.
    user_sessions n'est ajoutée que pour SESSION_BACKEND=database ;
    create_all ordonne la création selon les clés étrangères (users d'abord).
    """
    from app.models import Announcement, GoodnessRecord, User

    tables = [User.__table__, Announcement.__table__, GoodnessRecord.__table__]
    if settings.SESSION_BACKEND == "database":
        from app.sessions import UserSession

        tables.append(UserSession.__table__)

    Base.metadata.create_all(bind=engine, tables=tables)
    logger.info("Schéma vérifié : %s.", ", ".join(t.name for t in tables))
