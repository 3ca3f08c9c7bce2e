"""
Stockage des sessions authentifiées.

Une session associe un jeton opaque (cookie HttpOnly) à l'ID d'un utilisateur,
avec une durée de vie fixe (pas de prolongation glissante).
Le store est injecté via app.state et la dépendance get_session_store :
- MemorySessionStore   : mémoire du processus (développement, tests)
- DatabaseSessionStore : table user_sessions, partagée entre instances et redémarrages
"""

import logging
import secrets
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, delete, select
from sqlalchemy.orm import sessionmaker

from app.config import Settings
from app.database import Base

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    # Naïf en UTC : DateTime sans fuseau, comme le reste du schéma
    return datetime.now(timezone.utc).replace(tzinfo=None)


class UserSession(Base):
    """Session persistée (backend database uniquement)."""
    __tablename__ = "user_sessions"

    token = Column(String(64), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    expires_at = Column(DateTime, nullable=False, index=True)


class SessionStore(ABC):
    """Interface commune des stores de sessions."""

    def __init__(self, ttl: timedelta):
        self.ttl = ttl

    @staticmethod
    def new_token() -> str:
        return secrets.token_urlsafe(32)

    @abstractmethod
    def create(self, user_id: int) -> str:
        """Ouvre une session pour l'utilisateur et retourne son jeton."""

    @abstractmethod
    def get(self, token: str) -> Optional[int]:
        """Retourne l'ID utilisateur de la session, ou None si inconnue ou expirée."""

    @abstractmethod
    def delete(self, token: str) -> None:
        """Ferme la session. Sans effet si le jeton est inconnu."""

    @abstractmethod
    def purge_expired(self) -> int:
        """Supprime les sessions expirées et retourne leur nombre."""


class MemorySessionStore(SessionStore):
    def __init__(self, ttl: timedelta):
        super().__init__(ttl)
        self._sessions: dict[str, tuple[int, datetime]] = {}
        self._lock = threading.Lock()

    def create(self, user_id: int) -> str:
        token = self.new_token()
        with self._lock:
            self._sessions[token] = (user_id, _utcnow() + self.ttl)
        return token

    def get(self, token: str) -> Optional[int]:
        with self._lock:
            entry = self._sessions.get(token)
            if entry is None:
                return None
            user_id, expires_at = entry
            if expires_at <= _utcnow():
                del self._sessions[token]
                return None
            return user_id

    def delete(self, token: str) -> None:
        with self._lock:
            self._sessions.pop(token, None)

    def purge_expired(self) -> int:
        now = _utcnow()
        with self._lock:
            expired = [t for t, (_, expires_at) in self._sessions.items() if expires_at <= now]
            for token in expired:
                del self._sessions[token]
        return len(expired)


class DatabaseSessionStore(SessionStore):
    """Sessions en table user_sessions, créée par init_db (après users)."""

    def __init__(self, ttl: timedelta, session_factory: sessionmaker):
        super().__init__(ttl)
        self._session_factory = session_factory

    def create(self, user_id: int) -> str:
        token = self.new_token()
        with self._session_factory() as db:
            db.add(UserSession(token=token, user_id=user_id, expires_at=_utcnow() + self.ttl))
            db.commit()
        return token

    def get(self, token: str) -> Optional[int]:
        with self._session_factory() as db:
            return db.execute(
                select(UserSession.user_id).where(
                    UserSession.token == token,
                    UserSession.expires_at > _utcnow(),
                )
            ).scalar()

    def delete(self, token: str) -> None:
        with self._session_factory() as db:
            db.execute(delete(UserSession).where(UserSession.token == token))
            db.commit()

    def purge_expired(self) -> int:
        with self._session_factory() as db:
            result = db.execute(delete(UserSession).where(UserSession.expires_at <= _utcnow()))
            db.commit()
            return result.rowcount or 0


def build_session_store(config: Settings, session_factory: sessionmaker) -> SessionStore:
    """Instancie le store choisi par SESSION_BACKEND."""
    ttl = timedelta(hours=config.SESSION_TTL_HOURS)
    if config.SESSION_BACKEND == "database":
        logger.info("Sessions stockées en base (table user_sessions).")
        return DatabaseSessionStore(ttl, session_factory)
    if config.SESSION_BACKEND != "memory":
        raise ValueError(f"SESSION_BACKEND inconnu : {config.SESSION_BACKEND!r}")
    return MemorySessionStore(ttl)
