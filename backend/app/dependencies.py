"""
Dépendances FastAPI d'authentification et d'autorisation.

Chaîne de gardes composée avant chaque route :
- get_current_user : session valide requise, sinon 401
- require_admin    : get_current_user + rôle admin, sinon 403
Les gardes ne modifient jamais les données.
"""

from typing import Optional

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import APIKeyCookie
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.models.user import User
from app.services import user_service
from app.sessions import SessionStore

session_cookie = APIKeyCookie(name=settings.SESSION_COOKIE_NAME, auto_error=False)


def get_session_store(request: Request) -> SessionStore:
    """Store de sessions injecté au démarrage de l'application (app.state)."""
    return request.app.state.session_store


def get_current_user(
    token: Optional[str] = Security(session_cookie),
    store: SessionStore = Depends(get_session_store),
    db: Session = Depends(get_db),
) -> User:
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentification requise.")

    user_id = store.get(token)
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Session invalide ou expirée.")

    user = user_service.get_user(db, user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Session invalide ou expirée.")
    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != "admin":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Accès réservé aux administrateurs.")
    return current_user
