"""
Router d'authentification : connexion, déconnexion, profil courant, inscription.
La session est portée par un cookie HttpOnly contenant un jeton opaque.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, Security
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.dependencies import get_current_user, get_session_store, session_cookie
from app.models.user import User
from app.schemas.user import LoginRequest, SignupRequest, UserResponse
from app.services import user_service
from app.sessions import SessionStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentification"])


def _open_session(
    response: Response, store: SessionStore, user: User, previous_token: Optional[str] = None
) -> None:
    """Ouvre une nouvelle session ; celle déjà portée par la requête est fermée."""
    if previous_token:
        store.delete(previous_token)
    token = store.create(user.id)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_TTL_HOURS * 3600,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )


@router.post("/login", response_model=UserResponse, summary="Se connecter")
def login(
    data: LoginRequest,
    response: Response,
    previous_token: Optional[str] = Security(session_cookie),
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
):
    """Vérifie les identifiants et ouvre une session (cookie valable 24 h par défaut)."""
    user = user_service.authenticate(db, data)
    if user is None:
        raise HTTPException(status_code=401, detail="Nom d'utilisateur ou mot de passe incorrect.")

    _open_session(response, store, user, previous_token)
    logger.info("Connexion de %s (%s)", user.username, user.role)
    return user


@router.post("/logout", summary="Se déconnecter")
def logout(
    response: Response,
    token: Optional[str] = Security(session_cookie),
    store: SessionStore = Depends(get_session_store),
):
    """Ferme la session courante. Sans effet si aucune session n'est ouverte."""
    if token:
        store.delete(token)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"detail": "Déconnecté."}


@router.get("/me", response_model=UserResponse, summary="Utilisateur connecté")
def me(current_user: User = Depends(get_current_user)):
    return current_user


@router.post("/signup", response_model=UserResponse, status_code=201, summary="Inscription d'un élève")
def signup(
    data: SignupRequest,
    response: Response,
    previous_token: Optional[str] = Security(session_cookie),
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
):
    """
    Crée un compte élève (le rôle est toujours student) et connecte directement l'élève.
    Nom d'utilisateur déjà pris → 409.
    """
    try:
        user = user_service.signup(db, data)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))

    _open_session(response, store, user, previous_token)
    return user
