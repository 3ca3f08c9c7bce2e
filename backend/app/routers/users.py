"""
Router de gestion des utilisateurs (réservé aux administrateurs).
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import require_admin
from app.schemas.user import UserResponse, UserUpdate
from app.services import user_service

router = APIRouter(prefix="/api/users", tags=["Utilisateurs"], dependencies=[Depends(require_admin)])


@router.get("", response_model=List[UserResponse], summary="Lister les utilisateurs")
def list_users(db: Session = Depends(get_db)):
    return user_service.list_users(db)


@router.put("/{user_id}", response_model=UserResponse, summary="Modifier un utilisateur")
def update_user(user_id: int, data: UserUpdate, db: Session = Depends(get_db)):
    """
    Met à jour les champs fournis (profil, rôle, mot de passe, correction manuelle des points).
    Les champs absents ne sont pas modifiés.
    """
    try:
        user = user_service.update_user(db, user_id, data)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if user is None:
        raise HTTPException(status_code=404, detail="Utilisateur introuvable.")
    return user
