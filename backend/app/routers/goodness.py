"""
Router pour les fiches de bonnes actions.
Élèves : soumission et historique personnel.
Administrateurs : consultation de toutes les fiches et évaluation.
"""

from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user, require_admin
from app.models.user import User
from app.schemas.goodness import (
    GoodnessRecordCreate,
    GoodnessRecordResponse,
    GoodnessRecordWithUser,
    GoodnessReview,
)
from app.services import goodness_service

router = APIRouter(prefix="/api/goodness", tags=["Bonnes actions"])


@router.get("", response_model=List[GoodnessRecordWithUser], summary="Lister les fiches")
def list_records(
    user_id: Optional[int] = Query(None, alias="userId"),
    status: Optional[Literal["pending", "approved", "rejected"]] = Query(None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Retourne les fiches, les plus récentes d'abord, avec leur auteur.
    Un élève ne voit que ses propres fiches, quel que soit le filtre userId envoyé.
    Un administrateur peut filtrer sur n'importe quel utilisateur ou tout voir.
    """
    effective_user_id = user_id if current_user.role == "admin" else current_user.id
    return goodness_service.list_records(db, user_id=effective_user_id, status=status)


@router.post("", response_model=GoodnessRecordResponse, status_code=201, summary="Soumettre une bonne action")
def create_record(
    data: GoodnessRecordCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Crée une fiche pending au nom de l'utilisateur connecté."""
    return goodness_service.create_record(db, current_user.id, data)


@router.patch(
    "/{record_id}/review",
    response_model=GoodnessRecordResponse,
    dependencies=[Depends(require_admin)],
    summary="Évaluer une fiche",
)
def review_record(record_id: int, data: GoodnessReview, db: Session = Depends(get_db)):
    """
    Approuve ou rejette une fiche pending.
    En cas d'approbation, pointsAwarded est ajouté au solde de l'élève dans la même transaction.
    Une fiche déjà évaluée ne peut pas l'être à nouveau (409).
    """
    try:
        record = goodness_service.review_record(db, record_id, data)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if record is None:
        raise HTTPException(status_code=404, detail="Fiche introuvable.")
    return record
