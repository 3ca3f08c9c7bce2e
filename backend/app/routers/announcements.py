"""
Router pour les annonces : lecture publique, écriture réservée aux administrateurs.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import require_admin
from app.schemas.announcement import AnnouncementCreate, AnnouncementResponse, AnnouncementUpdate
from app.services import announcement_service

router = APIRouter(prefix="/api/announcements", tags=["Annonces"])


@router.get("", response_model=List[AnnouncementResponse], summary="Lister les annonces")
def list_announcements(db: Session = Depends(get_db)):
    """Retourne toutes les annonces, de la plus récente à la plus ancienne."""
    return announcement_service.list_announcements(db)


@router.get("/{announcement_id}", response_model=AnnouncementResponse, summary="Détail d'une annonce")
def get_announcement(announcement_id: int, db: Session = Depends(get_db)):
    announcement = announcement_service.get_announcement(db, announcement_id)
    if announcement is None:
        raise HTTPException(status_code=404, detail="Annonce introuvable.")
    return announcement


@router.post(
    "",
    response_model=AnnouncementResponse,
    status_code=201,
    dependencies=[Depends(require_admin)],
    summary="Publier une annonce",
)
def create_announcement(data: AnnouncementCreate, db: Session = Depends(get_db)):
    return announcement_service.create_announcement(db, data)


@router.put(
    "/{announcement_id}",
    response_model=AnnouncementResponse,
    dependencies=[Depends(require_admin)],
    summary="Modifier une annonce",
)
def update_announcement(announcement_id: int, data: AnnouncementUpdate, db: Session = Depends(get_db)):
    announcement = announcement_service.update_announcement(db, announcement_id, data)
    if announcement is None:
        raise HTTPException(status_code=404, detail="Annonce introuvable.")
    return announcement


@router.delete(
    "/{announcement_id}",
    status_code=204,
    dependencies=[Depends(require_admin)],
    summary="Supprimer une annonce",
)
def delete_announcement(announcement_id: int, db: Session = Depends(get_db)):
    """Suppression définitive. Idempotent : 204 même si l'annonce n'existe pas."""
    announcement_service.delete_announcement(db, announcement_id)
