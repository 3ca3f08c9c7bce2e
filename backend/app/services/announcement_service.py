"""
Service métier pour les annonces (lecture publique, écriture administrateur).
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.announcement import Announcement
from app.schemas.announcement import AnnouncementCreate, AnnouncementUpdate

logger = logging.getLogger(__name__)


def list_announcements(db: Session) -> list[Announcement]:
    """Retourne toutes les annonces, de la plus récente à la plus ancienne."""
    return list(db.execute(
        select(Announcement).order_by(Announcement.created_at.desc(), Announcement.id.desc())
    ).scalars().all())


def get_announcement(db: Session, announcement_id: int) -> Optional[Announcement]:
    return db.get(Announcement, announcement_id)


def create_announcement(db: Session, data: AnnouncementCreate) -> Announcement:
    announcement = Announcement(
        title=data.title,
        content=data.content,
        image_url=data.image_url,
    )
    db.add(announcement)
    db.commit()
    db.refresh(announcement)
    logger.info("Annonce publiée : %s (%s)", announcement.title, announcement.id)
    return announcement


def update_announcement(
    db: Session, announcement_id: int, data: AnnouncementUpdate
) -> Optional[Announcement]:
    """Met à jour les champs fournis. Retourne None si l'annonce n'existe pas."""
    announcement = db.get(Announcement, announcement_id)
    if announcement is None:
        return None

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(announcement, field, value)

    db.commit()
    db.refresh(announcement)
    return announcement


def delete_announcement(db: Session, announcement_id: int) -> bool:
    """
    Supprime définitivement une annonce.
    Idempotent : retourne False si elle n'existait pas, sans lever d'erreur.
    """
    announcement = db.get(Announcement, announcement_id)
    if announcement is None:
        return False

    db.delete(announcement)
    db.commit()
    logger.info("Annonce supprimée : %s", announcement_id)
    return True
