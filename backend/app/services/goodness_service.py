"""
Service métier pour les fiches de bonnes actions.
Soumission par les élèves, consultation filtrée, évaluation par l'administration.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.goodness_record import GoodnessRecord
from app.models.user import User
from app.schemas.goodness import (
    GoodnessRecordCreate,
    GoodnessRecordUpdate,
    GoodnessRecordWithUser,
    GoodnessReview,
)
from app.schemas.user import UserResponse

logger = logging.getLogger(__name__)


def list_records(
    db: Session,
    user_id: Optional[int] = None,
    status: Optional[str] = None,
) -> list[GoodnessRecordWithUser]:
    """
    Retourne les fiches (les plus récentes d'abord), chacune avec son auteur.
    Jointure gauche : une fiche dont l'auteur est introuvable est retournée sans user.
    """
    query = (
        select(GoodnessRecord, User)
        .outerjoin(User, User.id == GoodnessRecord.user_id)
        .order_by(GoodnessRecord.created_at.desc(), GoodnessRecord.id.desc())
    )
    if user_id is not None:
        query = query.where(GoodnessRecord.user_id == user_id)
    if status is not None:
        query = query.where(GoodnessRecord.status == status)

    rows = db.execute(query).all()
    return [_to_response(record, user) for record, user in rows]


def get_record(db: Session, record_id: int) -> Optional[GoodnessRecord]:
    return db.get(GoodnessRecord, record_id)


def create_record(db: Session, user_id: int, data: GoodnessRecordCreate) -> GoodnessRecord:
    """Crée une fiche en statut pending pour l'utilisateur connecté."""
    record = GoodnessRecord(
        user_id=user_id,
        description=data.description,
        date_performed=data.date_performed,
        image_url=data.image_url,
        status="pending",
        points_awarded=0,
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info("Fiche %s soumise par l'utilisateur %s", record.id, user_id)
    return record


def update_record(
    db: Session, record_id: int, data: GoodnessRecordUpdate
) -> Optional[GoodnessRecord]:
    """Met à jour les champs fournis d'une fiche. user_id n'est jamais modifiable."""
    record = db.get(GoodnessRecord, record_id)
    if record is None:
        return None

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(record, field, value)

    db.commit()
    db.refresh(record)
    return record


def review_record(db: Session, record_id: int, data: GoodnessReview) -> Optional[GoodnessRecord]:
    """
    Évalue une fiche pending et crédite les points de son auteur si elle est approuvée.

    Étapes (une seule transaction) :
    1. Verrouiller la fiche (SELECT ... FOR UPDATE) — None si introuvable
    2. Refuser toute nouvelle évaluation d'une fiche déjà approuvée ou rejetée
    3. Fixer statut, points attribués (0 si rejet) et commentaire
    4. Si approuvée avec des points : verrouiller l'auteur et créditer son solde
    5. Commit unique : fiche et solde sont écrits ensemble ou pas du tout

    Lève ValueError si la fiche a déjà été évaluée.
    """
    record = db.execute(
        select(GoodnessRecord).where(GoodnessRecord.id == record_id).with_for_update()
    ).scalar_one_or_none()
    if record is None:
        return None
    if record.status != "pending":
        raise ValueError(f"La fiche {record_id} a déjà été évaluée ({record.status}).")

    points = data.points_awarded if data.status == "approved" else 0
    record.status = data.status
    record.points_awarded = points
    record.admin_feedback = data.admin_feedback

    if data.status == "approved" and points > 0:
        # Lecture-modification-écriture : le verrou évite de perdre un crédit concurrent
        user = db.execute(
            select(User).where(User.id == record.user_id).with_for_update()
        ).scalar_one_or_none()
        if user is not None:
            user.points = (user.points or 0) + points
        else:
            logger.warning("Fiche %s approuvée mais auteur %s introuvable", record_id, record.user_id)

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(record)

    logger.info(
        "Fiche %s évaluée : %s — %d points pour l'utilisateur %s",
        record.id, record.status, points, record.user_id,
    )
    return record


def _to_response(record: GoodnessRecord, user: Optional[User]) -> GoodnessRecordWithUser:
    """Construit la réponse enrichie (sans mot de passe)."""
    return GoodnessRecordWithUser(
        id=record.id,
        user_id=record.user_id,
        description=record.description,
        date_performed=record.date_performed,
        image_url=record.image_url,
        status=record.status,
        points_awarded=record.points_awarded,
        admin_feedback=record.admin_feedback,
        created_at=record.created_at,
        user=UserResponse.model_validate(user) if user is not None else None,
    )
