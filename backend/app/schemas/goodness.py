"""
Schémas Pydantic pour les fiches de bonnes actions et leur évaluation.

Note : on importe datetime en tant que module (dt) pour éviter le conflit de nommage
entre les champs date et le type datetime.date dans Pydantic v2.
"""

import datetime as dt
from typing import Literal, Optional

from pydantic import Field, field_validator, model_serializer

from app.schemas.base import CamelModel
from app.schemas.user import UserResponse

RecordStatus = Literal["pending", "approved", "rejected"]


class GoodnessRecordCreate(CamelModel):
    """Soumission d'une bonne action (POST /api/goodness). user_id vient de la session."""
    description: str
    date_performed: dt.date
    image_url: Optional[str] = None

    @field_validator("description")
    @classmethod
    def description_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("La description ne peut pas être vide.")
        return v.strip()


class GoodnessRecordUpdate(CamelModel):
    """Mise à jour partielle interne d'une fiche (hors user_id, immuable)."""
    description: Optional[str] = None
    date_performed: Optional[dt.date] = None
    image_url: Optional[str] = None
    status: Optional[RecordStatus] = None
    points_awarded: Optional[int] = Field(default=None, ge=0)
    admin_feedback: Optional[str] = None


class GoodnessReview(CamelModel):
    """Décision d'un administrateur (PATCH /api/goodness/{id}/review)."""
    status: Literal["approved", "rejected"]
    points_awarded: int = Field(default=0, ge=0)  # ignoré si rejected
    admin_feedback: Optional[str] = None


class GoodnessRecordResponse(CamelModel):
    id: int
    user_id: int
    description: str
    date_performed: dt.date
    image_url: Optional[str]
    status: str
    points_awarded: Optional[int]
    admin_feedback: Optional[str]
    created_at: Optional[dt.datetime]


class GoodnessRecordWithUser(GoodnessRecordResponse):
    """Fiche enrichie de son auteur (jointure gauche : user absent si introuvable)."""
    user: Optional[UserResponse] = None

    @model_serializer(mode="wrap")
    def _omit_missing_user(self, handler):
        data = handler(self)
        if self.user is None:
            data.pop("user", None)
        return data
