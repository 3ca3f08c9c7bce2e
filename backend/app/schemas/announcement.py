"""
Schémas Pydantic pour les annonces.
"""

from datetime import datetime
from typing import Optional

from pydantic import field_validator

from app.schemas.base import CamelModel


class AnnouncementCreate(CamelModel):
    title: str
    content: str
    image_url: Optional[str] = None

    @field_validator("title", "content")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le champ ne peut pas être vide.")
        return v.strip()


class AnnouncementUpdate(CamelModel):
    title: Optional[str] = None
    content: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("title", "content")
    @classmethod
    def not_empty(cls, v: Optional[str]) -> Optional[str]:
        # Absent = inchangé ; null explicite refusé (colonnes NOT NULL)
        if v is None:
            raise ValueError("Le champ ne peut pas être null.")
        if not v.strip():
            raise ValueError("Le champ ne peut pas être vide.")
        return v.strip()


class AnnouncementResponse(CamelModel):
    id: int
    title: str
    content: str
    image_url: Optional[str]
    created_at: Optional[datetime]
