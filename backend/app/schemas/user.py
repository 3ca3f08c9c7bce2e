"""
Schémas Pydantic pour l'authentification et les utilisateurs.
Le mot de passe n'apparaît dans aucun schéma de réponse.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field, field_validator

from app.schemas.base import CamelModel

Role = Literal["student", "admin"]


def _strip_required(v: str) -> str:
    if not v.strip():
        raise ValueError("Le champ ne peut pas être vide.")
    return v.strip()


class LoginRequest(CamelModel):
    """Identifiants de connexion (POST /api/auth/login)."""
    username: str
    password: str


class SignupRequest(CamelModel):
    """Inscription d'un élève (POST /api/auth/signup). Le rôle est toujours student."""
    username: str
    password: str
    first_name: str
    last_name: str
    class_level: str
    student_number: Optional[int] = None

    @field_validator("username", "first_name", "last_name", "class_level")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return _strip_required(v)

    @field_validator("password")
    @classmethod
    def password_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("Le mot de passe ne peut pas être vide.")
        return v


class UserCreate(CamelModel):
    """Création interne d'un utilisateur (inscription, seed). Le mot de passe est en clair."""
    username: str
    password: str
    first_name: str
    last_name: str
    role: Role = "student"
    class_level: Optional[str] = None
    student_number: Optional[int] = None
    points: int = Field(default=0, ge=0)


class UserUpdate(CamelModel):
    """
    Mise à jour partielle par un administrateur (PUT /api/users/{id}).
    points permet une correction manuelle du solde ; password est re-haché.
    """
    username: Optional[str] = None
    password: Optional[str] = None
    role: Optional[Role] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    class_level: Optional[str] = None
    student_number: Optional[int] = None
    points: Optional[int] = Field(default=None, ge=0)

    @field_validator("username", "first_name", "last_name")
    @classmethod
    def not_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            raise ValueError("Le champ ne peut pas être null.")
        return _strip_required(v)

    @field_validator("password")
    @classmethod
    def password_not_empty(cls, v: Optional[str]) -> Optional[str]:
        if not v:
            raise ValueError("Le mot de passe ne peut pas être vide.")
        return v

    @field_validator("role", "points")
    @classmethod
    def not_null(cls, v):
        # Colonnes NOT NULL : absent = inchangé, null explicite refusé
        if v is None:
            raise ValueError("Le champ ne peut pas être null.")
        return v


class UserResponse(CamelModel):
    id: int
    username: str
    role: str
    first_name: str
    last_name: str
    class_level: Optional[str]
    student_number: Optional[int]
    points: int
    created_at: Optional[datetime]
