"""
Service métier pour les utilisateurs : inscription, connexion, gestion par l'administration.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.user import User
from app.schemas.user import LoginRequest, SignupRequest, UserCreate, UserUpdate
from app.security import hash_password, verify_password

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> Optional[User]:
    """Retourne un utilisateur par son ID, ou None s'il n'existe pas."""
    return db.get(User, user_id)


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.execute(
        select(User).where(User.username == username)
    ).scalar_one_or_none()


def list_users(db: Session) -> list[User]:
    return list(db.execute(select(User).order_by(User.id)).scalars().all())


def create_user(db: Session, data: UserCreate) -> User:
    """
    Crée un utilisateur avec mot de passe haché.
    Lève une ValueError si le nom d'utilisateur existe déjà.
    """
    if get_user_by_username(db, data.username) is not None:
        raise ValueError(f"Le nom d'utilisateur '{data.username}' existe déjà.")

    user = User(
        username=data.username,
        password=hash_password(data.password),
        role=data.role,
        first_name=data.first_name,
        last_name=data.last_name,
        class_level=data.class_level,
        student_number=data.student_number,
        points=data.points,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Inscription concurrente avec le même nom
        db.rollback()
        raise ValueError(f"Le nom d'utilisateur '{data.username}' existe déjà.")
    db.refresh(user)
    return user


def signup(db: Session, data: SignupRequest) -> User:
    """Inscription publique : le rôle est forcé à student, le solde démarre à 0."""
    user = create_user(db, UserCreate(
        username=data.username,
        password=data.password,
        first_name=data.first_name,
        last_name=data.last_name,
        class_level=data.class_level,
        student_number=data.student_number,
        role="student",
    ))
    logger.info("Nouvel élève inscrit : %s (%s)", user.username, user.id)
    return user


def authenticate(db: Session, data: LoginRequest) -> Optional[User]:
    """Retourne l'utilisateur si les identifiants sont valides, sinon None."""
    user = get_user_by_username(db, data.username)
    if user is None or not verify_password(data.password, user.password):
        logger.info("Échec de connexion pour '%s'", data.username)
        return None
    return user


def update_user(db: Session, user_id: int, data: UserUpdate) -> Optional[User]:
    """
    Met à jour les champs fournis d'un utilisateur.
    Un nouveau mot de passe est haché avant stockage.
    Lève une ValueError si le nouveau nom d'utilisateur est déjà pris.
    """
    user = db.get(User, user_id)
    if user is None:
        return None

    update_data = data.model_dump(exclude_unset=True)
    if update_data.get("password") is not None:
        update_data["password"] = hash_password(update_data["password"])
    for field, value in update_data.items():
        setattr(user, field, value)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        if "username" not in update_data:
            raise
        raise ValueError("Ce nom d'utilisateur existe déjà.")
    db.refresh(user)
    return user
