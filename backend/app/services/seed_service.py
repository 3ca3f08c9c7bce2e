"""
Données de démonstration créées au premier démarrage (base sans utilisateur).
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.user import User
from app.schemas.announcement import AnnouncementCreate
from app.schemas.user import UserCreate
from app.services import announcement_service, user_service

logger = logging.getLogger(__name__)

DEMO_USERS = [
    UserCreate(
        username="admin",
        password="admin123",
        role="admin",
        first_name="Admin",
        last_name="User",
        class_level="Staff",
        student_number=0,
    ),
    UserCreate(
        username="student",
        password="student123",
        role="student",
        first_name="Somchai",
        last_name="Dee",
        class_level="M.1/1",
        student_number=101,
    ),
]

WELCOME_ANNOUNCEMENT = AnnouncementCreate(
    title="Welcome to Student Council",
    content="This is the first announcement. Welcome everyone!",
    image_url="https://placehold.co/600x400",
)


def seed_demo_data(db: Session) -> bool:
    """
    Crée les comptes admin/élève de démonstration et l'annonce de bienvenue.
    Ne fait rien si au moins un utilisateur existe. Retourne True si le seed a eu lieu.
    """
    user_count = db.execute(select(func.count()).select_from(User)).scalar() or 0
    if user_count > 0:
        return False

    for data in DEMO_USERS:
        user_service.create_user(db, data)
    announcement_service.create_announcement(db, WELCOME_ANNOUNCEMENT)

    logger.info("Données de démonstration créées : %d comptes, 1 annonce.", len(DEMO_USERS))
    return True
