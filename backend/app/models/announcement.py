"""
Modèle SQLAlchemy pour les annonces publiques du conseil des élèves.
"""

from sqlalchemy import Column, DateTime, Integer, String, Text, func

from app.database import Base


class Announcement(Base):
    __tablename__ = "announcements"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    image_url = Column(String(500), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
