"""
Modèle SQLAlchemy pour les fiches de bonnes actions soumises par les élèves.

Cycle de vie :
- créée en statut pending par l'élève (pour lui-même)
- évaluée une seule fois par un administrateur : pending → approved | rejected
- jamais supprimée
"""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text, func

from app.database import Base


class GoodnessRecord(Base):
    __tablename__ = "goodness_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    description = Column(Text, nullable=False)
    date_performed = Column(Date, nullable=False)
    image_url = Column(String(500), nullable=True)
    status = Column(String(20), nullable=False, default="pending")  # pending, approved, rejected
    points_awarded = Column(Integer, default=0)  # figé au moment de l'approbation
    admin_feedback = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
