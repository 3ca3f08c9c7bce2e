"""
Modèle SQLAlchemy pour les utilisateurs (élèves et administrateurs).
"""

from sqlalchemy import Column, DateTime, Integer, String, Text, func

from app.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(100), unique=True, nullable=False)
    password = Column(Text, nullable=False)  # "<digest hex>.<sel hex>", jamais sérialisé
    role = Column(String(20), nullable=False, default="student")  # student, admin
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    class_level = Column(String(50), nullable=True)  # ex. "M.1/1"
    student_number = Column(Integer, nullable=True)
    points = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now())
