# emargement_api/models/training_session.py
from sqlalchemy import Column, Integer, String, Date, ForeignKey
from sqlalchemy.orm import relationship
from emargement_api.database import Base

# Represents a training session run by a formateur
class TrainingSession(Base):
    __tablename__ = "sessions"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    formateur_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    formateur = relationship("User")
    emargements = relationship("Emargement", back_populates="session", cascade="all, delete-orphan")
