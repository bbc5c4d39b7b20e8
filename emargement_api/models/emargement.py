# emargement_api/models/emargement.py
from sqlalchemy import Column, Integer, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from emargement_api.database import Base

# Attendance record of a student for a session, one per (session, student)
class Emargement(Base):
    __tablename__ = "emargements"
    __table_args__ = (
        UniqueConstraint("session_id", "etudiant_id", name="uq_emargements_session_etudiant"),
    )

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(Integer, ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    etudiant_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    presence = Column(Boolean, nullable=False)

    session = relationship("TrainingSession", back_populates="emargements")
    etudiant = relationship("User")
