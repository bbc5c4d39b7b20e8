# emargement_api/models/users.py
from sqlalchemy import Column, Integer, String, CheckConstraint
from emargement_api.database import Base

ROLE_FORMATEUR = "formateur"
ROLE_ETUDIANT = "etudiant"
ROLES = (ROLE_FORMATEUR, ROLE_ETUDIANT)

# Represents a user account with authentication details and system role
class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('formateur', 'etudiant')", name="ck_users_role"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False)
