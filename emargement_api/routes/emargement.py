# emargement_api/routes/emargement.py
import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from emargement_api.database import get_db
from emargement_api.models.emargement import Emargement
from emargement_api.models.users import User
from emargement_api.schemas.emargement import AttendeeResponse, EmargementPayload, EmargementResponse
from emargement_api.utils.errors import ConflictError
from emargement_api.utils.policy import Access, authorize
from emargement_api.utils.validation import validated_body

router = APIRouter(prefix="/sessions/{session_id:int}/emargement", tags=["Emargement"])
logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = "The user is already registered to this session"


def find_emargement(db: Session, session_id: int, etudiant_id: int):
    return (
        db.query(Emargement)
        .filter(Emargement.session_id == session_id, Emargement.etudiant_id == etudiant_id)
        .first()
    )


# A student signs the attendance sheet of a session, once
@router.post("", response_model=EmargementResponse)
def register_attendance(
    session_id: int,
    payload: EmargementPayload = Depends(validated_body(EmargementPayload)),
    access: Access = Depends(authorize("emargement:register")),
    db: Session = Depends(get_db),
):
    etudiant_id = access.identity.id

    if find_emargement(db, session_id, etudiant_id):
        raise ConflictError(DUPLICATE_MESSAGE)

    record = Emargement(session_id=session_id, etudiant_id=etudiant_id, presence=payload.presence)
    db.add(record)
    try:
        db.commit()
    except IntegrityError as exc:
        # Unique (session_id, etudiant_id) caught a concurrent duplicate
        db.rollback()
        raise ConflictError(DUPLICATE_MESSAGE) from exc
    db.refresh(record)

    logger.info("Etudiant %s signed session %s (presence=%s)", etudiant_id, session_id, record.presence)
    return record


# Attendance sheet of a session, for its formateur
@router.get("", response_model=List[AttendeeResponse])
def list_attendance(
    session_id: int,
    access: Access = Depends(authorize("emargement:list")),
    db: Session = Depends(get_db),
):
    rows = (
        db.query(User, Emargement)
        .join(Emargement, Emargement.etudiant_id == User.id)
        .filter(Emargement.session_id == session_id)
        .order_by(Emargement.id)
        .all()
    )
    return [
        AttendeeResponse(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            session_id=record.session_id,
            presence=record.presence,
        )
        for user, record in rows
    ]
