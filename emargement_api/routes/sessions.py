# emargement_api/routes/sessions.py
import logging
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from emargement_api.database import get_db
from emargement_api.models.training_session import TrainingSession
from emargement_api.schemas.session import SessionPayload, SessionResponse
from emargement_api.utils.errors import NotFoundError
from emargement_api.utils.policy import Access, authorize
from emargement_api.utils.validation import validated_body

router = APIRouter(prefix="/sessions", tags=["Sessions"])
logger = logging.getLogger(__name__)


# Create a session owned by the calling formateur
@router.post("", response_model=SessionResponse)
def create_session(
    payload: SessionPayload = Depends(validated_body(SessionPayload)),
    access: Access = Depends(authorize("session:create")),
    db: Session = Depends(get_db),
):
    session = TrainingSession(title=payload.title, date=payload.date, formateur_id=access.identity.id)
    db.add(session)
    db.commit()
    db.refresh(session)

    logger.info("Session %s created by formateur %s", session.id, access.identity.id)
    return session


# List every session (public)
@router.get("", response_model=List[SessionResponse])
def list_sessions(db: Session = Depends(get_db)):
    return db.query(TrainingSession).order_by(TrainingSession.id).all()


# Retrieve one session (public)
@router.get("/{session_id:int}", response_model=SessionResponse)
def get_session(session_id: int, db: Session = Depends(get_db)):
    session = db.query(TrainingSession).filter(TrainingSession.id == session_id).first()
    if not session:
        raise NotFoundError("Session not found")
    return session


# Replace title and date (owner only)
@router.put("/{session_id:int}")
def update_session(
    session_id: int,
    payload: SessionPayload = Depends(validated_body(SessionPayload)),
    access: Access = Depends(authorize("session:update")),
    db: Session = Depends(get_db),
):
    session = access.resource
    session.title = payload.title
    session.date = payload.date
    db.commit()

    logger.info("Session %s updated by formateur %s", session_id, access.identity.id)
    return Response(status_code=200)


# Delete a session and its attendance records (owner only)
@router.delete("/{session_id:int}")
def delete_session(
    session_id: int,
    access: Access = Depends(authorize("session:delete")),
    db: Session = Depends(get_db),
):
    db.delete(access.resource)
    db.commit()

    logger.info("Session %s deleted by formateur %s", session_id, access.identity.id)
    return Response(status_code=200)
