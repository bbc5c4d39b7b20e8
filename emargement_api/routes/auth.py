# emargement_api/routes/auth.py
import logging

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from emargement_api.database import get_db
from emargement_api.models.users import ROLES, User
from emargement_api.schemas import user as schemas
from emargement_api.utils.errors import AuthenticationError, ConflictError, ValidationError
from emargement_api.utils.hashing import PasswordHasher
from emargement_api.utils.tokenJWT import Identity, TokenService, get_current_identity, get_token_service
from emargement_api.utils.validation import validated_body

router = APIRouter(tags=["Auth"])
logger = logging.getLogger(__name__)


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def find_user_by_email(db: Session, email: str):
    return db.query(User).filter(func.lower(User.email) == email.lower()).first()


# Register a new user
@router.post("/auth/signup", response_model=schemas.UserResponse)
def signup(
    user: schemas.UserCreate = Depends(validated_body(schemas.UserCreate)),
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    if user.role not in ROLES:
        raise ValidationError(
            "The 'role' must be 'formateur' or 'etudiant'",
            details=[{"field": "role", "message": "Must be one of: formateur, etudiant", "type": "enum"}],
        )

    # Check for existing user
    db_user = find_user_by_email(db, user.email)
    if db_user:
        logger.info("Signup refused, email already registered: %s", user.email)
        raise ConflictError("Email already registered")

    # Create new user instance with hashed password
    new_user = User(name=user.name, email=user.email, password_hash=hasher.hash(user.password), role=user.role)
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError as exc:
        # Concurrent signup with the same email won the race
        db.rollback()
        raise ConflictError("Email already registered") from exc
    db.refresh(new_user)

    logger.info("User %s signed up as %s", new_user.id, new_user.role)
    return new_user


# Authenticate user and issue a token
@router.post("/auth/login", response_model=schemas.Token)
def login(
    payload: schemas.UserLogin = Depends(validated_body(schemas.UserLogin)),
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
):
    db_user = find_user_by_email(db, payload.email)

    # Same answer for unknown email and wrong password
    if not db_user or not hasher.verify(payload.password, db_user.password_hash):
        logger.info("Failed login for %s", payload.email)
        raise AuthenticationError("Invalid credentials")

    token = tokens.issue({"id": db_user.id, "role": db_user.role})
    logger.info("User %s logged in", db_user.id)
    return {"token": token}


# Token check, answers 200 with an empty body
@router.get("/protected")
def protected(identity: Identity = Depends(get_current_identity)):
    return Response(status_code=200)
