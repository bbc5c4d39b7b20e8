# utils/policy.py
"""Role and ownership rules for protected endpoints.

Every protected route names an action from ``POLICIES``. ``authorize``
turns that entry into a FastAPI dependency which always checks, in order:
the caller's role, the existence of the targeted resource, then
ownership of that resource.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from emargement_api.database import get_db
from emargement_api.models.training_session import TrainingSession
from emargement_api.models.users import ROLE_ETUDIANT, ROLE_FORMATEUR
from emargement_api.utils.errors import AuthorizationError, NotFoundError
from emargement_api.utils.tokenJWT import Identity, get_current_identity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceLoader:
    name: str
    path_param: str
    fetch: Callable[[Session, int], Any]


@dataclass(frozen=True)
class Policy:
    role: Optional[str] = None
    resource: Optional[ResourceLoader] = None
    # Returns the owning user id of the loaded resource
    owner: Optional[Callable[[Any], int]] = None


@dataclass(frozen=True)
class Access:
    identity: Identity
    resource: Any = None


def _fetch_session(db: Session, session_id: int) -> Optional[TrainingSession]:
    return db.query(TrainingSession).filter(TrainingSession.id == session_id).first()


SESSION = ResourceLoader(name="Session", path_param="session_id", fetch=_fetch_session)


def _session_owner(session: TrainingSession) -> int:
    return session.formateur_id


POLICIES: Dict[str, Policy] = {
    "session:create": Policy(role=ROLE_FORMATEUR),
    "session:update": Policy(role=ROLE_FORMATEUR, resource=SESSION, owner=_session_owner),
    "session:delete": Policy(role=ROLE_FORMATEUR, resource=SESSION, owner=_session_owner),
    "emargement:register": Policy(role=ROLE_ETUDIANT, resource=SESSION),
    "emargement:list": Policy(role=ROLE_FORMATEUR, resource=SESSION, owner=_session_owner),
}


def check_access(policy: Policy, identity: Identity, db: Session, path_params: Dict[str, Any]) -> Access:
    # Cheap role check first, before any store lookup
    if policy.role is not None and identity.role != policy.role:
        raise AuthorizationError(f"Unauthorized, need -> role: '{policy.role}'")

    if policy.resource is None:
        return Access(identity=identity)

    loader = policy.resource
    resource = loader.fetch(db, int(path_params[loader.path_param]))
    if resource is None:
        raise NotFoundError(f"{loader.name} not found")

    if policy.owner is not None and policy.owner(resource) != identity.id:
        raise AuthorizationError(f"Not authorized on this {loader.name.lower()}")

    return Access(identity=identity, resource=resource)


# Dependency factory for role- and ownership-based access control
def authorize(action: str):
    policy = POLICIES[action]

    def _checker(
        request: Request,
        identity: Identity = Depends(get_current_identity),
        db: Session = Depends(get_db),
    ) -> Access:
        try:
            return check_access(policy, identity, db, request.path_params)
        except AuthorizationError:
            logger.warning("User %s (%s) refused for %s on %s", identity.id, identity.role, action, request.url.path)
            raise

    _checker.__name__ = f"authorize_{action.replace(':', '_')}"
    return _checker
