# utils/tokenJWT.py
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from emargement_api.utils.errors import AuthenticationError

logger = logging.getLogger(__name__)

# Authorization scheme; errors are raised by the guard itself
bearer_scheme = HTTPBearer(auto_error=False)


class InvalidToken(Exception):
    """Token is malformed, expired, or its signature does not verify."""


@dataclass(frozen=True)
class Identity:
    id: int
    role: str


class TokenService:
    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 60):
        if not secret_key:
            raise ValueError("A token signing secret is required")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    # Generate a signed token for {id, role}
    def issue(self, payload: dict, expires_delta: Optional[timedelta] = None) -> str:
        to_encode = {"id": payload["id"], "role": payload["role"]}
        if expires_delta is None and self.expire_minutes > 0:
            expires_delta = timedelta(minutes=self.expire_minutes)
        if expires_delta is not None:
            to_encode["exp"] = datetime.now(timezone.utc) + expires_delta
        return jwt.encode(to_encode, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> Identity:
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except JWTError as exc:
            raise InvalidToken(str(exc)) from exc

        user_id = payload.get("id")
        role = payload.get("role")
        # Ensure identity claims are present in the token payload
        if not isinstance(user_id, int) or isinstance(user_id, bool) or not isinstance(role, str):
            raise InvalidToken("Token payload is missing id or role")
        return Identity(id=user_id, role=role)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


# Resolve the caller from the bearer token and attach it to the request
def get_current_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> Identity:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("Missing bearer token")

    try:
        identity = tokens.verify(credentials.credentials)
    except InvalidToken as exc:
        logger.info("Rejected token on %s %s: %s", request.method, request.url.path, exc)
        raise AuthenticationError("Invalid token") from exc

    request.state.identity = identity
    return identity
