# utils/hashing.py
import base64
import hashlib

import bcrypt

from emargement_api.utils.errors import InternalError

DEFAULT_ROUNDS = 10


def _prehash(plaintext: str) -> bytes:
    # bcrypt only reads 72 bytes; a base64 SHA-256 digest is 44 bytes for any password length
    return base64.b64encode(hashlib.sha256(plaintext.encode("utf-8")).digest())


class PasswordHasher:
    """Salted bcrypt hashing with a configurable cost factor."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        try:
            hashed = bcrypt.hashpw(_prehash(plaintext), bcrypt.gensalt(rounds=self.rounds))
        except ValueError as exc:
            raise InternalError(f"Password hashing failed: {exc}") from exc
        return hashed.decode("utf-8")

    def verify(self, plaintext: str, hash_string: str) -> bool:
        try:
            return bcrypt.checkpw(_prehash(plaintext), hash_string.encode("utf-8"))
        except ValueError:
            # Malformed stored hash never matches
            return False
