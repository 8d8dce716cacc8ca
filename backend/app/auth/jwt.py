"""
JWT helper utilities.

Tokens carry the owner in a ``user`` claim: ``{"user": {"id": 1}, "exp": ...}``.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from devconnect.config import Settings
from devconnect.errors import InvalidCredential, InvalidReferenceError, Unauthenticated
from devconnect.repositories import coerce_id


@dataclass(frozen=True)
class Principal:
    """Identity extracted from a verified token."""

    user_id: int


def create_access_token(user_id: int, settings: Settings, expires_minutes: int | None = None) -> str:
    """
    Create a signed JWT access token for ``user_id``.

    Args:
        user_id: Owner identity placed in the ``user`` claim.
        settings: Supplies the signing secret, algorithm and default expiry.
        expires_minutes: Optional override for expiration window in minutes.

    Returns:
        Encoded JWT string.
    """
    expire_delta = timedelta(
        minutes=expires_minutes if expires_minutes is not None else settings.access_token_expire_minutes
    )
    to_encode = {
        "user": {"id": user_id},
        "exp": datetime.now(timezone.utc) + expire_delta,
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


class TokenVerifier:
    """Decode and verify tokens against the configured shared secret."""

    def __init__(self, settings: Settings):
        self._secret = settings.jwt_secret_key
        self._algorithm = settings.jwt_algorithm

    def verify(self, token: str | None) -> Principal:
        """
        Verify ``token`` and return the principal it names.

        Raises:
            Unauthenticated: No token was supplied.
            InvalidCredential: Bad signature, malformed or expired token, or no user ID.
        """
        if not token:
            raise Unauthenticated()

        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except JWTError as exc:
            raise InvalidCredential() from exc

        user = payload.get("user")
        if not isinstance(user, dict):
            raise InvalidCredential()

        try:
            return Principal(user_id=coerce_id(user.get("id")))
        except InvalidReferenceError as exc:
            raise InvalidCredential() from exc
