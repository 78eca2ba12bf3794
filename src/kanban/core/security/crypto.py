"""JWT verification for the actor identity.

Tokens are issued by the authentication service; this module only checks the
signature and expiry with the shared secret.
"""

from typing import Any
from uuid import UUID

from jose import JWTError, jwt

from src.kanban.core.config import get_settings


def decode_token(token: str) -> dict[str, Any] | None:
    """Decode and validate JWT token. Returns None on any error."""
    settings = get_settings()
    try:
        return jwt.decode(  # type: ignore[no-any-return]
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None


def actor_id_from_token(token: str) -> UUID | None:
    """Return the ``sub`` claim of an access token as a UUID, or None."""
    payload = decode_token(token)
    if payload is None or payload.get("type", "access") != "access":
        return None

    subject = payload.get("sub")
    if not subject:
        return None

    try:
        return UUID(subject)
    except ValueError:
        return None
