"""Security utilities."""

from src.kanban.core.security.crypto import actor_id_from_token, decode_token

__all__ = [
    "actor_id_from_token",
    "decode_token",
]
