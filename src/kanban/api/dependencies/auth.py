"""Actor identity dependency."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status

from src.kanban.core.logging import bind_actor_context
from src.kanban.core.security import actor_id_from_token


async def get_current_actor(
    authorization: Annotated[str | None, Header()] = None,
) -> UUID:
    """Validate the bearer token and return the actor id from its ``sub`` claim.

    Membership is not checked here; each service asks the AccessGate for the
    role it needs on the project it touches.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid authorization header",
        )

    actor_id = actor_id_from_token(authorization[7:])
    if actor_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    bind_actor_context(actor_id)
    return actor_id


CurrentActor = Annotated[UUID, Depends(get_current_actor)]
