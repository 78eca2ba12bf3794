"""Optimistic versioning for card content and serializable runs for reorders."""

from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from src.kanban.core.exceptions import ConflictError, NotFoundError, TransactionConflictError
from src.kanban.core.logging import get_logger
from src.kanban.models import Card
from src.kanban.repositories import CardRepository

logger = get_logger(__name__)

# serialization_failure, deadlock_detected
SERIALIZATION_FAILURE_CODES = frozenset({"40001", "40P01"})


def is_serialization_failure(exc: DBAPIError) -> bool:
    """Whether a driver error is a retryable isolation abort."""
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code is None and orig is not None and orig.__cause__ is not None:
        code = getattr(orig.__cause__, "sqlstate", None)
    return code in SERIALIZATION_FAILURE_CODES


class ConcurrencyGuard:
    """Coordinates concurrent writers through the database only.

    Content updates are a single compare-and-set on ``version``. Structural
    changes run in a SERIALIZABLE transaction; an isolation abort rolls back
    and reruns the whole operation up to ``retry_limit`` more times.
    """

    def __init__(
        self,
        session: AsyncSession,
        card_repo: CardRepository,
        retry_limit: int = 1,
    ):
        self.session = session
        self.card_repo = card_repo
        self.retry_limit = retry_limit

    async def run_serializable[T](self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run ``operation`` and commit inside a SERIALIZABLE transaction.

        ``operation`` must do all of its reads itself, since a retry starts
        from a fresh transaction. The session must not have an open
        transaction when this is called.

        Raises:
            TransactionConflictError: Still aborting after the allowed retries.
        """
        attempt = 0
        while True:
            try:
                await self.session.connection(
                    execution_options={"isolation_level": "SERIALIZABLE"}
                )
                result = await operation()
                await self.session.commit()
                return result
            except DBAPIError as e:
                await self.session.rollback()
                if not is_serialization_failure(e):
                    raise
                if attempt >= self.retry_limit:
                    logger.warning("Serializable transaction aborted", attempts=attempt + 1)
                    raise TransactionConflictError() from e
                attempt += 1
                logger.info("Retrying serializable transaction", attempt=attempt)
            except Exception:
                await self.session.rollback()
                raise

    async def run_atomic[T](self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run ``operation`` and commit in one transaction at the default isolation."""
        try:
            result = await operation()
            await self.session.commit()
            return result
        except Exception:
            await self.session.rollback()
            raise

    async def update_card_content(
        self,
        card_id: UUID,
        content: dict[str, Any],
        expected_version: int,
        now: datetime,
    ) -> Card:
        """Apply ``content`` iff the stored version equals ``expected_version``.

        On success the version is incremented by one in the same statement.
        Does not commit.

        Raises:
            ConflictError: The card exists but its version moved on.
            NotFoundError: The card is gone or archived.
        """
        updated = await self.card_repo.compare_and_set_content(
            card_id, expected_version, content, now
        )
        if not updated:
            if await self.card_repo.get_by_id(card_id) is None:
                raise NotFoundError(f"Card {card_id} not found")
            logger.info(
                "Stale card version rejected",
                card_id=str(card_id),
                expected_version=expected_version,
            )
            raise ConflictError("Card has been modified. Please refresh and try again.")

        card = await self.card_repo.refetch(card_id)
        if card is None:
            raise NotFoundError(f"Card {card_id} not found")
        return card
