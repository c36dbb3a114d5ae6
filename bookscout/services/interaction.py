"""Interaction logging service."""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from bookscout.api.schemas import InteractionRequest
from bookscout.domain.models import Interaction

logger = logging.getLogger(__name__)


class InteractionService:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def log(self, user_id: UUID, data: InteractionRequest) -> Interaction:
        """Record one user action, e.g. opening a book's details."""
        interaction = Interaction(
            user_id=user_id,
            book_id=data.book_id,
            event=data.event,
        )
        self._session.add(interaction)
        await self._session.flush()
        logger.info(
            "Logged %s for user %s on book %d", data.event, user_id, data.book_id
        )
        return interaction
