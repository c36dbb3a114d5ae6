"""Interaction logging routes."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from bookscout.api.middleware.auth import get_current_user
from bookscout.api.schemas import InteractionRequest, InteractionResponse
from bookscout.database import get_session
from bookscout.domain.models import User
from bookscout.services.interaction import InteractionService

router = APIRouter(prefix="/interactions", tags=["Interactions"])


@router.post("", response_model=InteractionResponse, status_code=status.HTTP_201_CREATED)
async def log_interaction(
    data: InteractionRequest,
    session: AsyncSession = Depends(get_session),
    user: User = Depends(get_current_user),
) -> InteractionResponse:
    """Record a user action such as ``view_details`` on a book."""
    interaction = await InteractionService(session).log(user.id, data)
    return InteractionResponse.model_validate(interaction)
