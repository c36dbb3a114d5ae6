"""Authentication routes."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from bookscout.api.middleware.auth import get_current_user
from bookscout.api.schemas import LoginRequest, SignupRequest, TokenResponse, UserResponse
from bookscout.database import get_session
from bookscout.domain.models import User
from bookscout.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    data: SignupRequest,
    session: AsyncSession = Depends(get_session),
) -> UserResponse:
    user = await AuthService(session).signup(data)
    return UserResponse.model_validate(user)


@router.post("/login", response_model=TokenResponse)
async def login(
    data: LoginRequest,
    session: AsyncSession = Depends(get_session),
) -> TokenResponse:
    token = await AuthService(session).issue_token(data.email, data.password)
    return TokenResponse(access_token=token)


@router.get("/profile", response_model=UserResponse)
async def profile(user: User = Depends(get_current_user)) -> UserResponse:
    """Return the authenticated user's profile."""
    return UserResponse.model_validate(user)
