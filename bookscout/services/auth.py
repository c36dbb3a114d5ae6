"""Account registration and token issuing."""

import logging

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bookscout.api.middleware.auth import create_access_token, hash_password, verify_password
from bookscout.api.schemas import SignupRequest
from bookscout.domain.models import User

logger = logging.getLogger(__name__)


class AuthService:
    """Creates reader accounts and exchanges credentials for bearer tokens."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _exists(self, *criteria) -> bool:
        result = await self._session.execute(select(User.id).where(*criteria).limit(1))
        return result.first() is not None

    async def signup(self, data: SignupRequest) -> User:
        """
        Register a reader.

        Username and email are checked separately so the 409 says which
        one clashes; the username is checked first.
        """
        if await self._exists(User.username == data.username):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail="Username already taken"
            )
        if await self._exists(User.email == data.email):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail="Email already registered"
            )

        user = User(
            email=data.email,
            username=data.username,
            hashed_password=hash_password(data.password),
        )
        self._session.add(user)
        await self._session.flush()
        logger.info("Registered reader %s (%s)", user.id, user.username)
        return user

    async def issue_token(self, email: str, password: str) -> str:
        """Check credentials and return a signed access token. 401 on mismatch."""
        result = await self._session.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()
        if user is None or not verify_password(password, user.hashed_password):
            logger.info("Rejected login for %s", email)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials"
            )
        return create_access_token(user.id)
