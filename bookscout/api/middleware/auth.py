"""Password hashing, JWT tokens and the current-user dependency."""

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

import bcrypt
import jwt
from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bookscout.config import settings
from bookscout.database import get_session
from bookscout.domain.models import User

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))


def create_access_token(user_id: UUID) -> str:
    expires = datetime.now(timezone.utc) + timedelta(
        minutes=settings.access_token_expire_minutes
    )
    payload = {"sub": str(user_id), "exp": expires}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="User not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )


def _user_id_from_token(token: str) -> UUID:
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
        return UUID(payload["sub"])
    except (jwt.PyJWTError, KeyError, ValueError) as exc:
        logger.info("Rejected access token: %s", exc)
        raise _unauthorized() from exc


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    x_test_user_id: str | None = Header(default=None),
    session: AsyncSession = Depends(get_session),
) -> User:
    """
    Resolve the caller from a bearer token.

    With ``allow_test_identity`` enabled, an ``X-Test-User-Id`` header
    naming an existing user is accepted instead. Raises 401 otherwise.
    """
    if credentials is not None:
        user_id = _user_id_from_token(credentials.credentials)
    elif settings.allow_test_identity and x_test_user_id:
        try:
            user_id = UUID(x_test_user_id)
        except ValueError as exc:
            raise _unauthorized() from exc
    else:
        raise _unauthorized()

    result = await session.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if not user:
        raise _unauthorized()
    return user
