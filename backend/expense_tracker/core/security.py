"""Security utilities: bearer token validation and user provisioning."""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.config import settings
from expense_tracker.core.context import UserContext
from expense_tracker.core.database import get_db


def decode_access_token(token: str) -> dict:
    """Validate signature and expiry of an access token issued by the auth provider."""
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        ) from e


# ── Auth Dependencies ─────────────────────────────
security_scheme = HTTPBearer()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security_scheme),
    db: AsyncSession = Depends(get_db),
):
    """FastAPI dependency: validate the bearer token and return (or provision) the local user."""
    from expense_tracker.services.user_service import UserService

    payload = decode_access_token(credentials.credentials)

    subject = payload.get("sub")
    if not subject:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token missing subject",
        )

    return await UserService(db).get_or_provision(
        external_id=str(subject),
        email=payload.get("email"),
        full_name=payload.get("name"),
    )


async def get_user_context(user=Depends(get_current_user)) -> UserContext:
    return UserContext.create(user)
