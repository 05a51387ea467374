"""
Secure cookie-based authentication utilities
Tokens are read from the Authorization header first, then from httpOnly cookies
"""

import logging
import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
from fastapi import Depends, HTTPException, Request, Response, status
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from db_models.user import User
from drivelog_api.core.config import settings
from drivelog_api.db.session import get_db

LOGGER = logging.getLogger(__name__)

# Cookie configuration
COOKIE_NAME_ACCESS = f"{settings.COOKIE_PREFIX}_access_token"
COOKIE_NAME_REFRESH = f"{settings.COOKIE_PREFIX}_refresh_token"
COOKIE_NAME_SESSION = f"{settings.COOKIE_PREFIX}_session_data"

COOKIE_HTTPONLY = True
COOKIE_SAMESITE = "strict"


class CookieAuth:
    """Handles secure cookie-based authentication"""

    @staticmethod
    def _options(httponly: bool = COOKIE_HTTPONLY) -> dict[str, Any]:
        return {
            "secure": settings.COOKIE_SECURE,
            "httponly": httponly,
            "samesite": COOKIE_SAMESITE,
            "domain": settings.COOKIE_DOMAIN,
            "path": "/",
        }

    @staticmethod
    def set_auth_cookies(
        response: Response,
        access_token: str,
        refresh_token: str,
        session_data: dict[str, Any],
    ) -> None:
        """
        Set the access, refresh and session cookies.

        The session cookie is readable by the frontend, it only carries
        non-sensitive data signed with the API secret.
        """
        now = datetime.now(UTC)
        access_expire = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        refresh_expire = now + timedelta(minutes=settings.REFRESH_TOKEN_EXPIRE_MINUTES)
        session_token = jwt.encode(
            session_data, settings.SECRET_KEY, algorithm=settings.ALGORITHM
        )

        for name, value, expires, httponly in (
            (COOKIE_NAME_ACCESS, access_token, access_expire, True),
            (COOKIE_NAME_REFRESH, refresh_token, refresh_expire, True),
            (COOKIE_NAME_SESSION, session_token, access_expire, False),
        ):
            response.set_cookie(
                key=name,
                value=value,
                expires=expires,
                **CookieAuth._options(httponly),
            )

    @staticmethod
    def clear_auth_cookies(response: Response) -> None:
        for name in (COOKIE_NAME_ACCESS, COOKIE_NAME_REFRESH, COOKIE_NAME_SESSION):
            response.delete_cookie(
                key=name, **CookieAuth._options(name != COOKIE_NAME_SESSION)
            )

    @staticmethod
    def get_token_from_cookie(
        request: Request, token_type: str = "access"
    ) -> str | None:
        cookie_name = (
            COOKIE_NAME_ACCESS if token_type == "access" else COOKIE_NAME_REFRESH
        )
        return request.cookies.get(cookie_name)


### Helper functions
def hash_password(plain_password: str) -> str:
    return bcrypt.hashpw(plain_password.encode("utf-8"), bcrypt.gensalt()).decode(
        "utf-8"
    )


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(
        plain_password.encode("utf-8"), hashed_password.encode("utf-8")
    )


def create_tokens(
    data: dict,
    access_expires_delta: timedelta | None = None,
    refresh_expires_delta: timedelta | None = None,
) -> dict[str, str]:
    """Signed access and refresh tokens, told apart by their `type` claim"""
    now = datetime.now(UTC)
    lifetimes = {
        "access": access_expires_delta
        or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        "refresh": refresh_expires_delta
        or timedelta(minutes=settings.REFRESH_TOKEN_EXPIRE_MINUTES),
    }
    return {
        f"{token_type}_token": jwt.encode(
            {**data, "type": token_type, "exp": now + lifetime},
            settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
        )
        for token_type, lifetime in lifetimes.items()
    }


def decode_token(token: str, token_type: str = "access") -> uuid.UUID | None:
    """Return the user id carried by a valid token of the given type"""
    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
        )
    except JWTError as e:
        LOGGER.debug(f"Invalid token: {e!s}")
        return None
    if payload.get("type") != token_type:
        return None
    try:
        return uuid.UUID(payload.get("sub"))
    except (TypeError, ValueError):
        return None


def extract_bearer_token_from_request(request: Request) -> str | None:
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header[7:] or None
    return None


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Dependency returning the authenticated identity.

    The token is read from the Authorization Bearer header, with the
    httpOnly access cookie as fallback.
    """
    token = extract_bearer_token_from_request(request) or (
        CookieAuth.get_token_from_cookie(request, "access")
    )
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    user_id = decode_token(token, "access")
    if user_id is None:
        raise credentials_exception

    user = await db.get(User, user_id)
    if user is None or not user.is_active:
        raise credentials_exception
    return user


async def get_new_tokens(
    refresh_token: str, db: AsyncSession
) -> tuple[User, dict[str, str]] | None:
    """Identity and new token pair for a refresh token, None when it is not valid"""
    user_id = decode_token(refresh_token, "refresh")
    if user_id is None:
        return None
    user = await db.get(User, user_id)
    if user is None or not user.is_active:
        return None
    return user, create_tokens(data={"sub": str(user.id)})
