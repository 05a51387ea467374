import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from drivelog_api.core.cookie_auth import CookieAuth, get_new_tokens
from drivelog_api.db.session import get_db
from drivelog_api.schemas.company import Company
from drivelog_api.schemas.user import (
    LoginResponse,
    Profile,
    TokenResponse,
    User,
    UserLogin,
    UserSignUp,
)
from drivelog_api.services.user import (
    get_user_context,
    login_with_cookies,
    session_data,
    signup,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def _set_cookies(response: Response, result: dict[str, Any]) -> None:
    CookieAuth.set_auth_cookies(
        response=response,
        access_token=result["tokens"]["access_token"],
        refresh_token=result["tokens"]["refresh_token"],
        session_data=session_data(result["user"], result["company"]),
    )


def _login_response(result: dict[str, Any]) -> LoginResponse:
    profile, company = result["profile"], result["company"]
    return LoginResponse(
        user=User.model_validate(result["user"]),
        profile=Profile.model_validate(profile) if profile else None,
        company=Company.model_validate(company) if company else None,
    )


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def sign_up(
    response: Response,
    db: AsyncSession = Depends(get_db),
    body: UserSignUp = Body(...),
) -> LoginResponse:
    """Create an account and open a session"""
    result = await signup(body, db)
    _set_cookies(response, result)
    return _login_response(result)


@router.post("/login")
async def login(
    response: Response,
    db: AsyncSession = Depends(get_db),
    body: UserLogin = Body(...),
) -> LoginResponse:
    """Login endpoint that uses httpOnly cookies for security"""
    result = await login_with_cookies(form_data=body, db=db)
    _set_cookies(response, result)
    logger.info(f"User {result['user'].id} logged in")
    return _login_response(result)


@router.post("/token")
async def get_token(
    db: AsyncSession = Depends(get_db),
    body: UserLogin = Body(...),
) -> TokenResponse:
    """Bearer token for API clients"""
    result = await login_with_cookies(form_data=body, db=db)
    return TokenResponse(
        access_token=result["tokens"]["access_token"], token_type="bearer"
    )


@router.post("/logout")
async def logout(response: Response):
    """Logout endpoint that clears httpOnly cookies"""
    CookieAuth.clear_auth_cookies(response)
    return {"message": "Logged out successfully"}


@router.post("/refresh")
async def refresh_token(
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    token = CookieAuth.get_token_from_cookie(request, "refresh")
    refreshed = await get_new_tokens(token, db) if token else None
    if refreshed is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials (refresh)",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user, tokens = refreshed
    _, company = await get_user_context(user, db)
    _set_cookies(response, {"tokens": tokens, "user": user, "company": company})
    return {"ok": True}
