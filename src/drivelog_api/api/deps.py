"""Shared FastAPI dependencies resolving the caller's profile and role"""

from functools import lru_cache

from fastapi import Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.s3.s3_utils import S3Service
from db_models.enums import RoleEnum
from db_models.user import User, UserProfile
from drivelog_api.core.cookie_auth import get_current_user
from drivelog_api.db.session import get_db


async def get_optional_profile(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> UserProfile | None:
    result = await db.execute(select(UserProfile).where(UserProfile.user_id == user.id))
    return result.scalar_one_or_none()


async def get_current_profile(
    profile: UserProfile | None = Depends(get_optional_profile),
) -> UserProfile:
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="User profile not found"
        )
    return profile


async def get_company_profile(
    profile: UserProfile = Depends(get_current_profile),
) -> UserProfile:
    """Profile of a caller attached to a company"""
    if profile.company_id is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized"
        )
    return profile


async def get_admin_profile(
    profile: UserProfile = Depends(get_company_profile),
) -> UserProfile:
    if profile.role != RoleEnum.admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized"
        )
    return profile


@lru_cache
def get_storage() -> S3Service:
    return S3Service()
