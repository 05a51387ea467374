from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from db_models.user import User, UserProfile
from drivelog_api.api.deps import get_optional_profile
from drivelog_api.core.cookie_auth import get_current_user
from drivelog_api.db.session import get_db
from drivelog_api.schemas import user as schemas
from drivelog_api.services.user import update_profile

router = APIRouter()


@router.get(
    "/me",
    response_model=schemas.CurrentUser,
    summary="Get the current user",
    description="Identity and profile of the caller, the profile is empty before onboarding",
)
async def read_current_user(
    user: User = Depends(get_current_user),
    profile: UserProfile | None = Depends(get_optional_profile),
) -> schemas.CurrentUser:
    return schemas.CurrentUser(
        user=schemas.User.model_validate(user),
        profile=schemas.Profile.model_validate(profile) if profile else None,
    )


@router.patch(
    "/me",
    response_model=schemas.CurrentUser,
    summary="Update the current user",
    description="Name and email of the identity, and of the profile once there is one",
)
async def update_current_user(
    body: schemas.ProfileUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
    profile: UserProfile | None = Depends(get_optional_profile),
) -> schemas.CurrentUser:
    user, profile = await update_profile(user, profile, body, db)
    return schemas.CurrentUser(
        user=schemas.User.model_validate(user),
        profile=schemas.Profile.model_validate(profile) if profile else None,
    )
