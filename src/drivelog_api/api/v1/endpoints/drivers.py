import uuid

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from db_models.user import UserProfile
from drivelog_api.api.deps import get_admin_profile
from drivelog_api.db.session import get_db
from drivelog_api.schemas.user import DriverInvite, Profile
from drivelog_api.schemas.vehicle import Driver
from drivelog_api.services import driver as driver_service

router = APIRouter()


@router.get(
    "",
    response_model=list[Driver],
    summary="List the company drivers",
    description="Every profile of the company with the vehicles assigned to it",
)
async def list_drivers(
    db: AsyncSession = Depends(get_db),
    admin: UserProfile = Depends(get_admin_profile),
) -> list[Driver]:
    return await driver_service.list_drivers(admin, db)


@router.post(
    "",
    response_model=Profile,
    status_code=status.HTTP_201_CREATED,
    summary="Invite a driver",
    description="Create a pending driver profile, linked when the driver signs up",
)
async def invite_driver(
    body: DriverInvite,
    db: AsyncSession = Depends(get_db),
    admin: UserProfile = Depends(get_admin_profile),
) -> Profile:
    profile = await driver_service.invite_driver(admin, body, db)
    return Profile.model_validate(profile)


@router.delete(
    "/{profile_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a driver",
)
async def remove_driver(
    profile_id: uuid.UUID = Path(..., description="Profile of the driver"),
    db: AsyncSession = Depends(get_db),
    admin: UserProfile = Depends(get_admin_profile),
) -> None:
    await driver_service.remove_driver(profile_id, admin, db)
