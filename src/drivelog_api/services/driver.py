import logging
import uuid

from fastapi import HTTPException, status
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from db_models.enums import RoleEnum
from db_models.fahrtenbuch import FahrtenbuchEntry
from db_models.user import UserProfile
from db_models.vehicle import VehicleAssignment
from drivelog_api.schemas.user import DriverInvite, Profile
from drivelog_api.schemas.vehicle import Driver, Vehicle
from drivelog_api.services.user import (
    get_profile_by_email,
    get_profile_of_user,
    get_user_by_email,
)
from drivelog_api.services.vehicle import (
    get_assigned_vehicles_by_profile,
    get_company_profile_by_id,
)

logger = logging.getLogger(__name__)


async def list_drivers(admin: UserProfile, db: AsyncSession) -> list[Driver]:
    """Every profile of the admin's company with its assigned vehicles"""
    result = await db.execute(
        select(UserProfile)
        .where(UserProfile.company_id == admin.company_id)
        .order_by(UserProfile.name)
    )
    profiles = result.scalars().all()
    assigned = await get_assigned_vehicles_by_profile([p.id for p in profiles], db)
    return [
        Driver(
            **Profile.model_validate(profile).model_dump(),
            assigned_vehicles=[Vehicle.model_validate(v) for v in assigned[profile.id]],
        )
        for profile in profiles
    ]


async def invite_driver(
    admin: UserProfile, body: DriverInvite, db: AsyncSession
) -> UserProfile:
    """
    Create a driver profile in the admin's company.

    The profile stays pending until an identity with the same email signs up.
    An identity that already exists without any profile is linked right away.
    No email is sent.
    """
    email = body.email.lower()
    if await get_profile_by_email(email, db) is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User with this email already exists",
        )

    existing_user = await get_user_by_email(email, db)
    if existing_user is not None and await get_profile_of_user(existing_user, db):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User with this email already exists",
        )
    profile = UserProfile(
        user_id=existing_user.id if existing_user else None,
        company_id=admin.company_id,
        role=RoleEnum.driver,
        name=body.name,
        email=email,
    )
    db.add(profile)
    await db.commit()
    await db.refresh(profile)
    logger.info(f"Driver {profile.id} invited to company {admin.company_id}")
    return profile


async def remove_driver(
    profile_id: uuid.UUID, admin: UserProfile, db: AsyncSession
) -> None:
    """Delete a profile with its assignments, its trips are kept without owner"""
    profile = await get_company_profile_by_id(profile_id, admin.company_id, db)
    if profile.id == admin.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You cannot remove your own profile",
        )

    await db.execute(
        delete(VehicleAssignment).where(VehicleAssignment.profile_id == profile.id)
    )
    await db.execute(
        update(FahrtenbuchEntry)
        .where(FahrtenbuchEntry.profile_id == profile.id)
        .values(profile_id=None)
    )
    await db.delete(profile)
    await db.commit()
    logger.info(f"Driver {profile_id} removed from company {admin.company_id}")
