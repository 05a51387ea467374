import logging
import uuid

from fastapi import HTTPException, status
from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from db_models.fahrtenbuch import FahrtenbuchEntry
from db_models.user import UserProfile
from db_models.vehicle import Vehicle, VehicleAssignment
from drivelog_api.schemas.vehicle import VehicleCreate, VehicleUpdate

logger = logging.getLogger(__name__)

# Columns that cannot be emptied by a partial update
NON_NULLABLE_FIELDS = {
    "brand",
    "model",
    "license_plate",
    "vin",
    "fuel_type",
    "year",
    "mileage",
    "is_public",
}


async def list_company_vehicles(
    company_id: uuid.UUID, db: AsyncSession
) -> list[Vehicle]:
    result = await db.execute(
        select(Vehicle)
        .where(Vehicle.company_id == company_id)
        .order_by(Vehicle.brand, Vehicle.model, Vehicle.license_plate)
    )
    return list(result.scalars().all())


async def get_company_vehicle(
    vehicle_id: uuid.UUID, company_id: uuid.UUID, db: AsyncSession
) -> Vehicle:
    vehicle = await db.get(Vehicle, vehicle_id)
    if vehicle is None or vehicle.company_id != company_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Vehicle not found"
        )
    return vehicle


async def list_assigned_vehicles(
    profile: UserProfile, db: AsyncSession
) -> list[Vehicle]:
    """Vehicles assigned to the profile and public vehicles of its company"""
    if profile.company_id is None:
        return []
    assigned_ids = select(VehicleAssignment.vehicle_id).where(
        VehicleAssignment.profile_id == profile.id
    )
    result = await db.execute(
        select(Vehicle)
        .where(
            Vehicle.company_id == profile.company_id,
            or_(Vehicle.is_public.is_(True), Vehicle.id.in_(assigned_ids)),
        )
        .order_by(Vehicle.brand, Vehicle.model, Vehicle.license_plate)
    )
    return list(result.scalars().all())


async def can_use_vehicle(
    profile: UserProfile, vehicle: Vehicle, db: AsyncSession
) -> bool:
    if vehicle.company_id != profile.company_id:
        return False
    if vehicle.is_public:
        return True
    result = await db.execute(
        select(VehicleAssignment.id).where(
            VehicleAssignment.profile_id == profile.id,
            VehicleAssignment.vehicle_id == vehicle.id,
        )
    )
    return result.first() is not None


async def create_vehicle(
    admin: UserProfile, body: VehicleCreate, db: AsyncSession
) -> Vehicle:
    vehicle = Vehicle(company_id=admin.company_id, **body.model_dump())
    db.add(vehicle)
    await db.commit()
    await db.refresh(vehicle)
    logger.info(f"Vehicle {vehicle.id} added to company {admin.company_id}")
    return vehicle


async def update_vehicle(
    vehicle_id: uuid.UUID, admin: UserProfile, body: VehicleUpdate, db: AsyncSession
) -> Vehicle:
    vehicle = await get_company_vehicle(vehicle_id, admin.company_id, db)
    for field, value in body.model_dump(exclude_unset=True).items():
        if value is None and field in NON_NULLABLE_FIELDS:
            continue
        setattr(vehicle, field, value)
    await db.commit()
    await db.refresh(vehicle)
    return vehicle


async def delete_vehicle(
    vehicle_id: uuid.UUID, admin: UserProfile, db: AsyncSession
) -> None:
    """Delete a vehicle and its assignments, trips keep it from being deleted"""
    vehicle = await get_company_vehicle(vehicle_id, admin.company_id, db)
    result = await db.execute(
        select(FahrtenbuchEntry.id).where(FahrtenbuchEntry.vehicle_id == vehicle.id)
    )
    if result.first() is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Vehicle has logged trips and cannot be deleted",
        )
    await db.execute(
        delete(VehicleAssignment).where(VehicleAssignment.vehicle_id == vehicle.id)
    )
    await db.delete(vehicle)
    await db.commit()
    logger.info(f"Vehicle {vehicle_id} deleted from company {admin.company_id}")


async def get_company_profile_by_id(
    profile_id: uuid.UUID, company_id: uuid.UUID, db: AsyncSession
) -> UserProfile:
    profile = await db.get(UserProfile, profile_id)
    if profile is None or profile.company_id != company_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Driver not found or not authorized",
        )
    return profile


async def assign_vehicle(
    vehicle_id: uuid.UUID,
    profile_id: uuid.UUID,
    admin: UserProfile,
    db: AsyncSession,
) -> VehicleAssignment:
    """Assign a vehicle to a profile, an existing assignment is returned as is"""
    vehicle = await get_company_vehicle(vehicle_id, admin.company_id, db)
    profile = await get_company_profile_by_id(profile_id, admin.company_id, db)

    result = await db.execute(
        select(VehicleAssignment).where(
            VehicleAssignment.profile_id == profile.id,
            VehicleAssignment.vehicle_id == vehicle.id,
        )
    )
    assignment = result.scalar_one_or_none()
    if assignment is not None:
        return assignment

    assignment = VehicleAssignment(profile_id=profile.id, vehicle_id=vehicle.id)
    db.add(assignment)
    await db.commit()
    await db.refresh(assignment)
    logger.info(f"Vehicle {vehicle.id} assigned to profile {profile.id}")
    return assignment


async def unassign_vehicle(
    vehicle_id: uuid.UUID,
    profile_id: uuid.UUID,
    admin: UserProfile,
    db: AsyncSession,
) -> None:
    vehicle = await get_company_vehicle(vehicle_id, admin.company_id, db)
    result = await db.execute(
        select(VehicleAssignment).where(
            VehicleAssignment.profile_id == profile_id,
            VehicleAssignment.vehicle_id == vehicle.id,
        )
    )
    assignment = result.scalar_one_or_none()
    if assignment is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Assignment not found"
        )
    await db.delete(assignment)
    await db.commit()
    logger.info(f"Vehicle {vehicle.id} unassigned from profile {profile_id}")


async def get_assigned_vehicles_by_profile(
    profile_ids: list[uuid.UUID], db: AsyncSession
) -> dict[uuid.UUID, list[Vehicle]]:
    """Vehicles explicitly assigned to each of the given profiles"""
    assigned: dict[uuid.UUID, list[Vehicle]] = {pid: [] for pid in profile_ids}
    if not profile_ids:
        return assigned
    result = await db.execute(
        select(VehicleAssignment.profile_id, Vehicle)
        .join(Vehicle, VehicleAssignment.vehicle_id == Vehicle.id)
        .where(VehicleAssignment.profile_id.in_(profile_ids))
        .order_by(Vehicle.brand, Vehicle.model)
    )
    for profile_id, vehicle in result.all():
        assigned[profile_id].append(vehicle)
    return assigned
