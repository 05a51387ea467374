import uuid

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from db_models.user import UserProfile
from drivelog_api.api.deps import get_admin_profile, get_current_profile
from drivelog_api.db.session import get_db
from drivelog_api.schemas import vehicle as schemas
from drivelog_api.services import vehicle as vehicle_service

router = APIRouter()


@router.get(
    "",
    response_model=list[schemas.Vehicle],
    summary="List the company vehicles",
)
async def list_vehicles(
    db: AsyncSession = Depends(get_db),
    admin: UserProfile = Depends(get_admin_profile),
) -> list[schemas.Vehicle]:
    vehicles = await vehicle_service.list_company_vehicles(admin.company_id, db)
    return [schemas.Vehicle.model_validate(v) for v in vehicles]


@router.get(
    "/assigned",
    response_model=list[schemas.Vehicle],
    summary="List the vehicles available to the caller",
    description="Vehicles assigned to the caller and public vehicles of the company",
)
async def list_assigned_vehicles(
    db: AsyncSession = Depends(get_db),
    profile: UserProfile = Depends(get_current_profile),
) -> list[schemas.Vehicle]:
    vehicles = await vehicle_service.list_assigned_vehicles(profile, db)
    return [schemas.Vehicle.model_validate(v) for v in vehicles]


@router.post(
    "",
    response_model=schemas.Vehicle,
    status_code=status.HTTP_201_CREATED,
    summary="Add a vehicle",
)
async def create_vehicle(
    body: schemas.VehicleCreate,
    db: AsyncSession = Depends(get_db),
    admin: UserProfile = Depends(get_admin_profile),
) -> schemas.Vehicle:
    vehicle = await vehicle_service.create_vehicle(admin, body, db)
    return schemas.Vehicle.model_validate(vehicle)


@router.patch(
    "/{vehicle_id}",
    response_model=schemas.Vehicle,
    summary="Update a vehicle",
)
async def update_vehicle(
    body: schemas.VehicleUpdate,
    vehicle_id: uuid.UUID = Path(..., description="ID of the vehicle"),
    db: AsyncSession = Depends(get_db),
    admin: UserProfile = Depends(get_admin_profile),
) -> schemas.Vehicle:
    vehicle = await vehicle_service.update_vehicle(vehicle_id, admin, body, db)
    return schemas.Vehicle.model_validate(vehicle)


@router.delete(
    "/{vehicle_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a vehicle",
)
async def delete_vehicle(
    vehicle_id: uuid.UUID = Path(..., description="ID of the vehicle"),
    db: AsyncSession = Depends(get_db),
    admin: UserProfile = Depends(get_admin_profile),
) -> None:
    await vehicle_service.delete_vehicle(vehicle_id, admin, db)


@router.post(
    "/{vehicle_id}/assignments",
    response_model=schemas.VehicleAssignment,
    summary="Assign a vehicle to a driver",
)
async def assign_vehicle(
    body: schemas.VehicleAssignmentCreate,
    vehicle_id: uuid.UUID = Path(..., description="ID of the vehicle"),
    db: AsyncSession = Depends(get_db),
    admin: UserProfile = Depends(get_admin_profile),
) -> schemas.VehicleAssignment:
    assignment = await vehicle_service.assign_vehicle(
        vehicle_id, body.profile_id, admin, db
    )
    return schemas.VehicleAssignment.model_validate(assignment)


@router.delete(
    "/{vehicle_id}/assignments/{profile_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Unassign a vehicle from a driver",
)
async def unassign_vehicle(
    vehicle_id: uuid.UUID = Path(..., description="ID of the vehicle"),
    profile_id: uuid.UUID = Path(..., description="Profile of the driver"),
    db: AsyncSession = Depends(get_db),
    admin: UserProfile = Depends(get_admin_profile),
) -> None:
    await vehicle_service.unassign_vehicle(vehicle_id, profile_id, admin, db)
