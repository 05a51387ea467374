from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from db_models.enums import RoleEnum
from db_models.fahrtenbuch import FahrtenbuchEntry
from db_models.user import UserProfile
from db_models.vehicle import Vehicle
from drivelog_api.schemas.dashboard import AdminOverview, DriverOverview
from drivelog_api.services.fahrtenbuch import enrich_entries
from drivelog_api.services.vehicle import list_assigned_vehicles

RECENT_TRIPS_LIMIT = 5

distance = func.coalesce(
    func.sum(FahrtenbuchEntry.km_end - FahrtenbuchEntry.km_start), 0
)


async def get_admin_overview(admin: UserProfile, db: AsyncSession) -> AdminOverview:
    vehicle_count = await db.scalar(
        select(func.count(Vehicle.id)).where(Vehicle.company_id == admin.company_id)
    )
    driver_count = await db.scalar(
        select(func.count(UserProfile.id)).where(
            UserProfile.company_id == admin.company_id,
            UserProfile.role == RoleEnum.driver,
        )
    )
    trips = await db.execute(
        select(
            func.count(FahrtenbuchEntry.id).label("trip_count"),
            distance.label("total_km"),
        ).where(FahrtenbuchEntry.company_id == admin.company_id)
    )
    trip_stats = trips.mappings().one()
    return AdminOverview(
        vehicle_count=vehicle_count or 0,
        driver_count=driver_count or 0,
        trip_count=trip_stats["trip_count"],
        total_km=trip_stats["total_km"],
    )


async def get_driver_overview(
    profile: UserProfile, db: AsyncSession
) -> DriverOverview:
    vehicles = await list_assigned_vehicles(profile, db)
    trips = await db.execute(
        select(
            func.count(FahrtenbuchEntry.id).label("trip_count"),
            distance.label("total_km"),
        ).where(FahrtenbuchEntry.profile_id == profile.id)
    )
    trip_stats = trips.mappings().one()

    result = await db.execute(
        select(FahrtenbuchEntry)
        .where(FahrtenbuchEntry.profile_id == profile.id)
        .order_by(FahrtenbuchEntry.date.desc(), FahrtenbuchEntry.created_at.desc())
        .limit(RECENT_TRIPS_LIMIT)
    )
    recent = await enrich_entries(list(result.scalars().all()), db, with_driver=False)
    return DriverOverview(
        vehicle_count=len(vehicles),
        trip_count=trip_stats["trip_count"],
        total_km=trip_stats["total_km"],
        recent_trips=recent,
    )
