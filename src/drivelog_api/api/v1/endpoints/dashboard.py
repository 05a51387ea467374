from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from db_models.user import UserProfile
from drivelog_api.api.deps import get_admin_profile, get_company_profile
from drivelog_api.db.session import get_db
from drivelog_api.schemas.dashboard import AdminOverview, DriverOverview
from drivelog_api.services.dashboard import get_admin_overview, get_driver_overview

router = APIRouter()


@router.get("/admin", response_model=AdminOverview, summary="Company figures")
async def admin_overview(
    db: AsyncSession = Depends(get_db),
    admin: UserProfile = Depends(get_admin_profile),
) -> AdminOverview:
    return await get_admin_overview(admin, db)


@router.get("/driver", response_model=DriverOverview, summary="Caller's figures")
async def driver_overview(
    db: AsyncSession = Depends(get_db),
    profile: UserProfile = Depends(get_company_profile),
) -> DriverOverview:
    return await get_driver_overview(profile, db)
