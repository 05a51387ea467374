from fastapi import APIRouter

from drivelog_api.api.v1.endpoints import (
    auth,
    companies,
    dashboard,
    drivers,
    fahrtenbuch,
    users,
    vehicles,
)

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(companies.router, prefix="/companies", tags=["Companies"])
api_router.include_router(drivers.router, prefix="/drivers", tags=["Drivers"])
api_router.include_router(vehicles.router, prefix="/vehicles", tags=["Vehicles"])
api_router.include_router(
    fahrtenbuch.router, prefix="/fahrtenbuch", tags=["Fahrtenbuch"]
)
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
