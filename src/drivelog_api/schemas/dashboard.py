from pydantic import BaseModel, Field

from drivelog_api.schemas.fahrtenbuch import FahrtenbuchEntry


class AdminOverview(BaseModel):
    """Company-wide figures shown on the admin dashboard"""

    vehicle_count: int = Field(..., description="Vehicles owned by the company")
    driver_count: int = Field(..., description="Profiles with the driver role")
    trip_count: int = Field(..., description="Trips logged in the company")
    total_km: int = Field(..., description="Sum of the distance of every trip")


class DriverOverview(BaseModel):
    """Figures shown on the driver dashboard"""

    vehicle_count: int = Field(..., description="Vehicles the driver may use")
    trip_count: int
    total_km: int
    recent_trips: list[FahrtenbuchEntry] = []
