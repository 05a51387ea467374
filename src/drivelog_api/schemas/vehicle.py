from datetime import date, datetime
from typing import Annotated

from pydantic import UUID4, AfterValidator, BaseModel, ConfigDict, Field

from db_models.enums import FuelTypeEnum
from drivelog_api.schemas.user import Profile


def _check_year(v: int) -> int:
    if not 1900 <= v <= date.today().year + 1:
        raise ValueError(f"year must be between 1900 and {date.today().year + 1}")
    return v


VehicleYear = Annotated[int, AfterValidator(_check_year)]


class VehicleBase(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    brand: str = Field(min_length=1, max_length=100)
    model: str = Field(min_length=1, max_length=100)
    license_plate: str = Field(min_length=1, max_length=50)
    vin: str = Field(min_length=1, max_length=50)
    fuel_type: FuelTypeEnum = FuelTypeEnum.Petrol
    year: VehicleYear
    mileage: int = Field(default=0, ge=0)
    is_public: bool = False
    notes: str | None = None


class VehicleCreate(VehicleBase):
    pass


class VehicleUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    brand: str | None = Field(default=None, min_length=1, max_length=100)
    model: str | None = Field(default=None, min_length=1, max_length=100)
    license_plate: str | None = Field(default=None, min_length=1, max_length=50)
    vin: str | None = Field(default=None, min_length=1, max_length=50)
    fuel_type: FuelTypeEnum | None = None
    year: VehicleYear | None = None
    mileage: int | None = Field(default=None, ge=0)
    is_public: bool | None = None
    notes: str | None = None


class Vehicle(VehicleBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID4
    company_id: UUID4
    created_at: datetime | None = None
    updated_at: datetime | None = None


class VehicleAssignmentCreate(BaseModel):
    profile_id: UUID4


class VehicleAssignment(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID4
    profile_id: UUID4
    vehicle_id: UUID4
    created_at: datetime | None = None


class Driver(Profile):
    """Profile of a company member with the vehicles assigned to it"""

    assigned_vehicles: list[Vehicle] = []
