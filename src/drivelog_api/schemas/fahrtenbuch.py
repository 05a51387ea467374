"""Schemas for logbook trips and their receipts"""

import datetime as dt

from pydantic import (
    UUID4,
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)

from db_models.enums import FileTypeEnum, FuelTypeEnum, RoleEnum

ALLOWED_CONTENT_TYPES = ("application/pdf",)


def _check_odometer(km_start: int | None, km_end: int | None) -> None:
    if km_start is not None and km_end is not None and km_end <= km_start:
        raise ValueError("km_end must be greater than km_start")


class FahrtenbuchEntryBase(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    date: dt.date
    time_start: dt.time | None = None
    time_end: dt.time | None = None
    location_start: str = Field(..., min_length=1, max_length=255)
    location_end: str = Field(..., min_length=1, max_length=255)
    km_start: int = Field(..., ge=0, description="Odometer at departure")
    km_end: int = Field(..., ge=0, description="Odometer at arrival")
    purpose: str = Field(..., min_length=1, max_length=255)
    notes: str | None = None


class FahrtenbuchEntryCreate(FahrtenbuchEntryBase):
    vehicle_id: UUID4

    @model_validator(mode="after")
    def check_odometer(self):
        _check_odometer(self.km_start, self.km_end)
        return self


class FahrtenbuchEntryUpdate(BaseModel):
    """Partial update, the merged trip is validated by the service"""

    model_config = ConfigDict(str_strip_whitespace=True)

    date: dt.date | None = None
    time_start: dt.time | None = None
    time_end: dt.time | None = None
    location_start: str | None = Field(None, min_length=1, max_length=255)
    location_end: str | None = Field(None, min_length=1, max_length=255)
    km_start: int | None = Field(None, ge=0)
    km_end: int | None = Field(None, ge=0)
    purpose: str | None = Field(None, min_length=1, max_length=255)
    notes: str | None = None

    @model_validator(mode="after")
    def check_odometer(self):
        _check_odometer(self.km_start, self.km_end)
        return self


class VehicleSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID4
    brand: str
    model: str
    license_plate: str
    fuel_type: FuelTypeEnum


class DriverSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID4
    name: str
    email: str
    role: RoleEnum


class FahrtenbuchEntry(FahrtenbuchEntryBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID4
    profile_id: UUID4 | None = None
    vehicle_id: UUID4
    company_id: UUID4
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None
    vehicle: VehicleSummary | None = None
    driver: DriverSummary | None = None

    @computed_field
    @property
    def distance_km(self) -> int:
        return self.km_end - self.km_start


class UploadUrlRequest(BaseModel):
    content_type: str = Field(..., description="MIME type of the receipt")

    @field_validator("content_type")
    @classmethod
    def check_content_type(cls, v: str) -> str:
        return _check_content_type(v)


class UploadUrlResponse(BaseModel):
    upload_url: str
    storage_key: str


class AttachmentCreate(BaseModel):
    storage_key: str = Field(..., min_length=1, max_length=255)
    file_name: str = Field(..., min_length=1, max_length=255)
    content_type: str

    @field_validator("content_type")
    @classmethod
    def check_content_type(cls, v: str) -> str:
        return _check_content_type(v)

    @property
    def file_type(self) -> FileTypeEnum:
        if self.content_type.startswith("image/"):
            return FileTypeEnum.image
        return FileTypeEnum.pdf


class Attachment(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID4
    entry_id: UUID4
    file_name: str
    file_type: FileTypeEnum
    storage_key: str
    created_at: dt.datetime | None = None
    download_url: str | None = None


def _check_content_type(v: str) -> str:
    v = v.strip().lower()
    if not (v.startswith("image/") or v in ALLOWED_CONTENT_TYPES):
        raise ValueError("Only images and PDF files are accepted")
    return v
