"""Models for vehicle-related tables"""

import uuid

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy import Enum as SqlEnum
from sqlalchemy.orm import Mapped

from db_models.base_uuid_model import BaseUUIDCreatedAt, BaseUUIDModel
from db_models.enums import FuelTypeEnum


class Vehicle(BaseUUIDModel):
    """Company vehicle"""

    __tablename__ = "vehicle"
    company_id: Mapped[uuid.UUID] = Column(ForeignKey("company.id"), nullable=False)
    brand: str = Column(String(100), nullable=False)
    model: str = Column(String(100), nullable=False)
    license_plate: str = Column(String(50), nullable=False)
    vin: str = Column(String(50), nullable=False)
    fuel_type: FuelTypeEnum = Column(
        SqlEnum(FuelTypeEnum, name="fuel_type_enum"),
        nullable=False,
        default=FuelTypeEnum.Petrol,
    )
    year: int = Column(Integer, nullable=False)
    mileage: int = Column(Integer, nullable=False, default=0)
    is_public: bool = Column(
        Boolean,
        nullable=False,
        default=False,
        comment="Visible to every driver of the company",
    )
    notes: str | None = Column(String, nullable=True)
    table_args = (
        Index("ix_vehicle_company_id", "company_id"),
        Index("ix_vehicle_vin", "vin"),
    )


class VehicleAssignment(BaseUUIDCreatedAt):
    """Vehicle made available to a user profile"""

    __tablename__ = "vehicle_assignment"
    profile_id: Mapped[uuid.UUID] = Column(
        ForeignKey("user_profile.id"), nullable=False
    )
    vehicle_id: Mapped[uuid.UUID] = Column(ForeignKey("vehicle.id"), nullable=False)
    table_args = (
        UniqueConstraint(
            "profile_id", "vehicle_id", name="uq_vehicle_assignment_profile_vehicle"
        ),
        Index("ix_vehicle_assignment_vehicle_id", "vehicle_id"),
    )
