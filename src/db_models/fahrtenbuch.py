"""Models for trip logbook tables"""

import uuid

from sqlalchemy import (
    Column,
    Date,
    ForeignKey,
    Index,
    Integer,
    String,
    Time,
)
from sqlalchemy import Enum as SqlEnum
from sqlalchemy.orm import Mapped

from db_models.base_uuid_model import BaseUUIDCreatedAt, BaseUUIDModel
from db_models.enums import FileTypeEnum


class FahrtenbuchEntry(BaseUUIDModel):
    """Single trip of the logbook"""

    __tablename__ = "fahrtenbuch_entry"
    profile_id: Mapped[uuid.UUID] | None = Column(
        ForeignKey("user_profile.id", ondelete="SET NULL"),
        nullable=True,
        comment="Driver who logged the trip, emptied when the driver is removed",
    )
    vehicle_id: Mapped[uuid.UUID] = Column(ForeignKey("vehicle.id"), nullable=False)
    company_id: Mapped[uuid.UUID] = Column(ForeignKey("company.id"), nullable=False)
    date = Column(Date, nullable=False)
    time_start = Column(Time, nullable=True)
    time_end = Column(Time, nullable=True)
    location_start: str = Column(String(255), nullable=False)
    location_end: str = Column(String(255), nullable=False)
    km_start: int = Column(Integer, nullable=False)
    km_end: int = Column(Integer, nullable=False)
    purpose: str = Column(String(255), nullable=False)
    notes: str | None = Column(String, nullable=True)
    table_args = (
        Index("ix_fahrtenbuch_entry_company_id_date", "company_id", "date"),
        Index("ix_fahrtenbuch_entry_profile_id", "profile_id"),
        Index("ix_fahrtenbuch_entry_vehicle_id", "vehicle_id"),
    )


class Attachment(BaseUUIDCreatedAt):
    """Receipt or document attached to a trip"""

    __tablename__ = "attachment"
    entry_id: Mapped[uuid.UUID] = Column(
        ForeignKey("fahrtenbuch_entry.id"), nullable=False
    )
    storage_key: str = Column(String(255), nullable=False)
    file_name: str = Column(String(255), nullable=False)
    file_type: FileTypeEnum = Column(
        SqlEnum(FileTypeEnum, name="file_type_enum"),
        nullable=False,
    )
    table_args = (Index("ix_attachment_entry_id", "entry_id"),)
