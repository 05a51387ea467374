"""Factories for logbook models."""

from datetime import date, time
from uuid import uuid4

from polyfactory import Use

from db_models.enums import FileTypeEnum
from db_models.fahrtenbuch import Attachment, FahrtenbuchEntry
from tests.factories.base import BaseAsyncFactory


class FahrtenbuchEntryFactory(BaseAsyncFactory[FahrtenbuchEntry]):
    """Factory for FahrtenbuchEntry model."""

    __model__ = FahrtenbuchEntry

    # profile_id, vehicle_id and company_id must be provided
    date = Use(lambda: date(2026, 3, 2))
    time_start = time(8, 0)
    time_end = time(9, 0)
    location_start = "Berlin"
    location_end = "Potsdam"
    km_start = 1000
    km_end = 1040
    purpose = "Customer visit"
    notes = None


class AttachmentFactory(BaseAsyncFactory[Attachment]):
    """Factory for Attachment model."""

    __model__ = Attachment

    # entry_id must be provided
    storage_key = Use(lambda: f"receipts/test/{uuid4()}")
    file_name = "receipt.pdf"
    file_type = FileTypeEnum.pdf


__all__ = [
    "AttachmentFactory",
    "FahrtenbuchEntryFactory",
]
