"""
Factory exports for polyfactory-based test data generation.

Usage:
    from tests.factories import CompanyFactory, UserProfileFactory

    async def test_something(db_session):
        company = await CompanyFactory.create_async(
            session=db_session,
            name="Custom Company"
        )
        profile = await UserProfileFactory.create_async(
            session=db_session,
            company_id=company.id,
        )
"""

from tests.factories.core import CompanyFactory, UserFactory, UserProfileFactory
from tests.factories.fahrtenbuch import AttachmentFactory, FahrtenbuchEntryFactory
from tests.factories.vehicle import VehicleAssignmentFactory, VehicleFactory

__all__ = [  # noqa: RUF022 - organized by domain for readability
    # Core business
    "CompanyFactory",
    "UserFactory",
    "UserProfileFactory",
    # Vehicles
    "VehicleAssignmentFactory",
    "VehicleFactory",
    # Logbook
    "AttachmentFactory",
    "FahrtenbuchEntryFactory",
]
