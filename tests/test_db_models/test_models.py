"""
Database model tests.
Tests defaults, constraints and relationships between tables.
"""

from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from db_models import (
    Attachment,
    Company,
    FahrtenbuchEntry,
    User,
    UserProfile,
    Vehicle,
    VehicleAssignment,
)
from db_models.base_uuid_model import Base
from db_models.enums import FileTypeEnum, FuelTypeEnum, RoleEnum
from tests.factories import UserProfileFactory, VehicleFactory


class TestCompanyModel:
    @pytest.mark.asyncio
    async def test_create_company(self, db_session: AsyncSession):
        company = Company(name="Spedition Nord")
        db_session.add(company)
        await db_session.flush()
        await db_session.refresh(company)

        assert company.id is not None
        assert company.is_rental_company is False
        assert company.created_at is not None

    @pytest.mark.asyncio
    async def test_company_name_required(self, db_session: AsyncSession):
        db_session.add(Company(name=None))

        with pytest.raises(IntegrityError):
            await db_session.flush()


class TestUserModel:
    @pytest.mark.asyncio
    async def test_user_defaults(self, db_session: AsyncSession):
        user = User(email="driver@example.com", password="hashed", name="Driver")
        db_session.add(user)
        await db_session.flush()
        await db_session.refresh(user)

        assert user.is_active is True
        assert user.last_connection is None

    @pytest.mark.asyncio
    async def test_email_unique(self, db_session: AsyncSession, foo_user: User):
        db_session.add(User(email=foo_user.email, password="hashed"))

        with pytest.raises(IntegrityError):
            await db_session.flush()

    @pytest.mark.asyncio
    async def test_one_profile_per_identity(
        self, db_session: AsyncSession, foo_admin: UserProfile, foo_user: User
    ):
        db_session.add(
            UserProfile(
                user_id=foo_user.id, name="Second", email="second@example.com"
            )
        )

        with pytest.raises(IntegrityError):
            await db_session.flush()

    @pytest.mark.asyncio
    async def test_pending_profile(
        self, db_session: AsyncSession, foo_company: Company
    ):
        profile = UserProfile(
            company_id=foo_company.id, name="Invited", email="invited@example.com"
        )
        db_session.add(profile)
        await db_session.flush()
        await db_session.refresh(profile)

        assert profile.user_id is None
        assert profile.role == RoleEnum.driver


class TestVehicleModel:
    @pytest.mark.asyncio
    async def test_vehicle_defaults(
        self, db_session: AsyncSession, foo_company: Company
    ):
        vehicle = Vehicle(
            company_id=foo_company.id,
            brand="Opel",
            model="Corsa",
            license_plate="HH-OC-42",
            vin="W0L0XCF0812345678",
            year=2020,
        )
        db_session.add(vehicle)
        await db_session.flush()
        await db_session.refresh(vehicle)

        assert vehicle.fuel_type == FuelTypeEnum.Petrol
        assert vehicle.mileage == 0
        assert vehicle.is_public is False
        assert vehicle.updated_at is not None

    @pytest.mark.asyncio
    async def test_vehicle_requires_company(self, db_session: AsyncSession):
        db_session.add(
            Vehicle(brand="Opel", model="Corsa", license_plate="X", vin="Y", year=2020)
        )

        with pytest.raises(IntegrityError):
            await db_session.flush()

    @pytest.mark.asyncio
    async def test_assignment_unique(
        self, db_session: AsyncSession, foo_company: Company, foo_vehicle: Vehicle
    ):
        profile = await UserProfileFactory.create_async(
            session=db_session, company_id=foo_company.id
        )
        db_session.add(
            VehicleAssignment(profile_id=profile.id, vehicle_id=foo_vehicle.id)
        )
        await db_session.flush()
        db_session.add(
            VehicleAssignment(profile_id=profile.id, vehicle_id=foo_vehicle.id)
        )

        with pytest.raises(IntegrityError):
            await db_session.flush()


class TestFahrtenbuchModel:
    @pytest.mark.asyncio
    async def test_trip_with_receipt(
        self, db_session: AsyncSession, foo_admin: UserProfile, foo_company: Company
    ):
        vehicle = await VehicleFactory.create_async(
            session=db_session, company_id=foo_company.id
        )
        entry = FahrtenbuchEntry(
            profile_id=foo_admin.id,
            vehicle_id=vehicle.id,
            company_id=foo_company.id,
            date=date(2026, 10, 1),
            location_start="Köln",
            location_end="Bonn",
            km_start=100,
            km_end=130,
            purpose="Client meeting",
        )
        db_session.add(entry)
        await db_session.flush()
        attachment = Attachment(
            entry_id=entry.id,
            storage_key=f"receipts/{foo_company.id}/parking",
            file_name="parking.jpg",
            file_type=FileTypeEnum.image,
        )
        db_session.add(attachment)
        await db_session.flush()
        await db_session.refresh(entry)

        assert entry.time_start is None
        assert entry.date == date(2026, 10, 1)
        assert attachment.entry_id == entry.id

    @pytest.mark.asyncio
    async def test_trip_may_outlive_its_driver(
        self, db_session: AsyncSession, foo_company: Company
    ):
        vehicle = await VehicleFactory.create_async(
            session=db_session, company_id=foo_company.id
        )
        entry = FahrtenbuchEntry(
            profile_id=None,
            vehicle_id=vehicle.id,
            company_id=foo_company.id,
            date=date(2026, 10, 1),
            location_start="Köln",
            location_end="Bonn",
            km_start=100,
            km_end=130,
            purpose="Client meeting",
        )
        db_session.add(entry)
        await db_session.flush()

        assert entry.id is not None


def test_table_comments_from_docstrings():
    tables = Base.metadata.tables
    assert tables["fahrtenbuch_entry"].comment == "Single trip of the logbook"
    assert tables["vehicle"].comment == "Company vehicle"
    assert set(tables) == {
        "attachment",
        "company",
        "fahrtenbuch_entry",
        "user",
        "user_profile",
        "vehicle",
        "vehicle_assignment",
    }
