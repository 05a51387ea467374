import logging
import uuid
from datetime import date

from botocore.exceptions import ClientError
from fastapi import HTTPException, status
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.s3.s3_utils import S3Service
from db_models.enums import RoleEnum
from db_models.fahrtenbuch import Attachment, FahrtenbuchEntry
from db_models.user import UserProfile
from db_models.vehicle import Vehicle
from drivelog_api.schemas import fahrtenbuch as schemas
from drivelog_api.services.vehicle import can_use_vehicle, get_company_vehicle

logger = logging.getLogger(__name__)


def _storage_error(action: str, error: ClientError) -> HTTPException:
    logger.error(f"Storage error while trying to {action}: {error}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Could not {action}",
    )


def _check_odometer(km_start: int, km_end: int) -> None:
    if km_end <= km_start:
        raise HTTPException(
            status_code=422,
            detail="km_end must be greater than km_start",
        )


async def enrich_entries(
    entries: list[FahrtenbuchEntry], db: AsyncSession, with_driver: bool = True
) -> list[schemas.FahrtenbuchEntry]:
    """Attach vehicle and driver summaries to trips with one lookup each"""
    vehicle_ids = {e.vehicle_id for e in entries}
    profile_ids = {e.profile_id for e in entries if e.profile_id is not None}

    vehicles = {}
    if vehicle_ids:
        result = await db.execute(select(Vehicle).where(Vehicle.id.in_(vehicle_ids)))
        vehicles = {v.id: v for v in result.scalars().all()}
    profiles = {}
    if with_driver and profile_ids:
        result = await db.execute(
            select(UserProfile).where(UserProfile.id.in_(profile_ids))
        )
        profiles = {p.id: p for p in result.scalars().all()}

    enriched = []
    for entry in entries:
        item = schemas.FahrtenbuchEntry.model_validate(entry)
        vehicle = vehicles.get(entry.vehicle_id)
        driver = profiles.get(entry.profile_id)
        enriched.append(
            item.model_copy(
                update={
                    "vehicle": schemas.VehicleSummary.model_validate(vehicle)
                    if vehicle
                    else None,
                    "driver": schemas.DriverSummary.model_validate(driver)
                    if driver
                    else None,
                }
            )
        )
    return enriched


async def get_accessible_entry(
    entry_id: uuid.UUID, profile: UserProfile, db: AsyncSession
) -> FahrtenbuchEntry:
    """Trip owned by the profile, or any trip of the company for an admin"""
    entry = await db.get(FahrtenbuchEntry, entry_id)
    if entry is None or entry.company_id != profile.company_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Trip not found"
        )
    if entry.profile_id != profile.id and profile.role != RoleEnum.admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized"
        )
    return entry


async def create_entry(
    profile: UserProfile, body: schemas.FahrtenbuchEntryCreate, db: AsyncSession
) -> schemas.FahrtenbuchEntry:
    vehicle = await get_company_vehicle(body.vehicle_id, profile.company_id, db)
    if profile.role != RoleEnum.admin and not await can_use_vehicle(
        profile, vehicle, db
    ):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized"
        )

    entry = FahrtenbuchEntry(
        profile_id=profile.id,
        company_id=profile.company_id,
        **body.model_dump(),
    )
    db.add(entry)
    if vehicle.mileage < body.km_end:
        vehicle.mileage = body.km_end
    await db.commit()
    await db.refresh(entry)
    logger.info(f"Trip {entry.id} logged by profile {profile.id}")
    return (await enrich_entries([entry], db))[0]


async def list_my_entries(
    profile: UserProfile, db: AsyncSession
) -> list[schemas.FahrtenbuchEntry]:
    result = await db.execute(
        select(FahrtenbuchEntry)
        .where(FahrtenbuchEntry.profile_id == profile.id)
        .order_by(FahrtenbuchEntry.date.desc(), FahrtenbuchEntry.created_at.desc())
    )
    return await enrich_entries(list(result.scalars().all()), db, with_driver=False)


async def list_company_entries(
    admin: UserProfile,
    db: AsyncSession,
    vehicle_id: uuid.UUID | None = None,
    profile_id: uuid.UUID | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
) -> list[schemas.FahrtenbuchEntry]:
    query = select(FahrtenbuchEntry).where(
        FahrtenbuchEntry.company_id == admin.company_id
    )
    if vehicle_id is not None:
        query = query.where(FahrtenbuchEntry.vehicle_id == vehicle_id)
    if profile_id is not None:
        query = query.where(FahrtenbuchEntry.profile_id == profile_id)
    if date_from is not None:
        query = query.where(FahrtenbuchEntry.date >= date_from)
    if date_to is not None:
        query = query.where(FahrtenbuchEntry.date <= date_to)
    result = await db.execute(
        query.order_by(
            FahrtenbuchEntry.date.desc(), FahrtenbuchEntry.created_at.desc()
        )
    )
    return await enrich_entries(list(result.scalars().all()), db)


async def get_entry(
    entry_id: uuid.UUID, profile: UserProfile, db: AsyncSession
) -> schemas.FahrtenbuchEntry:
    entry = await get_accessible_entry(entry_id, profile, db)
    return (await enrich_entries([entry], db))[0]


async def update_entry(
    entry_id: uuid.UUID,
    profile: UserProfile,
    body: schemas.FahrtenbuchEntryUpdate,
    db: AsyncSession,
) -> schemas.FahrtenbuchEntry:
    """Patch a trip, the odometer readings are checked on the merged result"""
    entry = await get_accessible_entry(entry_id, profile, db)
    changes = {
        field: value
        for field, value in body.model_dump(exclude_unset=True).items()
        if value is not None or field in ("time_start", "time_end", "notes")
    }
    _check_odometer(
        changes.get("km_start", entry.km_start), changes.get("km_end", entry.km_end)
    )
    for field, value in changes.items():
        setattr(entry, field, value)

    vehicle = await db.get(Vehicle, entry.vehicle_id)
    if vehicle is not None and vehicle.mileage < entry.km_end:
        vehicle.mileage = entry.km_end
    await db.commit()
    await db.refresh(entry)
    return (await enrich_entries([entry], db))[0]


async def delete_entry(
    entry_id: uuid.UUID, profile: UserProfile, storage: S3Service, db: AsyncSession
) -> None:
    """
    Delete the receipts of a trip, then the trip.

    Rows are committed first; stored files that cannot be removed afterwards
    are only logged, they are no longer referenced by the logbook.
    """
    entry = await get_accessible_entry(entry_id, profile, db)
    result = await db.execute(
        select(Attachment.storage_key).where(Attachment.entry_id == entry.id)
    )
    storage_keys = list(result.scalars().all())
    await db.execute(delete(Attachment).where(Attachment.entry_id == entry.id))
    await db.delete(entry)
    await db.commit()
    logger.info(f"Trip {entry_id} deleted by profile {profile.id}")

    for storage_key in storage_keys:
        try:
            storage.delete_object(storage_key)
        except ClientError as e:
            logger.warning(f"Could not delete stored receipt {storage_key}: {e}")


def create_upload_url(
    profile: UserProfile, body: schemas.UploadUrlRequest, storage: S3Service
) -> schemas.UploadUrlResponse:
    storage_key = storage.new_receipt_key(profile.company_id)
    try:
        upload_url = storage.generate_upload_url(storage_key, body.content_type)
    except ClientError as e:
        raise _storage_error("generate the upload URL", e) from e
    return schemas.UploadUrlResponse(upload_url=upload_url, storage_key=storage_key)


def _with_download_url(
    attachment: Attachment, storage: S3Service
) -> schemas.Attachment:
    try:
        download_url = storage.generate_download_url(attachment.storage_key)
    except ClientError as e:
        raise _storage_error("generate the download URL", e) from e
    return schemas.Attachment.model_validate(attachment).model_copy(
        update={"download_url": download_url}
    )


async def add_attachment(
    entry_id: uuid.UUID,
    profile: UserProfile,
    body: schemas.AttachmentCreate,
    storage: S3Service,
    db: AsyncSession,
) -> schemas.Attachment:
    """Record a receipt that was uploaded with a presigned URL"""
    entry = await get_accessible_entry(entry_id, profile, db)
    if not body.storage_key.startswith(storage.receipt_prefix(entry.company_id)):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid storage key"
        )
    try:
        uploaded = storage.check_file_exists(body.storage_key)
    except ClientError as e:
        raise _storage_error("check the uploaded receipt", e) from e
    if not uploaded:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="File has not been uploaded",
        )

    attachment = Attachment(
        entry_id=entry.id,
        storage_key=body.storage_key,
        file_name=body.file_name,
        file_type=body.file_type,
    )
    db.add(attachment)
    await db.commit()
    await db.refresh(attachment)
    logger.info(f"Receipt {attachment.id} attached to trip {entry.id}")
    return _with_download_url(attachment, storage)


async def list_attachments(
    entry_id: uuid.UUID, profile: UserProfile, storage: S3Service, db: AsyncSession
) -> list[schemas.Attachment]:
    entry = await get_accessible_entry(entry_id, profile, db)
    result = await db.execute(
        select(Attachment)
        .where(Attachment.entry_id == entry.id)
        .order_by(Attachment.created_at)
    )
    return [_with_download_url(a, storage) for a in result.scalars().all()]
