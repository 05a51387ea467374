import uuid
from datetime import date

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.s3.s3_utils import S3Service
from db_models.user import UserProfile
from drivelog_api.api.deps import get_admin_profile, get_company_profile, get_storage
from drivelog_api.db.session import get_db
from drivelog_api.schemas import fahrtenbuch as schemas
from drivelog_api.services import fahrtenbuch as fahrtenbuch_service

router = APIRouter()


@router.post(
    "",
    response_model=schemas.FahrtenbuchEntry,
    status_code=status.HTTP_201_CREATED,
    summary="Log a trip",
    description="Odometer at arrival must be greater than at departure",
)
async def create_entry(
    body: schemas.FahrtenbuchEntryCreate,
    db: AsyncSession = Depends(get_db),
    profile: UserProfile = Depends(get_company_profile),
) -> schemas.FahrtenbuchEntry:
    return await fahrtenbuch_service.create_entry(profile, body, db)


@router.get(
    "/me",
    response_model=list[schemas.FahrtenbuchEntry],
    summary="List the caller's trips",
)
async def list_my_entries(
    db: AsyncSession = Depends(get_db),
    profile: UserProfile = Depends(get_company_profile),
) -> list[schemas.FahrtenbuchEntry]:
    return await fahrtenbuch_service.list_my_entries(profile, db)


@router.get(
    "",
    response_model=list[schemas.FahrtenbuchEntry],
    summary="List the company trips",
    description="Date bounds are inclusive",
)
async def list_company_entries(
    vehicle_id: uuid.UUID | None = Query(None, description="Only this vehicle"),
    profile_id: uuid.UUID | None = Query(None, description="Only this driver"),
    date_from: date | None = Query(None, description="First day"),
    date_to: date | None = Query(None, description="Last day"),
    db: AsyncSession = Depends(get_db),
    admin: UserProfile = Depends(get_admin_profile),
) -> list[schemas.FahrtenbuchEntry]:
    return await fahrtenbuch_service.list_company_entries(
        admin,
        db,
        vehicle_id=vehicle_id,
        profile_id=profile_id,
        date_from=date_from,
        date_to=date_to,
    )


@router.post(
    "/upload-url",
    response_model=schemas.UploadUrlResponse,
    summary="Get a presigned URL to upload a receipt",
)
async def create_upload_url(
    body: schemas.UploadUrlRequest,
    profile: UserProfile = Depends(get_company_profile),
    storage: S3Service = Depends(get_storage),
) -> schemas.UploadUrlResponse:
    return fahrtenbuch_service.create_upload_url(profile, body, storage)


@router.get(
    "/{entry_id}",
    response_model=schemas.FahrtenbuchEntry,
    summary="Get a trip",
)
async def read_entry(
    entry_id: uuid.UUID = Path(..., description="ID of the trip"),
    db: AsyncSession = Depends(get_db),
    profile: UserProfile = Depends(get_company_profile),
) -> schemas.FahrtenbuchEntry:
    return await fahrtenbuch_service.get_entry(entry_id, profile, db)


@router.patch(
    "/{entry_id}",
    response_model=schemas.FahrtenbuchEntry,
    summary="Update a trip",
)
async def update_entry(
    body: schemas.FahrtenbuchEntryUpdate,
    entry_id: uuid.UUID = Path(..., description="ID of the trip"),
    db: AsyncSession = Depends(get_db),
    profile: UserProfile = Depends(get_company_profile),
) -> schemas.FahrtenbuchEntry:
    return await fahrtenbuch_service.update_entry(entry_id, profile, body, db)


@router.delete(
    "/{entry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a trip and its receipts",
)
async def delete_entry(
    entry_id: uuid.UUID = Path(..., description="ID of the trip"),
    db: AsyncSession = Depends(get_db),
    profile: UserProfile = Depends(get_company_profile),
    storage: S3Service = Depends(get_storage),
) -> None:
    await fahrtenbuch_service.delete_entry(entry_id, profile, storage, db)


@router.post(
    "/{entry_id}/files",
    response_model=schemas.Attachment,
    status_code=status.HTTP_201_CREATED,
    summary="Attach an uploaded receipt to a trip",
)
async def add_file(
    body: schemas.AttachmentCreate,
    entry_id: uuid.UUID = Path(..., description="ID of the trip"),
    db: AsyncSession = Depends(get_db),
    profile: UserProfile = Depends(get_company_profile),
    storage: S3Service = Depends(get_storage),
) -> schemas.Attachment:
    return await fahrtenbuch_service.add_attachment(
        entry_id, profile, body, storage, db
    )


@router.get(
    "/{entry_id}/files",
    response_model=list[schemas.Attachment],
    summary="List the receipts of a trip",
)
async def list_files(
    entry_id: uuid.UUID = Path(..., description="ID of the trip"),
    db: AsyncSession = Depends(get_db),
    profile: UserProfile = Depends(get_company_profile),
    storage: S3Service = Depends(get_storage),
) -> list[schemas.Attachment]:
    return await fahrtenbuch_service.list_attachments(entry_id, profile, storage, db)
