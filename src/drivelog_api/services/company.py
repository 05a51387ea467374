import logging

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from db_models.company import Company
from db_models.enums import RoleEnum
from db_models.user import User, UserProfile
from drivelog_api.schemas.company import CompanyCreate, CompanyUpdate

logger = logging.getLogger(__name__)


async def create_company(
    user: User, profile: UserProfile | None, body: CompanyCreate, db: AsyncSession
) -> Company:
    """Create a company and make the caller its admin"""
    if profile is not None and profile.company_id is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User already belongs to a company",
        )

    company = Company(**body.model_dump())
    db.add(company)
    await db.flush()

    if profile is None:
        profile = UserProfile(
            user_id=user.id,
            name=user.name or user.email,
            email=user.email,
        )
        db.add(profile)
    profile.company_id = company.id
    profile.role = RoleEnum.admin

    await db.commit()
    await db.refresh(company)
    logger.info(f"Company {company.id} created by user {user.id}")
    return company


async def get_company(profile: UserProfile, db: AsyncSession) -> Company:
    company = None
    if profile.company_id is not None:
        company = await db.get(Company, profile.company_id)
    if company is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Company not found"
        )
    return company


async def update_company(
    profile: UserProfile, body: CompanyUpdate, db: AsyncSession
) -> Company:
    company = await get_company(profile, db)
    for field, value in body.model_dump(exclude_unset=True).items():
        if value is None and field in ("name", "is_rental_company"):
            continue
        setattr(company, field, value)
    await db.commit()
    await db.refresh(company)
    return company
