from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from db_models.user import User, UserProfile
from drivelog_api.api.deps import (
    get_admin_profile,
    get_current_profile,
    get_optional_profile,
)
from drivelog_api.core.cookie_auth import CookieAuth, create_tokens, get_current_user
from drivelog_api.db.session import get_db
from drivelog_api.schemas.company import Company, CompanyCreate, CompanyUpdate
from drivelog_api.services import company as company_service
from drivelog_api.services.user import session_data

router = APIRouter()


@router.post(
    "",
    response_model=Company,
    status_code=status.HTTP_201_CREATED,
    summary="Create a company",
    description=(
        "Create the caller's company, the caller becomes its admin. "
        "The session cookies are reissued with the new company."
    ),
)
async def create_company(
    body: CompanyCreate,
    response: Response,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
    profile: UserProfile | None = Depends(get_optional_profile),
) -> Company:
    company = await company_service.create_company(user, profile, body, db)
    tokens = create_tokens(data={"sub": str(user.id)})
    CookieAuth.set_auth_cookies(
        response=response,
        access_token=tokens["access_token"],
        refresh_token=tokens["refresh_token"],
        session_data=session_data(user, company),
    )
    return Company.model_validate(company)


@router.get("/me", response_model=Company, summary="Get the caller's company")
async def read_my_company(
    db: AsyncSession = Depends(get_db),
    profile: UserProfile = Depends(get_current_profile),
) -> Company:
    company = await company_service.get_company(profile, db)
    return Company.model_validate(company)


@router.patch("/me", response_model=Company, summary="Update the caller's company")
async def update_my_company(
    body: CompanyUpdate,
    db: AsyncSession = Depends(get_db),
    admin: UserProfile = Depends(get_admin_profile),
) -> Company:
    company = await company_service.update_company(admin, body, db)
    return Company.model_validate(company)
