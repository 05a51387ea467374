import uuid
from dataclasses import dataclass

import httpx
from botocore.exceptions import ClientError
from sqlalchemy.ext.asyncio import AsyncSession

from db_models import Company, User, UserProfile
from db_models.enums import RoleEnum
from drivelog_api.core.cookie_auth import create_tokens
from tests.factories import CompanyFactory, UserFactory, UserProfileFactory


class FakeStorage:
    """In-memory replacement of S3Service"""

    prefix = "receipts"

    def __init__(self):
        self.objects: set[str] = set()
        self.deleted: list[str] = []
        # Keys whose deletion fails like an unreachable bucket
        self.failing_keys: set[str] = set()

    def receipt_prefix(self, company_id: uuid.UUID) -> str:
        return f"{self.prefix}/{company_id}/"

    def new_receipt_key(self, company_id: uuid.UUID) -> str:
        return f"{self.receipt_prefix(company_id)}{uuid.uuid4()}"

    def generate_upload_url(self, key: str, content_type: str | None = None) -> str:
        return f"https://storage.test/{key}?upload"

    def generate_download_url(self, key: str) -> str:
        return f"https://storage.test/{key}"

    def check_file_exists(self, key: str) -> bool:
        return key in self.objects

    def delete_object(self, key: str) -> None:
        if key in self.failing_keys:
            raise ClientError(
                {"Error": {"Code": "ServiceUnavailable", "Message": "down"}},
                "DeleteObject",
            )
        self.objects.discard(key)
        self.deleted.append(key)


@dataclass
class AuthContext:
    user: User
    profile: UserProfile
    company: Company
    access_token: str

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.access_token}"}


def extract_cookies_from_response(response: httpx.Response) -> dict[str, str]:
    """Extract cookies from Set-Cookie headers for httpx compatibility."""
    cookies = {}
    for cookie_header in response.headers.get_list("set-cookie"):
        cookie_parts = cookie_header.split(";")[0].split("=", 1)
        if len(cookie_parts) == 2:
            cookies[cookie_parts[0].strip()] = cookie_parts[1].strip().strip('"')
    return cookies


def token_for(user: User) -> str:
    return create_tokens({"sub": str(user.id)})["access_token"]


async def create_member(
    db_session: AsyncSession,
    role: RoleEnum = RoleEnum.driver,
    company: Company | None = None,
) -> AuthContext:
    """
    Helper to create an identity with a profile in a company and its token.
    A new company is created when none is given.
    """
    if company is None:
        company = await CompanyFactory.create_async(session=db_session)
    user = await UserFactory.create_async(session=db_session)
    profile = await UserProfileFactory.create_async(
        session=db_session,
        user_id=user.id,
        company_id=company.id,
        role=role,
        name=user.name,
        email=user.email,
    )
    return AuthContext(
        user=user, profile=profile, company=company, access_token=token_for(user)
    )
