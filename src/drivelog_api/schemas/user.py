"""Pydantic schemas for identities and profiles"""

from datetime import datetime

from pydantic import UUID4, BaseModel, ConfigDict, EmailStr, Field

from db_models.enums import RoleEnum
from drivelog_api.schemas.company import Company


# Authentication Models
class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class UserSignUp(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8)
    name: str = Field(min_length=1, max_length=100)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str


# User Models
class User(BaseModel):
    """Authentication identity, without its password"""

    model_config = ConfigDict(from_attributes=True)

    id: UUID4
    email: EmailStr
    name: str | None = None
    last_connection: datetime | None = None
    is_active: bool = True


class Profile(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID4
    user_id: UUID4 | None = None
    company_id: UUID4 | None = None
    role: RoleEnum
    name: str
    email: EmailStr
    created_at: datetime | None = None


class ProfileUpdate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr


class CurrentUser(BaseModel):
    user: User
    profile: Profile | None = None


class LoginResponse(BaseModel):
    """Body returned by the signup and login endpoints"""

    user: User
    profile: Profile | None = None
    company: Company | None = None


class DriverInvite(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
