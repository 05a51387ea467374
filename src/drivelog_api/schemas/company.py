from datetime import datetime

from pydantic import UUID4, BaseModel, ConfigDict, Field


class CompanyBase(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=100)
    address: str | None = None
    industry: str | None = Field(default=None, max_length=100)
    is_rental_company: bool = False


class CompanyCreate(CompanyBase):
    pass


class CompanyUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(default=None, min_length=1, max_length=100)
    address: str | None = None
    industry: str | None = Field(default=None, max_length=100)
    is_rental_company: bool | None = None


class Company(CompanyBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID4
    created_at: datetime | None = None
