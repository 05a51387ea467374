"""Models for company-related tables"""

from sqlalchemy import (
    Boolean,
    Column,
    String,
)

from db_models.base_uuid_model import BaseUUIDModel


class Company(BaseUUIDModel):
    """Tenant owning user profiles and vehicles"""

    __tablename__ = "company"
    name: str = Column(String(100), nullable=False)
    address: str = Column(String, nullable=True)
    industry: str = Column(String(100), nullable=True)
    is_rental_company: bool = Column(Boolean, nullable=False, default=False)
