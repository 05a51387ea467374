"""Models for user-related tables"""

import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    String,
)
from sqlalchemy import Enum as SqlEnum
from sqlalchemy.orm import Mapped

from db_models.base_uuid_model import BaseUUIDModel
from db_models.enums import RoleEnum


class User(BaseUUIDModel):
    """Authentication identity"""

    __tablename__ = "user"
    email: str = Column(String(100), nullable=False, unique=True)
    password: str = Column(String(100), nullable=False)
    name: str = Column(String(100))
    last_connection = Column(DateTime)
    is_active: bool = Column(Boolean, default=True)


class UserProfile(BaseUUIDModel):
    """Application-level user record, user_id stays empty while an invitation is pending"""

    __tablename__ = "user_profile"
    user_id: Mapped[uuid.UUID] | None = Column(
        ForeignKey("user.id"), nullable=True, unique=True
    )
    company_id: Mapped[uuid.UUID] | None = Column(
        ForeignKey("company.id"), nullable=True
    )
    role: RoleEnum = Column(
        SqlEnum(RoleEnum, name="role_enum"),
        nullable=False,
        default=RoleEnum.driver,
    )
    name: str = Column(String(100), nullable=False)
    email: str = Column(String(100), nullable=False)
    table_args = (
        Index("ix_user_profile_company_id", "company_id"),
        Index("ix_user_profile_email", "email"),
    )
