"""Init drivelog

Revision ID: 202610190900
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "202610190900"
down_revision = None
branch_labels = None
depends_on = None

role_enum = sa.Enum("admin", "driver", name="role_enum")
fuel_type_enum = sa.Enum("Petrol", "Diesel", "Electric", "Hybrid", name="fuel_type_enum")
file_type_enum = sa.Enum("image", "pdf", name="file_type_enum")


def _timestamps(updated: bool = True) -> list[sa.Column]:
    columns = [
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    ]
    if updated:
        columns.append(
            sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now())
        )
    return columns


def upgrade() -> None:
    op.create_table(
        "company",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("address", sa.String(), nullable=True),
        sa.Column("industry", sa.String(length=100), nullable=True),
        sa.Column("is_rental_company", sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        "user",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("email", sa.String(length=100), nullable=False, unique=True),
        sa.Column("password", sa.String(length=100), nullable=False),
        sa.Column("name", sa.String(length=100)),
        sa.Column("last_connection", sa.DateTime()),
        sa.Column("is_active", sa.Boolean()),
        *_timestamps(),
    )
    op.create_table(
        "user_profile",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("user.id"), unique=True),
        sa.Column("company_id", sa.Uuid(), sa.ForeignKey("company.id")),
        sa.Column("role", role_enum, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=100), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_user_profile_company_id", "user_profile", ["company_id"])
    op.create_index("ix_user_profile_email", "user_profile", ["email"])

    op.create_table(
        "vehicle",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "company_id", sa.Uuid(), sa.ForeignKey("company.id"), nullable=False
        ),
        sa.Column("brand", sa.String(length=100), nullable=False),
        sa.Column("model", sa.String(length=100), nullable=False),
        sa.Column("license_plate", sa.String(length=50), nullable=False),
        sa.Column("vin", sa.String(length=50), nullable=False),
        sa.Column("fuel_type", fuel_type_enum, nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("mileage", sa.Integer(), nullable=False),
        sa.Column("is_public", sa.Boolean(), nullable=False),
        sa.Column("notes", sa.String()),
        *_timestamps(),
    )
    op.create_index("ix_vehicle_company_id", "vehicle", ["company_id"])
    op.create_index("ix_vehicle_vin", "vehicle", ["vin"])

    op.create_table(
        "vehicle_assignment",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "profile_id", sa.Uuid(), sa.ForeignKey("user_profile.id"), nullable=False
        ),
        sa.Column(
            "vehicle_id", sa.Uuid(), sa.ForeignKey("vehicle.id"), nullable=False
        ),
        *_timestamps(updated=False),
        sa.UniqueConstraint(
            "profile_id", "vehicle_id", name="uq_vehicle_assignment_profile_vehicle"
        ),
    )
    op.create_index(
        "ix_vehicle_assignment_vehicle_id", "vehicle_assignment", ["vehicle_id"]
    )

    op.create_table(
        "fahrtenbuch_entry",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "profile_id",
            sa.Uuid(),
            sa.ForeignKey("user_profile.id", ondelete="SET NULL"),
        ),
        sa.Column(
            "vehicle_id", sa.Uuid(), sa.ForeignKey("vehicle.id"), nullable=False
        ),
        sa.Column(
            "company_id", sa.Uuid(), sa.ForeignKey("company.id"), nullable=False
        ),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time_start", sa.Time()),
        sa.Column("time_end", sa.Time()),
        sa.Column("location_start", sa.String(length=255), nullable=False),
        sa.Column("location_end", sa.String(length=255), nullable=False),
        sa.Column("km_start", sa.Integer(), nullable=False),
        sa.Column("km_end", sa.Integer(), nullable=False),
        sa.Column("purpose", sa.String(length=255), nullable=False),
        sa.Column("notes", sa.String()),
        *_timestamps(),
    )
    op.create_index(
        "ix_fahrtenbuch_entry_company_id_date",
        "fahrtenbuch_entry",
        ["company_id", "date"],
    )
    op.create_index(
        "ix_fahrtenbuch_entry_profile_id", "fahrtenbuch_entry", ["profile_id"]
    )
    op.create_index(
        "ix_fahrtenbuch_entry_vehicle_id", "fahrtenbuch_entry", ["vehicle_id"]
    )

    op.create_table(
        "attachment",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "entry_id",
            sa.Uuid(),
            sa.ForeignKey("fahrtenbuch_entry.id"),
            nullable=False,
        ),
        sa.Column("storage_key", sa.String(length=255), nullable=False),
        sa.Column("file_name", sa.String(length=255), nullable=False),
        sa.Column("file_type", file_type_enum, nullable=False),
        *_timestamps(updated=False),
    )
    op.create_index("ix_attachment_entry_id", "attachment", ["entry_id"])


def downgrade() -> None:
    op.drop_table("attachment")
    op.drop_table("fahrtenbuch_entry")
    op.drop_table("vehicle_assignment")
    op.drop_table("vehicle")
    op.drop_table("user_profile")
    op.drop_table("user")
    op.drop_table("company")
    file_type_enum.drop(op.get_bind(), checkfirst=True)
    fuel_type_enum.drop(op.get_bind(), checkfirst=True)
    role_enum.drop(op.get_bind(), checkfirst=True)
