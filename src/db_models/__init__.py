from db_models.company import Company
from db_models.fahrtenbuch import (
    Attachment,
    FahrtenbuchEntry,
)
from db_models.user import (
    User,
    UserProfile,
)
from db_models.vehicle import (
    Vehicle,
    VehicleAssignment,
)

__all__ = [
    "Attachment",
    "Company",
    "FahrtenbuchEntry",
    "User",
    "UserProfile",
    "Vehicle",
    "VehicleAssignment",
]
