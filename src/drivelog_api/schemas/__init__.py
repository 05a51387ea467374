from drivelog_api.schemas.company import Company, CompanyCreate, CompanyUpdate
from drivelog_api.schemas.dashboard import AdminOverview, DriverOverview
from drivelog_api.schemas.fahrtenbuch import (
    Attachment,
    AttachmentCreate,
    DriverSummary,
    FahrtenbuchEntry,
    FahrtenbuchEntryCreate,
    FahrtenbuchEntryUpdate,
    UploadUrlRequest,
    UploadUrlResponse,
    VehicleSummary,
)
from drivelog_api.schemas.user import (
    CurrentUser,
    DriverInvite,
    LoginResponse,
    Profile,
    ProfileUpdate,
    TokenResponse,
    User,
    UserLogin,
    UserSignUp,
)
from drivelog_api.schemas.vehicle import (
    Driver,
    Vehicle,
    VehicleAssignment,
    VehicleAssignmentCreate,
    VehicleCreate,
    VehicleUpdate,
)

__all__ = [
    "AdminOverview",
    "Attachment",
    "AttachmentCreate",
    "Company",
    "CompanyCreate",
    "CompanyUpdate",
    "CurrentUser",
    "Driver",
    "DriverInvite",
    "DriverOverview",
    "DriverSummary",
    "FahrtenbuchEntry",
    "FahrtenbuchEntryCreate",
    "FahrtenbuchEntryUpdate",
    "LoginResponse",
    "Profile",
    "ProfileUpdate",
    "TokenResponse",
    "UploadUrlRequest",
    "UploadUrlResponse",
    "User",
    "UserLogin",
    "UserSignUp",
    "Vehicle",
    "VehicleAssignment",
    "VehicleAssignmentCreate",
    "VehicleCreate",
    "VehicleUpdate",
]
