import enum


class RoleEnum(str, enum.Enum):
    admin = "admin"
    driver = "driver"


class FuelTypeEnum(str, enum.Enum):
    Petrol = "Petrol"
    Diesel = "Diesel"
    Electric = "Electric"
    Hybrid = "Hybrid"


class FileTypeEnum(str, enum.Enum):
    image = "image"
    pdf = "pdf"
