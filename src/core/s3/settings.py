from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class S3Settings(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore")

    S3_REGION: str = Field(default="fr-par")
    S3_ENDPOINT: str = Field(default="https://s3.fr-par.scw.cloud")
    S3_BUCKET: str = Field(default=...)
    S3_KEY: str = Field(default=...)
    S3_SECRET: str = Field(default=...)
    S3_PRESIGNED_EXPIRATION: int = Field(
        default=3600, description="Lifetime of presigned URLs in seconds"
    )
    S3_RECEIPTS_PREFIX: str = Field(default="receipts")

    @field_validator("S3_ENDPOINT")
    @classmethod
    def validate_https_endpoint(cls, v: str) -> str:
        """Receipts may contain personal data, only encrypted transport is allowed."""
        if not v.startswith("https://"):
            raise ValueError(
                "S3_ENDPOINT must use HTTPS protocol to ensure encryption in transit. "
                f"Got: {v}. Please update to use https://"
            )
        return v
