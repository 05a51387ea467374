import logging
import uuid

import boto3
from botocore.client import Config
from botocore.exceptions import ClientError

from core.s3.settings import S3Settings


class S3Service:
    """
    S3 service with enforced encryption in transit (HTTPS/TLS).

    Files never transit through the API: clients upload and download them
    with presigned URLs, the service only signs URLs and deletes objects.
    """

    def __init__(self, settings: S3Settings | None = None):
        settings = settings or S3Settings()
        self._settings = settings

        boto_config = Config(
            signature_version="s3v4",
            s3={"addressing_style": "path"},
        )

        self._s3_client = boto3.client(
            "s3",
            region_name=settings.S3_REGION,
            endpoint_url=settings.S3_ENDPOINT,
            aws_access_key_id=settings.S3_KEY,
            aws_secret_access_key=settings.S3_SECRET,
            use_ssl=True,
            verify=True,
            config=boto_config,
        )
        self.bucket_name = settings.S3_BUCKET
        self.logger = logging.getLogger("S3_BUCKET")

    def receipt_prefix(self, company_id: uuid.UUID) -> str:
        return f"{self._settings.S3_RECEIPTS_PREFIX}/{company_id}/"

    def new_receipt_key(self, company_id: uuid.UUID) -> str:
        """Storage key for a not yet uploaded receipt of a company."""
        return f"{self.receipt_prefix(company_id)}{uuid.uuid4()}"

    def generate_upload_url(self, key: str, content_type: str | None = None) -> str:
        params = {"Bucket": self.bucket_name, "Key": key}
        if content_type:
            params["ContentType"] = content_type
        return self._s3_client.generate_presigned_url(
            "put_object",
            Params=params,
            ExpiresIn=self._settings.S3_PRESIGNED_EXPIRATION,
        )

    def generate_download_url(self, key: str) -> str:
        return self._s3_client.generate_presigned_url(
            "get_object",
            Params={"Bucket": self.bucket_name, "Key": key},
            ExpiresIn=self._settings.S3_PRESIGNED_EXPIRATION,
        )

    def check_file_exists(self, key: str) -> bool:
        """
        Checks if a file (key) exists in the S3 bucket.

        :param key: The S3 key (path) to check.
        :return: True if the file exists, False otherwise.
        """
        try:
            self._s3_client.head_object(Bucket=self.bucket_name, Key=key)
            return True
        except ClientError as e:
            if e.response["Error"]["Code"] in ("404", "NoSuchKey"):
                return False
            raise

    def delete_object(self, key: str) -> None:
        self.logger.info(f"Deleting s3://{self.bucket_name}/{key}")
        self._s3_client.delete_object(Bucket=self.bucket_name, Key=key)
