import boto3
from botocore.exceptions import ClientError
from app.config.settings import settings
import logging

logger = logging.getLogger(__name__)


class R2Storage:
    """Cloudflare R2 bucket accessed through its S3-compatible API."""

    def __init__(self):
        if not all([settings.r2_access_key_id, settings.r2_secret_access_key, settings.r2_bucket_name]):
            raise ValueError("R2 credentials and bucket name must be configured")
        if not settings.cloudflare_account_id and not settings.r2_endpoint_url:
            raise ValueError("CLOUDFLARE_ACCOUNT_ID or R2_ENDPOINT_URL must be configured")

        self.s3_client = boto3.client(
            's3',
            endpoint_url=settings.r2_endpoint,
            aws_access_key_id=settings.r2_access_key_id,
            aws_secret_access_key=settings.r2_secret_access_key,
            region_name=settings.r2_region
        )
        self.bucket_name = settings.r2_bucket_name

    def upload_file(self, file_content: bytes, key: str, content_type: str = "image/jpeg") -> str:
        """Upload bytes under key and return the key"""
        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=file_content,
                ContentType=content_type
            )
            return key
        except ClientError as e:
            logger.error(f"Failed to upload file to R2: {str(e)}")
            raise

    def delete_file(self, key: str) -> bool:
        """Delete object from R2"""
        try:
            self.s3_client.delete_object(Bucket=self.bucket_name, Key=key)
            return True
        except ClientError as e:
            logger.error(f"Failed to delete file from R2: {str(e)}")
            return False
