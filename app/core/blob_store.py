"""S3 blob store for vehicle images."""

import asyncio
import logging
from typing import Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from app.core.config import Settings
from app.core.exceptions import StoreFailure

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class S3BlobStore:
    """Put objects into one bucket and hand back their public URL."""

    def __init__(self, settings: Settings, client=None):
        self.bucket = settings.S3_BUCKET_NAME
        self.region = settings.AWS_REGION
        self.endpoint_url = settings.S3_ENDPOINT_URL
        self.prefix = settings.S3_VEHICLE_IMAGE_PREFIX.strip("/")
        self.public_base_url = settings.S3_PUBLIC_BASE_URL.rstrip("/")
        self._settings = settings
        self._client = client

    @property
    def enabled(self) -> bool:
        return bool(self.bucket)

    def _get_client(self):
        if self._client is None:
            config = Config(signature_version="s3v4", region_name=self.region)
            kwargs = {"region_name": self.region, "config": config}
            if self.endpoint_url:
                kwargs["endpoint_url"] = self.endpoint_url
            if self._settings.AWS_ACCESS_KEY_ID and self._settings.AWS_SECRET_ACCESS_KEY:
                kwargs["aws_access_key_id"] = self._settings.AWS_ACCESS_KEY_ID
                kwargs["aws_secret_access_key"] = self._settings.AWS_SECRET_ACCESS_KEY
            self._client = boto3.client("s3", **kwargs)
        return self._client

    def object_key(self, name: str) -> str:
        return f"{self.prefix}/{name}" if self.prefix else name

    def object_url(self, key: str) -> str:
        if self.public_base_url:
            return f"{self.public_base_url}/{key}"
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket}/{key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    def ensure_bucket(self) -> None:
        """Create the bucket if it does not exist yet."""
        if not self.enabled:
            logger.info("S3_BUCKET_NAME not set; image uploads are disabled")
            return
        client = self._get_client()
        try:
            client.head_bucket(Bucket=self.bucket)
            logger.info("Bucket already exists: %s", self.bucket)
            return
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            if code not in ("404", "NoSuchBucket", "NotFound"):
                raise StoreFailure(str(e)) from e
        except BotoCoreError as e:
            raise StoreFailure(str(e)) from e
        kwargs = {"Bucket": self.bucket}
        if self.region != "us-east-1":
            kwargs["CreateBucketConfiguration"] = {"LocationConstraint": self.region}
        try:
            client.create_bucket(**kwargs)
        except (BotoCoreError, ClientError) as e:
            raise StoreFailure(str(e)) from e
        logger.info("Bucket created: %s", self.bucket)

    def put(self, name: str, data: bytes, content_type: Optional[str] = None) -> str:
        """Upload `data` under `name` and return the object URL."""
        if not self.enabled:
            raise StoreFailure("Upload de imagens não configurado. Defina S3_BUCKET_NAME.")
        key = self.object_key(name)
        try:
            self._get_client().put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type or DEFAULT_CONTENT_TYPE,
                CacheControl="max-age=31536000",
            )
        except (BotoCoreError, ClientError) as e:
            logger.exception("S3 upload failed: %s", e)
            raise StoreFailure(str(e)) from e
        return self.object_url(key)

    async def upload(self, name: str, data: bytes, content_type: Optional[str] = None) -> str:
        return await asyncio.to_thread(self.put, name, data, content_type)
