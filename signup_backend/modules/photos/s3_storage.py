import mimetypes
import re
import uuid
from typing import Optional
import logging

import boto3
from botocore.exceptions import ClientError

from signup_backend.config.settings import Settings

logger = logging.getLogger(__name__)

SAFE_EXTENSION_RE = re.compile(r"\.[a-z0-9]{1,5}")


class S3PhotoStorage:
    """Image host for profile photos: stores the bytes in S3 and hands back a public URL."""

    def __init__(
        self,
        s3_client,
        bucket_name: str,
        folder: str = "user_photos",
        region: str = "us-east-1",
        public_base_url: Optional[str] = None,
    ):
        self.s3_client = s3_client
        self.bucket_name = bucket_name
        self.folder = folder.strip("/")
        self.public_base_url = (
            public_base_url or f"https://{bucket_name}.s3.{region}.amazonaws.com"
        ).rstrip("/")

    @classmethod
    def from_settings(cls, settings: Settings) -> "S3PhotoStorage":
        if not all([settings.aws_access_key_id, settings.aws_secret_access_key, settings.s3_bucket_name]):
            raise ValueError("AWS S3 credentials and bucket name must be configured")

        s3_client = boto3.client(
            's3',
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
            region_name=settings.aws_region
        )
        return cls(
            s3_client,
            settings.s3_bucket_name,
            folder=settings.photo_folder,
            region=settings.aws_region,
            public_base_url=settings.photo_public_base_url,
        )

    def make_key(self, content_type: str, filename: Optional[str] = None) -> str:
        ext = mimetypes.guess_extension(content_type or "") or ""
        if not ext and filename and "." in filename:
            candidate = "." + filename.rsplit(".", 1)[1].lower()
            if SAFE_EXTENSION_RE.fullmatch(candidate):
                ext = candidate
        return f"{self.folder}/{uuid.uuid4().hex}{ext}"

    def public_url(self, key: str) -> str:
        return f"{self.public_base_url}/{key}"

    def upload_photo(self, content: bytes, content_type: str, filename: Optional[str] = None) -> str:
        """Upload photo bytes and return their public URL"""
        if not (content_type or "").startswith("image/"):
            raise ValueError(f"Unsupported photo content type: {content_type}")
        key = self.make_key(content_type, filename)
        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=content,
                ContentType=content_type
            )
        except ClientError as e:
            logger.error("Failed to upload photo to S3: %s", e)
            raise
        return self.public_url(key)

    def delete_photo(self, url: str) -> bool:
        """Delete a previously uploaded photo by its public URL"""
        prefix = self.public_base_url + "/"
        if not url.startswith(prefix):
            logger.warning("Not deleting photo outside of bucket: %s", url)
            return False
        key = url[len(prefix):]
        try:
            self.s3_client.delete_object(Bucket=self.bucket_name, Key=key)
            return True
        except ClientError as e:
            logger.warning("Failed to delete photo from S3 (%s): %s", key, e)
            return False
