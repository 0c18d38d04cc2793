"""S3-compatible object store for gallery and menu images.

Works against AWS S3 or any S3-compatible endpoint (e.g. Cloudflare R2) through boto3.
"""

import logging
import time
import uuid
from dataclasses import dataclass

from botocore.exceptions import ClientError
from mypy_boto3_s3.client import S3Client

from restaurant_site_service.exceptions import ValidationError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "webp"})
IMAGE_CACHE_CONTROL = "public, max-age=86400"

_CONTENT_TYPES = {
    "png": "image/png",
    "webp": "image/webp",
}

_MISSING_KEY_CODES = frozenset({"NoSuchKey", "404", "NotFound"})


@dataclass
class StoredImage:
    """An image blob read back from the bucket.

    Attributes:
        body: Raw image bytes
        content_type: MIME type recorded at upload time
        etag: Quoted entity tag of the stored object
    """

    body: bytes
    content_type: str
    etag: str


def generate_upload_key(filename: str | None) -> tuple[str, str]:
    """Build a fresh object key and content type for an uploaded file.

    Args:
        filename: Client-provided file name; only its extension is used

    Returns:
        Tuple of (key, content_type), e.g. ("gal_1700000000000_a1b2c3d4e5f6.png", "image/png")

    Raises:
        ValidationError: If the extension is not an allowed image type
    """
    name = (filename or "upload").lower()
    extension = name.rsplit(".", 1)[-1] if "." in name else "jpg"

    if extension not in ALLOWED_EXTENSIONS:
        raise ValidationError("Only jpg/jpeg/png/webp allowed")

    key = f"gal_{int(time.time() * 1000)}_{uuid.uuid4().hex[:12]}.{extension}"
    return key, _CONTENT_TYPES.get(extension, "image/jpeg")


class ImageStore:
    """Keyed blob storage for public images."""

    def __init__(self, s3_client: S3Client, bucket_name: str) -> None:
        """Initialize the store.

        Args:
            s3_client: Boto3 S3 client
            bucket_name: Bucket holding the images
        """
        self.s3 = s3_client
        self.bucket_name = bucket_name

    def put(self, key: str, data: bytes, content_type: str) -> None:
        """Store an image blob.

        Args:
            key: Object key
            data: Image bytes
            content_type: MIME type served back on reads
        """
        self.s3.put_object(Bucket=self.bucket_name, Key=key, Body=data, ContentType=content_type)
        logger.info(f"Stored image {key} ({len(data)} bytes)")

    def get(self, key: str) -> StoredImage | None:
        """Retrieve an image blob.

        Args:
            key: Object key

        Returns:
            StoredImage if found, None if the key does not exist
        """
        try:
            response = self.s3.get_object(Bucket=self.bucket_name, Key=key)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in _MISSING_KEY_CODES:
                return None
            raise

        return StoredImage(
            body=response["Body"].read(),
            content_type=response.get("ContentType") or "application/octet-stream",
            etag=response.get("ETag", ""),
        )
