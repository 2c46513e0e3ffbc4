"""Object storage adapter for uploaded images.

Uploads go straight from the browser to the bucket through presigned URLs.
Uploaded objects live under "<private_dir>/" in the bucket and are exposed by
this service as "/objects/<key below private_dir>".
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Optional
from urllib.parse import unquote, urlparse

import boto3
from botocore.exceptions import ClientError
from fastapi.responses import StreamingResponse

# Configure logging
logger = logging.getLogger(__name__)

OBJECT_PATH_PREFIX = "/objects/"
UPLOAD_URL_TTL_SECONDS = 900
NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}


class ObjectNotFoundError(Exception):
    """Raised when an object path does not resolve to a stored object."""


@dataclass
class ObjectFile:
    """A stored object located by its bucket key."""

    key: str
    content_type: str
    size: int
    visibility: str = "private"


class ObjectStorageService:
    """Thin wrapper around an S3-compatible bucket."""

    def __init__(
        self,
        bucket_name: str,
        private_dir: str,
        region_name: str = "us-east-1",
        endpoint_url: Optional[str] = None,
        aws_access_key_id: Optional[str] = None,
        aws_secret_access_key: Optional[str] = None,
        cache_ttl: int = 3600,
        client=None,
    ):
        self.bucket_name = bucket_name
        self.private_dir = private_dir.strip("/")
        self.region_name = region_name
        self.endpoint_url = endpoint_url
        self.cache_ttl = cache_ttl
        self.s3_client = client or boto3.client(
            's3',
            aws_access_key_id=aws_access_key_id,
            aws_secret_access_key=aws_secret_access_key,
            region_name=region_name,
            endpoint_url=endpoint_url,
        )

    def get_object_entity_upload_url(self) -> str:
        """
        Issue a presigned PUT URL for a new upload.

        Returns:
            str: URL valid for 15 minutes
        """
        key = f"{self.private_dir}/uploads/{uuid.uuid4()}"
        logger.info(f"Issuing upload URL for {key}")
        return self.s3_client.generate_presigned_url(
            'put_object',
            Params={'Bucket': self.bucket_name, 'Key': key},
            ExpiresIn=UPLOAD_URL_TTL_SECONDS,
        )

    def _key_from_url(self, raw_url: str) -> Optional[str]:
        """Bucket key addressed by a URL, or None if the URL is outside the bucket."""
        parsed = urlparse(raw_url)
        if parsed.scheme not in ("http", "https"):
            return None

        host = parsed.netloc.lower()
        path = unquote(parsed.path)

        # Virtual-hosted style: https://<bucket>.s3[.<region>].amazonaws.com/<key>
        if host.startswith(f"{self.bucket_name}.s3") and host.endswith("amazonaws.com"):
            return path.lstrip("/")

        endpoint_host = urlparse(self.endpoint_url).netloc.lower() if self.endpoint_url else None
        if endpoint_host and host == f"{self.bucket_name}.{endpoint_host}":
            return path.lstrip("/")

        # Path style: https://s3[.<region>].amazonaws.com/<bucket>/<key> or a custom endpoint
        if host == endpoint_host or (host.startswith("s3") and host.endswith("amazonaws.com")):
            bucket_prefix = f"/{self.bucket_name}/"
            if path.startswith(bucket_prefix):
                return path[len(bucket_prefix):]

        return None

    def normalize_object_entity_path(self, raw_url: str) -> str:
        """
        Map an upload URL to the stable "/objects/..." path served by this API.

        URLs outside the bucket's private directory are returned unchanged.

        Args:
            raw_url: URL the browser uploaded to (query string included)

        Returns:
            str: Normalized object path or the original URL
        """
        key = self._key_from_url(raw_url)
        if key is None or not key.startswith(f"{self.private_dir}/"):
            return raw_url

        entity_id = key[len(self.private_dir) + 1:]
        return f"{OBJECT_PATH_PREFIX}{entity_id}"

    def get_object_entity_file(self, object_path: str) -> ObjectFile:
        """
        Resolve an "/objects/..." path to a stored object.

        Args:
            object_path: Normalized object path

        Returns:
            ObjectFile: Located object

        Raises:
            ObjectNotFoundError: If the path is malformed or the object is missing
        """
        if not object_path.startswith(OBJECT_PATH_PREFIX):
            raise ObjectNotFoundError(object_path)

        entity_id = object_path[len(OBJECT_PATH_PREFIX):]
        if not entity_id or ".." in entity_id.split("/"):
            raise ObjectNotFoundError(object_path)

        key = f"{self.private_dir}/{entity_id}"
        try:
            head = self.s3_client.head_object(Bucket=self.bucket_name, Key=key)
        except ClientError as e:
            code = str(e.response.get("Error", {}).get("Code", ""))
            if code in NOT_FOUND_CODES or code == "403":
                raise ObjectNotFoundError(object_path) from e
            raise

        return ObjectFile(
            key=key,
            content_type=head.get("ContentType") or "application/octet-stream",
            size=head.get("ContentLength", 0),
            visibility=head.get("Metadata", {}).get("visibility", "private"),
        )

    def download_object(self, object_file: ObjectFile) -> StreamingResponse:
        """Stream an object back to the client with cache headers."""
        response = self.s3_client.get_object(Bucket=self.bucket_name, Key=object_file.key)
        visibility = "public" if object_file.visibility == "public" else "private"
        headers = {
            "Content-Length": str(object_file.size),
            "Cache-Control": f"{visibility}, max-age={self.cache_ttl}",
        }
        return StreamingResponse(
            response["Body"].iter_chunks(),
            media_type=object_file.content_type,
            headers=headers,
        )
