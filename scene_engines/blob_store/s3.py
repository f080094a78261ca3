"""S3-backed blob store."""
from __future__ import annotations

import logging
from typing import Any, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from scene_engines.blob_store.repository import public_base_url
from scene_engines.common.errors import UpstreamUnavailable
from scene_engines.config import runtime_config

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}


class S3BlobStore:
    """S3 blob store.

    Enforces BLOB_BUCKET at init (fail-fast) so the first upload never
    discovers a missing bucket.
    """

    def __init__(
        self,
        bucket_name: Optional[str] = None,
        region: Optional[str] = None,
        client: Optional[Any] = None,
        make_public: bool = True,
    ) -> None:
        self.bucket_name = bucket_name or runtime_config.get_blob_bucket()
        if not self.bucket_name:
            raise ValueError(
                "BLOB_BUCKET config missing. "
                "Set BLOB_BUCKET env var to the S3 bucket name for scene images."
            )
        self.region = region or runtime_config.get_blob_region()
        self.make_public = make_public
        if client is not None:
            self.client = client
        else:
            timeout = runtime_config.get_upstream_timeout_seconds()
            self.client = boto3.client(
                "s3",
                region_name=self.region,
                config=Config(connect_timeout=timeout, read_timeout=timeout, retries={"max_attempts": 2}),
            )
        self.base_url = public_base_url(self.bucket_name, self.region)

    def upload(self, key: str, content: bytes, content_type: str) -> str:
        if not key or not key.strip():
            raise ValueError("Missing key.")
        if not content:
            raise ValueError("Empty content.")
        params = {
            "Bucket": self.bucket_name,
            "Key": key,
            "Body": content,
            "ContentType": content_type,
        }
        if self.make_public:
            params["ACL"] = "public-read"
        try:
            self.client.put_object(**params)
        except (ClientError, BotoCoreError) as exc:
            raise UpstreamUnavailable(f"S3 upload failed for {key}: {exc}") from exc
        return f"{self.base_url}/{key}"

    def delete(self, key: str) -> None:
        if not key or not key.strip():
            return
        try:
            self.client.delete_object(Bucket=self.bucket_name, Key=key)
        except ClientError as exc:
            code = str(exc.response.get("Error", {}).get("Code", ""))
            if code in _NOT_FOUND_CODES:
                logger.info("Delete ignored; key not found: %s", key)
                return
            raise UpstreamUnavailable(f"S3 delete failed for {key}: {exc}") from exc
        except BotoCoreError as exc:
            raise UpstreamUnavailable(f"S3 delete failed for {key}: {exc}") from exc

    def presigned_download_url(self, key: str, filename: str, ttl_seconds: int) -> str:
        try:
            return self.client.generate_presigned_url(
                "get_object",
                Params={
                    "Bucket": self.bucket_name,
                    "Key": key,
                    "ResponseContentDisposition": f'attachment; filename="{filename}"',
                },
                ExpiresIn=ttl_seconds,
            )
        except (ClientError, BotoCoreError) as exc:
            raise UpstreamUnavailable(f"S3 presign failed for {key}: {exc}") from exc
