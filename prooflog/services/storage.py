"""S3 object storage for proof files.

The bucket is private; the only way to read or write an object from outside is
a presigned URL issued here.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import datetime
from typing import Any, Protocol, cast

from boto3 import Session
from botocore.client import Config

from prooflog.config import Settings

logger = logging.getLogger(__name__)


class S3ClientProtocol(Protocol):
    """Subset of S3 client methods used in this module."""

    def generate_presigned_url(self, *args: Any, **kwargs: Any) -> str: ...

    def get_paginator(self, *args: Any, **kwargs: Any) -> Any: ...

    def delete_object(self, *args: Any, **kwargs: Any) -> Any: ...


def _normalize_endpoint(url: str | None) -> str | None:
    """Ensure endpoints include a scheme so boto3 accepts them."""
    if not url:
        return None
    if url.startswith("http://") or url.startswith("https://"):
        return url
    return f"http://{url}"


def build_s3_client(settings: Settings) -> S3ClientProtocol:
    """Create an S3 client for AWS or an S3-compatible endpoint."""
    session = Session(
        aws_access_key_id=settings.aws_access_key_id,
        aws_secret_access_key=settings.aws_secret_access_key,
        region_name=settings.aws_region,
    )
    client = session.client(
        "s3",
        endpoint_url=_normalize_endpoint(settings.s3_endpoint_url),
        config=Config(signature_version="s3v4"),
    )
    return cast(S3ClientProtocol, client)


class ProofStorage:
    """Presigned access to the proof bucket."""

    def __init__(self, client: S3ClientProtocol, bucket: str):
        self.client = client
        self.bucket = bucket

    @classmethod
    def from_settings(cls, settings: Settings) -> ProofStorage:
        return cls(build_s3_client(settings), settings.s3_bucket_name)

    def presign_upload(self, key: str, content_type: str, expires_in: int) -> str:
        """URL allowing one PUT of ``key`` with the given content type."""
        return self.client.generate_presigned_url(
            "put_object",
            Params={"Bucket": self.bucket, "Key": key, "ContentType": content_type},
            ExpiresIn=expires_in,
        )

    def presign_download(self, key: str, expires_in: int) -> str:
        """URL allowing GET of ``key`` until it expires."""
        return self.client.generate_presigned_url(
            "get_object",
            Params={"Bucket": self.bucket, "Key": key},
            ExpiresIn=expires_in,
        )

    def iter_objects(self, prefix: str) -> Iterator[tuple[str, datetime]]:
        """Yield ``(key, last_modified)`` for every object under ``prefix``."""
        paginator = self.client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=self.bucket, Prefix=prefix):
            for obj in page.get("Contents", []):
                yield obj["Key"], obj["LastModified"]

    def delete_object(self, key: str) -> None:
        self.client.delete_object(Bucket=self.bucket, Key=key)
        logger.info(f"Deleted object s3://{self.bucket}/{key}")
