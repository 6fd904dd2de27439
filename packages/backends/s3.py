from __future__ import annotations

from typing import Any, Optional
from urllib.parse import quote

import boto3
from botocore.client import Config
from botocore.exceptions import ClientError

from packages.common.config import AppSettings


_MISSING_CODES = {"404", "NoSuchKey", "NotFound"}


class ObjectExistsError(Exception):
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__("The resource already exists")


def build_s3_client(settings: AppSettings) -> Any:
    s3 = settings.s3
    session = boto3.session.Session()
    return session.client(
        "s3",
        endpoint_url=s3.endpoint_url,
        aws_access_key_id=s3.access_key,
        aws_secret_access_key=s3.secret_key,
        region_name=s3.region,
        use_ssl=s3.secure,
        config=Config(signature_version="s3v4"),
    )


class S3ObjectStore:
    """PDF bucket on an S3-compatible service (MinIO in development)."""

    def __init__(self, client: Any, bucket: str, public_base_url: Optional[str] = None) -> None:
        self.client = client
        self.bucket = bucket
        self.public_base_url = public_base_url

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "S3ObjectStore":
        base = settings.s3_public_base_url or settings.s3_endpoint_url
        return cls(build_s3_client(settings), settings.s3_bucket, base)

    def exists(self, path: str) -> bool:
        try:
            self.client.head_object(Bucket=self.bucket, Key=path)
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") in _MISSING_CODES:
                return False
            raise
        return True

    def upload(
        self,
        path: str,
        data: bytes,
        *,
        content_type: str,
        cache_control_seconds: int,
        overwrite: bool = False,
    ) -> None:
        # head-then-put: a concurrent writer on the same key can still slip in between.
        if not overwrite and self.exists(path):
            raise ObjectExistsError(path)
        self.client.put_object(
            Bucket=self.bucket,
            Key=path,
            Body=data,
            ContentType=content_type,
            CacheControl=f"max-age={cache_control_seconds}",
        )

    def public_url(self, path: str) -> Optional[str]:
        if not self.public_base_url or not path:
            return None
        return f"{self.public_base_url.rstrip('/')}/{self.bucket}/{quote(path)}"
