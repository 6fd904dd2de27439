from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class S3Settings(BaseModel):
    endpoint_url: str = Field(..., description="S3-compatible endpoint URL, e.g., http://minio:9000")
    access_key: str = Field(..., description="S3 access key (MinIO access key)")
    secret_key: str = Field(..., description="S3 secret key (MinIO secret key)")
    bucket: str = Field(default="pdfs", description="Bucket receiving uploaded PDFs")
    region: str = Field(default="us-east-1", description="Region for S3-compatible services")
    secure: bool = Field(default=False, description="Use HTTPS when connecting to endpoint")
    public_base_url: Optional[str] = Field(default=None, description="Base URL used to build public links")


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    app_name: str = Field(default="PDF Upload", description="Application name")
    environment: str = Field(default="dev", description="Environment name: dev|staging|prod")
    log_level: str = Field(default="INFO", description="Logging level")

    # Metadata store
    database_url: str = Field(default="sqlite:///./pdf_files.db", alias="DATABASE_URL")
    api_base_url: str = Field(default="http://localhost:8000", alias="API_BASE_URL")

    # S3 / MinIO
    s3_endpoint_url: str = Field(..., alias="S3_ENDPOINT_URL")
    s3_access_key: str = Field(..., alias="S3_ACCESS_KEY")
    s3_secret_key: str = Field(..., alias="S3_SECRET_KEY")
    s3_bucket: str = Field(default="pdfs", alias="S3_BUCKET")
    s3_region: str = Field(default="us-east-1", alias="S3_REGION")
    s3_secure: bool = Field(default=False, alias="S3_SECURE")
    s3_public_base_url: Optional[str] = Field(default=None, alias="S3_PUBLIC_BASE_URL")

    # Upload form
    cache_control_seconds: int = Field(default=3600, alias="STORAGE_CACHE_CONTROL_SECONDS")
    max_upload_bytes: int = Field(default=50 * 1024 * 1024, alias="MAX_UPLOAD_BYTES")
    year_options: List[int] = Field(default_factory=lambda: [1, 2, 3], alias="YEAR_OPTIONS")
    type_options: List[str] = Field(
        default_factory=lambda: ["exam", "exercise list", "summary", "other"],
        alias="TYPE_OPTIONS",
    )

    @property
    def s3(self) -> S3Settings:
        return S3Settings(
            endpoint_url=self.s3_endpoint_url,
            access_key=self.s3_access_key,
            secret_key=self.s3_secret_key,
            bucket=self.s3_bucket,
            region=self.s3_region,
            secure=self.s3_secure,
            public_base_url=self.s3_public_base_url,
        )

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        valid = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
        upper = v.upper()
        if upper not in valid:
            return "INFO"
        return upper


@lru_cache
def get_settings() -> AppSettings:
    """Return cached application settings loaded from environment/.env.

    Using LRU cache ensures a singleton-style settings object across the app.
    """
    return AppSettings()  # type: ignore[call-arg]
