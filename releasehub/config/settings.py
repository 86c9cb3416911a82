"""
Binary distribution settings for ReleaseHub.

Centralized settings loaded from environment variables (or a ``.env`` file).
"""

import re
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from releasehub.utils.version import DEFAULT_VERSION_PATTERN


class BinarySettings(BaseSettings):
    """
    Release binary settings loaded from environment variables.

    Environment Variables:
        RELEASEHUB_VERSION_PATTERN: Regex every release filename must match, with one
            capturing group for the dotted version (default: ".*?(\\d+\\.\\d+\\.\\d+).*")
        RELEASEHUB_APP_VERSION_PATTERN: Regex application versions reported with issues
            must match (default: "(\\d+\\.\\d+\\.\\d+)(-SNAPSHOT)?")
        RELEASEHUB_STORAGE_MODE: "s3" or "local" (default: "local")
        RELEASEHUB_LOCAL_BINARY_DIR: Directory holding binaries in local mode
        RELEASEHUB_AWS_BUCKET_NAME: Bucket holding binaries in s3 mode
        RELEASEHUB_AWS_ACCESS_KEY_ID: AWS access key ID
        RELEASEHUB_AWS_SECRET_ACCESS_KEY: AWS secret access key
        RELEASEHUB_AWS_REGION: AWS region (default: "eu-west-3")
        RELEASEHUB_BASE_URL: Public URL prefix of the bucket, e.g.
            "https://s3.eu-west-3.amazonaws.com/"
    """

    version_pattern: str = Field(
        default=DEFAULT_VERSION_PATTERN,
        validation_alias="RELEASEHUB_VERSION_PATTERN",
        description="Regex with one capturing group that release filenames must match"
    )

    app_version_pattern: str = Field(
        default=r"(\d+\.\d+\.\d+)(-SNAPSHOT)?",
        validation_alias="RELEASEHUB_APP_VERSION_PATTERN",
        description="Regex application versions reported with issues must fully match"
    )

    storage_mode: Literal["s3", "local"] = Field(
        default="local",
        validation_alias="RELEASEHUB_STORAGE_MODE"
    )

    local_binary_dir: str = Field(
        default="binaries",
        validation_alias="RELEASEHUB_LOCAL_BINARY_DIR"
    )

    # S3 storage
    aws_bucket_name: str = Field(
        default="",
        validation_alias="RELEASEHUB_AWS_BUCKET_NAME"
    )

    aws_access_key_id: str = Field(
        default="",
        validation_alias="RELEASEHUB_AWS_ACCESS_KEY_ID"
    )

    aws_secret_access_key: str = Field(
        default="",
        validation_alias="RELEASEHUB_AWS_SECRET_ACCESS_KEY"
    )

    aws_region: str = Field(
        default="eu-west-3",
        validation_alias="RELEASEHUB_AWS_REGION"
    )

    base_url: str = Field(
        default="https://s3.eu-west-3.amazonaws.com/",
        validation_alias="RELEASEHUB_BASE_URL"
    )

    class Config:
        env_file = ".env"
        extra = "ignore"

    @field_validator("version_pattern", "app_version_pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        """Validate that the pattern compiles."""
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"Invalid regular expression '{v}': {e}")
        return v

    @property
    def s3_configured(self) -> bool:
        """Check if S3 bucket and credentials are set."""
        return bool(
            self.aws_bucket_name and self.aws_access_key_id and self.aws_secret_access_key
        )

    @property
    def s3_credentials(self) -> dict:
        """Credentials dictionary in the format expected by S3Adapter."""
        return {
            "aws_access_key_id": self.aws_access_key_id,
            "aws_secret_access_key": self.aws_secret_access_key,
            "region": self.aws_region,
        }


@lru_cache()
def get_settings() -> BinarySettings:
    """
    Get cached binary settings instance.

    Returns:
        BinarySettings: Configured settings from environment
    """
    return BinarySettings()
