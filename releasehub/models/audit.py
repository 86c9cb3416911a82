"""
Audit models for binary downloads and version checks.

Records are append-only: one row per download or version check, never
updated or deleted by the application.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, Enum, Index

from releasehub.models import Base
from releasehub.models.platform import PlatformType


def utcnow() -> datetime:
    """Naive UTC timestamp, as stored in the DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class DownloadAudit(Base):
    """
    One binary download.

    Attributes:
        id: Primary key
        app_version: Version of the downloaded binary
        platform_type: Platform of the downloaded binary
        occurred_at: Download timestamp (naive UTC)
    """

    __tablename__ = "download_audits"

    id = Column(Integer, primary_key=True, autoincrement=True)
    app_version = Column(String(50), nullable=False)
    platform_type = Column(Enum(PlatformType), nullable=False)
    occurred_at = Column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        Index("ix_download_audits_platform_occurred", "platform_type", "occurred_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<DownloadAudit(id={self.id}, app_version='{self.app_version}', "
            f"platform_type={self.platform_type}, occurred_at={self.occurred_at})>"
        )


class VersionAudit(Base):
    """
    One version check ("is there a newer release?") made by an installed application.

    Attributes:
        id: Primary key
        app_version: Version reported by the application
        platform_type: Platform reported by the application
        occurred_at: Check timestamp (naive UTC)
    """

    __tablename__ = "version_audits"

    id = Column(Integer, primary_key=True, autoincrement=True)
    app_version = Column(String(50), nullable=False)
    platform_type = Column(Enum(PlatformType), nullable=False)
    occurred_at = Column(DateTime, default=utcnow, nullable=False, index=True)

    def __repr__(self) -> str:
        return (
            f"<VersionAudit(id={self.id}, app_version='{self.app_version}', "
            f"platform_type={self.platform_type}, occurred_at={self.occurred_at})>"
        )
