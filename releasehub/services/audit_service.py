"""
Audit service for binary downloads and version checks.

Provides:
- record_download / record_version_check: Append one audit record (committed)
- downloads_by_date / version_checks_by_date: Per-day counts over a date range
- download_counts_by_version: Download totals per (version, platform)

Date ranges are inclusive: from the start date at 00:00:00 to the end date
at 23:59:59.999999. Days without events are absent from the result.
"""

from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import func, desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from releasehub.models.audit import DownloadAudit, VersionAudit, utcnow
from releasehub.models.platform import PlatformType
from releasehub.services.exceptions import ValidationError
from releasehub.utils.logging_config import get_logger


logger = get_logger("services")


@dataclass(frozen=True)
class DownloadCount:
    """Number of downloads of one version on one platform."""
    app_version: str
    platform_type: PlatformType
    count: int


def day_bounds(start_date: date, end_date: date) -> Tuple[datetime, datetime]:
    """
    Convert an inclusive date range into datetime bounds.

    Returns:
        (start_date at 00:00:00, end_date at 23:59:59.999999)

    Raises:
        ValidationError: If start_date is after end_date
    """
    if start_date > end_date:
        raise ValidationError(
            f"Start date {start_date.isoformat()} is after end date {end_date.isoformat()}",
            field="start_date"
        )
    return datetime.combine(start_date, time.min), datetime.combine(end_date, time.max)


def bucket_by_date(timestamps: Iterable[datetime]) -> Dict[date, int]:
    """Count timestamps per calendar date."""
    return dict(Counter(ts.date() for ts in timestamps))


class AuditService:
    """
    Service recording and aggregating download and version-check audits.

    Usage:
        >>> service = AuditService(db)
        >>> service.record_download("1.2.0", PlatformType.LINUX_PACKAGE)
        >>> service.downloads_by_date(PlatformType.LINUX_PACKAGE, date(2024, 1, 1), date(2024, 1, 31))
        {datetime.date(2024, 1, 3): 1}
    """

    def __init__(self, db: Session):
        """Initialize service with database session."""
        self.db = db

    def _record(self, record):
        try:
            self.db.add(record)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to record {type(record).__name__}: {e}")
            raise
        self.db.refresh(record)
        return record

    def record_download(
        self,
        app_version: str,
        platform_type: PlatformType,
        occurred_at: Optional[datetime] = None
    ) -> DownloadAudit:
        """
        Record one binary download.

        Args:
            app_version: Version of the downloaded binary
            platform_type: Platform of the downloaded binary
            occurred_at: Event time (naive UTC); defaults to now

        Returns:
            The committed DownloadAudit
        """
        record = self._record(DownloadAudit(
            app_version=app_version,
            platform_type=platform_type,
            occurred_at=occurred_at or utcnow()
        ))
        logger.debug(f"Recorded download {app_version} {platform_type.name}")
        return record

    def record_version_check(
        self,
        app_version: str,
        platform_type: PlatformType,
        occurred_at: Optional[datetime] = None
    ) -> VersionAudit:
        """
        Record one version check made by an installed application.

        Args:
            app_version: Version reported by the application
            platform_type: Platform reported by the application
            occurred_at: Event time (naive UTC); defaults to now

        Returns:
            The committed VersionAudit
        """
        record = self._record(VersionAudit(
            app_version=app_version,
            platform_type=platform_type,
            occurred_at=occurred_at or utcnow()
        ))
        logger.debug(f"Recorded version check {app_version} {platform_type.name}")
        return record

    def downloads_by_date(
        self,
        platform_type: PlatformType,
        start_date: date,
        end_date: date
    ) -> Dict[date, int]:
        """
        Count downloads of a platform per day.

        Raises:
            ValidationError: If start_date is after end_date
        """
        start, end = day_bounds(start_date, end_date)
        rows = (
            self.db.query(DownloadAudit.occurred_at)
            .filter(
                DownloadAudit.platform_type == platform_type,
                DownloadAudit.occurred_at >= start,
                DownloadAudit.occurred_at <= end
            )
            .all()
        )
        return bucket_by_date(row.occurred_at for row in rows)

    def version_checks_by_date(self, start_date: date, end_date: date) -> Dict[date, int]:
        """
        Count version checks of all platforms per day.

        Raises:
            ValidationError: If start_date is after end_date
        """
        start, end = day_bounds(start_date, end_date)
        rows = (
            self.db.query(VersionAudit.occurred_at)
            .filter(
                VersionAudit.occurred_at >= start,
                VersionAudit.occurred_at <= end
            )
            .all()
        )
        return bucket_by_date(row.occurred_at for row in rows)

    def download_counts_by_version(self) -> List[DownloadCount]:
        """
        Count downloads grouped by version and platform, most downloaded first.
        """
        download_count = func.count(DownloadAudit.id).label("download_count")
        rows = (
            self.db.query(DownloadAudit.app_version, DownloadAudit.platform_type, download_count)
            .group_by(DownloadAudit.app_version, DownloadAudit.platform_type)
            .order_by(desc(download_count), DownloadAudit.app_version)
            .all()
        )
        return [
            DownloadCount(
                app_version=row.app_version,
                platform_type=row.platform_type,
                count=row.download_count
            )
            for row in rows
        ]
