"""
Issue service for problem reports sent by installed applications.

Reports are validated against the application version pattern; the
version pattern for binaries plus an optional "-SNAPSHOT" suffix by default.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from releasehub.models.issue import Issue
from releasehub.models.audit import utcnow
from releasehub.services.audit_service import bucket_by_date, day_bounds
from releasehub.services.exceptions import NotFoundError, ValidationError
from releasehub.utils.logging_config import get_logger


logger = get_logger("services")

MAX_PAGE_SIZE = 100


@dataclass
class IssuePage:
    """One page of issues, newest first."""
    items: List[Issue]
    total: int
    offset: int
    limit: int


class IssueService:
    """
    Service for recording and browsing issue reports.
    """

    def __init__(self, db: Session, app_version_pattern: str):
        self.db = db
        self.app_version_pattern = app_version_pattern
        self._app_version_regex = re.compile(app_version_pattern)

    def record_issue(
        self,
        value: str,
        app_version: str,
        occurred_at: Optional[datetime] = None
    ) -> Issue:
        """
        Record an issue report.

        Raises:
            ValidationError: If value is empty or app_version does not match
                the application version pattern
        """
        if not value or not value.strip():
            raise ValidationError("Empty issue value received", field="value")
        if not app_version or not self._app_version_regex.fullmatch(app_version):
            raise ValidationError(
                f"Invalid application version: {app_version}", field="app_version"
            )

        issue = Issue(value=value, app_version=app_version, occurred_at=occurred_at or utcnow())
        try:
            self.db.add(issue)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to record issue for {app_version}: {e}")
            raise
        self.db.refresh(issue)

        logger.info(f"Recorded issue {issue.id} for application {app_version}")
        return issue

    def list_issues(self, offset: int = 0, limit: int = 20) -> IssuePage:
        """
        List issues, newest first.

        Raises:
            ValidationError: If offset is negative or limit is outside 1..MAX_PAGE_SIZE
        """
        if offset < 0:
            raise ValidationError("Offset must not be negative", field="offset")
        if limit < 1 or limit > MAX_PAGE_SIZE:
            raise ValidationError(
                f"Limit must be between 1 and {MAX_PAGE_SIZE}", field="limit"
            )

        query = self.db.query(Issue)
        total = query.count()
        items = (
            query.order_by(Issue.occurred_at.desc(), Issue.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return IssuePage(items=items, total=total, offset=offset, limit=limit)

    def get_issue(self, issue_id: int) -> Issue:
        """
        Get an issue by ID.

        Raises:
            NotFoundError: If no issue has that ID
        """
        issue = self.db.get(Issue, issue_id)
        if issue is None:
            raise NotFoundError("Issue", issue_id)
        return issue

    def delete_issue(self, issue_id: int) -> None:
        """
        Delete an issue by ID.

        Raises:
            NotFoundError: If no issue has that ID
        """
        issue = self.get_issue(issue_id)
        try:
            self.db.delete(issue)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to delete issue {issue_id}: {e}")
            raise
        logger.info(f"Deleted issue {issue_id}")

    def issues_by_date(self, start_date: date, end_date: date) -> Dict[date, int]:
        """
        Count issues per day over an inclusive date range.

        Raises:
            ValidationError: If start_date is after end_date
        """
        start, end = day_bounds(start_date, end_date)
        rows = (
            self.db.query(Issue.occurred_at)
            .filter(Issue.occurred_at >= start, Issue.occurred_at <= end)
            .all()
        )
        return bucket_by_date(row.occurred_at for row in rows)
