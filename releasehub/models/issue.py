"""
Issue model for problems reported by installed applications.
"""

from sqlalchemy import Column, Integer, String, Text, DateTime

from releasehub.models import Base
from releasehub.models.audit import utcnow


class Issue(Base):
    """
    A problem report sent by an installed application.

    Attributes:
        id: Primary key
        value: Free-form report content
        app_version: Version of the reporting application
        occurred_at: Report timestamp (naive UTC)
    """

    __tablename__ = "issues"

    id = Column(Integer, primary_key=True, autoincrement=True)
    value = Column(Text, nullable=False)
    app_version = Column(String(50), nullable=False)
    occurred_at = Column(DateTime, default=utcnow, nullable=False, index=True)

    def to_dict(self) -> dict:
        """Serialize for JSON output."""
        return {
            "id": self.id,
            "value": self.value,
            "app_version": self.app_version,
            "occurred_at": self.occurred_at.isoformat() if self.occurred_at else None,
        }

    def __repr__(self) -> str:
        return f"<Issue(id={self.id}, app_version='{self.app_version}')>"
