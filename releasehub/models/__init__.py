"""
Data models for ReleaseHub.

This module provides the declarative base class and imports all models
to ensure they are registered with SQLAlchemy's metadata.
"""

from sqlalchemy.orm import declarative_base

# All persisted models inherit from this Base class
Base = declarative_base()


from releasehub.models.platform import PlatformType
from releasehub.models.artifact import Artifact
from releasehub.models.audit import DownloadAudit, VersionAudit
from releasehub.models.issue import Issue

__all__ = [
    "Base",
    "PlatformType",
    "Artifact",
    "DownloadAudit",
    "VersionAudit",
    "Issue",
]
