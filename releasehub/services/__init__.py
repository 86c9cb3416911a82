"""
Service layer for release binaries, audits and issues.

Services receive their collaborators (storage adapter, database session,
version codec) explicitly and hold no state between calls. Service classes
are imported from their own modules:

    from releasehub.services.artifact_service import ArtifactService
    from releasehub.services.audit_service import AuditService
    from releasehub.services.issue_service import IssueService

Only the exception hierarchy is re-exported here, since utility modules
raise these errors too.
"""

from releasehub.services.exceptions import (
    ServiceError,
    NotFoundError,
    ValidationError,
    InvalidFilenameError,
    VersionNotFoundError,
    ArtifactNotFoundError,
)

__all__ = [
    "ServiceError",
    "NotFoundError",
    "ValidationError",
    "InvalidFilenameError",
    "VersionNotFoundError",
    "ArtifactNotFoundError",
]
