"""
Custom exceptions for service layer.

Provides specific exception types for release resolution and audit
errors that can be translated to appropriate responses by callers.
"""

from typing import Any, Optional


class ServiceError(Exception):
    """Base exception for service layer errors."""
    pass


class NotFoundError(ServiceError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: Any):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} {identifier} not found")


class ValidationError(ServiceError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(message)


class InvalidFilenameError(ValidationError):
    """Raised when an upload filename does not satisfy the naming contract."""

    def __init__(self, filename: str, reason: str):
        self.filename = filename
        self.reason = reason
        super().__init__(
            f"Invalid binary filename '{filename}': {reason}",
            field="filename"
        )


class VersionNotFoundError(ServiceError):
    """
    Raised when a filename expected to carry a version does not parse.

    Stored binaries are expected to already satisfy the naming contract,
    so this points at a configuration or storage inconsistency.
    """

    def __init__(self, filename: str, pattern: str):
        self.filename = filename
        self.pattern = pattern
        self.message = (
            f"Impossible to find binary version on '{filename}' with: {pattern}"
        )
        super().__init__(self.message)


class ArtifactNotFoundError(NotFoundError):
    """Raised when no stored binary matches the requested name or platform."""

    def __init__(self, identifier: Any):
        super().__init__("Binary", identifier)
