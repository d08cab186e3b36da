"""Domain exceptions for the spin admin service.

Defines domain-level exceptions for authorization, request validation,
store failures and live-feed delivery. Presentation layer maps them to
HTTP responses in exception handlers; WebSocket sessions forward
SubscriptionDeliveryFailure as an error message instead of raising.
"""

from typing import Any


class SpinAdminException(Exception):
    """Base exception for all spin admin errors.

    All custom exceptions inherit from this class to allow consistent
    error handling and logging.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        kind: Short caller-facing category (e.g. 'permission-denied').
        details: Additional error context.
    """

    kind = "internal"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON error responses."""
        return {
            "error": self.error_code,
            "kind": self.kind,
            "message": self.message,
            "details": self.details,
        }


class UnauthenticatedException(SpinAdminException):
    """Raised when the caller has no verified identity (missing, invalid or revoked token)."""

    kind = "unauthenticated"

    def __init__(self, message: str = "Authentication required.") -> None:
        super().__init__(message, "UNAUTHENTICATED")


class PermissionDeniedException(SpinAdminException):
    """Raised when a verified caller lacks the capability required for the operation."""

    kind = "permission-denied"

    def __init__(
        self,
        message: str = "Admin privileges required.",
        capability: str | None = None,
    ) -> None:
        """Initialize with optional capability name.

        Args:
            message: Human-readable message. Never names which part of a request was wrong.
            capability: Capability that was required (e.g. 'admin').
        """
        details = {"capability": capability} if capability else {}
        super().__init__(message, "PERMISSION_DENIED", details)


class InvalidRequestException(SpinAdminException):
    """Raised when input is malformed (e.g. missing target identity, bad document id)."""

    kind = "invalid-argument"

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "INVALID_REQUEST", details)


class ResourceNotFoundException(SpinAdminException):
    """Raised when a requested document does not exist."""

    kind = "not-found"

    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ConfigurationException(SpinAdminException):
    """Raised when a required server-side setting is missing."""

    kind = "failed-precondition"

    def __init__(self, message: str, setting: str | None = None) -> None:
        details = {"setting": setting} if setting else {}
        super().__init__(message, "CONFIGURATION_ERROR", details)


class StoreUnavailableException(SpinAdminException):
    """Raised when an operation needs the document store but it is not configured."""

    kind = "unavailable"

    def __init__(self) -> None:
        super().__init__(
            "Document store is not configured.",
            "STORE_UNAVAILABLE",
        )


class StoreCommitFailure(SpinAdminException):
    """Raised when a batch commit fails part-way through a chunked bulk delete.

    Chunks before failed_chunk were committed and stay deleted; deleted
    reports how many identifiers they covered. Not retried here.
    """

    kind = "aborted"

    def __init__(
        self,
        deleted: int,
        failed_chunk: int,
        chunk_size: int,
        reason: str,
    ) -> None:
        """Initialize with the confirmed count and the failing chunk.

        Args:
            deleted: Identifiers covered by chunks that committed before the failure.
            failed_chunk: 1-indexed position of the chunk whose commit failed.
            chunk_size: Number of identifiers in the failed chunk.
            reason: Description of the underlying store error.
        """
        self.deleted = deleted
        self.failed_chunk = failed_chunk
        super().__init__(
            f"Batch commit failed on chunk {failed_chunk}; {deleted} deletions already committed",
            "STORE_COMMIT_FAILED",
            {
                "deleted": deleted,
                "failed_chunk": failed_chunk,
                "chunk_size": chunk_size,
                "reason": reason,
            },
        )


class SubscriptionDeliveryFailure(SpinAdminException):
    """A live feed reported an error. Forwarded to consumers; the feed stays attached."""

    kind = "unavailable"

    def __init__(self, feed: str, reason: str) -> None:
        self.feed = feed
        super().__init__(
            f"Live feed '{feed}' reported an error",
            "SUBSCRIPTION_DELIVERY_FAILED",
            {"feed": feed, "reason": reason},
        )
