"""
Custom Exceptions for Task Tracker
==================================

This module defines a hierarchy of custom exceptions that:

1. **Categorize Errors**: Different exception types for different problems
2. **Carry Context**: Include relevant information for server-side logs
3. **Support APIs**: Map cleanly to HTTP status codes (see error_handler)

Only `message` ever reaches the client. `details` is for logging.

Exception Hierarchy:
    TaskTrackerError (base)
    ├── AuthenticationError
    ├── ForbiddenError
    ├── RequestValidationFailed
    │   ├── UsernameTakenError
    │   ├── InvalidUserError
    │   ├── InvalidPasswordError
    │   └── InvalidRequestError
    ├── NotFoundError
    │   └── TaskNotFoundError
    ├── StorageError
    │   └── DatabaseConnectionError
    └── ConfigurationError
"""

from typing import Optional


class TaskTrackerError(Exception):
    """
    Base exception for all Task Tracker errors.

    Attributes:
        message: Short, fixed, client-safe error description
        details: Additional context (never sent to clients)
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None
    ):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert to the JSON error body returned by the API."""
        return {"error": self.message}


# =============================================================================
# Authentication / Authorization
# =============================================================================

class AuthenticationError(TaskTrackerError):
    """Raised when a bearer token is missing, malformed, unsigned or expired."""

    def __init__(self, reason: str = "missing token"):
        super().__init__(
            message="Invalid JWT Token",
            details={"reason": reason}
        )


class ForbiddenError(TaskTrackerError):
    """Raised when an authenticated user touches a resource it does not own."""

    def __init__(self, username: str, resource: str):
        super().__init__(
            message="Forbidden",
            details={"username": username, "resource": resource}
        )


# =============================================================================
# Validation / Conflict Errors (HTTP 400)
# =============================================================================

class RequestValidationFailed(TaskTrackerError):
    """Base class for client errors rejected with HTTP 400."""
    pass


class UsernameTakenError(RequestValidationFailed):
    """Raised when registering a username that already exists."""

    def __init__(self, username: str):
        super().__init__(
            message="Username already exists",
            details={"username": username}
        )


class InvalidUserError(RequestValidationFailed):
    """Raised when logging in with an unknown username."""

    def __init__(self, username: str):
        super().__init__(
            message="Invalid User",
            details={"username": username}
        )


class InvalidPasswordError(RequestValidationFailed):
    """Raised when the supplied password does not match the stored hash."""

    def __init__(self, username: str):
        super().__init__(
            message="Invalid Password",
            details={"username": username}
        )


class InvalidRequestError(RequestValidationFailed):
    """Raised when a request body or parameter fails schema validation."""

    def __init__(self, errors: Optional[list] = None):
        super().__init__(
            message="Invalid request body",
            details={"errors": errors or []}
        )


# =============================================================================
# Not Found
# =============================================================================

class NotFoundError(TaskTrackerError):
    """Base class for missing resources."""
    pass


class TaskNotFoundError(NotFoundError):
    """Raised when deleting a task that does not exist."""

    def __init__(self, task_id: str):
        super().__init__(
            message="Task not found",
            details={"task_id": task_id}
        )


# =============================================================================
# Storage Errors
# =============================================================================

class StorageError(TaskTrackerError):
    """
    Raised when the document store fails during an operation.

    The message is the fixed, operation-specific text shown to clients;
    the underlying error is kept in details for the server log.
    """

    def __init__(self, message: str, original_error: Optional[str] = None):
        super().__init__(
            message=message,
            details={"original_error": original_error}
        )


class DatabaseConnectionError(StorageError):
    """Raised at startup when the document store cannot be reached."""

    def __init__(self, url: str, original_error: str):
        super().__init__(
            message=f"Cannot connect to document store at {url}",
            original_error=original_error
        )


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(TaskTrackerError):
    """Raised when there's a configuration problem."""

    def __init__(self, setting_name: str, issue: str):
        super().__init__(
            message=f"Configuration error for '{setting_name}': {issue}",
            details={
                "setting_name": setting_name,
                "issue": issue
            }
        )
