"""
Error taxonomy for the content pipeline.

Services raise these; `responses.register_exception_handlers` turns them
into HTTP responses.
"""
from typing import Any, Dict, Optional


class BlogError(Exception):
    """Base class for content pipeline errors."""

    status_code = 500
    error_code = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class ValidationError(BlogError):
    """Malformed input, empty required field, slug collision, bad schedule."""

    status_code = 400
    error_code = "VALIDATION_ERROR"


class NotFoundError(BlogError):
    """Unknown id or slug, or a post that is not currently visible."""

    status_code = 404
    error_code = "NOT_FOUND"

    def __init__(self, resource: str = "Resource", key: Any = None):
        message = f"{resource} not found" if key is None else f"{resource} '{key}' not found"
        super().__init__(message)


class AuthorizationError(BlogError):
    """Mutation attempted without an authoring context."""

    status_code = 401
    error_code = "UNAUTHORIZED"

    def __init__(self, message: str = "Not authenticated", forbidden: bool = False):
        super().__init__(message)
        if forbidden:
            self.status_code = 403
            self.error_code = "FORBIDDEN"


class StoreError(BlogError):
    """Persistence failure. The message never reaches the client."""

    status_code = 500
    error_code = "STORE_ERROR"
