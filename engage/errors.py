"""Error types raised by controllers and mapped to HTTP status codes by routes."""


class EngageError(Exception):
    """Base error for request handling failures."""

    status_code = 500


class ValidationError(EngageError, ValueError):
    """Malformed request body or parameter."""

    status_code = 400


class PermissionDeniedError(EngageError):
    """Caller is authenticated but its role does not allow the operation."""

    status_code = 403


class NotFoundError(EngageError, LookupError):
    status_code = 404
