"""Domain errors raised by services and translated to HTTP responses in main."""


class PortalError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(PortalError):
    """Missing or malformed input. The caller can resubmit."""

    status_code = 400


class ConflictError(PortalError):
    """Unique value already taken (email, username, slug)."""

    status_code = 400


class AuthenticationError(PortalError):
    """Wrong credentials, or the acting user no longer exists."""

    status_code = 401


class PermissionDeniedError(PortalError):
    status_code = 403


class NotFoundError(PortalError):
    status_code = 404
