"""Error taxonomy shared by services, auth, and the HTTP layer.

Every failure is an expected, typed outcome: each error carries a
machine-checkable ``kind`` and the HTTP status the API maps it to.
None of them are retryable without changing the input.
"""


class ShelfmarkError(Exception):
    """Base class for all domain errors."""

    kind = "error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ShelfmarkError):
    """Malformed or missing required input."""

    kind = "validation_error"
    status_code = 400


class AuthError(ShelfmarkError):
    """Bad credentials, or a missing/invalid/expired token."""

    kind = "auth_error"
    status_code = 401


class ForbiddenError(ShelfmarkError):
    """Authenticated, but not entitled to the resource."""

    kind = "forbidden"
    status_code = 403


class NotFoundError(ShelfmarkError):
    """No such resource."""

    kind = "not_found"
    status_code = 404


class ConflictError(ShelfmarkError):
    """Duplicate unique key."""

    kind = "conflict"
    status_code = 409
