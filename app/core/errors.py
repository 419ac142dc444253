"""Error taxonomy shared by the store, the booking engine and the routes.

Routes never catch these; ``app.main`` maps them to JSON responses.
"""


class BookingAppError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BookingAppError):
    """Missing or invalid input (no slot selected, inactive venue, past date...)."""
    status_code = 400


class AuthError(BookingAppError):
    """Action requires an authenticated identity."""
    status_code = 401

    def __init__(self, message: str = "Authentication required", redirect: str | None = None):
        super().__init__(message)
        self.redirect = redirect


class PermissionDeniedError(AuthError):
    """Authenticated, but the role or ownership does not allow the action."""
    status_code = 403


class NotFoundError(BookingAppError):
    status_code = 404


class ConflictError(BookingAppError):
    """The slot was claimed by another confirmed booking."""
    status_code = 409


class StoreError(BookingAppError):
    """Generic backend failure. Surfaced, never retried."""
    status_code = 503


class UpdateError(StoreError):
    pass
