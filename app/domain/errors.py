# app/domain/errors.py


class StoreError(Exception):
    """Bazowy blad domenowy, kazdy podtyp niesie swoj status HTTP."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthenticationMissing(StoreError):
    status_code = 401
    default_message = "No authorization header"


class AuthenticationInvalid(StoreError):
    status_code = 401
    default_message = "Unauthorized"


class AuthorizationDenied(StoreError):
    status_code = 403
    default_message = "Forbidden - Admin access required"


class NotFound(StoreError):
    status_code = 404
    default_message = "Not found"


class ValidationFailure(StoreError):
    status_code = 400
    default_message = "Invalid request"


class Conflict(StoreError):
    status_code = 409
    default_message = "Conflict"


class NotificationUnavailable(StoreError):
    status_code = 503
    default_message = "Notification channel unavailable"
