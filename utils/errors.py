"""Error types raised by the exercise tracker.

Every error carries the HTTP status it maps to, so the API layer can
render any of them with a single exception handler.
"""


class TrackerError(Exception):
    """Base class for all exercise tracker errors."""

    status_code = 500
    default_message = "Server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingFieldError(TrackerError):
    """A required field was absent or blank."""
    status_code = 400
    default_message = "Missing required field"


class InvalidNumberError(TrackerError):
    """A numeric field did not parse to a finite number."""
    status_code = 400
    default_message = "Duration must be a number"


class InvalidDateError(TrackerError):
    """A date field could not be parsed."""
    status_code = 400
    default_message = "Invalid date format"


class InvalidPayloadError(TrackerError):
    """The request body could not be decoded into the expected shape."""
    status_code = 400
    default_message = "Invalid request body"


class UserNotFoundError(TrackerError):
    status_code = 404
    default_message = "User not found"


class DuplicateKeyError(TrackerError):
    """A user with the same username already exists in the store."""
    status_code = 409
    default_message = "Username already exists"


class StoreError(TrackerError):
    """Unexpected persistence failure. The message never carries internal detail."""
    status_code = 500
