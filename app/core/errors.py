"""
Error taxonomy for the registration service.

Every error carries a human-readable message and the HTTP status it maps to.
The handlers in app.main turn them into ``{"error": message}`` responses.
"""

from fastapi import status


class RegistrationError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(RegistrationError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class Forbidden(RegistrationError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFound(RegistrationError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class CourseFull(RegistrationError):
    default_message = "Course is full"


class ScheduleConflict(RegistrationError):
    def __init__(self, code: str, day: str):
        self.code = code
        self.day = day
        super().__init__(f"Schedule conflict with {code} on {day}")


class AlreadyRegistered(RegistrationError):
    default_message = "Already registered for this course"


class ConflictError(RegistrationError):
    """A unique constraint of the store was violated."""

    default_message = "Duplicate value"


class CapacityBelowEnrollment(RegistrationError):
    default_message = "Capacity cannot be lower than the current enrollment"
