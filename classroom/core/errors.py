"""
Error taxonomy for the classroom API.

Services raise these; the handlers registered in ``classroom.main`` turn
them into the ``{"success": false, "error": ...}`` envelope with the
matching status code.
"""

from typing import Any

from fastapi import status


class ClassroomError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: str | None = None, details: Any = None):
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)


# 401


class AuthenticationError(ClassroomError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized"


class WrongRoleError(AuthenticationError):
    """Caller is authenticated but holds the other role."""


# 403


class AuthorizationError(ClassroomError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Access denied"


# 404


class NotFoundError(ClassroomError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class NotFoundOrDeniedError(NotFoundError):
    """Course is missing or the caller is not a member. Never say which."""

    message = "Course not found or access denied"


# 400


class DomainRuleError(ClassroomError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Request violates a course rule"


class InvalidCodeFormatError(DomainRuleError):
    message = "Invalid course code format"


class AlreadyEnrolledError(DomainRuleError):
    message = "You are already enrolled in this course"


class AlreadyCoTeacherError(DomainRuleError):
    message = "This teacher is already a co-teacher of this course"


class AlreadyMainTeacherError(DomainRuleError):
    message = "This teacher is already the main teacher of the course"


class NotATeacherError(DomainRuleError):
    message = "User with this email is not a teacher"


class NotAStudentError(DomainRuleError):
    message = "User with this email is not a student"


class InvalidFileTypeError(DomainRuleError):
    message = "Unsupported file type"
