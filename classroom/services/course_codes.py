"""
Shareable course codes.

A code is ``PREFIX-NAME4-ID4``: the first four characters of the course name
and of the course id, upper-cased. Codes are not stored; decoding recomputes
the code of every candidate course and returns the first exact match.
"""

from collections.abc import Iterable

from classroom.core.errors import InvalidCodeFormatError, NotFoundError
from classroom.models.course import Course

STUDENT_PREFIX = "STUD"
TEACHER_PREFIX = "TEACH"


def encode(course: Course, prefix: str = STUDENT_PREFIX) -> str:
    # names shorter than four characters are used whole, no padding
    return f"{prefix}-{course.name[:4].upper()}-{course.id[:4].upper()}"


def decode(
    code: str,
    candidates: Iterable[Course],
    prefix: str = STUDENT_PREFIX,
) -> Course:
    parts = code.split("-")
    if len(parts) != 3 or parts[0] != prefix:
        raise InvalidCodeFormatError()

    for course in candidates:
        if encode(course, prefix) == code:
            return course

    raise NotFoundError("Invalid course code")
