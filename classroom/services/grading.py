"""
Per-student grade aggregation for a course.

A submission counts as graded only when its feedback carries a grade;
feedback with just a comment is shown to the student but never enters an
average.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass

from classroom.models.assignment import Assignment
from classroom.models.course import Course
from classroom.models.submission import Submission

EXCELLENT = "Excellent"
GOOD = "Good"
AVERAGE = "Average"
NEEDS_IMPROVEMENT = "Needs Improvement"

# submission review states
PENDING = "pending"
SUBMITTED = "submitted"
FEEDBACK_GIVEN = "feedback_given"
GRADED = "graded"


@dataclass
class StudentPerformance:
    id: str
    name: str
    email: str
    average_grade: int
    graded_count: int
    completed_assignments: int
    total_assignments: int
    status: str


@dataclass
class TopPerformer:
    rank: int
    id: str
    name: str
    average_grade: int
    percentage: int


def round_half_up(value: float) -> int:
    # round() is banker's rounding; 74.5 must become 75
    return int(math.floor(value + 0.5))


def is_graded(submission: Submission) -> bool:
    return submission.feedback is not None and submission.feedback.grade is not None


def average_grade(submissions: Iterable[Submission]) -> int:
    grades = [s.feedback.grade for s in submissions if is_graded(s)]
    if not grades:
        return 0
    return round_half_up(sum(grades) / len(grades))


def status_for(average: int) -> str:
    if average >= 90:
        return EXCELLENT
    if average >= 75:
        return GOOD
    if average >= 60:
        return AVERAGE
    return NEEDS_IMPROVEMENT


def compute_roster(course: Course) -> list[StudentPerformance]:
    """One entry per enrolled student, including students with nothing graded.

    Only the newest submission per assignment counts, so an older graded
    attempt stops counting once the student resubmits.

    Expects ``course.students`` and ``course.assignments`` with their
    submissions and feedback to be loaded.
    """
    total_assignments = len(course.assignments)

    roster: list[StudentPerformance] = []
    for student in course.students:
        # a resubmission replaces the earlier ones for that assignment
        latest = (latest_submission(a, student.id) for a in course.assignments)
        mine = [s for s in latest if s is not None]
        avg = average_grade(mine)
        roster.append(
            StudentPerformance(
                id=student.id,
                name=student.name,
                email=student.email,
                average_grade=avg,
                graded_count=sum(1 for s in mine if is_graded(s)),
                completed_assignments=len(mine),
                total_assignments=total_assignments,
                status=status_for(avg),
            )
        )
    return roster


def rank(performances: Iterable[StudentPerformance], limit: int = 3) -> list[TopPerformer]:
    """Top students by average grade.

    Students without a single graded submission are never ranked. Equal
    averages are ordered by student id so the result is deterministic.
    """
    ranked = sorted(
        (p for p in performances if p.graded_count > 0),
        key=lambda p: (-p.average_grade, p.id),
    )[:limit]

    return [
        TopPerformer(
            rank=i,
            id=p.id,
            name=p.name,
            average_grade=p.average_grade,
            percentage=p.average_grade,
        )
        for i, p in enumerate(ranked, start=1)
    ]


def current_student_average(performances: Iterable[StudentPerformance], user_id: str) -> int:
    for p in performances:
        if p.id == user_id:
            return p.average_grade
    return 0


def latest_submission(assignment: Assignment, student_id: str) -> Submission | None:
    # Assignment.submissions is ordered newest first
    for s in assignment.submissions:
        if s.student_id == student_id:
            return s
    return None


def review_status(submission: Submission | None) -> str:
    if submission is None:
        return PENDING
    if is_graded(submission):
        return GRADED
    if submission.feedback is not None:
        return FEEDBACK_GIVEN
    return SUBMITTED
