import pytest

from classroom.models.assignment import Assignment
from classroom.models.course import Course
from classroom.models.feedback import Feedback
from classroom.models.submission import Submission
from classroom.models.user import User, UserRole
from classroom.services import grading


def student(user_id: str, name: str | None = None) -> User:
    return User(
        id=user_id,
        name=name or user_id,
        email=f"{user_id}@example.com",
        role=UserRole.STUDENT,
        hashed_password="x",
    )


def submission(who: User, grade: float | None = None, comment: str | None = None) -> Submission:
    s = Submission(student_id=who.id, summary="done")
    if grade is not None or comment is not None:
        s.feedback = Feedback(comment=comment or "ok", grade=grade, teacher_id="teacher-1")
    return s


def course_with(students: list[User], assignments: list[list[Submission]]) -> Course:
    course = Course(id="abcd1234", name="Physics 101", teacher_id="teacher-1")
    course.students = students
    course.assignments = [
        Assignment(title=f"HW{i}", description="-", submissions=subs)
        for i, subs in enumerate(assignments, start=1)
    ]
    return course


def by_id(roster: list[grading.StudentPerformance]) -> dict[str, grading.StudentPerformance]:
    return {p.id: p for p in roster}


def test_average_rounds_half_up_to_good():
    alice = student("alice")
    course = course_with([alice], [[submission(alice, 60)], [submission(alice, 89)]])

    perf = grading.compute_roster(course)[0]

    assert perf.average_grade == 75
    assert perf.status == grading.GOOD
    assert perf.graded_count == 2


@pytest.mark.parametrize(
    "value, expected",
    [(74.5, 75), (0.5, 1), (1.5, 2), (2.5, 3), (74.49, 74), (0, 0)],
)
def test_round_half_up(value, expected):
    assert grading.round_half_up(value) == expected


@pytest.mark.parametrize(
    "average, status",
    [
        (100, grading.EXCELLENT),
        (90, grading.EXCELLENT),
        (89, grading.GOOD),
        (75, grading.GOOD),
        (74, grading.AVERAGE),
        (60, grading.AVERAGE),
        (59, grading.NEEDS_IMPROVEMENT),
        (0, grading.NEEDS_IMPROVEMENT),
    ],
)
def test_status_bands(average, status):
    assert grading.status_for(average) == status


def test_student_without_grades_defaults_to_zero_and_stays_on_roster():
    alice, bob = student("alice"), student("bob")
    course = course_with([alice, bob], [[submission(alice, 95), submission(bob)]])

    roster = by_id(grading.compute_roster(course))

    assert roster["bob"].average_grade == 0
    assert roster["bob"].graded_count == 0
    assert roster["bob"].completed_assignments == 1
    assert roster["bob"].status == grading.NEEDS_IMPROVEMENT
    assert [p.id for p in grading.rank(roster.values())] == ["alice"]


def test_comment_only_feedback_is_not_graded():
    alice = student("alice")
    course = course_with(
        [alice],
        [[submission(alice, 80)], [submission(alice, comment="see me")]],
    )

    perf = grading.compute_roster(course)[0]

    assert perf.average_grade == 80
    assert perf.graded_count == 1
    assert perf.completed_assignments == 2


def test_counts_against_all_course_assignments():
    alice, bob = student("alice"), student("bob")
    course = course_with(
        [alice, bob],
        [[submission(alice, 70)], [submission(bob, 50)], []],
    )

    roster = by_id(grading.compute_roster(course))

    assert roster["alice"].total_assignments == 3
    assert roster["alice"].completed_assignments == 1
    assert roster["alice"].average_grade == 70
    assert roster["bob"].average_grade == 50


def test_zero_grade_counts_as_graded():
    alice = student("alice")
    course = course_with([alice], [[submission(alice, 0)], [submission(alice, 100)]])

    perf = grading.compute_roster(course)[0]

    assert perf.graded_count == 2
    assert perf.average_grade == 50


def test_resubmission_replaces_earlier_attempt():
    alice = student("alice")
    # submissions are listed newest first
    course = course_with(
        [alice],
        [[submission(alice), submission(alice, 90), submission(alice, 40)], [submission(alice, 60)]],
    )

    perf = grading.compute_roster(course)[0]

    assert perf.completed_assignments == 2
    assert perf.total_assignments == 2
    assert perf.graded_count == 1
    assert perf.average_grade == 60


def test_rank_takes_top_three_with_ranks():
    students = [student(f"s{i}") for i in range(5)]
    grades = [70, 95, 88, 60, 91]
    course = course_with(
        students,
        [[submission(s, g) for s, g in zip(students, grades)]],
    )

    top = grading.rank(grading.compute_roster(course))

    assert [(t.rank, t.id, t.average_grade) for t in top] == [
        (1, "s1", 95),
        (2, "s4", 91),
        (3, "s2", 88),
    ]
    assert all(t.percentage == t.average_grade for t in top)


def test_rank_breaks_ties_by_id():
    zed, amy, kim = student("zed"), student("amy"), student("kim")
    course = course_with(
        [zed, amy, kim],
        [[submission(zed, 80), submission(amy, 80), submission(kim, 80)]],
    )

    top = grading.rank(grading.compute_roster(course))

    assert [t.id for t in top] == ["amy", "kim", "zed"]


def test_rank_limit():
    students = [student(f"s{i}") for i in range(4)]
    course = course_with(students, [[submission(s, 50 + i) for i, s in enumerate(students)]])

    assert len(grading.rank(grading.compute_roster(course), limit=2)) == 2


def test_current_student_average():
    alice = student("alice")
    roster = grading.compute_roster(course_with([alice], [[submission(alice, 66)]]))

    assert grading.current_student_average(roster, "alice") == 66
    assert grading.current_student_average(roster, "someone-else") == 0


def test_review_status():
    alice = student("alice")

    assert grading.review_status(None) == grading.PENDING
    assert grading.review_status(submission(alice)) == grading.SUBMITTED
    assert grading.review_status(submission(alice, comment="nice")) == grading.FEEDBACK_GIVEN
    assert grading.review_status(submission(alice, 0)) == grading.GRADED


def test_latest_submission_picks_first_for_student():
    alice, bob = student("alice"), student("bob")
    newest, older = submission(alice), submission(alice)
    assignment = Assignment(title="HW1", description="-", submissions=[submission(bob), newest, older])

    assert grading.latest_submission(assignment, "alice") is newest
    assert grading.latest_submission(assignment, "carol") is None
