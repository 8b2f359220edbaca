from classroom.models.feedback import Feedback
from classroom.models.submission import Submission
from tests.conftest import ASSIGNMENT_ID, COURSE_ID, SUBMISSION_ID, as_user

FEEDBACK_URL = f"/teacher/assignments/submissions/{SUBMISSION_ID}/feedback"


def test_feedback_twice_updates_same_row(client, db):
    headers = as_user(client, "teacher1@example.com")

    r1 = client.post(FEEDBACK_URL, json={"comment": "first pass", "grade": 70}, headers=headers)
    assert r1.status_code == 200, r1.text
    id1 = r1.json()["feedback"]["id"]

    r2 = client.post(FEEDBACK_URL, json={"comment": "regraded", "grade": 85}, headers=headers)
    assert r2.status_code == 200, r2.text
    body2 = r2.json()
    assert body2["success"] is True
    assert body2["feedback"] == {"id": id1, "comment": "regraded", "grade": 85}

    rows = db.query(Feedback).filter(Feedback.submission_id == SUBMISSION_ID).all()
    assert len(rows) == 1
    assert rows[0].comment == "regraded"
    assert rows[0].grade == 85


def test_feedback_without_grade_clears_grade(client):
    headers = as_user(client, "teacher1@example.com")

    client.post(FEEDBACK_URL, json={"comment": "good", "grade": 90}, headers=headers)
    r = client.post(FEEDBACK_URL, json={"comment": "please redo question 3"}, headers=headers)
    assert r.status_code == 200
    assert r.json()["feedback"]["grade"] is None

    subs = client.get(f"/teacher/assignments/{ASSIGNMENT_ID}/submissions", headers=headers)
    row = subs.json()["submissions"][0]
    assert row["status"] == "feedback_given"
    assert row["feedback"] == "please redo question 3"


def test_co_teacher_can_grade_and_is_recorded(client, db):
    r = client.post(
        FEEDBACK_URL,
        json={"comment": "nice", "grade": 95},
        headers=as_user(client, "coteacher1@example.com"),
    )
    assert r.status_code == 200, r.text

    fb = db.query(Feedback).filter(Feedback.submission_id == SUBMISSION_ID).one()
    assert fb.teacher_id == "coteacher-1"


def test_outsider_teacher_is_forbidden(client, db):
    r = client.post(
        FEEDBACK_URL,
        json={"comment": "hijack", "grade": 0},
        headers=as_user(client, "outsider1@example.com"),
    )
    assert r.status_code == 403
    assert r.json() == {"success": False, "error": "Access denied"}
    assert db.query(Feedback).count() == 0


def test_feedback_on_missing_submission(client):
    r = client.post(
        "/teacher/assignments/submissions/nope/feedback",
        json={"comment": "?"},
        headers=as_user(client, "teacher1@example.com"),
    )
    assert r.status_code == 404
    assert r.json()["error"] == "Submission not found"


def test_feedback_grade_out_of_range(client):
    headers = as_user(client, "teacher1@example.com")

    for grade in (-1, 100.5):
        r = client.post(FEEDBACK_URL, json={"comment": "x", "grade": grade}, headers=headers)
        assert r.status_code == 400
        assert r.json()["error"] == "Validation error"
        assert r.json()["details"]


def test_feedback_requires_comment(client):
    r = client.post(
        FEEDBACK_URL,
        json={"comment": "", "grade": 50},
        headers=as_user(client, "teacher1@example.com"),
    )
    assert r.status_code == 400


def test_student_cannot_leave_feedback(client):
    r = client.post(
        FEEDBACK_URL,
        json={"comment": "self-graded", "grade": 100},
        headers=as_user(client, "student1@example.com"),
    )
    assert r.status_code == 401


def test_student_submits_summary(client, db):
    r = client.post(
        f"/student/assignments/{ASSIGNMENT_ID}/submissions",
        data={"summary": "second attempt"},
        headers=as_user(client, "student1@example.com"),
    )
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["summary"] == "second attempt"
    assert body["status"] == "submitted"
    assert body["student"]["id"] == "student-1"

    assert db.query(Submission).filter(Submission.student_id == "student-1").count() == 2


def test_student_sees_newest_submission(client):
    headers = as_user(client, "student1@example.com")
    client.post(
        f"/student/assignments/{ASSIGNMENT_ID}/submissions",
        data={"summary": "second attempt"},
        headers=headers,
    )

    r = client.get(f"/student/assignments?courseId={COURSE_ID}", headers=headers)
    assignment = r.json()["assignments"][0]
    assert assignment["submission"] == "second attempt"
    assert assignment["status"] == "submitted"


def test_student_submits_file(client):
    r = client.post(
        f"/student/assignments/{ASSIGNMENT_ID}/submissions",
        files={"file": ("answers.pdf", b"%PDF-1.4 answers", "application/pdf")},
        headers=as_user(client, "student1@example.com"),
    )
    assert r.status_code == 201, r.text
    file_url = r.json()["fileUrl"]
    assert file_url.startswith("http://files.test/submissions/")
    assert file_url.endswith("-answers.pdf")


def test_empty_submission_is_rejected(client):
    r = client.post(
        f"/student/assignments/{ASSIGNMENT_ID}/submissions",
        data={"summary": "   "},
        headers=as_user(client, "student1@example.com"),
    )
    assert r.status_code == 400
    assert r.json()["error"] == "A summary or a file is required"


def test_non_enrolled_student_cannot_submit(client):
    r = client.post(
        f"/student/assignments/{ASSIGNMENT_ID}/submissions",
        data={"summary": "let me in"},
        headers=as_user(client, "student2@example.com"),
    )
    assert r.status_code == 404


def test_teacher_lists_submissions(client):
    r = client.get(
        f"/teacher/assignments/{ASSIGNMENT_ID}/submissions",
        headers=as_user(client, "teacher1@example.com"),
    )
    assert r.status_code == 200, r.text
    subs = r.json()["submissions"]
    assert len(subs) == 1
    assert subs[0]["id"] == SUBMISSION_ID
    assert subs[0]["status"] == "submitted"
    assert subs[0]["student"]["name"] == "Sam Student"
