import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from apps.domains.attempts.models import AssignmentAttempt
from apps.domains.attempts.services.grading_audit_service import GradingAuditService

from tests.factories import QT

pytestmark = pytest.mark.django_db

User = get_user_model()


@pytest.fixture
def learner():
    return User.objects.create_user(username="learner", password="pw")


@pytest.fixture
def staff():
    return User.objects.create_user(username="author", password="pw", is_staff=True)


@pytest.fixture
def client_for():
    def _client(user):
        c = APIClient()
        c.force_authenticate(user=user)
        return c

    return _client


def base(assignment):
    return f"/api/v1/assignments/{assignment.id}"


# ======================================================
# learner attempt flow
# ======================================================
def test_requires_authentication(assignment):
    res = APIClient().get(f"{base(assignment)}/attempts/")
    assert res.status_code in (401, 403)


def test_attempt_lifecycle(client_for, learner, assignment, tf_question, choice_question):
    client = client_for(learner)

    created = client.post(f"{base(assignment)}/attempts/")
    assert created.status_code == 201
    attempt_id = created.data["id"]
    assert AssignmentAttempt.objects.get(id=attempt_id).user_id == str(learner.pk)

    open_ = client.get(f"{base(assignment)}/attempts/", {"submitted": "false"})
    assert [a["id"] for a in open_.data] == [attempt_id]

    submitted = client.patch(
        f"{base(assignment)}/attempts/{attempt_id}/",
        {
            "responses_for_questions": [
                {"id": tf_question.id, "learner_answer_choice": "true"},
                {"id": choice_question.id, "learner_choices": ["Paris"]},
            ],
            "language": "en",
        },
        format="json",
    )
    assert submitted.status_code == 200
    assert submitted.data["total_points_earned"] == 3
    assert submitted.data["total_possible_points"] == 3

    detail = client.get(f"{base(assignment)}/attempts/{attempt_id}/")
    assert detail.status_code == 200
    assert detail.data["submitted"] is True

    assert client.get(f"{base(assignment)}/attempts/", {"submitted": "false"}).data == []


def test_other_learner_cannot_read_attempt(client_for, learner, assignment):
    attempt = AssignmentAttempt.objects.create(assignment=assignment, user_id=str(learner.pk))
    other = User.objects.create_user(username="other", password="pw")

    res = client_for(other).get(f"{base(assignment)}/attempts/{attempt.id}/")

    assert res.status_code == 403


def test_unknown_assignment(client_for, learner):
    res = client_for(learner).post("/api/v1/assignments/999999/attempts/")
    assert res.status_code == 404


def test_submit_validates_payload(client_for, learner, assignment):
    attempt = AssignmentAttempt.objects.create(assignment=assignment, user_id=str(learner.pk))

    res = client_for(learner).patch(
        f"{base(assignment)}/attempts/{attempt.id}/",
        {"responses_for_questions": [{"learner_text_response": "no id"}]},
        format="json",
    )

    assert res.status_code == 400


# ======================================================
# feedback / regrade / report
# ======================================================
def test_feedback_regrade_report(client_for, learner, assignment):
    attempt = AssignmentAttempt.objects.create(assignment=assignment, user_id=str(learner.pk), submitted=True)
    client = client_for(learner)
    url = f"{base(assignment)}/attempts/{attempt.id}"

    assert client.post(f"{url}/feedback/", {"comments": "ok", "assignment_rating": 6}, format="json").status_code == 400
    assert client.post(f"{url}/feedback/", {"comments": "ok", "assignment_rating": 4}, format="json").status_code == 200
    assert client.get(f"{url}/feedback/").data["assignment_rating"] == 4

    assert client.get(f"{url}/regrade/").status_code == 404
    assert client.post(f"{url}/regrade/", {"reason": "second answer was right"}, format="json").status_code == 201
    assert client.get(f"{url}/regrade/").data["status"] == "PENDING"

    report = client.post(f"{url}/report/", {"issue_type": "BUG", "description": "typo"}, format="json")
    assert report.status_code == 201
    assert report.data["success"] is True


# ======================================================
# author / staff
# ======================================================
PREVIEW = {
    "responses_for_questions": [{"id": 1, "learner_answer_choice": "yes"}],
    "author_questions": [{"id": 1, "question": "Draft?", "type": QT.TRUE_FALSE, "total_points": 2, "answer": True}],
}


def test_preview_is_staff_only(client_for, learner, assignment):
    res = client_for(learner).post(f"{base(assignment)}/preview/", PREVIEW, format="json")
    assert res.status_code == 403


def test_preview_grades_draft(client_for, staff, assignment):
    res = client_for(staff).post(f"{base(assignment)}/preview/", PREVIEW, format="json")

    assert res.status_code == 200
    assert res.data["id"] == -1
    assert res.data["total_points_earned"] == 2
    assert AssignmentAttempt.objects.count() == 0


def test_grading_audit_endpoints(client_for, staff, assignment):
    for points in (0, 1):
        GradingAuditService.record_grading(
            question_id=11,
            assignment_id=assignment.id,
            request_payload={},
            response_payload={"total_points": points},
            grading_strategy="text",
        )
    client = client_for(staff)

    history = client.get("/api/v1/assignments/grading-audits/questions/11/", {"limit": 1})
    assert history.status_code == 200
    assert len(history.data) == 1

    stats = client.get(f"{base(assignment)}/grading-audits/statistics/")
    assert stats.data["questions"][0]["total_attempts"] == 2

    issues = client.get(f"{base(assignment)}/grading-audits/issues/")
    assert issues.data == {"assignment_id": assignment.id, "issues": {}}

    assert client.get("/api/v1/assignments/grading-audits/questions/11/", {"limit": "x"}).status_code == 400
