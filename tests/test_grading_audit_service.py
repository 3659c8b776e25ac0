import pytest

from apps.domains.attempts.models import GradingAudit
from apps.domains.attempts.services.grading_audit_service import GradingAuditService

pytestmark = pytest.mark.django_db


def record(question_id, points, assignment_id=1):
    return GradingAuditService.record_grading(
        question_id=question_id,
        assignment_id=assignment_id,
        request_payload={"id": question_id},
        response_payload={"total_points": points},
        grading_strategy="text",
    )


def test_record_and_history():
    for p in (1, 2, 3):
        record(5, p)
    record(6, 9)

    history = GradingAuditService.get_grading_history(question_id=5, limit=2)

    assert [h.response_payload["total_points"] for h in history] == [3, 2]


def test_audit_failure_is_swallowed(monkeypatch):
    def broken(**kwargs):
        raise RuntimeError("disk full")

    monkeypatch.setattr(GradingAudit.objects, "create", broken)
    assert record(5, 1) is None


def test_statistics_per_question():
    for p in (0, 2, 2, 4):
        record(5, p)
    record(6, 1)
    record(7, 1, assignment_id=2)

    stats = GradingAuditService.get_grading_statistics(assignment_id=1)

    assert [s["question_id"] for s in stats] == [5, 6]
    assert stats[0]["total_attempts"] == 4
    assert stats[0]["average_score"] == 2
    assert stats[0]["distribution"] == {"0": 1, "2": 2, "4": 1}


def test_no_issues_below_sample_threshold():
    for _ in range(9):
        record(5, 0)
    assert GradingAuditService.identify_question_issues(question_id=5) == []


def test_excessive_zeros(make_question):
    q = make_question(total_points=10)
    for p in [0] * 5 + [5] * 5:
        record(q.id, p)

    issues = GradingAuditService.identify_question_issues(question_id=q.id)

    assert [i["type"] for i in issues] == ["excessive_zeros"]
    assert issues[0]["severity"] == "high"


def test_excessive_max_scores(make_question):
    q = make_question(total_points=4)
    for p in [4] * 7 + [2] * 3:
        record(q.id, p, assignment_id=q.assignment_id)

    issues = GradingAuditService.identify_grading_issues(assignment_id=q.assignment_id)

    assert [i["type"] for i in issues[q.id]] == ["excessive_max_scores"]
