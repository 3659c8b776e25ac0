import pytest
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from apps.domains.attempts.exceptions import ReportLimitReached
from apps.domains.attempts.models import AssignmentAttempt, RegradingRequest, Report
from apps.domains.attempts.services.feedback_service import AttemptFeedbackService
from apps.domains.attempts.services.regrading_service import AttemptRegradingService
from apps.domains.attempts.services.reporting_service import AttemptReportingService

pytestmark = pytest.mark.django_db

USER = "learner-1"


@pytest.fixture
def attempt(assignment):
    return AssignmentAttempt.objects.create(assignment=assignment, user_id=USER, submitted=True, grade=0.5)


def ids(attempt, user_id=USER):
    return {"assignment_id": attempt.assignment_id, "attempt_id": attempt.id, "user_id": user_id}


# ======================================================
# feedback
# ======================================================
def test_feedback_defaults(attempt):
    assert AttemptFeedbackService.get_feedback(**ids(attempt)) == {
        "comments": "",
        "ai_grading_rating": None,
        "assignment_rating": None,
    }


def test_feedback_is_upserted(attempt):
    AttemptFeedbackService.submit_feedback(**ids(attempt), comments="too hard", assignment_rating=2)
    AttemptFeedbackService.submit_feedback(**ids(attempt), comments="fair", ai_grading_rating=4, assignment_rating=3)

    fb = AttemptFeedbackService.get_feedback(**ids(attempt))
    assert fb["comments"] == "fair"
    assert fb["ai_grading_rating"] == 4
    assert fb["assignment_rating"] == 3


def test_feedback_requires_owner(attempt):
    with pytest.raises(PermissionDenied):
        AttemptFeedbackService.submit_feedback(**ids(attempt, "intruder"), comments="x")


# ======================================================
# regrading
# ======================================================
def test_regrading_status_before_request(attempt):
    with pytest.raises(NotFound):
        AttemptRegradingService.get_regrading_status(**ids(attempt))


def test_regrading_request_is_reopened(attempt):
    first = AttemptRegradingService.process_regrading_request(**ids(attempt), reason="question 2 was right")
    RegradingRequest.objects.filter(id=first["id"]).update(status=RegradingRequest.Status.REJECTED)

    second = AttemptRegradingService.process_regrading_request(**ids(attempt), reason="please look again")

    assert first["id"] == second["id"]
    assert AttemptRegradingService.get_regrading_status(**ids(attempt)) == {
        "status": "PENDING",
        "reason": "please look again",
    }


def test_regrading_wrong_assignment(attempt, make_assignment):
    with pytest.raises(ValidationError):
        AttemptRegradingService.process_regrading_request(
            assignment_id=make_assignment().id, attempt_id=attempt.id, user_id=USER, reason="x",
        )


# ======================================================
# reports
# ======================================================
def report(attempt, issue_type="BUG"):
    return AttemptReportingService.create_report(**ids(attempt), issue_type=issue_type, description="Broken image")


def test_report_is_stored(attempt):
    created = report(attempt, "FALSE_MARKING")
    assert created.reporter_id == USER
    assert created.status == Report.Status.OPEN
    assert created.attempt_id == attempt.id


def test_unknown_issue_type(attempt):
    with pytest.raises(ValidationError):
        report(attempt, "RANT")


def test_daily_report_limit(attempt, settings):
    settings.GRADING_REPORTS_PER_DAY = 2
    report(attempt)
    report(attempt)
    with pytest.raises(ReportLimitReached):
        report(attempt)


def test_report_needs_existing_assignment(attempt):
    with pytest.raises(NotFound):
        AttemptReportingService.create_report(
            assignment_id=31337, attempt_id=attempt.id, user_id=USER, issue_type="BUG", description="x",
        )
