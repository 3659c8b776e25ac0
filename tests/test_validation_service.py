from datetime import timedelta

import pytest
from django.utils import timezone

from apps.domains.attempts.exceptions import (
    DeadlinePassed,
    InProgressAttempt,
    MaxAttemptsReached,
    RateLimited,
)
from apps.domains.attempts.models import AssignmentAttempt
from apps.domains.attempts.services.validation_service import AttemptValidationService

pytestmark = pytest.mark.django_db

USER = "learner-1"


def attempt(assignment, **kwargs):
    defaults = {"user_id": USER, "submitted": True}
    defaults.update(kwargs)
    return AssignmentAttempt.objects.create(assignment=assignment, **defaults)


def validate(assignment, user_id=USER):
    AttemptValidationService.validate_new_attempt(assignment=assignment, user_id=user_id)


def test_first_attempt_is_allowed(assignment):
    validate(assignment)


def test_unsubmitted_attempt_without_expiry_blocks(assignment):
    attempt(assignment, submitted=False, expires_at=None)
    with pytest.raises(InProgressAttempt):
        validate(assignment)


def test_unsubmitted_unexpired_attempt_blocks(assignment):
    attempt(assignment, submitted=False, expires_at=timezone.now() + timedelta(minutes=5))
    with pytest.raises(InProgressAttempt):
        validate(assignment)


def test_expired_attempt_does_not_block(assignment):
    attempt(assignment, submitted=False, expires_at=timezone.now() - timedelta(minutes=5))
    validate(assignment)


def test_other_users_attempts_are_ignored(assignment):
    attempt(assignment, submitted=False, user_id="someone-else")
    validate(assignment)


def test_max_attempts(make_assignment):
    assignment = make_assignment(num_attempts=1)
    attempt(assignment)
    with pytest.raises(MaxAttemptsReached):
        validate(assignment)


def test_in_progress_is_checked_before_max_attempts(make_assignment):
    assignment = make_assignment(num_attempts=1)
    attempt(assignment, submitted=False)
    with pytest.raises(InProgressAttempt):
        validate(assignment)


def test_unlimited_attempts(make_assignment):
    assignment = make_assignment(num_attempts=-1)
    for _ in range(5):
        attempt(assignment)
    validate(assignment)


def test_rate_window(make_assignment):
    assignment = make_assignment(attempts_per_time_range=2, attempts_time_range_hours=1, num_attempts=10)
    first, second = attempt(assignment), attempt(assignment)
    with pytest.raises(RateLimited):
        validate(assignment)

    AssignmentAttempt.objects.filter(id__in=[first.id, second.id]).update(
        created_at=timezone.now() - timedelta(hours=2)
    )
    validate(assignment)


def test_rate_window_is_checked_before_max_attempts(make_assignment):
    assignment = make_assignment(attempts_per_time_range=1, attempts_time_range_hours=24, num_attempts=1)
    attempt(assignment)
    with pytest.raises(RateLimited):
        validate(assignment)


def test_expiry_grace():
    now = timezone.now()
    assert AttemptValidationService.is_attempt_expired(None) is False
    assert AttemptValidationService.is_attempt_expired(now - timedelta(seconds=5)) is False
    assert AttemptValidationService.is_attempt_expired(now - timedelta(seconds=20)) is True


def test_submission_deadline_grace():
    now = timezone.now()
    AttemptValidationService.check_submission_deadline(None)
    AttemptValidationService.check_submission_deadline(now - timedelta(seconds=20))
    with pytest.raises(DeadlinePassed):
        AttemptValidationService.check_submission_deadline(now - timedelta(seconds=45))
