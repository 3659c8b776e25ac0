# PATH: apps/domains/attempts/services/validation_service.py
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from django.db.models import Q
from django.utils import timezone

from apps.domains.assignments.models import Assignment
from apps.domains.attempts.exceptions import (
    DeadlinePassed,
    InProgressAttempt,
    MaxAttemptsReached,
    RateLimited,
)
from apps.domains.attempts.models import AssignmentAttempt

# clock skew allowance for last-second submissions
EXPIRY_GRACE = timedelta(seconds=10)
# commit-time guard runs after grading, so it is wider
DEADLINE_GRACE = timedelta(seconds=30)


class AttemptValidationService:
    """
    Attempt eligibility gate.

    validate_new_attempt order (first failure wins):
    1) in-progress attempt   -> InProgressAttempt
    2) rate window exhausted -> RateLimited
    3) max attempts          -> MaxAttemptsReached
    """

    @staticmethod
    def validate_new_attempt(*, assignment: Assignment, user_id: str) -> None:
        now = timezone.now()
        attempts = AssignmentAttempt.objects.filter(
            assignment_id=assignment.id,
            user_id=str(user_id),
        )

        # 1) in progress: not submitted and (no expiry or not yet expired)
        in_progress = attempts.filter(submitted=False).filter(
            Q(expires_at__isnull=True) | Q(expires_at__gte=now)
        )
        if in_progress.exists():
            raise InProgressAttempt()

        # 2) rolling window
        if assignment.attempts_per_time_range:
            window_start = AttemptValidationService.time_range_start(assignment, now=now)
            in_window = attempts.filter(created_at__gte=window_start, created_at__lte=now).count()
            if in_window >= assignment.attempts_per_time_range:
                raise RateLimited()

        # 3) total
        if assignment.num_attempts is not None and assignment.num_attempts != -1:
            if attempts.count() >= assignment.num_attempts:
                raise MaxAttemptsReached()

    @staticmethod
    def time_range_start(assignment: Assignment, *, now: Optional[datetime] = None) -> datetime:
        now = now or timezone.now()
        hours = assignment.attempts_time_range_hours
        if hours:
            return now - timedelta(hours=hours)
        return now

    @staticmethod
    def is_attempt_expired(expires_at: Optional[datetime]) -> bool:
        if not expires_at:
            return False
        return timezone.now() - EXPIRY_GRACE > expires_at

    @staticmethod
    def check_submission_deadline(expires_at: Optional[datetime]) -> None:
        if expires_at and timezone.now() - DEADLINE_GRACE > expires_at:
            raise DeadlinePassed()
