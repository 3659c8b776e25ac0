# PATH: apps/domains/attempts/services/reporting_service.py
from __future__ import annotations

import logging
from datetime import timedelta

from django.conf import settings
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from apps.domains.attempts.exceptions import ReportLimitReached
from apps.domains.attempts.models import Report
from apps.domains.attempts.services.access import get_assignment, get_owned_attempt

logger = logging.getLogger(__name__)


class AttemptReportingService:
    @staticmethod
    def create_report(
        *,
        assignment_id: int,
        attempt_id: int,
        user_id: str,
        issue_type: str,
        description: str,
    ) -> Report:
        assignment = get_assignment(assignment_id)
        attempt = get_owned_attempt(attempt_id=attempt_id, assignment_id=assignment.id, user_id=user_id)

        if issue_type not in Report.IssueType.values:
            raise ValidationError({"detail": f"Unknown issue type: {issue_type}"})

        limit = int(getattr(settings, "GRADING_REPORTS_PER_DAY", 5))
        since = timezone.now() - timedelta(hours=24)
        if Report.objects.filter(reporter_id=str(user_id), created_at__gte=since).count() >= limit:
            raise ReportLimitReached()

        report = Report.objects.create(
            assignment=assignment,
            attempt=attempt,
            reporter_id=str(user_id),
            issue_type=issue_type,
            description=description,
        )
        logger.info("report created: report_id=%s type=%s attempt_id=%s", report.id, issue_type, attempt.id)
        return report
