# PATH: apps/domains/attempts/models/grading_audit.py
from django.db import models

from apps.api.common.models import BaseModel


class GradingAudit(BaseModel):
    """
    Record of one strategy run (request in, graded response out).

    Plain ids on purpose: author previews are audited too and have no
    persisted attempt.
    """

    question_id = models.PositiveIntegerField(db_index=True)
    assignment_id = models.PositiveIntegerField(null=True, blank=True, db_index=True)

    request_payload = models.JSONField(default=dict)
    response_payload = models.JSONField(default=dict)
    grading_strategy = models.CharField(max_length=64)
    metadata = models.JSONField(null=True, blank=True)

    class Meta:
        db_table = "attempts_grading_audit"
        ordering = ["-created_at"]

    def __str__(self):
        return f"GradingAudit q={self.question_id} ({self.grading_strategy})"
