# PATH: apps/domains/attempts/models/feedback.py
from django.db import models

from apps.api.common.models import BaseModel
from apps.domains.assignments.models import Assignment

from .attempt import AssignmentAttempt


class AssignmentFeedback(BaseModel):
    """Learner feedback on an attempt (one row per assignment/attempt/user)."""

    assignment = models.ForeignKey(Assignment, on_delete=models.CASCADE, related_name="feedbacks")
    attempt = models.ForeignKey(AssignmentAttempt, on_delete=models.CASCADE, related_name="feedbacks")
    user_id = models.CharField(max_length=255)

    comments = models.TextField(blank=True, default="")
    ai_grading_rating = models.PositiveSmallIntegerField(null=True, blank=True)
    assignment_rating = models.PositiveSmallIntegerField(null=True, blank=True)

    class Meta:
        db_table = "attempts_assignment_feedback"
        unique_together = ("assignment", "attempt", "user_id")

    def __str__(self):
        return f"AssignmentFeedback attempt={self.attempt_id} user={self.user_id}"


class RegradingRequest(BaseModel):
    class Status(models.TextChoices):
        PENDING = "PENDING", "Pending"
        APPROVED = "APPROVED", "Approved"
        REJECTED = "REJECTED", "Rejected"
        COMPLETED = "COMPLETED", "Completed"

    assignment = models.ForeignKey(Assignment, on_delete=models.CASCADE, related_name="regrading_requests")
    attempt = models.ForeignKey(AssignmentAttempt, on_delete=models.CASCADE, related_name="regrading_requests")
    user_id = models.CharField(max_length=255)

    reason = models.TextField()
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING)

    class Meta:
        db_table = "attempts_regrading_request"
        unique_together = ("assignment", "attempt", "user_id")

    def __str__(self):
        return f"RegradingRequest attempt={self.attempt_id} [{self.status}]"


class Report(BaseModel):
    class IssueType(models.TextChoices):
        BUG = "BUG", "Bug"
        FEEDBACK = "FEEDBACK", "Feedback"
        SUGGESTION = "SUGGESTION", "Suggestion"
        PERFORMANCE = "PERFORMANCE", "Performance"
        FALSE_MARKING = "FALSE_MARKING", "False marking"
        OTHER = "OTHER", "Other"

    class Status(models.TextChoices):
        OPEN = "OPEN", "Open"
        IN_PROGRESS = "IN_PROGRESS", "In progress"
        CLOSED = "CLOSED", "Closed"

    assignment = models.ForeignKey(Assignment, on_delete=models.CASCADE, related_name="reports")
    attempt = models.ForeignKey(
        AssignmentAttempt,
        on_delete=models.SET_NULL,
        related_name="reports",
        null=True,
        blank=True,
    )
    reporter_id = models.CharField(max_length=255, db_index=True)

    issue_type = models.CharField(max_length=20, choices=IssueType.choices)
    description = models.TextField()
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.OPEN)

    class Meta:
        db_table = "attempts_report"
        ordering = ["-created_at"]

    def __str__(self):
        return f"Report #{self.id} {self.issue_type} by {self.reporter_id}"
