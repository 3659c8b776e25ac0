# PATH: apps/domains/assignments/models/assignment.py
from django.db import models

from apps.api.common.models import BaseModel


class Assignment(BaseModel):
    """
    A multi-question assignment learners attempt.

    Attempt policy
    --------------------------------------------------
    - num_attempts == -1 means unlimited attempts
    - attempts_per_time_range / attempts_time_range_hours bound how many
      attempts may be created inside a rolling window
    - alloted_time_minutes bounds a single attempt (None / 0 = no limit)

    Visibility policy
    --------------------------------------------------
    - show_assignment_score: overall grade returned to the learner
    - show_submission_feedback: per-question feedback returned to the learner
    - show_question_score: per-question points returned to the learner
    """

    class DisplayOrder(models.TextChoices):
        SEQUENTIAL = "SEQUENTIAL", "Sequential"
        RANDOM = "RANDOM", "Random"

    name = models.CharField(max_length=255)
    introduction = models.TextField(blank=True, default="")
    instructions = models.TextField(blank=True, default="")

    # explicit question id ordering authored for SEQUENTIAL display
    question_order = models.JSONField(default=list, blank=True)
    display_order = models.CharField(
        max_length=20,
        choices=DisplayOrder.choices,
        default=DisplayOrder.SEQUENTIAL,
    )

    num_attempts = models.IntegerField(default=-1)
    attempts_per_time_range = models.PositiveIntegerField(null=True, blank=True)
    attempts_time_range_hours = models.PositiveIntegerField(null=True, blank=True)
    alloted_time_minutes = models.PositiveIntegerField(null=True, blank=True)
    passing_grade = models.PositiveIntegerField(default=50)

    show_assignment_score = models.BooleanField(default=True)
    show_submission_feedback = models.BooleanField(default=True)
    show_question_score = models.BooleanField(default=True)

    class Meta:
        db_table = "assignments_assignment"
        ordering = ["-created_at"]

    def __str__(self):
        return f"Assignment #{self.id} {self.name}"
