# PATH: apps/domains/attempts/models/attempt.py
from django.db import models

from apps.api.common.models import BaseModel
from apps.domains.assignments.models import Assignment, Question, QuestionVariant


class AssignmentAttempt(BaseModel):
    """
    One learner's timed session on an assignment.

    State
    --------------------------------------------------
    CREATED   : submitted=False, not past expires_at
    EXPIRED   : submitted=False, past expires_at
    SUBMITTED : submitted=True (terminal)

    - question_order is materialized at creation and never rewritten
    - grade is a 0..1 fraction
    """

    assignment = models.ForeignKey(
        Assignment,
        on_delete=models.CASCADE,
        related_name="attempts",
    )
    # external (LTI) learner identifier
    user_id = models.CharField(max_length=255, db_index=True)

    expires_at = models.DateTimeField(null=True, blank=True)
    submitted = models.BooleanField(default=False)
    grade = models.FloatField(null=True, blank=True)

    question_order = models.JSONField(default=list, blank=True)
    preferred_language = models.CharField(max_length=16, null=True, blank=True)
    comments = models.TextField(null=True, blank=True)

    class Meta:
        db_table = "attempts_assignment_attempt"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["assignment", "user_id"], name="attempt_assignment_user_idx"),
        ]

    def __str__(self):
        return (
            f"AssignmentAttempt #{self.id} "
            f"assignment={self.assignment_id} "
            f"user={self.user_id}"
        )


class AssignmentAttemptQuestionVariant(models.Model):
    """
    Per-attempt binding of a question to the variant (or none) and the
    shuffled choice array chosen at creation. Written once, never mutated.
    """

    attempt = models.ForeignKey(
        AssignmentAttempt,
        on_delete=models.CASCADE,
        related_name="question_variants",
    )
    question = models.ForeignKey(
        Question,
        on_delete=models.CASCADE,
        related_name="attempt_bindings",
    )
    question_variant = models.ForeignKey(
        QuestionVariant,
        on_delete=models.SET_NULL,
        related_name="attempt_bindings",
        null=True,
        blank=True,
    )
    randomized_choices = models.JSONField(null=True, blank=True)

    class Meta:
        db_table = "attempts_attempt_question_variant"
        unique_together = ("attempt", "question")

    def __str__(self):
        return f"attempt={self.attempt_id} q={self.question_id} variant={self.question_variant_id}"
