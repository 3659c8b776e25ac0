# PATH: apps/domains/attempts/models/question_response.py
from django.db import models
from django.utils import timezone

from apps.api.common.models import BaseModel
from apps.domains.assignments.models import Question

from .attempt import AssignmentAttempt


class QuestionResponse(BaseModel):
    """
    Graded answer to one question inside an attempt (append-only).

    - learner_response: shape depends on the question type
    - feedback: list of {feedback, choice?} items produced by the strategy
    - metadata: strategy specific audit data, never shown to learners
    """

    attempt = models.ForeignKey(
        AssignmentAttempt,
        on_delete=models.CASCADE,
        related_name="question_responses",
    )
    question = models.ForeignKey(
        Question,
        on_delete=models.CASCADE,
        related_name="responses",
    )

    learner_response = models.JSONField(null=True, blank=True)
    points = models.FloatField(default=0)
    feedback = models.JSONField(default=list, blank=True)
    metadata = models.JSONField(null=True, blank=True)
    graded_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "attempts_question_response"
        ordering = ["id"]

    def __str__(self):
        return f"QuestionResponse attempt={self.attempt_id} q={self.question_id} points={self.points}"
