# PATH: apps/domains/assignments/models/question.py
from django.db import models

from apps.api.common.models import SoftDeleteModel

from .assignment import Assignment


class Question(SoftDeleteModel):
    """
    Assignment question.

    - choices: ordered list of {id, choice, is_correct, points, feedback}
    - scoring: {type, rubrics, show_rubrics_to_learner}
    - answer: canonical boolean for TRUE_FALSE
    """

    class QuestionType(models.TextChoices):
        TEXT = "TEXT", "Text"
        URL = "URL", "Url"
        UPLOAD = "UPLOAD", "Upload"
        LINK_FILE = "LINK_FILE", "Link or file"
        TRUE_FALSE = "TRUE_FALSE", "True / False"
        SINGLE_CORRECT = "SINGLE_CORRECT", "Single correct"
        MULTIPLE_CORRECT = "MULTIPLE_CORRECT", "Multiple correct"

    class ResponseType(models.TextChoices):
        CODE = "CODE", "Code"
        ESSAY = "ESSAY", "Essay"
        REPORT = "REPORT", "Report"
        LIVE_RECORDING = "LIVE_RECORDING", "Live recording"
        PRESENTATION = "PRESENTATION", "Presentation"
        OTHER = "OTHER", "Other"

    class ScoringType(models.TextChoices):
        CRITERIA_BASED = "CRITERIA_BASED", "Criteria based"
        LOSS_PER_MISTAKE = "LOSS_PER_MISTAKE", "Loss per mistake"

    assignment = models.ForeignKey(
        Assignment,
        on_delete=models.CASCADE,
        related_name="questions",
    )

    question = models.TextField()
    type = models.CharField(max_length=32, choices=QuestionType.choices)
    response_type = models.CharField(
        max_length=32,
        choices=ResponseType.choices,
        null=True,
        blank=True,
    )
    total_points = models.FloatField(default=0)

    choices = models.JSONField(null=True, blank=True)
    scoring = models.JSONField(null=True, blank=True)
    answer = models.BooleanField(null=True, blank=True)

    max_words = models.PositiveIntegerField(null=True, blank=True)
    max_characters = models.PositiveIntegerField(null=True, blank=True)

    grading_context_question_ids = models.JSONField(default=list, blank=True)
    randomized_choices = models.BooleanField(default=False)
    video_presentation_config = models.JSONField(null=True, blank=True)

    class Meta:
        db_table = "assignments_question"
        ordering = ["id"]

    def __str__(self):
        return f"Q{self.id} ({self.type}) of assignment {self.assignment_id}"


class QuestionVariant(SoftDeleteModel):
    """
    Alternate phrasing / choice set of a Question.

    Fields left null inherit from variant_of.
    """

    variant_of = models.ForeignKey(
        Question,
        on_delete=models.CASCADE,
        related_name="variants",
    )

    variant_content = models.TextField()
    choices = models.JSONField(null=True, blank=True)
    scoring = models.JSONField(null=True, blank=True)
    answer = models.BooleanField(null=True, blank=True)

    max_words = models.PositiveIntegerField(null=True, blank=True)
    max_characters = models.PositiveIntegerField(null=True, blank=True)

    randomized_choices = models.BooleanField(default=False)
    class Meta:
        db_table = "assignments_question_variant"
        ordering = ["id"]

    def __str__(self):
        return f"Variant {self.id} of Q{self.variant_of_id}"
