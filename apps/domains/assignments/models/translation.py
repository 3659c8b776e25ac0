# PATH: apps/domains/assignments/models/translation.py
from django.db import models

from apps.api.common.models import BaseModel

from .question import Question, QuestionVariant


class Translation(BaseModel):
    """
    (question, variant|None, language_code) -> translated text + choices.

    variant None means the row applies to the base question.
    """

    question = models.ForeignKey(
        Question,
        on_delete=models.CASCADE,
        related_name="translations",
    )
    variant = models.ForeignKey(
        QuestionVariant,
        on_delete=models.CASCADE,
        related_name="translations",
        null=True,
        blank=True,
    )

    language_code = models.CharField(max_length=16)
    translated_text = models.TextField()
    translated_choices = models.JSONField(null=True, blank=True)

    class Meta:
        db_table = "assignments_translation"
        unique_together = ("question", "variant", "language_code")
        ordering = ["id"]

    def __str__(self):
        return f"Translation q={self.question_id} v={self.variant_id} [{self.language_code}]"
