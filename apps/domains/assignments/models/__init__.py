# apps/domains/assignments/models/__init__.py

from .assignment import Assignment
from .question import Question, QuestionVariant
from .translation import Translation

__all__ = [
    "Assignment",
    "Question",
    "QuestionVariant",
    "Translation",
]
