# apps/domains/attempts/dto/__init__.py

from .context import AUTHOR, LEARNER, GradingContext, QuestionAnswerContext
from .question import ChoiceData, QuestionData, ScoringData, parse_choices
from .response import FeedbackItem, GradedResponse, LearnerResponse

__all__ = [
    "AUTHOR",
    "LEARNER",
    "GradingContext",
    "QuestionAnswerContext",
    "ChoiceData",
    "QuestionData",
    "ScoringData",
    "parse_choices",
    "FeedbackItem",
    "GradedResponse",
    "LearnerResponse",
]
