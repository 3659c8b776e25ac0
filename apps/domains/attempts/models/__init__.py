# apps/domains/attempts/models/__init__.py

from .attempt import AssignmentAttempt, AssignmentAttemptQuestionVariant
from .question_response import QuestionResponse
from .grading_audit import GradingAudit
from .feedback import AssignmentFeedback, RegradingRequest, Report

__all__ = [
    "AssignmentAttempt",
    "AssignmentAttemptQuestionVariant",
    "QuestionResponse",
    "GradingAudit",
    "AssignmentFeedback",
    "RegradingRequest",
    "Report",
]
