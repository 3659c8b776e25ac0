# tests/factories.py
from apps.domains.assignments.models import Question
from apps.domains.attempts.dto import LearnerResponse, QuestionData, ScoringData, parse_choices

QT = Question.QuestionType

CAPITAL_CHOICES = [
    {"id": 1, "choice": "Paris", "is_correct": True, "points": 2, "feedback": "Right, it is ${learnerChoice}."},
    {"id": 2, "choice": "Rome", "is_correct": False, "points": 0},
    {"id": 3, "choice": "Berlin", "is_correct": False, "points": 0},
]


def question_data(**kwargs) -> QuestionData:
    """In-memory question for strategy tests."""
    defaults = {"id": 1, "question": "Q?", "type": QT.TEXT, "total_points": 10}
    defaults.update(kwargs)
    if "choices" in defaults:
        defaults["choices"] = parse_choices(defaults["choices"])
    if isinstance(defaults.get("scoring"), dict):
        defaults["scoring"] = ScoringData.from_raw(defaults["scoring"])
    return QuestionData(**defaults)


def response(question_id=1, language="en", **fields) -> LearnerResponse:
    return LearnerResponse(question_id=question_id, language=language, **fields)
