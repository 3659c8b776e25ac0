# PATH: apps/domains/attempts/grading/dispatcher.py
"""
(question type, response type) -> grading strategy.

LINK_FILE has no static mapping: the same question accepts either a
link or an upload, so the orchestrator picks URL or File once it has
seen the payload (get_strategy returns None for it).
"""
from __future__ import annotations

from typing import Dict, Optional

from apps.domains.assignments.models import Question
from apps.domains.attempts.grading.strategies import (
    CHOICE_STRATEGY,
    FILE_STRATEGY,
    PRESENTATION_STRATEGY,
    TEXT_STRATEGY,
    TRUE_FALSE_STRATEGY,
    URL_STRATEGY,
    GradingStrategy,
)

QT = Question.QuestionType
RT = Question.ResponseType

STRATEGIES: Dict[str, GradingStrategy] = {
    QT.TEXT: TEXT_STRATEGY,
    QT.URL: URL_STRATEGY,
    QT.TRUE_FALSE: TRUE_FALSE_STRATEGY,
    QT.SINGLE_CORRECT: CHOICE_STRATEGY,
    QT.MULTIPLE_CORRECT: CHOICE_STRATEGY,
    QT.UPLOAD: FILE_STRATEGY,
}

PRESENTATION_RESPONSE_TYPES = (RT.LIVE_RECORDING, RT.PRESENTATION)


def get_strategy(question_type: Optional[str], response_type: Optional[str] = None) -> Optional[GradingStrategy]:
    if not question_type:
        raise ValueError("question type is required for grading dispatch")

    if question_type == QT.LINK_FILE:
        return None

    if question_type == QT.UPLOAD and response_type in PRESENTATION_RESPONSE_TYPES:
        return PRESENTATION_STRATEGY

    strategy = STRATEGIES.get(question_type)
    if strategy is None:
        raise ValueError(f"no grading strategy for question type: {question_type}")
    return strategy
