# PATH: apps/domains/attempts/services/grading_service.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List

from apps.domains.assignments.models import Assignment
from apps.domains.attempts.dto import GradedResponse, QuestionData


@dataclass(frozen=True)
class GradeSummary:
    grade: float
    total_points_earned: float
    total_possible_points: float


def _summary(responses: List[GradedResponse], possible: float) -> GradeSummary:
    if not responses:
        return GradeSummary(grade=0.0, total_points_earned=0.0, total_possible_points=0.0)
    earned = sum(float(r.total_points or 0) for r in responses)
    grade = earned / possible if possible > 0 else 0.0
    return GradeSummary(grade=grade, total_points_earned=earned, total_possible_points=possible)


class AttemptGradingService:
    """Grade aggregation + learner-facing visibility of per-question results."""

    @staticmethod
    def calculate_for_learner(responses: List[GradedResponse], assignment: Assignment) -> GradeSummary:
        possible = sum(
            float(q.total_points or 0)
            for q in assignment.questions.alive().only("total_points")
        )
        return _summary(responses, possible)

    @staticmethod
    def calculate_for_author(responses: List[GradedResponse], questions: Iterable[QuestionData]) -> GradeSummary:
        possible = sum(float(q.total_points or 0) for q in questions)
        return _summary(responses, possible)

    @staticmethod
    def construct_feedbacks(responses: List[GradedResponse], assignment: Assignment) -> List[Dict[str, Any]]:
        """
        show_question_score=False  -> total_points = -1
        show_submission_feedback=False -> feedback omitted
        """
        out: List[Dict[str, Any]] = []
        for r in responses:
            item = r.to_dict()
            item.pop("metadata", None)
            if not assignment.show_question_score:
                item["total_points"] = -1
            if not assignment.show_submission_feedback:
                item.pop("feedback", None)
            out.append(item)
        return out
