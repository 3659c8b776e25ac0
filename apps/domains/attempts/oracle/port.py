# PATH: apps/domains/attempts/oracle/port.py
"""
Grading oracle port: the external (LLM) scorer for open-ended answers.

Adapters implement GradingOracle; the grading strategies only see this
contract.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

from apps.domains.attempts.dto import QuestionAnswerContext


@dataclass(frozen=True)
class EvaluationModel:
    question: str
    question_answer_context: List[QuestionAnswerContext]
    assignment_instructions: str
    learner_response: Any
    total_points: float
    scoring_type: str = ""
    scoring: Optional[Dict[str, Any]] = None
    question_type: Optional[str] = None
    response_type: str = "OTHER"
    extras: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class OracleVerdict:
    points: float
    feedback: str
    grading_rationale: Optional[str] = None


class GradingOracle(Protocol):
    def grade_text(
        self, model: EvaluationModel, assignment_id: Optional[int], language: Optional[str] = None
    ) -> OracleVerdict:
        ...

    def grade_file(
        self, model: EvaluationModel, assignment_id: Optional[int], language: Optional[str] = None
    ) -> OracleVerdict:
        ...

    def grade_url(
        self, model: EvaluationModel, assignment_id: Optional[int], language: Optional[str] = None
    ) -> OracleVerdict:
        ...

    def grade_presentation(
        self, model: EvaluationModel, assignment_id: Optional[int], language: Optional[str] = None
    ) -> OracleVerdict:
        ...

    def grade_video_presentation(
        self, model: EvaluationModel, assignment_id: Optional[int], language: Optional[str] = None
    ) -> OracleVerdict:
        ...
