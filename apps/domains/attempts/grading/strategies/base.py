# PATH: apps/domains/attempts/grading/strategies/base.py
"""
Grading strategy record + shared helpers.

A strategy is a plain record of three functions:
    validate(question, response, deps) -> None   (raises ValidationError)
    extract(response, deps)            -> typed learner answer
    grade(question, answer, ctx, deps) -> GradedResponse
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

from rest_framework.exceptions import ValidationError

from apps.domains.attempts.content import ContentFetcher
from apps.domains.attempts.dto import (
    FeedbackItem,
    GradedResponse,
    GradingContext,
    LearnerResponse,
    QuestionData,
)
from apps.domains.attempts.grading.boolean_tokens import BOOLEAN_TOKENS
from apps.domains.attempts.grading.localization import get_localized_string
from apps.domains.attempts.oracle.port import EvaluationModel, GradingOracle, OracleVerdict


@dataclass(frozen=True)
class GradingDeps:
    oracle: GradingOracle
    fetcher: ContentFetcher
    boolean_tokens: Mapping[str, Mapping[str, bool]] = field(default_factory=lambda: BOOLEAN_TOKENS)


@dataclass(frozen=True)
class GradingStrategy:
    name: str
    validate: Callable[[QuestionData, LearnerResponse, GradingDeps], None]
    extract: Callable[[LearnerResponse, GradingDeps], Any]
    grade: Callable[[QuestionData, Any, GradingContext, GradingDeps], GradedResponse]


@dataclass
class StrategyOutcome:
    graded: GradedResponse
    learner_response: Any
    strategy_name: str


def handle_response(
    strategy: GradingStrategy,
    question: QuestionData,
    response: LearnerResponse,
    context: GradingContext,
    deps: GradingDeps,
) -> StrategyOutcome:
    strategy.validate(question, response, deps)
    learner_response = strategy.extract(response, deps)
    graded = strategy.grade(question, learner_response, context, deps)
    return StrategyOutcome(graded=graded, learner_response=learner_response, strategy_name=strategy.name)


# -----------------------------
# helpers
# -----------------------------
def invalid(key: str, language: Optional[str], **placeholders) -> ValidationError:
    return ValidationError({"detail": get_localized_string(key, language, placeholders or None)})


def clamp_points(points: float, total_points: float) -> float:
    return max(0.0, min(float(points or 0), float(total_points or 0)))


def evaluation_model(
    question: QuestionData,
    context: GradingContext,
    learner_response: Any,
    **extras,
) -> EvaluationModel:
    scoring = question.scoring
    return EvaluationModel(
        question=question.question,
        question_answer_context=list(context.question_answer_context),
        assignment_instructions=context.assignment_instructions,
        learner_response=learner_response,
        total_points=question.total_points,
        scoring_type=(scoring.type if scoring and scoring.type else ""),
        scoring=scoring.to_dict() if scoring else None,
        question_type=question.type,
        response_type=question.response_type or "OTHER",
        extras=dict(extras),
    )


def from_verdict(verdict: OracleVerdict, question: QuestionData, **metadata) -> GradedResponse:
    """Oracle-scored answers are clamped to [0, total_points]."""
    return GradedResponse(
        total_points=clamp_points(verdict.points, question.total_points),
        feedback=[FeedbackItem(verdict.feedback)],
        metadata=dict(metadata),
    )
