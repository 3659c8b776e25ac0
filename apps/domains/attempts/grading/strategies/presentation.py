# PATH: apps/domains/attempts/grading/strategies/presentation.py
from __future__ import annotations

from typing import Any, Dict, List

from apps.domains.assignments.models import Question
from apps.domains.attempts.dto import GradedResponse, GradingContext, LearnerResponse, QuestionData
from apps.domains.attempts.grading.strategies.base import (
    GradingDeps,
    GradingStrategy,
    evaluation_model,
    from_verdict,
    invalid,
)

RT = Question.ResponseType
SUPPORTED = (RT.LIVE_RECORDING, RT.PRESENTATION)


def _slides(presentation: Any) -> List[Dict[str, Any]]:
    if isinstance(presentation, list):
        return [s for s in presentation if isinstance(s, dict)]
    if isinstance(presentation, dict):
        slides = presentation.get("slides_data") or presentation.get("slidesData") or []
        return [s for s in slides if isinstance(s, dict)]
    return []


def validate(question: QuestionData, response: LearnerResponse, deps: GradingDeps) -> None:
    if question.response_type not in SUPPORTED:
        raise invalid("unsupportedPresentationType", response.language, type=question.response_type)
    if not response.presentation:
        raise invalid("expectedPresentationResponse", response.language)


def extract(response: LearnerResponse, deps: GradingDeps) -> Any:
    return response.presentation


def grade(question: QuestionData, presentation: Any, context: GradingContext, deps: GradingDeps) -> GradedResponse:
    slides = _slides(presentation)

    if question.response_type == RT.LIVE_RECORDING:
        verdict = deps.oracle.grade_presentation(
            evaluation_model(question, context, presentation),
            context.assignment_id,
            context.language,
        )
        return from_verdict(
            verdict,
            question,
            presentation_type="LIVE_RECORDING",
            slide_count=len(slides),
            recording_duration=sum(float(s.get("duration") or 0) for s in slides),
            grading_rationale=verdict.grading_rationale,
        )

    verdict = deps.oracle.grade_video_presentation(
        evaluation_model(
            question,
            context,
            presentation,
            video_presentation_config=question.video_presentation_config,
        ),
        context.assignment_id,
        context.language,
    )
    return from_verdict(
        verdict,
        question,
        presentation_type="VIDEO_PRESENTATION",
        slides_with_video=sum(1 for s in slides if s.get("video_url") or s.get("videoUrl")),
        slides_with_audio=sum(1 for s in slides if s.get("audio_url") or s.get("audioUrl")),
        total_slides=len(slides),
        grading_rationale=verdict.grading_rationale,
    )


PRESENTATION_STRATEGY = GradingStrategy(
    name="presentation",
    validate=validate,
    extract=extract,
    grade=grade,
)
