# PATH: apps/domains/attempts/grading/strategies/text.py
from __future__ import annotations

from apps.domains.attempts.dto import GradedResponse, GradingContext, LearnerResponse, QuestionData
from apps.domains.attempts.grading.strategies.base import (
    GradingDeps,
    GradingStrategy,
    evaluation_model,
    from_verdict,
    invalid,
)


def validate(question: QuestionData, response: LearnerResponse, deps: GradingDeps) -> None:
    text = response.text or ""
    if not text.strip():
        raise invalid("expectedTextResponse", response.language)

    words = len(text.split())
    if question.max_words and words > question.max_words:
        raise invalid(
            "exceededMaxWords", response.language,
            maxWords=question.max_words, currentWords=words,
        )
    if question.max_characters and len(text) > question.max_characters:
        raise invalid(
            "exceededMaxChars", response.language,
            maxChars=question.max_characters, currentChars=len(text),
        )


def extract(response: LearnerResponse, deps: GradingDeps) -> str:
    return response.text or ""


def grade(question: QuestionData, text: str, context: GradingContext, deps: GradingDeps) -> GradedResponse:
    verdict = deps.oracle.grade_text(
        evaluation_model(question, context, text),
        context.assignment_id,
        context.language,
    )
    return from_verdict(
        verdict,
        question,
        word_count=len(text.split()),
        character_count=len(text),
        grading_rationale=verdict.grading_rationale,
    )


TEXT_STRATEGY = GradingStrategy(name="text", validate=validate, extract=extract, grade=grade)
