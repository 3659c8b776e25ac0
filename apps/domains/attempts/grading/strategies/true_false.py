# PATH: apps/domains/attempts/grading/strategies/true_false.py
from __future__ import annotations

from apps.domains.attempts.dto import (
    FeedbackItem,
    GradedResponse,
    GradingContext,
    LearnerResponse,
    QuestionData,
)
from apps.domains.attempts.grading.boolean_tokens import parse_boolean_token
from apps.domains.attempts.grading.localization import get_localized_string
from apps.domains.attempts.grading.strategies.base import GradingDeps, GradingStrategy, invalid


def validate(question: QuestionData, response: LearnerResponse, deps: GradingDeps) -> None:
    value = response.answer_choice
    if value is None:
        raise invalid("expectedTrueFalse", response.language)
    if isinstance(value, str) and parse_boolean_token(value, response.language, deps.boolean_tokens) is None:
        raise invalid("invalidTrueFalse", response.language)


def extract(response: LearnerResponse, deps: GradingDeps) -> bool:
    value = response.answer_choice
    if isinstance(value, str):
        parsed = parse_boolean_token(value, response.language, deps.boolean_tokens)
        if parsed is not None:
            return parsed
    return bool(value)


def grade(question: QuestionData, learner_answer: bool, context: GradingContext, deps: GradingDeps) -> GradedResponse:
    language = context.language
    correct_answer = question.answer
    is_correct = correct_answer is not None and learner_answer == correct_answer

    if is_correct:
        message = get_localized_string("correctTF", language)
    else:
        answer_label = get_localized_string("true" if correct_answer else "false", language)
        message = get_localized_string("incorrectTF", language, {"correctAnswer": answer_label})

    possible = question.total_points or (question.choices[0].points if question.choices else 0)
    awarded = possible if is_correct else 0

    return GradedResponse(
        total_points=awarded,
        feedback=[FeedbackItem(message, choice=learner_answer)],
        metadata={
            "is_correct": is_correct,
            "learner_response": learner_answer,
            "correct_answer": correct_answer,
            "possible_points": possible,
            "awarded_points": awarded,
        },
    )


TRUE_FALSE_STRATEGY = GradingStrategy(name="true_false", validate=validate, extract=extract, grade=grade)
