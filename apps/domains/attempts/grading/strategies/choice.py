# PATH: apps/domains/attempts/grading/strategies/choice.py
"""
SINGLE_CORRECT / MULTIPLE_CORRECT grading.

Learner choices are matched against choice texts after normalize_text
(trim, lowercase, punctuation removed).

single   : matched correct -> that choice's points, matched incorrect -> 0
           (or the choice's own negative points), unmatched -> 0
multiple : sum(correct matched) [- sum(incorrect matched) under LOSS_PER_MISTAKE]
           clamped to [0, sum(correct points)]
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from apps.domains.assignments.models import Question
from apps.domains.attempts.dto import (
    ChoiceData,
    FeedbackItem,
    GradedResponse,
    GradingContext,
    LearnerResponse,
    QuestionData,
)
from apps.domains.attempts.grading.localization import (
    format_feedback,
    format_points,
    get_localized_string,
    normalize_text,
)
from apps.domains.attempts.grading.strategies.base import GradingDeps, GradingStrategy, invalid

QT = Question.QuestionType


def validate(question: QuestionData, response: LearnerResponse, deps: GradingDeps) -> None:
    if question.type not in (QT.SINGLE_CORRECT, QT.MULTIPLE_CORRECT):
        raise invalid("unsupportedChoiceType", response.language, type=question.type)
    if question.type == QT.SINGLE_CORRECT and response.choices and len(response.choices) > 1:
        raise invalid("tooManyChoicesSelected", response.language, max=1)


def extract(response: LearnerResponse, deps: GradingDeps) -> List[str]:
    return [str(c) for c in (response.choices or [])]


def grade(question: QuestionData, learner_choices: List[str], context: GradingContext, deps: GradingDeps) -> GradedResponse:
    if question.type == QT.SINGLE_CORRECT:
        return grade_single(question, learner_choices, context.language)
    return grade_multiple(question, learner_choices, context.language)


def _find(choices: List[ChoiceData], learner_choice: str) -> Optional[ChoiceData]:
    target = normalize_text(learner_choice)
    for c in choices:
        if normalize_text(c.choice) == target:
            return c
    return None


def _choice_feedback(choice: ChoiceData, data: Dict[str, Any], language: str) -> str:
    if choice.feedback:
        return format_feedback(choice.feedback, data)
    key = "correctSelection" if choice.is_correct else "incorrectSelection"
    return get_localized_string(key, language, data)


# -----------------------------
# single
# -----------------------------
def grade_single(question: QuestionData, learner_choices: List[str], language: str) -> GradedResponse:
    if not learner_choices:
        return GradedResponse(
            total_points=0,
            feedback=[FeedbackItem(get_localized_string("noOptionSelected", language), choice="")],
        )

    choices = question.choices
    learner_choice = learner_choices[0]
    correct = next((c for c in choices if c.is_correct), None)
    selected = _find(choices, learner_choice)

    if selected is None:
        return GradedResponse(
            total_points=0,
            feedback=[
                FeedbackItem(
                    get_localized_string("invalidSelection", language, {"learnerChoice": learner_choice}),
                    choice=learner_choice,
                )
            ],
            metadata={
                "is_correct": False,
                "error": "invalidSelection",
                "correct_choice": correct.choice if correct else None,
            },
        )

    data = {
        "learnerChoice": learner_choice,
        "correctChoice": correct.choice if correct else "",
        "points": format_points(selected.points),
    }
    points = selected.points if selected.is_correct else min(0.0, selected.points)

    return GradedResponse(
        total_points=points,
        feedback=[FeedbackItem(_choice_feedback(selected, data, language), choice=learner_choice)],
        metadata={
            "is_correct": selected.is_correct,
            "correct_choice": correct.choice if correct else None,
            "possible_points": selected.points,
            "scored_points": points,
        },
    )


# -----------------------------
# multiple
# -----------------------------
def grade_multiple(question: QuestionData, learner_choices: List[str], language: str) -> GradedResponse:
    if not learner_choices:
        return GradedResponse(
            total_points=0,
            feedback=[FeedbackItem(get_localized_string("noOptionSelected", language), choice=[])],
        )

    loss_per_mistake = bool(
        question.scoring and question.scoring.type == Question.ScoringType.LOSS_PER_MISTAKE
    )
    choices = question.choices
    correct_choices = [c for c in choices if c.is_correct]
    correct_texts = {normalize_text(c.choice) for c in correct_choices}
    normalized_learner = {normalize_text(c) for c in learner_choices}

    total = 0.0
    details: List[str] = []
    selected: List[Dict[str, Any]] = []

    seen = set()
    for learner_choice in learner_choices:
        key = normalize_text(learner_choice)
        if key in seen:
            continue
        seen.add(key)

        matched = _find(choices, learner_choice)
        if matched is None:
            msg = get_localized_string("invalidSelection", language, {"learnerChoice": learner_choice})
            selected.append({"choice": learner_choice, "is_correct": False, "points": 0, "feedback": msg})
            details.append(msg)
            continue

        selected.append(matched.to_dict())
        if matched.is_correct:
            total += matched.points
        elif loss_per_mistake:
            total -= matched.points

        data = {"learnerChoice": learner_choice, "points": format_points(matched.points)}
        details.append(_choice_feedback(matched, data, language))

    max_points = sum(c.points for c in correct_choices)
    final_points = max(0.0, min(total, max_points))

    all_correct_selected = all(t in normalized_learner for t in correct_texts)
    no_incorrect_selected = all(t in correct_texts for t in normalized_learner)
    perfect = all_correct_selected and no_incorrect_selected

    if perfect:
        summary = get_localized_string("allCorrectSelected", language)
    else:
        summary = get_localized_string(
            "correctOptions",
            language,
            {"correctOptions": ", ".join(c.choice for c in correct_choices)},
        )
    message = ".\n".join(details) + ".\n" + summary

    return GradedResponse(
        total_points=final_points,
        feedback=[FeedbackItem(message.strip(), choice=", ".join(learner_choices))],
        metadata={
            "selected_choices": selected,
            "correct_choices": [c.choice for c in correct_choices],
            "max_points": max_points,
            "actual_points": total,
            "final_points": final_points,
            "perfect_score": perfect,
            "all_correct_selected": all_correct_selected,
            "no_incorrect_selected": no_incorrect_selected,
        },
    )


CHOICE_STRATEGY = GradingStrategy(name="choice", validate=validate, extract=extract, grade=grade)
