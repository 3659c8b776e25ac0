# PATH: apps/domains/attempts/services/variant_service.py
from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from apps.domains.assignments.models import Question
from apps.domains.attempts.dto import QuestionData, parse_choices
from apps.domains.attempts.models import AssignmentAttempt, AssignmentAttemptQuestionVariant

logger = logging.getLogger(__name__)


def _maybe_shuffle(raw_choices, should_shuffle: bool, rng: random.Random) -> Optional[List[dict]]:
    if raw_choices is None:
        return None
    choices = [c.to_dict() for c in parse_choices(raw_choices)]
    if should_shuffle:
        rng.shuffle(choices)
    return choices


class QuestionVariantService:
    """
    Variant binding per attempt.

    candidates = [no variant] + live variants, picked uniformly.
    The chosen entity's randomized_choices flag decides whether its
    choice list is shuffled; the resulting list is stored as-is so
    every later read renders the same order.
    """

    @staticmethod
    def create_attempt_question_variants(
        *,
        attempt: AssignmentAttempt,
        questions: Iterable[Question],
        rng: Optional[random.Random] = None,
    ) -> List[AssignmentAttemptQuestionVariant]:
        rng = rng or random.Random()
        rows: List[AssignmentAttemptQuestionVariant] = []

        for q in questions:
            variants = [v for v in q.variants.all() if not v.is_deleted]
            chosen = rng.choice([None] + variants)

            if chosen is not None:
                source = chosen.choices if chosen.choices is not None else q.choices
                randomized = _maybe_shuffle(source, bool(chosen.randomized_choices), rng)
            else:
                randomized = _maybe_shuffle(q.choices, bool(q.randomized_choices), rng)

            rows.append(
                AssignmentAttemptQuestionVariant(
                    attempt=attempt,
                    question=q,
                    question_variant=chosen,
                    randomized_choices=randomized,
                )
            )

        return AssignmentAttemptQuestionVariant.objects.bulk_create(rows)

    @staticmethod
    def bindings_for(attempt: AssignmentAttempt) -> Dict[int, AssignmentAttemptQuestionVariant]:
        qs = attempt.question_variants.select_related("question_variant", "question")
        return {b.question_id: b for b in qs}

    @staticmethod
    def effective_question(
        question: Question,
        binding: Optional[AssignmentAttemptQuestionVariant],
    ) -> QuestionData:
        """Base question merged with the attempt's bound variant and stored choice order."""
        if binding is not None and binding.question_variant is not None:
            data = QuestionData.from_variant(binding.question_variant, question)
        else:
            data = QuestionData.from_model(question)

        if binding is not None and binding.randomized_choices:
            stored = parse_choices(binding.randomized_choices)
            if stored:
                data = replace(data, choices=stored)
        return data
