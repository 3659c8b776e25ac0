# PATH: apps/domains/attempts/services/translation_service.py
from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional

from django.db.models import Q

from apps.domains.assignments.models import Question, Translation
from apps.domains.attempts.dto import ChoiceData, LearnerResponse, QuestionData, parse_choices
from apps.domains.attempts.grading.localization import normalize_language
from apps.domains.attempts.models import AssignmentAttempt, AssignmentAttemptQuestionVariant
from apps.domains.attempts.services.access import answerable_questions
from apps.domains.attempts.services.variant_service import QuestionVariantService

logger = logging.getLogger(__name__)


def is_default_language(language: Optional[str]) -> bool:
    return not language or normalize_language(language) == "en"


def choice_permutation(ordered: List[ChoiceData], base: List[ChoiceData]) -> List[int]:
    """
    Index into `base` for every entry of `ordered` (match by id, else by
    literal text). -1 where nothing matches.
    """
    out: List[int] = []
    for c in ordered:
        idx = -1
        for i, b in enumerate(base):
            if (c.id is not None and b.id == c.id) or (c.id is None and b.choice == c.choice):
                idx = i
                break
        out.append(idx)
    return out


def apply_permutation(items: List[Any], permutation: List[int]) -> List[Any]:
    """Reorder only when the permutation covers every item exactly."""
    if len(items) != len(permutation) or any(i < 0 or i >= len(items) for i in permutation):
        return items
    return [items[i] for i in permutation]


def merge_translated_choices(translated: List[ChoiceData], base: List[ChoiceData]) -> List[ChoiceData]:
    """
    Translated rows carry text (and sometimes feedback); grading fields
    always come from the base choice at the same id, else same position.
    """
    by_id = {b.id: b for b in base if b.id is not None}
    merged: List[ChoiceData] = []
    for i, t in enumerate(translated):
        ref = by_id.get(t.id) if t.id is not None else None
        if ref is None and i < len(base):
            ref = base[i]
        if ref is None:
            merged.append(t)
            continue
        merged.append(replace(ref, choice=t.choice, feedback=t.feedback or ref.feedback))
    return merged


class TranslationService:
    # -----------------------------
    # lookup
    # -----------------------------
    @staticmethod
    def find_translation(
        *,
        question_id: int,
        variant_id: Optional[int],
        language: str,
    ) -> Optional[Translation]:
        """Variant translation first, then the base question's."""
        if variant_id is not None:
            row = Translation.objects.filter(
                question_id=question_id,
                variant_id=variant_id,
                language_code=language,
            ).first()
            if row is not None:
                return row
        return Translation.objects.filter(
            question_id=question_id,
            variant__isnull=True,
            language_code=language,
        ).first()

    @staticmethod
    def translations_map(
        *,
        question_ids: Iterable[int],
        variant_ids: Iterable[int],
    ) -> Dict[str, Dict[str, Dict[str, Any]]]:
        """
        "question-<id>" / "variant-<id>" -> {language: {translated_text, translated_choices}}
        """
        question_ids = list(question_ids)
        variant_ids = [v for v in variant_ids if v is not None]
        if not question_ids and not variant_ids:
            return {}

        cond = Q(question_id__in=question_ids, variant__isnull=True)
        if variant_ids:
            cond |= Q(variant_id__in=variant_ids)

        out: Dict[str, Dict[str, Dict[str, Any]]] = defaultdict(dict)
        for t in Translation.objects.filter(cond):
            key = f"variant-{t.variant_id}" if t.variant_id else f"question-{t.question_id}"
            out[key][t.language_code] = {
                "translated_text": t.translated_text,
                "translated_choices": t.translated_choices,
            }
        return dict(out)

    # -----------------------------
    # overlay
    # -----------------------------
    @staticmethod
    def apply_translation(
        question: QuestionData,
        language: Optional[str],
        *,
        base_choices: Optional[List[ChoiceData]] = None,
    ) -> QuestionData:
        """
        Overlay text/choices of `language` onto an effective question.

        base_choices is the unshuffled choice list the translation rows
        are written against; when the question's choices were shuffled
        for the attempt, translated choices follow the same order.
        """
        if is_default_language(language):
            return question

        row = TranslationService.find_translation(
            question_id=question.id,
            variant_id=question.variant_id,
            language=normalize_language(language),
        )
        if row is None:
            return question

        translated = question.with_text(row.translated_text or question.question)
        translated_choices = parse_choices(row.translated_choices)
        if not translated_choices:
            return translated

        base = base_choices if base_choices is not None else question.choices
        merged = merge_translated_choices(translated_choices, base)
        merged = apply_permutation(merged, choice_permutation(question.choices, base))
        return translated.with_choices(merged)

    @staticmethod
    def pre_translate_questions(
        *,
        responses: List[LearnerResponse],
        attempt: AssignmentAttempt,
        language: Optional[str],
    ) -> Dict[int, QuestionData]:
        """
        question id -> translated effective question, for grading in
        the learner's language. Empty for the default language.
        """
        if is_default_language(language):
            return {}

        bindings = QuestionVariantService.bindings_for(attempt)
        ids = [r.question_id for r in responses]
        questions = answerable_questions(attempt=attempt, question_ids=ids)

        out: Dict[int, QuestionData] = {}
        for qid in ids:
            q = questions.get(qid)
            if q is None:
                continue
            binding = bindings.get(qid)
            effective = QuestionVariantService.effective_question(q, binding)
            out[qid] = TranslationService.apply_translation(
                effective,
                language,
                base_choices=unshuffled_choices(q, binding),
            )
        return out


def unshuffled_choices(question: Question, binding: Optional[AssignmentAttemptQuestionVariant]) -> List[ChoiceData]:
    variant = binding.question_variant if binding is not None else None
    if variant is not None and variant.choices is not None:
        return parse_choices(variant.choices)
    return parse_choices(question.choices)
