import random

import pytest

from apps.domains.assignments.models import Translation
from apps.domains.attempts.dto import ChoiceData, LearnerResponse
from apps.domains.attempts.models import AssignmentAttempt
from apps.domains.attempts.services.translation_service import (
    TranslationService,
    apply_permutation,
    choice_permutation,
    merge_translated_choices,
    unshuffled_choices,
)
from apps.domains.attempts.services.variant_service import QuestionVariantService

FR_CHOICES = [
    {"id": 1, "choice": "Paris (fr)"},
    {"id": 2, "choice": "Rome (fr)"},
    {"id": 3, "choice": "Berlin (fr)"},
]


class ReverseShuffle(random.Random):
    def __init__(self, pick=0):
        super().__init__(0)
        self.pick = pick

    def choice(self, seq):
        return seq[self.pick]

    def shuffle(self, x):
        x.reverse()


# ======================================================
# pure helpers
# ======================================================
def test_permutation_by_text_when_ids_are_missing():
    base = [ChoiceData("a"), ChoiceData("b"), ChoiceData("c")]
    ordered = [ChoiceData("c"), ChoiceData("a"), ChoiceData("b")]
    perm = choice_permutation(ordered, base)
    assert perm == [2, 0, 1]
    assert apply_permutation(["A", "B", "C"], perm) == ["C", "A", "B"]


def test_incomplete_permutation_leaves_order():
    assert apply_permutation(["A", "B"], [1, -1]) == ["A", "B"]
    assert apply_permutation(["A", "B"], [0]) == ["A", "B"]


def test_merge_takes_grading_fields_from_base():
    base = [ChoiceData("Paris", True, 2, "good", id=1), ChoiceData("Rome", False, 0, id=2)]
    merged = merge_translated_choices([ChoiceData("Rome (fr)", id=2), ChoiceData("Paris (fr)", id=1)], base)
    assert merged[0] == ChoiceData("Rome (fr)", False, 0, None, id=2)
    assert merged[1] == ChoiceData("Paris (fr)", True, 2, "good", id=1)


# ======================================================
# overlay
# ======================================================
@pytest.fixture
def shuffled_attempt(assignment, choice_question):
    choice_question.randomized_choices = True
    choice_question.save()
    attempt = AssignmentAttempt.objects.create(assignment=assignment, user_id="u1")
    QuestionVariantService.create_attempt_question_variants(
        attempt=attempt, questions=[choice_question], rng=ReverseShuffle()
    )
    return attempt


def effective_and_base(attempt, question):
    binding = QuestionVariantService.bindings_for(attempt)[question.id]
    return QuestionVariantService.effective_question(question, binding), unshuffled_choices(question, binding)


@pytest.mark.django_db
def test_default_language_is_untouched(shuffled_attempt, choice_question):
    effective, base = effective_and_base(shuffled_attempt, choice_question)
    assert TranslationService.apply_translation(effective, "en-US", base_choices=base) is effective


@pytest.mark.django_db
def test_missing_translation_falls_back_to_question(shuffled_attempt, choice_question):
    effective, base = effective_and_base(shuffled_attempt, choice_question)
    assert TranslationService.apply_translation(effective, "de", base_choices=base) == effective


@pytest.mark.django_db
def test_translated_choices_follow_attempt_order(shuffled_attempt, choice_question):
    Translation.objects.create(
        question=choice_question,
        language_code="fr",
        translated_text="Quelle est la capitale de la France ?",
        translated_choices=FR_CHOICES,
    )
    effective, base = effective_and_base(shuffled_attempt, choice_question)

    translated = TranslationService.apply_translation(effective, "fr-FR", base_choices=base)

    assert translated.question == "Quelle est la capitale de la France ?"
    assert [c.choice for c in effective.choices] == ["Berlin", "Rome", "Paris"]
    assert [c.choice for c in translated.choices] == ["Berlin (fr)", "Rome (fr)", "Paris (fr)"]
    paris = translated.choices[2]
    assert paris.is_correct is True and paris.points == 2


@pytest.mark.django_db
def test_variant_translation_wins(assignment, choice_question, make_variant):
    variant = make_variant(choice_question, variant_content="Capital of France?")
    Translation.objects.create(question=choice_question, language_code="fr", translated_text="base fr")
    Translation.objects.create(question=choice_question, variant=variant, language_code="fr", translated_text="variant fr")

    attempt = AssignmentAttempt.objects.create(assignment=assignment, user_id="u1")
    QuestionVariantService.create_attempt_question_variants(
        attempt=attempt, questions=[choice_question], rng=ReverseShuffle(pick=-1)
    )
    effective, base = effective_and_base(attempt, choice_question)

    assert TranslationService.apply_translation(effective, "fr", base_choices=base).question == "variant fr"


@pytest.mark.django_db
def test_variant_without_translation_uses_base_row(assignment, choice_question, make_variant):
    make_variant(choice_question, variant_content="Capital of France?")
    Translation.objects.create(question=choice_question, language_code="fr", translated_text="base fr")

    attempt = AssignmentAttempt.objects.create(assignment=assignment, user_id="u1")
    QuestionVariantService.create_attempt_question_variants(
        attempt=attempt, questions=[choice_question], rng=ReverseShuffle(pick=-1)
    )
    effective, base = effective_and_base(attempt, choice_question)

    assert TranslationService.apply_translation(effective, "fr", base_choices=base).question == "base fr"


@pytest.mark.django_db
def test_translations_map_keys(choice_question, make_variant):
    variant = make_variant(choice_question)
    Translation.objects.create(question=choice_question, language_code="fr", translated_text="fr")
    Translation.objects.create(question=choice_question, language_code="es", translated_text="es")
    Translation.objects.create(question=choice_question, variant=variant, language_code="fr", translated_text="vfr")

    out = TranslationService.translations_map(question_ids=[choice_question.id], variant_ids=[variant.id, None])

    assert set(out[f"question-{choice_question.id}"]) == {"fr", "es"}
    assert out[f"variant-{variant.id}"]["fr"]["translated_text"] == "vfr"


@pytest.mark.django_db
def test_pre_translate_questions(shuffled_attempt, choice_question):
    Translation.objects.create(
        question=choice_question, language_code="fr", translated_text="FR", translated_choices=FR_CHOICES,
    )
    responses = [LearnerResponse(question_id=choice_question.id)]

    assert TranslationService.pre_translate_questions(responses=responses, attempt=shuffled_attempt, language="en") == {}

    out = TranslationService.pre_translate_questions(responses=responses, attempt=shuffled_attempt, language="fr")
    assert out[choice_question.id].question == "FR"
