import random

import pytest

from apps.domains.attempts.models import AssignmentAttempt
from apps.domains.attempts.services.variant_service import QuestionVariantService

pytestmark = pytest.mark.django_db


class PickLast(random.Random):
    """Always picks the last candidate and reverses on shuffle."""

    def choice(self, seq):
        return seq[-1]

    def shuffle(self, x):
        x.reverse()


class PickFirst(PickLast):
    def choice(self, seq):
        return seq[0]


@pytest.fixture
def attempt(assignment):
    return AssignmentAttempt.objects.create(assignment=assignment, user_id="u1")


def bind(attempt, questions, rng):
    QuestionVariantService.create_attempt_question_variants(attempt=attempt, questions=questions, rng=rng)
    return QuestionVariantService.bindings_for(attempt)


def test_one_binding_per_question(attempt, choice_question, tf_question):
    bindings = bind(attempt, [choice_question, tf_question], random.Random(3))
    assert set(bindings) == {choice_question.id, tf_question.id}


def test_no_variant_without_shuffle_keeps_base_order(attempt, choice_question):
    binding = bind(attempt, [choice_question], PickFirst())[choice_question.id]
    assert binding.question_variant is None
    assert [c["choice"] for c in binding.randomized_choices] == ["Paris", "Rome", "Berlin"]


def test_base_question_flag_shuffles(attempt, choice_question):
    choice_question.randomized_choices = True
    choice_question.save()
    binding = bind(attempt, [choice_question], PickFirst())[choice_question.id]
    assert [c["choice"] for c in binding.randomized_choices] == ["Berlin", "Rome", "Paris"]


def test_variant_flag_governs_shuffle(attempt, choice_question, make_variant):
    choice_question.randomized_choices = True
    choice_question.save()
    variant = make_variant(choice_question, randomized_choices=False)

    binding = bind(attempt, [choice_question], PickLast())[choice_question.id]

    assert binding.question_variant_id == variant.id
    # variant has no choices of its own: base choices, unshuffled
    assert [c["choice"] for c in binding.randomized_choices] == ["Paris", "Rome", "Berlin"]


def test_deleted_variants_are_not_candidates(attempt, choice_question, make_variant):
    make_variant(choice_question, is_deleted=True)
    binding = bind(attempt, [choice_question], PickLast())[choice_question.id]
    assert binding.question_variant is None


def test_question_without_choices(attempt, make_question):
    q = make_question()
    binding = bind(attempt, [q], PickFirst())[q.id]
    assert binding.randomized_choices is None


def test_effective_question_is_stable(attempt, choice_question, make_variant):
    choice_question.randomized_choices = True
    choice_question.save()
    make_variant(choice_question, variant_content="Which city is France's capital?", randomized_choices=True)
    bind(attempt, [choice_question], random.Random(99))

    first = QuestionVariantService.effective_question(
        choice_question, QuestionVariantService.bindings_for(attempt)[choice_question.id]
    )
    second = QuestionVariantService.effective_question(
        choice_question, QuestionVariantService.bindings_for(attempt)[choice_question.id]
    )
    assert first == second


def test_effective_question_uses_variant_and_stored_order(attempt, choice_question, make_variant):
    variant = make_variant(
        choice_question,
        variant_content="Capital of France?",
        randomized_choices=True,
        choices=[
            {"id": 11, "choice": "Paris", "is_correct": True, "points": 2},
            {"id": 12, "choice": "Lyon", "is_correct": False, "points": 0},
        ],
    )
    binding = bind(attempt, [choice_question], PickLast())[choice_question.id]
    effective = QuestionVariantService.effective_question(choice_question, binding)

    assert effective.id == choice_question.id
    assert effective.variant_id == variant.id
    assert effective.question == "Capital of France?"
    assert effective.type == choice_question.type
    assert [c.choice for c in effective.choices] == ["Lyon", "Paris"]
