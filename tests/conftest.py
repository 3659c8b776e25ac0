# tests/conftest.py
import random

import pytest

from apps.domains.assignments.models import Assignment, Question, QuestionVariant
from apps.domains.attempts.dto import GradingContext
from apps.domains.attempts.grading.strategies import GradingDeps
from apps.domains.attempts.oracle import reset_grading_oracle
from apps.domains.attempts.services.attempt_service import AttemptService
from apps.domains.attempts.services.question_response_service import QuestionResponseService

from tests.factories import CAPITAL_CHOICES
from tests.fakes import FakeFetcher, FakeLtiCallback, FakeOracle

QT = Question.QuestionType


@pytest.fixture(autouse=True)
def _fresh_oracle():
    reset_grading_oracle()
    yield
    reset_grading_oracle()


# ======================================================
# collaborators
# ======================================================
@pytest.fixture
def oracle():
    return FakeOracle()


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def deps(oracle, fetcher):
    return GradingDeps(oracle=oracle, fetcher=fetcher)


@pytest.fixture
def context():
    return GradingContext(assignment_instructions="Be precise.", assignment_id=7, language="en")


@pytest.fixture
def lti():
    return FakeLtiCallback(enabled=True)


@pytest.fixture
def question_responses(oracle, fetcher):
    return QuestionResponseService(oracle=oracle, fetcher=fetcher, max_workers=4)


@pytest.fixture
def attempt_service(question_responses, lti):
    return AttemptService(
        question_responses=question_responses,
        lti_callback=lti,
        rng=random.Random(1234),
    )


# ======================================================
# factories
# ======================================================
@pytest.fixture
def make_assignment(db):
    def _make(**kwargs):
        defaults = {"name": "Geography quiz", "instructions": "Answer every question."}
        defaults.update(kwargs)
        return Assignment.objects.create(**defaults)

    return _make


@pytest.fixture
def assignment(make_assignment):
    return make_assignment()


@pytest.fixture
def make_question(assignment):
    def _make(owner=None, **kwargs):
        defaults = {
            "question": "Explain photosynthesis.",
            "type": QT.TEXT,
            "total_points": 10,
        }
        defaults.update(kwargs)
        return Question.objects.create(assignment=owner or assignment, **defaults)

    return _make


@pytest.fixture
def choice_question(make_question):
    return make_question(
        question="What is the capital of France?",
        type=QT.SINGLE_CORRECT,
        total_points=2,
        choices=CAPITAL_CHOICES,
    )


@pytest.fixture
def tf_question(make_question):
    return make_question(
        question="The earth orbits the sun.",
        type=QT.TRUE_FALSE,
        total_points=1,
        answer=True,
    )


@pytest.fixture
def make_variant():
    def _make(question, **kwargs):
        defaults = {"variant_content": f"{question.question} (variant)"}
        defaults.update(kwargs)
        return QuestionVariant.objects.create(variant_of=question, **defaults)

    return _make

