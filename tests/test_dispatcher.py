import pytest

from apps.domains.attempts.grading.dispatcher import get_strategy
from apps.domains.attempts.grading.strategies import (
    CHOICE_STRATEGY,
    FILE_STRATEGY,
    PRESENTATION_STRATEGY,
    TEXT_STRATEGY,
    TRUE_FALSE_STRATEGY,
    URL_STRATEGY,
)


@pytest.mark.parametrize(
    "question_type, response_type, expected",
    [
        ("TEXT", None, TEXT_STRATEGY),
        ("URL", None, URL_STRATEGY),
        ("TRUE_FALSE", None, TRUE_FALSE_STRATEGY),
        ("SINGLE_CORRECT", None, CHOICE_STRATEGY),
        ("MULTIPLE_CORRECT", None, CHOICE_STRATEGY),
        ("UPLOAD", None, FILE_STRATEGY),
        ("UPLOAD", "OTHER", FILE_STRATEGY),
        ("UPLOAD", "LIVE_RECORDING", PRESENTATION_STRATEGY),
        ("UPLOAD", "PRESENTATION", PRESENTATION_STRATEGY),
    ],
)
def test_dispatch_table(question_type, response_type, expected):
    assert get_strategy(question_type, response_type) is expected


def test_link_file_is_decided_by_payload():
    assert get_strategy("LINK_FILE") is None


@pytest.mark.parametrize("question_type", [None, ""])
def test_missing_type_is_a_programming_error(question_type):
    with pytest.raises(ValueError):
        get_strategy(question_type)


def test_unknown_type():
    with pytest.raises(ValueError):
        get_strategy("ESSAY_PLUS")
