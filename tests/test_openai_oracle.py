from types import SimpleNamespace

import pytest

from apps.domains.attempts.dto import QuestionAnswerContext
from apps.domains.attempts.exceptions import GradingFailure
from apps.domains.attempts.oracle import EvaluationModel
from apps.domains.attempts.oracle.openai_oracle import OpenAIGradingOracle, build_prompt, parse_verdict


def evaluation(**kwargs):
    defaults = {
        "question": "Explain photosynthesis.",
        "question_answer_context": [QuestionAnswerContext(question="Define light.", answer="Radiation.")],
        "assignment_instructions": "Be precise.",
        "learner_response": "Plants turn light into sugar.",
        "total_points": 5,
        "scoring_type": "CRITERIA_BASED",
        "response_type": "ESSAY",
    }
    defaults.update(kwargs)
    return EvaluationModel(**defaults)


class FakeCompletions:
    def __init__(self, content):
        self.content = content
        self.requests = []

    def create(self, **kwargs):
        self.requests.append(kwargs)
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_client(content):
    completions = FakeCompletions(content)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


def test_prompt_carries_question_and_context():
    prompt = build_prompt("text", evaluation(), "fr")

    assert "Explain photosynthesis." in prompt
    assert "Define light." in prompt
    assert "Plants turn light into sugar." in prompt
    assert "Total Points Available: 5" in prompt
    assert "this language: fr" in prompt


def test_verdict_points_are_clamped():
    assert parse_verdict('{"points": 9, "feedback": "ok"}', 5).points == 5
    assert parse_verdict('{"points": -2, "feedback": "ok"}', 5).points == 0


def test_verdict_reads_rationale():
    v = parse_verdict('{"points": 3, "feedback": "good", "gradingRationale": "clear"}', 5)
    assert (v.points, v.feedback, v.grading_rationale) == (3, "good", "clear")


@pytest.mark.parametrize("content", ["not json", '{"points": "lots"}'])
def test_bad_verdict_raises(content):
    with pytest.raises(GradingFailure):
        parse_verdict(content, 5)


def test_oracle_calls_chat_completions():
    client, completions = fake_client('{"points": 4, "feedback": "Nice"}')
    oracle = OpenAIGradingOracle(model_name="test-model", client=client)

    verdict = oracle.grade_url(evaluation(), assignment_id=7, language="en")

    assert verdict.points == 4
    assert verdict.feedback == "Nice"
    sent = completions.requests[0]
    assert sent["model"] == "test-model"
    assert sent["response_format"] == {"type": "json_object"}
    assert "content retrieved from the URL" in sent["messages"][1]["content"]
