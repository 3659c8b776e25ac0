# PATH: apps/domains/attempts/oracle/openai_oracle.py
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from django.conf import settings
from openai import OpenAI

from apps.domains.attempts.exceptions import GradingFailure
from apps.domains.attempts.oracle.port import EvaluationModel, OracleVerdict
from apps.domains.attempts.oracle.prompts import (
    GRADING_TEMPLATE,
    KIND_INTRO,
    RESPONSE_TYPE_INSTRUCTIONS,
    SYSTEM_PROMPT,
)

logger = logging.getLogger(__name__)

_client: Optional[OpenAI] = None


def _get_client() -> OpenAI:
    global _client
    if _client is not None:
        return _client

    api_key = getattr(settings, "OPENAI_API_KEY", None)
    if not api_key:
        raise GradingFailure("OPENAI_API_KEY not set")

    _client = OpenAI(
        api_key=api_key,
        timeout=float(getattr(settings, "GRADING_ORACLE_TIMEOUT_SECONDS", 60)),
    )
    return _client


def _dump(v: Any) -> str:
    if isinstance(v, str):
        return v
    return json.dumps(v, ensure_ascii=False, default=str)


def build_prompt(kind: str, model: EvaluationModel, language: Optional[str]) -> str:
    return GRADING_TEMPLATE.format(
        intro=KIND_INTRO.get(kind, KIND_INTRO["text"]),
        question=model.question,
        assignment_instructions=model.assignment_instructions or "",
        previous_questions_and_answers=_dump([c.to_dict() for c in model.question_answer_context]),
        learner_response=_dump(model.learner_response),
        response_specific_instruction=RESPONSE_TYPE_INSTRUCTIONS.get(model.response_type or "", ""),
        total_points=model.total_points,
        scoring_type=model.scoring_type or "",
        scoring_criteria=_dump(model.scoring or {}),
        language=language or "en",
    )


def parse_verdict(content: str, total_points: float) -> OracleVerdict:
    try:
        data: Dict[str, Any] = json.loads(content or "")
    except ValueError as e:
        raise GradingFailure(f"Failed to parse grading response: {e}") from e

    try:
        points = float(data.get("points", 0) or 0)
    except (TypeError, ValueError) as e:
        raise GradingFailure("Grading response carried non-numeric points") from e

    points = max(0.0, min(points, float(total_points or 0)))
    return OracleVerdict(
        points=points,
        feedback=str(data.get("feedback") or ""),
        grading_rationale=data.get("gradingRationale") or data.get("grading_rationale"),
    )


class OpenAIGradingOracle:
    """GradingOracle backed by the OpenAI chat completions API."""

    def __init__(self, *, model_name: Optional[str] = None, client: Optional[OpenAI] = None):
        self.model_name = model_name or getattr(settings, "GRADING_ORACLE_MODEL", "gpt-4o-mini")
        self._client = client

    def _complete(self, kind: str, model: EvaluationModel, assignment_id: Optional[int], language: Optional[str]) -> OracleVerdict:
        client = self._client or _get_client()
        prompt = build_prompt(kind, model, language)

        logger.info(
            "oracle request kind=%s assignment=%s model=%s",
            kind, assignment_id, self.model_name,
        )
        response = client.chat.completions.create(
            model=self.model_name,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            response_format={"type": "json_object"},
            temperature=0.2,
        )
        content = response.choices[0].message.content
        return parse_verdict(content, model.total_points)

    def grade_text(self, model, assignment_id, language=None):
        return self._complete("text", model, assignment_id, language)

    def grade_file(self, model, assignment_id, language=None):
        return self._complete("file", model, assignment_id, language)

    def grade_url(self, model, assignment_id, language=None):
        return self._complete("url", model, assignment_id, language)

    def grade_presentation(self, model, assignment_id, language=None):
        return self._complete("presentation", model, assignment_id, language)

    def grade_video_presentation(self, model, assignment_id, language=None):
        return self._complete("video_presentation", model, assignment_id, language)
