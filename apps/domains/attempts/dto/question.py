# apps/domains/attempts/dto/question.py
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


def _load_json(raw: Any) -> Any:
    """JSON columns may hold a serialized string from older writers."""
    if isinstance(raw, str):
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("unparseable json field: %.80s", raw)
            return None
    return raw


def _opt_int(v: Any) -> Optional[int]:
    if v is None or v == "":
        return None
    try:
        return int(v)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class ChoiceData:
    choice: str
    is_correct: bool = False
    points: float = 0
    feedback: Optional[str] = None
    id: Optional[int] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "ChoiceData":
        return cls(
            choice=str(raw.get("choice") or ""),
            is_correct=bool(raw.get("is_correct", raw.get("isCorrect", False))),
            points=float(raw.get("points") or 0),
            feedback=raw.get("feedback") or None,
            id=_opt_int(raw.get("id")),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "choice": self.choice,
            "is_correct": self.is_correct,
            "points": self.points,
            "feedback": self.feedback,
        }
        if self.id is not None:
            out["id"] = self.id
        return out


def parse_choices(raw: Any) -> List[ChoiceData]:
    data = _load_json(raw)
    if not data or not isinstance(data, list):
        return []
    return [ChoiceData.from_dict(c) for c in data if isinstance(c, dict)]


@dataclass(frozen=True)
class ScoringData:
    type: Optional[str] = None
    rubrics: List[Dict[str, Any]] = field(default_factory=list)
    show_rubrics_to_learner: bool = False

    @classmethod
    def from_raw(cls, raw: Any) -> Optional["ScoringData"]:
        data = _load_json(raw)
        if not isinstance(data, dict):
            return None
        return cls(
            type=data.get("type") or None,
            rubrics=list(data.get("rubrics") or []),
            show_rubrics_to_learner=bool(
                data.get("show_rubrics_to_learner", data.get("showRubricsToLearner", False))
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "rubrics": list(self.rubrics),
            "show_rubrics_to_learner": self.show_rubrics_to_learner,
        }


@dataclass(frozen=True)
class QuestionData:
    """
    Effective question as graded: base question merged with the bound
    variant and, when requested, a translation.
    """

    id: int
    question: str
    type: str
    total_points: float = 0
    response_type: Optional[str] = None
    choices: List[ChoiceData] = field(default_factory=list)
    scoring: Optional[ScoringData] = None
    answer: Optional[bool] = None
    max_words: Optional[int] = None
    max_characters: Optional[int] = None
    grading_context_question_ids: List[int] = field(default_factory=list)
    randomized_choices: bool = False
    assignment_id: Optional[int] = None
    variant_id: Optional[int] = None
    video_presentation_config: Optional[Dict[str, Any]] = None

    # -----------------------------
    # decoders
    # -----------------------------
    @classmethod
    def from_model(cls, q) -> "QuestionData":
        return cls(
            id=int(q.id),
            question=q.question,
            type=q.type,
            total_points=float(q.total_points or 0),
            response_type=q.response_type,
            choices=parse_choices(q.choices),
            scoring=ScoringData.from_raw(q.scoring),
            answer=q.answer,
            max_words=q.max_words,
            max_characters=q.max_characters,
            grading_context_question_ids=[int(x) for x in (q.grading_context_question_ids or [])],
            randomized_choices=bool(q.randomized_choices),
            assignment_id=q.assignment_id,
            video_presentation_config=_load_json(q.video_presentation_config),
        )

    @classmethod
    def from_variant(cls, variant, base) -> "QuestionData":
        """
        Variant overrides text / limits / scoring / choices.
        type, total_points, response_type and grading context always
        come from the base question.
        """
        base_data = cls.from_model(base)
        variant_choices = parse_choices(variant.choices)
        return replace(
            base_data,
            question=variant.variant_content,
            choices=variant_choices or base_data.choices,
            scoring=ScoringData.from_raw(variant.scoring) or base_data.scoring,
            answer=base.answer if base.answer is not None else variant.answer,
            max_words=variant.max_words if variant.max_words is not None else base.max_words,
            max_characters=(
                variant.max_characters if variant.max_characters is not None else base.max_characters
            ),
            randomized_choices=bool(variant.randomized_choices),
            variant_id=int(variant.id),
        )

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "QuestionData":
        """Author preview payloads (unsaved questions)."""
        if raw.get("id") is None:
            raise ValueError("question id is required")
        return cls(
            id=int(raw["id"]),
            question=str(raw.get("question") or ""),
            type=raw.get("type") or "",
            total_points=float(raw.get("total_points") or 0),
            response_type=raw.get("response_type"),
            choices=parse_choices(raw.get("choices")),
            scoring=ScoringData.from_raw(raw.get("scoring")),
            answer=raw.get("answer"),
            max_words=_opt_int(raw.get("max_words")),
            max_characters=_opt_int(raw.get("max_characters")),
            grading_context_question_ids=[int(x) for x in (raw.get("grading_context_question_ids") or [])],
            randomized_choices=bool(raw.get("randomized_choices", False)),
            assignment_id=_opt_int(raw.get("assignment_id")),
            video_presentation_config=raw.get("video_presentation_config"),
        )

    # -----------------------------
    # helpers
    # -----------------------------
    def with_choices(self, choices: List[ChoiceData]) -> "QuestionData":
        return replace(self, choices=list(choices))

    def with_text(self, text: str) -> "QuestionData":
        return replace(self, question=text)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "question": self.question,
            "type": self.type,
            "total_points": self.total_points,
            "response_type": self.response_type,
            "choices": [c.to_dict() for c in self.choices],
            "scoring": self.scoring.to_dict() if self.scoring else None,
            "answer": self.answer,
            "max_words": self.max_words,
            "max_characters": self.max_characters,
            "grading_context_question_ids": list(self.grading_context_question_ids),
            "randomized_choices": self.randomized_choices,
            "assignment_id": self.assignment_id,
            "variant_id": self.variant_id,
        }
