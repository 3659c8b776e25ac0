# apps/domains/attempts/dto/response.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class LearnerResponse:
    """
    One submitted answer. Exactly which field is meaningful depends on
    the question type; the others stay None.
    """

    question_id: int
    text: Optional[str] = None
    url: Optional[str] = None
    choices: Optional[List[str]] = None
    answer_choice: Any = None  # bool, or a localized token string
    files: Optional[List[Dict[str, Any]]] = None
    presentation: Any = None
    language: str = "en"

    @classmethod
    def from_dict(cls, raw: Dict[str, Any], *, language: str = "en") -> "LearnerResponse":
        return cls(
            question_id=int(raw["id"]),
            text=raw.get("learner_text_response"),
            url=raw.get("learner_url_response"),
            choices=raw.get("learner_choices"),
            answer_choice=raw.get("learner_answer_choice"),
            files=raw.get("learner_file_response"),
            presentation=raw.get("learner_presentation_response"),
            language=language or "en",
        )

    def is_empty(self) -> bool:
        if self.files:
            return False
        if self.url and self.url.strip():
            return False
        if self.text and self.text.strip():
            return False
        if self.choices:
            return False
        if self.answer_choice is not None:
            return False
        if self.presentation:
            return False
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.question_id,
            "learner_text_response": self.text,
            "learner_url_response": self.url,
            "learner_choices": self.choices,
            "learner_answer_choice": self.answer_choice,
            "learner_file_response": self.files,
            "learner_presentation_response": self.presentation,
            "language": self.language,
        }


@dataclass
class FeedbackItem:
    feedback: str
    choice: Any = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"feedback": self.feedback}
        if self.choice is not None:
            out["choice"] = self.choice
        return out


@dataclass
class GradedResponse:
    total_points: float
    feedback: List[FeedbackItem] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    question_id: Optional[int] = None
    question: Optional[str] = None
    id: Optional[int] = None

    @classmethod
    def single(cls, points: float, message: str, **metadata) -> "GradedResponse":
        return cls(total_points=points, feedback=[FeedbackItem(message)], metadata=dict(metadata))

    def feedback_dicts(self) -> List[Dict[str, Any]]:
        return [f.to_dict() for f in self.feedback]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "question_id": self.question_id,
            "question": self.question,
            "total_points": self.total_points,
            "feedback": self.feedback_dicts(),
            "metadata": dict(self.metadata),
        }
