# apps/domains/attempts/dto/context.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

LEARNER = "LEARNER"
AUTHOR = "AUTHOR"


@dataclass(frozen=True)
class QuestionAnswerContext:
    question: str
    answer: str
    question_id: Optional[int] = None
    question_type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"question": self.question, "answer": self.answer}


@dataclass
class GradingContext:
    assignment_instructions: str = ""
    question_answer_context: List[QuestionAnswerContext] = field(default_factory=list)
    assignment_id: Optional[int] = None
    language: str = "en"
    user_role: str = LEARNER
    metadata: Dict[str, Any] = field(default_factory=dict)
