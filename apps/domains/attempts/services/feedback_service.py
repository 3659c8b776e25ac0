# PATH: apps/domains/attempts/services/feedback_service.py
from __future__ import annotations

from typing import Any, Dict, Optional

from django.db import transaction

from apps.domains.attempts.models import AssignmentFeedback
from apps.domains.attempts.services.access import get_owned_attempt


def _as_dict(fb: Optional[AssignmentFeedback]) -> Dict[str, Any]:
    if fb is None:
        return {"comments": "", "ai_grading_rating": None, "assignment_rating": None}
    return {
        "id": fb.id,
        "comments": fb.comments,
        "ai_grading_rating": fb.ai_grading_rating,
        "assignment_rating": fb.assignment_rating,
    }


class AttemptFeedbackService:
    @staticmethod
    @transaction.atomic
    def submit_feedback(
        *,
        assignment_id: int,
        attempt_id: int,
        user_id: str,
        comments: str = "",
        ai_grading_rating: Optional[int] = None,
        assignment_rating: Optional[int] = None,
    ) -> Dict[str, Any]:
        attempt = get_owned_attempt(attempt_id=attempt_id, assignment_id=assignment_id, user_id=user_id)

        fb, _ = AssignmentFeedback.objects.update_or_create(
            assignment_id=attempt.assignment_id,
            attempt=attempt,
            user_id=str(user_id),
            defaults={
                "comments": comments or "",
                "ai_grading_rating": ai_grading_rating,
                "assignment_rating": assignment_rating,
            },
        )
        return _as_dict(fb)

    @staticmethod
    def get_feedback(*, assignment_id: int, attempt_id: int, user_id: str) -> Dict[str, Any]:
        attempt = get_owned_attempt(attempt_id=attempt_id, assignment_id=assignment_id, user_id=user_id)
        fb = AssignmentFeedback.objects.filter(
            assignment_id=attempt.assignment_id,
            attempt=attempt,
            user_id=str(user_id),
        ).first()
        return _as_dict(fb)
