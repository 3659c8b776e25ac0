# PATH: apps/domains/attempts/services/access.py
from __future__ import annotations

from typing import Dict, Iterable

from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from apps.domains.assignments.models import Assignment, Question
from apps.domains.attempts.models import AssignmentAttempt


def get_assignment(assignment_id: int) -> Assignment:
    assignment = Assignment.objects.filter(id=int(assignment_id)).first()
    if assignment is None:
        raise NotFound(f"Assignment with ID {assignment_id} not found.")
    return assignment


def get_owned_attempt(*, attempt_id: int, assignment_id: int, user_id: str) -> AssignmentAttempt:
    """
    404 missing, 400 wrong assignment, 403 someone else's attempt.
    """
    attempt = (
        AssignmentAttempt.objects.select_related("assignment")
        .filter(id=int(attempt_id))
        .first()
    )
    if attempt is None:
        raise NotFound(f"AssignmentAttempt with ID {attempt_id} not found.")
    if attempt.assignment_id != int(assignment_id):
        raise ValidationError({"detail": "This attempt does not belong to the specified assignment."})
    if attempt.user_id != str(user_id):
        raise PermissionDenied("You do not have permission to access this attempt.")
    return attempt


def answerable_questions(*, attempt: AssignmentAttempt, question_ids: Iterable[int]) -> Dict[int, Question]:
    """
    Live questions of the attempt's assignment, limited to the attempt's
    question_order when one was materialized.
    """
    order = {int(x) for x in (attempt.question_order or [])}
    qs = Question.objects.alive().filter(id__in=list(question_ids), assignment_id=attempt.assignment_id)
    return {q.id: q for q in qs if not order or q.id in order}
