# PATH: apps/domains/attempts/services/regrading_service.py
from __future__ import annotations

import logging
from typing import Any, Dict

from django.db import transaction
from rest_framework.exceptions import NotFound

from apps.domains.attempts.models import RegradingRequest
from apps.domains.attempts.services.access import get_owned_attempt

logger = logging.getLogger(__name__)


class AttemptRegradingService:
    """
    Learner regrade requests. One open request per (assignment, attempt,
    user); a new request resets it to PENDING with the new reason.
    """

    @staticmethod
    @transaction.atomic
    def process_regrading_request(
        *,
        assignment_id: int,
        attempt_id: int,
        user_id: str,
        reason: str,
    ) -> Dict[str, Any]:
        attempt = get_owned_attempt(attempt_id=attempt_id, assignment_id=assignment_id, user_id=user_id)

        req, created = RegradingRequest.objects.update_or_create(
            assignment_id=attempt.assignment_id,
            attempt=attempt,
            user_id=str(user_id),
            defaults={"reason": reason, "status": RegradingRequest.Status.PENDING},
        )
        logger.info("regrading request %s: attempt_id=%s", "created" if created else "reopened", attempt.id)
        return {"success": True, "id": req.id}

    @staticmethod
    def get_regrading_status(*, assignment_id: int, attempt_id: int, user_id: str) -> Dict[str, Any]:
        attempt = get_owned_attempt(attempt_id=attempt_id, assignment_id=assignment_id, user_id=user_id)
        req = RegradingRequest.objects.filter(
            assignment_id=attempt.assignment_id,
            attempt=attempt,
            user_id=str(user_id),
        ).first()
        if req is None:
            raise NotFound(f"Regrading request for attempt {attempt_id} not found.")
        return {"status": req.status, "reason": req.reason}
