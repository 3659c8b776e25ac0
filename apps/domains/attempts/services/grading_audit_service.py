# PATH: apps/domains/attempts/services/grading_audit_service.py
from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Dict, List, Optional

from django.db import transaction

from apps.domains.assignments.models import Question
from apps.domains.attempts.models import GradingAudit

logger = logging.getLogger(__name__)

ISSUE_MIN_AUDITS = 10
ISSUE_SAMPLE_SIZE = 100
EXCESSIVE_ZERO_RATIO = 0.4
EXCESSIVE_MAX_RATIO = 0.6


def _points_of(audit: GradingAudit) -> float:
    payload = audit.response_payload if isinstance(audit.response_payload, dict) else {}
    try:
        return float(payload.get("total_points") or 0)
    except (TypeError, ValueError):
        return 0.0


class GradingAuditService:
    """
    Quality-control trail of strategy runs.

    record_grading never raises: a failed audit write must not take the
    grading path down with it.
    """

    @staticmethod
    def record_grading(
        *,
        question_id: int,
        assignment_id: Optional[int],
        request_payload: Dict[str, Any],
        response_payload: Dict[str, Any],
        grading_strategy: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Optional[GradingAudit]:
        try:
            with transaction.atomic():
                return GradingAudit.objects.create(
                    question_id=int(question_id),
                    assignment_id=assignment_id,
                    request_payload=request_payload,
                    response_payload=response_payload,
                    grading_strategy=grading_strategy,
                    metadata=metadata,
                )
        except Exception:
            logger.exception("failed to record grading audit (question_id=%s)", question_id)
            return None

    @staticmethod
    def get_grading_history(*, question_id: int, limit: int = 10) -> List[GradingAudit]:
        return list(
            GradingAudit.objects.filter(question_id=int(question_id)).order_by("-created_at", "-id")[:limit]
        )

    # ======================================================
    # statistics
    # ======================================================
    @staticmethod
    def get_question_statistics(*, question_id: int) -> Dict[str, Any]:
        scores = [_points_of(a) for a in GradingAudit.objects.filter(question_id=int(question_id))]
        return _summarize(int(question_id), scores)

    @staticmethod
    def get_grading_statistics(*, assignment_id: int) -> List[Dict[str, Any]]:
        by_question: Dict[int, List[float]] = defaultdict(list)
        for audit in GradingAudit.objects.filter(assignment_id=int(assignment_id)).order_by("question_id"):
            by_question[audit.question_id].append(_points_of(audit))
        return [_summarize(qid, scores) for qid, scores in sorted(by_question.items())]

    # ======================================================
    # issues
    # ======================================================
    @staticmethod
    def identify_question_issues(*, question_id: int) -> List[Dict[str, str]]:
        audits = GradingAudit.objects.filter(question_id=int(question_id)).order_by("-created_at", "-id")
        scores = [_points_of(a) for a in audits[:ISSUE_SAMPLE_SIZE]]
        if len(scores) < ISSUE_MIN_AUDITS:
            return []

        issues: List[Dict[str, str]] = []

        zeros = sum(1 for s in scores if s == 0)
        if zeros / len(scores) > EXCESSIVE_ZERO_RATIO:
            issues.append({
                "type": "excessive_zeros",
                "description": f"{zeros} out of {len(scores)} responses scored 0 points",
                "severity": "high",
            })

        question = Question.objects.filter(id=int(question_id)).only("total_points").first()
        max_score = float(question.total_points) if question else max(scores)
        at_max = sum(1 for s in scores if s == max_score)
        if at_max / len(scores) > EXCESSIVE_MAX_RATIO:
            issues.append({
                "type": "excessive_max_scores",
                "description": f"{at_max} out of {len(scores)} responses scored maximum points",
                "severity": "medium",
            })

        return issues

    @staticmethod
    def identify_grading_issues(*, assignment_id: int) -> Dict[int, List[Dict[str, str]]]:
        question_ids = (
            GradingAudit.objects.filter(assignment_id=int(assignment_id))
            .values_list("question_id", flat=True)
            .distinct()
        )
        out: Dict[int, List[Dict[str, str]]] = {}
        for qid in sorted(set(question_ids)):
            issues = GradingAuditService.identify_question_issues(question_id=qid)
            if issues:
                out[qid] = issues
        return out


def _summarize(question_id: int, scores: List[float]) -> Dict[str, Any]:
    if not scores:
        return {"question_id": question_id, "total_attempts": 0, "average_score": 0.0, "distribution": {}}

    distribution: Dict[str, int] = defaultdict(int)
    for s in scores:
        distribution[f"{s:g}"] += 1

    return {
        "question_id": question_id,
        "total_attempts": len(scores),
        "average_score": sum(scores) / len(scores),
        "distribution": dict(distribution),
    }
