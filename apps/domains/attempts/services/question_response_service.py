# PATH: apps/domains/attempts/services/question_response_service.py
from __future__ import annotations

import json
import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Tuple

from django.conf import settings
from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import APIException, NotFound, ValidationError

from apps.domains.assignments.models import Assignment, Question
from apps.domains.attempts.content import ContentFetcher, convert_github_url_to_raw
from apps.domains.attempts.dto import (
    AUTHOR,
    LEARNER,
    FeedbackItem,
    GradedResponse,
    GradingContext,
    LearnerResponse,
    QuestionAnswerContext,
    QuestionData,
)
from apps.domains.attempts.exceptions import GradingFailure, SubmissionFailure
from apps.domains.attempts.grading.dispatcher import get_strategy
from apps.domains.attempts.grading.localization import get_localized_string
from apps.domains.attempts.grading.strategies import (
    FILE_STRATEGY,
    URL_STRATEGY,
    GradingDeps,
    StrategyOutcome,
    handle_response,
)
from apps.domains.attempts.grading.strategies.base import invalid
from apps.domains.attempts.models import AssignmentAttempt, QuestionResponse
from apps.domains.attempts.oracle import GradingOracle, get_grading_oracle
from apps.domains.attempts.services.access import answerable_questions
from apps.domains.attempts.services.grading_audit_service import GradingAuditService
from apps.domains.attempts.services.variant_service import QuestionVariantService

logger = logging.getLogger(__name__)

QT = Question.QuestionType


def error_message(exc: BaseException) -> str:
    """Flatten DRF detail payloads ({"detail": msg} / [msg]) into one line."""
    if isinstance(exc, APIException):
        detail = exc.detail
        while isinstance(detail, (dict, list)) and detail:
            detail = next(iter(detail.values())) if isinstance(detail, dict) else detail[0]
        return str(detail)
    return str(exc)


def _answer_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


@dataclass
class _Prepared:
    index: int
    response: LearnerResponse
    question: QuestionData
    context: GradingContext


class QuestionResponseService:
    """
    submit_questions: all-or-nothing grading of one submission batch.

    Phases
    --------------------------------------------------
    1) resolve  (caller thread) : effective question + grading context per response
    2) grade    (thread pool)   : strategy run, oracle / fetcher calls only
    3) decide                   : any failure -> SubmissionFailure listing every reason
    4) audit + persist (caller thread, LEARNER only persists)

    Results always follow input order.
    """

    def __init__(
        self,
        *,
        oracle: Optional[GradingOracle] = None,
        fetcher: Optional[ContentFetcher] = None,
        max_workers: Optional[int] = None,
    ):
        self.deps = GradingDeps(
            oracle=oracle if oracle is not None else get_grading_oracle(),
            fetcher=fetcher if fetcher is not None else ContentFetcher(),
        )
        self.max_workers = int(max_workers or getattr(settings, "GRADING_MAX_WORKERS", 8))

    # ======================================================
    # entry
    # ======================================================
    def submit_questions(
        self,
        *,
        responses: List[LearnerResponse],
        assignment: Assignment,
        attempt: Optional[AssignmentAttempt],
        role: str,
        language: str = "en",
        author_questions: Optional[List[QuestionData]] = None,
        pre_translated: Optional[Dict[int, QuestionData]] = None,
    ) -> List[GradedResponse]:
        if role not in (LEARNER, AUTHOR):
            raise ValidationError({"detail": f"Unsupported user role: {role}"})
        if role == LEARNER and attempt is None:
            raise ValidationError({"detail": "Learner submissions require an attempt."})

        counts = Counter(r.question_id for r in responses)
        duplicates = sorted(qid for qid, n in counts.items() if n > 1)
        if duplicates:
            raise ValidationError({"detail": f"Duplicate responses for questions: {duplicates}"})

        responses = [replace(r, language=language or "en") for r in responses]
        errors: List[Optional[str]] = [None] * len(responses)

        # 1) resolve
        prepared: List[_Prepared] = []
        if role == AUTHOR:
            resolver = self._author_resolver(assignment, author_questions or [], language)
        else:
            resolver = self._learner_resolver(assignment, attempt, responses, language, pre_translated or {})

        for i, r in enumerate(responses):
            try:
                question, context = resolver(r)
            except (APIException, ValueError) as e:
                errors[i] = error_message(e)
                continue
            prepared.append(_Prepared(index=i, response=r, question=question, context=context))

        # 2) grade
        outcomes: Dict[int, StrategyOutcome] = {}
        if prepared:
            workers = max(1, min(self.max_workers, len(prepared)))
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="grading") as pool:
                futures = [(p, pool.submit(self._grade_one, p)) for p in prepared]
                for p, fut in futures:
                    try:
                        outcomes[p.index] = fut.result()
                    except Exception as e:
                        errors[p.index] = error_message(e)

        # 3) decide
        reasons = [e for e in errors if e]
        if reasons:
            logger.warning(
                "submission failed (assignment_id=%s attempt_id=%s): %s",
                assignment.id, getattr(attempt, "id", None), reasons,
            )
            raise SubmissionFailure(f"Failed to submit questions: {', '.join(reasons)}")

        # 4) audit + persist
        ordered = [(p, outcomes[p.index]) for p in prepared]
        self._audit(ordered, assignment)

        if role == LEARNER:
            self._persist(ordered, attempt)

        out: List[GradedResponse] = []
        for p, outcome in ordered:
            graded = outcome.graded
            graded.question_id = p.response.question_id
            graded.question = p.question.question
            out.append(graded)
        return out

    # ======================================================
    # resolve
    # ======================================================
    def _learner_resolver(
        self,
        assignment: Assignment,
        attempt: AssignmentAttempt,
        responses: List[LearnerResponse],
        language: str,
        pre_translated: Dict[int, QuestionData],
    ):
        bindings = QuestionVariantService.bindings_for(attempt)
        questions = answerable_questions(attempt=attempt, question_ids=[r.question_id for r in responses])

        def resolve(r: LearnerResponse) -> Tuple[QuestionData, GradingContext]:
            qid = r.question_id
            model = questions.get(qid)
            if model is None:
                raise NotFound(f"Question with ID {qid} not found.")
            if qid in pre_translated:
                question = pre_translated[qid]
            else:
                question = QuestionVariantService.effective_question(model, bindings.get(qid))

            context = GradingContext(
                assignment_instructions=assignment.instructions or "",
                question_answer_context=self._context_answers(question, attempt.id),
                assignment_id=assignment.id,
                language=language or "en",
                user_role=LEARNER,
                metadata={
                    "attempt_id": attempt.id,
                    "question_type": question.type,
                    "response_type": question.response_type,
                },
            )
            return question, context

        return resolve

    def _author_resolver(
        self,
        assignment: Assignment,
        author_questions: List[QuestionData],
        language: str,
    ):
        by_id = {q.id: q for q in author_questions}

        def resolve(r: LearnerResponse) -> Tuple[QuestionData, GradingContext]:
            question = by_id.get(r.question_id)
            if question is None:
                raise NotFound(f"Question with ID {r.question_id} not found.")
            context = GradingContext(
                assignment_instructions=assignment.instructions or "",
                assignment_id=assignment.id,
                language=language or "en",
                user_role=AUTHOR,
                metadata={"question_type": question.type, "response_type": question.response_type},
            )
            return question, context

        return resolve

    @staticmethod
    def _context_answers(question: QuestionData, attempt_id: int) -> List[QuestionAnswerContext]:
        ids = list(question.grading_context_question_ids or [])
        if not ids:
            return []

        latest: Dict[int, QuestionResponse] = {}
        for row in QuestionResponse.objects.filter(attempt_id=attempt_id, question_id__in=ids).order_by("-id"):
            latest.setdefault(row.question_id, row)

        out = []
        for cq in Question.objects.filter(id__in=ids).only("id", "question", "type"):
            row = latest.get(cq.id)
            out.append(
                QuestionAnswerContext(
                    question=cq.question,
                    answer=_answer_text(row.learner_response if row else ""),
                    question_id=cq.id,
                    question_type=cq.type,
                )
            )
        return out

    # ======================================================
    # grade (worker thread, no ORM access)
    # ======================================================
    def _grade_one(self, p: _Prepared) -> StrategyOutcome:
        if p.response.is_empty():
            return StrategyOutcome(
                graded=GradedResponse(
                    total_points=0,
                    feedback=[FeedbackItem(get_localized_string("noResponse", p.context.language))],
                ),
                learner_response="",
                strategy_name="no_response",
            )

        context = self._with_fetched_urls(p.context)
        try:
            return self._dispatch(p.question, p.response, context)
        except Exception as e:
            logger.warning("question grading failed (question_id=%s): %s", p.question.id, e)
            raise GradingFailure(f"Failed to process question response: {error_message(e)}") from e

    def _dispatch(self, question: QuestionData, response: LearnerResponse, context: GradingContext) -> StrategyOutcome:
        if question.type == QT.LINK_FILE:
            if response.url:
                raw = convert_github_url_to_raw(response.url)
                if raw:
                    response = replace(response, url=raw)
                return handle_response(URL_STRATEGY, question, response, context, self.deps)
            if response.files:
                return handle_response(FILE_STRATEGY, question, response, context, self.deps)
            raise invalid("expectedLinkOrFile", response.language)

        strategy = get_strategy(question.type, question.response_type)
        return handle_response(strategy, question, response, context, self.deps)

    def _with_fetched_urls(self, context: GradingContext) -> GradingContext:
        """URL answers in the grading context are replaced by their fetched content."""
        if not any(c.question_type == QT.URL and c.answer for c in context.question_answer_context):
            return context

        expanded = []
        for c in context.question_answer_context:
            if c.question_type != QT.URL or not c.answer:
                expanded.append(c)
                continue
            url = _url_of(c.answer)
            fetched = self.deps.fetcher.fetch(url)
            answer = json.dumps(
                {"url": url, "content": fetched.body, "is_functional": fetched.is_functional},
                ensure_ascii=False,
            )
            expanded.append(replace(c, answer=answer))
        return replace(context, question_answer_context=expanded)

    # ======================================================
    # audit / persist (caller thread)
    # ======================================================
    def _audit(self, ordered: List[Tuple[_Prepared, StrategyOutcome]], assignment: Assignment) -> None:
        for p, outcome in ordered:
            if outcome.strategy_name == "no_response":
                continue
            GradingAuditService.record_grading(
                question_id=p.question.id,
                assignment_id=assignment.id,
                request_payload=p.response.to_dict(),
                response_payload=outcome.graded.to_dict(),
                grading_strategy=outcome.strategy_name,
                metadata={
                    "user_role": p.context.user_role,
                    "language": p.context.language,
                    "variant_id": p.question.variant_id,
                    **p.context.metadata,
                },
            )

    @staticmethod
    def _persist(ordered: List[Tuple[_Prepared, StrategyOutcome]], attempt: AssignmentAttempt) -> None:
        now = timezone.now()
        rows = [
            QuestionResponse(
                attempt=attempt,
                question_id=p.response.question_id,
                learner_response=outcome.learner_response,
                points=float(outcome.graded.total_points or 0),
                feedback=outcome.graded.feedback_dicts(),
                metadata=outcome.graded.metadata or None,
                graded_at=now,
            )
            for p, outcome in ordered
        ]
        with transaction.atomic():
            created = QuestionResponse.objects.bulk_create(rows)
        for (_, outcome), row in zip(ordered, created):
            outcome.graded.id = row.id


def _url_of(answer: str) -> str:
    try:
        parsed = json.loads(answer)
    except ValueError:
        return answer
    if isinstance(parsed, dict):
        return str(parsed.get("url") or "")
    return str(parsed)
