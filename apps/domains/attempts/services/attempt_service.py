# PATH: apps/domains/attempts/services/attempt_service.py
from __future__ import annotations

import logging
import random
from datetime import timedelta
from typing import Any, Dict, List, Optional

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from apps.domains.assignments.models import Assignment, Question
from apps.domains.attempts.dto import AUTHOR, LEARNER, LearnerResponse, QuestionData, parse_choices
from apps.domains.attempts.exceptions import EXPIRED_SUBMISSION_COMMENT, SUBMISSION_DEADLINE_MESSAGE
from apps.domains.attempts.grading.localization import normalize_language
from apps.domains.attempts.lti import LtiGradeCallback
from apps.domains.attempts.models import AssignmentAttempt, AssignmentAttemptQuestionVariant
from apps.domains.attempts.services.access import get_assignment, get_owned_attempt
from apps.domains.attempts.services.grading_service import AttemptGradingService
from apps.domains.attempts.services.question_response_service import QuestionResponseService
from apps.domains.attempts.services.translation_service import (
    TranslationService,
    apply_permutation,
    choice_permutation,
    merge_translated_choices,
    unshuffled_choices,
)
from apps.domains.attempts.services.validation_service import AttemptValidationService
from apps.domains.attempts.services.variant_service import QuestionVariantService
from apps.domains.attempts.services.visibility import remove_sensitive_data, visible_scoring

logger = logging.getLogger(__name__)

AUTHOR_PREVIEW_ATTEMPT_ID = -1


def order_questions(questions: List[Question], assignment: Assignment, rng: random.Random) -> List[Question]:
    """
    RANDOM     -> uniform shuffle
    SEQUENTIAL -> assignment.question_order (ids missing from it go first)
    """
    ordered = list(questions)
    if assignment.display_order == Assignment.DisplayOrder.RANDOM:
        rng.shuffle(ordered)
    elif assignment.question_order:
        order = [int(x) for x in assignment.question_order]
        ordered.sort(key=lambda q: order.index(q.id) if q.id in order else -1)
    return ordered


def parse_learner_responses(raw: Any, language: str) -> List[LearnerResponse]:
    if not isinstance(raw, list):
        raise ValidationError({"detail": "responses_for_questions must be a list."})
    try:
        return [LearnerResponse.from_dict(r, language=language) for r in raw]
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError({"detail": f"Invalid question response: {e}"}) from e


class AttemptService:
    """
    Attempt lifecycle.

    CREATED --(deadline passes)--> EXPIRED
    CREATED --submit--> SUBMITTED (graded)
    EXPIRED --submit--> SUBMITTED (grade 0, not graded)
    """

    def __init__(
        self,
        *,
        question_responses: Optional[QuestionResponseService] = None,
        lti_callback: Optional[LtiGradeCallback] = None,
        rng: Optional[random.Random] = None,
    ):
        self._question_responses = question_responses
        self.lti_callback = lti_callback or LtiGradeCallback()
        self.rng = rng or random.Random()

    @property
    def question_responses(self) -> QuestionResponseService:
        if self._question_responses is None:
            self._question_responses = QuestionResponseService()
        return self._question_responses

    # ======================================================
    # create
    # ======================================================
    def create_attempt(self, *, assignment_id: int, user_id: str) -> AssignmentAttempt:
        with transaction.atomic():
            # serializes concurrent creates for the same assignment
            assignment = Assignment.objects.select_for_update().filter(id=int(assignment_id)).first()
            if assignment is None:
                raise NotFound(f"Assignment with ID {assignment_id} not found.")

            AttemptValidationService.validate_new_attempt(assignment=assignment, user_id=user_id)

            expires_at = None
            if assignment.alloted_time_minutes and assignment.alloted_time_minutes > 0:
                expires_at = timezone.now() + timedelta(minutes=assignment.alloted_time_minutes)

            questions = list(
                assignment.questions.alive().prefetch_related("variants")
            )
            ordered = order_questions(questions, assignment, self.rng)

            attempt = AssignmentAttempt.objects.create(
                assignment=assignment,
                user_id=str(user_id),
                expires_at=expires_at,
                submitted=False,
                question_order=[q.id for q in ordered],
            )
            QuestionVariantService.create_attempt_question_variants(
                attempt=attempt,
                questions=ordered,
                rng=self.rng,
            )

        logger.info(
            "attempt created: attempt_id=%s assignment_id=%s user_id=%s questions=%s",
            attempt.id, assignment.id, user_id, len(ordered),
        )
        return attempt

    # ======================================================
    # submit (learner)
    # ======================================================
    def submit_attempt(
        self,
        *,
        attempt_id: int,
        assignment_id: int,
        user_id: str,
        responses: List[Dict[str, Any]],
        language: Optional[str] = None,
        auth_cookie: Optional[str] = None,
        grading_callback_required: bool = False,
    ) -> Dict[str, Any]:
        attempt = get_owned_attempt(attempt_id=attempt_id, assignment_id=assignment_id, user_id=user_id)
        if attempt.submitted:
            raise ValidationError({"detail": "This attempt has already been submitted."})

        if AttemptValidationService.is_attempt_expired(attempt.expires_at):
            return self._submit_expired(attempt)

        language = language or "en"
        learner_responses = parse_learner_responses(responses, language)
        assignment = attempt.assignment

        with transaction.atomic():
            pre_translated = TranslationService.pre_translate_questions(
                responses=learner_responses,
                attempt=attempt,
                language=language,
            )
            graded = self.question_responses.submit_questions(
                responses=learner_responses,
                assignment=assignment,
                attempt=attempt,
                role=LEARNER,
                language=language,
                pre_translated=pre_translated,
            )
            summary = AttemptGradingService.calculate_for_learner(graded, assignment)

            AttemptValidationService.check_submission_deadline(attempt.expires_at)

            if grading_callback_required:
                self._send_grade(attempt, summary.grade, auth_cookie)

            attempt.preferred_language = language
            attempt.expires_at = timezone.now()
            attempt.grade = summary.grade
            attempt.submitted = True
            attempt.save(update_fields=["preferred_language", "expires_at", "grade", "submitted", "updated_at"])

        logger.info(
            "attempt submitted: attempt_id=%s grade=%.4f (%s/%s)",
            attempt.id, summary.grade, summary.total_points_earned, summary.total_possible_points,
        )
        return {
            "id": attempt.id,
            "submitted": True,
            "success": True,
            "total_points_earned": summary.total_points_earned,
            "total_possible_points": summary.total_possible_points,
            "grade": attempt.grade if assignment.show_assignment_score else None,
            "show_submission_feedback": assignment.show_submission_feedback,
            "feedbacks_for_questions": AttemptGradingService.construct_feedbacks(graded, assignment),
        }

    def _submit_expired(self, attempt: AssignmentAttempt) -> Dict[str, Any]:
        attempt.submitted = True
        attempt.grade = 0
        attempt.comments = EXPIRED_SUBMISSION_COMMENT
        attempt.save(update_fields=["submitted", "grade", "comments", "updated_at"])

        logger.info("expired attempt forced to submitted: attempt_id=%s", attempt.id)
        return {
            "id": attempt.id,
            "submitted": True,
            "success": True,
            "total_points_earned": 0,
            "total_possible_points": 0,
            "grade": 0,
            "show_submission_feedback": False,
            "feedbacks_for_questions": [],
            "message": SUBMISSION_DEADLINE_MESSAGE,
        }

    def _send_grade(self, attempt: AssignmentAttempt, grade: float, auth_cookie: Optional[str]) -> None:
        if not self.lti_callback.enabled or not auth_cookie:
            logger.info("lti grade callback skipped: attempt_id=%s", attempt.id)
            return

        previous = (
            AssignmentAttempt.objects.filter(
                assignment_id=attempt.assignment_id,
                user_id=attempt.user_id,
                grade__isnull=False,
            )
            .exclude(id=attempt.id)
            .values_list("grade", flat=True)
        )
        best = max([float(g) for g in previous] + [float(grade or 0)])
        self.lti_callback.send(score=best, auth_cookie=auth_cookie)

    # ======================================================
    # submit (author preview)
    # ======================================================
    def preview_submission(
        self,
        *,
        assignment_id: int,
        responses: List[Dict[str, Any]],
        author_questions: List[Dict[str, Any]],
        language: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Same scoring path as a learner submit; nothing is persisted."""
        assignment = get_assignment(assignment_id)
        language = language or "en"

        try:
            questions = [QuestionData.from_dict(q) for q in (author_questions or [])]
        except (TypeError, ValueError) as e:
            raise ValidationError({"detail": f"Invalid author question: {e}"}) from e

        graded = self.question_responses.submit_questions(
            responses=parse_learner_responses(responses, language),
            assignment=assignment,
            attempt=None,
            role=AUTHOR,
            language=language,
            author_questions=questions,
        )
        summary = AttemptGradingService.calculate_for_author(graded, questions)

        return {
            "id": AUTHOR_PREVIEW_ATTEMPT_ID,
            "submitted": True,
            "success": True,
            "total_points_earned": summary.total_points_earned,
            "total_possible_points": summary.total_possible_points,
            "grade": summary.grade,
            "show_submission_feedback": True,
            "feedbacks_for_questions": [
                {k: v for k, v in g.to_dict().items() if k != "metadata"} for g in graded
            ],
        }

    # ======================================================
    # read
    # ======================================================
    @staticmethod
    def list_attempts(*, assignment_id: int, user_id: str, submitted: Optional[bool] = None) -> List[Dict[str, Any]]:
        assignment = get_assignment(assignment_id)
        qs = AssignmentAttempt.objects.filter(assignment_id=assignment.id, user_id=str(user_id))
        if submitted is not None:
            qs = qs.filter(submitted=submitted)

        return [
            {
                "id": a.id,
                "assignment_id": a.assignment_id,
                "user_id": a.user_id,
                "submitted": a.submitted,
                "grade": a.grade if assignment.show_assignment_score else None,
                "created_at": a.created_at,
                "expires_at": a.expires_at,
                "comments": a.comments,
            }
            for a in qs.order_by("-created_at", "-id")
        ]

    @staticmethod
    def get_attempt_language(attempt: AssignmentAttempt) -> str:
        return normalize_language(attempt.preferred_language or "en")

    @staticmethod
    def get_attempt(
        *,
        attempt_id: int,
        assignment_id: int,
        user_id: str,
        language: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Learner-facing view: bound variants, stored choice order and the
        requested translation, with every grading field stripped.
        """
        attempt = get_owned_attempt(attempt_id=attempt_id, assignment_id=assignment_id, user_id=user_id)
        assignment = attempt.assignment
        language = normalize_language(language) if language else AttemptService.get_attempt_language(attempt)

        questions = {q.id: q for q in assignment.questions.all()}
        order = [int(x) for x in (attempt.question_order or assignment.question_order or [])] or list(questions)
        bindings = QuestionVariantService.bindings_for(attempt)

        translations = TranslationService.translations_map(
            question_ids=list(questions),
            variant_ids=[b.question_variant_id for b in bindings.values()],
        )

        responses_by_question: Dict[int, list] = {}
        for r in attempt.question_responses.order_by("id"):
            responses_by_question.setdefault(r.question_id, []).append(r)

        out_questions = []
        for qid in order:
            q = questions.get(qid)
            if q is None:
                continue
            out_questions.append(
                _question_view(
                    q,
                    bindings.get(qid),
                    assignment,
                    language,
                    translations,
                    responses_by_question.get(qid, []),
                )
            )

        return {
            "id": attempt.id,
            "assignment_id": attempt.assignment_id,
            "user_id": attempt.user_id,
            "submitted": attempt.submitted,
            "grade": attempt.grade if assignment.show_assignment_score else None,
            "created_at": attempt.created_at,
            "expires_at": attempt.expires_at,
            "question_order": order,
            "preferred_language": attempt.preferred_language,
            "comments": attempt.comments,
            "passing_grade": assignment.passing_grade,
            "show_assignment_score": assignment.show_assignment_score,
            "show_submission_feedback": assignment.show_submission_feedback,
            "show_question_score": assignment.show_question_score,
            "questions": out_questions,
        }


def _question_view(
    question: Question,
    binding: Optional[AssignmentAttemptQuestionVariant],
    assignment: Assignment,
    language: str,
    translations: Dict[str, Dict[str, Dict[str, Any]]],
    responses: list,
) -> Dict[str, Any]:
    effective = QuestionVariantService.effective_question(question, binding)
    base_choices = unshuffled_choices(question, binding)
    permutation = choice_permutation(effective.choices, base_choices)

    displayed = TranslationService.apply_translation(effective, language, base_choices=base_choices)

    merged: Dict[str, Dict[str, Any]] = dict(translations.get(f"question-{question.id}", {}))
    if effective.variant_id is not None:
        merged.update(translations.get(f"variant-{effective.variant_id}", {}))

    # every language follows the attempt's choice order
    ordered_translations: Dict[str, Dict[str, Any]] = {}
    for lang, content in merged.items():
        translated = parse_choices(content.get("translated_choices"))
        if translated:
            translated = apply_permutation(merge_translated_choices(translated, base_choices), permutation)
        ordered_translations[lang] = {
            "translated_text": content.get("translated_text"),
            "translated_choices": [c.to_dict() for c in translated] or None,
        }

    view = {
        "id": question.id,
        "variant_id": effective.variant_id,
        "question": displayed.question,
        "type": effective.type,
        "response_type": effective.response_type,
        "total_points": effective.total_points,
        "max_words": effective.max_words,
        "max_characters": effective.max_characters,
        "choices": displayed.choices,
        "scoring": visible_scoring(effective.scoring),
        "answer": effective.answer,
        "translations": ordered_translations,
        "question_responses": [_response_view(r, effective, assignment) for r in responses],
    }
    return remove_sensitive_data(view)


def _response_view(row, question: QuestionData, assignment: Assignment) -> Dict[str, Any]:
    out = {
        "id": row.id,
        "question_id": row.question_id,
        "variant_id": question.variant_id,
        "learner_response": row.learner_response,
        "points": row.points if assignment.show_question_score else -1,
        "graded_at": row.graded_at,
    }
    if assignment.show_submission_feedback:
        out["feedback"] = row.feedback
    return out
