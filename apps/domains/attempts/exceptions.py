# PATH: apps/domains/attempts/exceptions.py
"""
Attempt / grading error taxonomy.

- input problems        -> rest_framework.exceptions.ValidationError (400)
- eligibility problems  -> EligibilityFailure subclasses (422)
- missing rows          -> rest_framework.exceptions.NotFound (404)
- grading / transport   -> GradingFailure family (500)
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.exceptions import APIException

MAX_ATTEMPTS_MESSAGE = "Maximum number of attempts reached for this assignment."
SUBMISSION_DEADLINE_MESSAGE = "The attempt deadline has passed."
GRADE_SUBMISSION_MESSAGE = "Failed to submit the final grade to lms."
IN_PROGRESS_MESSAGE = "A attempt is already in progress and has not expired."
TIME_RANGE_MESSAGE = (
    "You have exceeded the allowed number of attempts within the specified time range."
)
REPORT_LIMIT_MESSAGE = (
    "You have reached the maximum number of reports allowed in a 24-hour period."
)

EXPIRED_SUBMISSION_COMMENT = (
    "You submitted the assignment after the deadline. Your submission will not be graded. "
    "If you don't have any more attempts, please contact your instructor."
)


class EligibilityFailure(APIException):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_code = "eligibility_failure"


class InProgressAttempt(EligibilityFailure):
    default_detail = IN_PROGRESS_MESSAGE
    default_code = "in_progress_attempt"


class RateLimited(EligibilityFailure):
    default_detail = TIME_RANGE_MESSAGE
    default_code = "rate_limited"


class MaxAttemptsReached(EligibilityFailure):
    default_detail = MAX_ATTEMPTS_MESSAGE
    default_code = "max_attempts_reached"


class DeadlinePassed(EligibilityFailure):
    default_detail = SUBMISSION_DEADLINE_MESSAGE
    default_code = "deadline_passed"


class ReportLimitReached(EligibilityFailure):
    default_detail = REPORT_LIMIT_MESSAGE
    default_code = "report_limit_reached"


class GradingFailure(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Failed to process question response."
    default_code = "grading_failure"


class SubmissionFailure(GradingFailure):
    default_detail = "Failed to submit questions."
    default_code = "submission_failure"


class GradeSubmissionFailure(GradingFailure):
    default_detail = GRADE_SUBMISSION_MESSAGE
    default_code = "grade_submission_failure"
