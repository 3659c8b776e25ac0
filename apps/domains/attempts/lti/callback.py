# PATH: apps/domains/attempts/lti/callback.py
from __future__ import annotations

import logging
from typing import Optional

import requests
from django.conf import settings

from apps.domains.attempts.exceptions import GradeSubmissionFailure

logger = logging.getLogger(__name__)


class LtiGradeCallback:
    """
    One-shot grade passback to the LMS gateway.

    PUT <gateway> {"score": <0..1>} authenticated by the learner's
    gateway cookie. Anything but 200 is a failure.
    """

    def __init__(self, *, endpoint: Optional[str] = None, timeout: float = 10.0):
        self.endpoint = endpoint if endpoint is not None else getattr(settings, "GRADING_LTI_GATEWAY_URL", "")
        self.timeout = timeout

    @property
    def enabled(self) -> bool:
        return bool(self.endpoint)

    def send(self, *, score: float, auth_cookie: str) -> None:
        try:
            resp = requests.put(
                self.endpoint,
                json={"score": score},
                headers={"Cookie": f"authentication={auth_cookie}"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("lti grade callback transport error: %s", e)
            raise GradeSubmissionFailure() from e

        if resp.status_code != 200:
            logger.warning("lti grade callback rejected: status=%s", resp.status_code)
            raise GradeSubmissionFailure()

        logger.info("lti grade callback sent: score=%s", score)
