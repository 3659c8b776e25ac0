import pytest
import requests

from apps.domains.attempts.exceptions import GradeSubmissionFailure
from apps.domains.attempts.lti import callback as callback_module
from apps.domains.attempts.lti.callback import LtiGradeCallback

GATEWAY = "https://lti.example.com/grade"


class Recorder:
    def __init__(self, status_code=200, error=None):
        self.status_code = status_code
        self.error = error
        self.calls = []

    def __call__(self, url, json=None, headers=None, timeout=None):
        self.calls.append({"url": url, "json": json, "headers": headers})
        if self.error is not None:
            raise self.error
        return type("Resp", (), {"status_code": self.status_code})()


def test_enabled_follows_endpoint(settings):
    settings.GRADING_LTI_GATEWAY_URL = ""
    assert LtiGradeCallback().enabled is False
    assert LtiGradeCallback(endpoint=GATEWAY).enabled is True


def test_send_puts_score_with_cookie(monkeypatch):
    put = Recorder()
    monkeypatch.setattr(callback_module.requests, "put", put)

    LtiGradeCallback(endpoint=GATEWAY).send(score=0.75, auth_cookie="tok")

    assert put.calls == [
        {"url": GATEWAY, "json": {"score": 0.75}, "headers": {"Cookie": "authentication=tok"}}
    ]


def test_non_200_fails(monkeypatch):
    monkeypatch.setattr(callback_module.requests, "put", Recorder(status_code=500))
    with pytest.raises(GradeSubmissionFailure):
        LtiGradeCallback(endpoint=GATEWAY).send(score=1.0, auth_cookie="tok")


def test_transport_error_fails(monkeypatch):
    monkeypatch.setattr(callback_module.requests, "put", Recorder(error=requests.ConnectionError("down")))
    with pytest.raises(GradeSubmissionFailure):
        LtiGradeCallback(endpoint=GATEWAY).send(score=1.0, auth_cookie="tok")
