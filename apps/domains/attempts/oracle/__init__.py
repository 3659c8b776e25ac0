# PATH: apps/domains/attempts/oracle/__init__.py
from __future__ import annotations

from typing import Optional

from django.conf import settings
from django.utils.module_loading import import_string

from apps.domains.attempts.oracle.port import EvaluationModel, GradingOracle, OracleVerdict

_BACKENDS = {
    "openai": "apps.domains.attempts.oracle.openai_oracle.OpenAIGradingOracle",
}

_oracle: Optional[GradingOracle] = None


def get_grading_oracle() -> GradingOracle:
    """
    GRADING_ORACLE_BACKEND is either a short name ("openai") or a dotted
    path to a class. Built once per process.
    """
    global _oracle
    if _oracle is not None:
        return _oracle

    backend = getattr(settings, "GRADING_ORACLE_BACKEND", "openai") or "openai"
    cls = import_string(_BACKENDS.get(backend, backend))
    _oracle = cls()
    return _oracle


def reset_grading_oracle() -> None:
    global _oracle
    _oracle = None


__all__ = [
    "EvaluationModel",
    "GradingOracle",
    "OracleVerdict",
    "get_grading_oracle",
    "reset_grading_oracle",
]
