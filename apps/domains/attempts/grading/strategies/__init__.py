# apps/domains/attempts/grading/strategies/__init__.py

from .base import GradingDeps, GradingStrategy, StrategyOutcome, handle_response
from .choice import CHOICE_STRATEGY
from .file import FILE_STRATEGY
from .presentation import PRESENTATION_STRATEGY
from .text import TEXT_STRATEGY
from .true_false import TRUE_FALSE_STRATEGY
from .url import URL_STRATEGY

__all__ = [
    "GradingDeps",
    "GradingStrategy",
    "StrategyOutcome",
    "handle_response",
    "CHOICE_STRATEGY",
    "FILE_STRATEGY",
    "PRESENTATION_STRATEGY",
    "TEXT_STRATEGY",
    "TRUE_FALSE_STRATEGY",
    "URL_STRATEGY",
]
