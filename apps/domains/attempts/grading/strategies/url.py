# PATH: apps/domains/attempts/grading/strategies/url.py
from __future__ import annotations

from urllib.parse import urlparse

from apps.domains.attempts.dto import GradedResponse, GradingContext, LearnerResponse, QuestionData
from apps.domains.attempts.grading.localization import get_localized_string
from apps.domains.attempts.grading.strategies.base import (
    GradingDeps,
    GradingStrategy,
    evaluation_model,
    from_verdict,
    invalid,
)

SUMMARY_LENGTH = 150


def is_well_formed_url(url: str) -> bool:
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return bool(parsed.scheme and parsed.netloc)


def summarize_content(content: str) -> str:
    if not content:
        return "No content available"
    preview = content[:SUMMARY_LENGTH].strip()
    return f"{preview}..." if len(content) > SUMMARY_LENGTH else preview


def validate(question: QuestionData, response: LearnerResponse, deps: GradingDeps) -> None:
    url = (response.url or "").strip()
    if not url:
        raise invalid("expectedUrlResponse", response.language)
    if not is_well_formed_url(url):
        raise invalid("invalidUrl", response.language, url=url)


def extract(response: LearnerResponse, deps: GradingDeps) -> str:
    return (response.url or "").strip()


def grade(question: QuestionData, url: str, context: GradingContext, deps: GradingDeps) -> GradedResponse:
    fetched = deps.fetcher.fetch(url)

    # unreachable content is scored zero without consulting the oracle
    if not fetched.is_functional:
        return GradedResponse.single(
            0,
            get_localized_string("unableToFetchUrl", context.language, {"url": url}),
            error="url_fetch_failed",
            url=url,
            status="error",
        )

    verdict = deps.oracle.grade_url(
        evaluation_model(
            question,
            context,
            {"url": url, "content": fetched.body, "is_functional": fetched.is_functional},
        ),
        context.assignment_id,
        context.language,
    )
    return from_verdict(
        verdict,
        question,
        url=url,
        content_summary=summarize_content(fetched.body),
        content_length=len(fetched.body),
        is_github_repo="github.com" in url,
        grading_rationale=verdict.grading_rationale or "URL content evaluated",
    )


URL_STRATEGY = GradingStrategy(name="url", validate=validate, extract=extract, grade=grade)
