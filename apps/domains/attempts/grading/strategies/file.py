# PATH: apps/domains/attempts/grading/strategies/file.py
from __future__ import annotations

import logging
from typing import Any, Dict, List

from apps.domains.attempts.dto import GradedResponse, GradingContext, LearnerResponse, QuestionData
from apps.domains.attempts.grading.strategies.base import (
    GradingDeps,
    GradingStrategy,
    evaluation_model,
    from_verdict,
    invalid,
)

logger = logging.getLogger(__name__)

_SUMMARY_BY_EXT = {
    "pdf": "PDF document",
    "csv": "Spreadsheet data",
    "xlsx": "Spreadsheet data",
    "xls": "Spreadsheet data",
    "jpg": "Image file",
    "png": "Image file",
    "gif": "Image file",
    "docx": "Word document",
    "doc": "Word document",
    "txt": "Text file",
}


def file_extension(filename: str) -> str:
    name = str(filename or "")
    return name.rsplit(".", 1)[-1].lower() if "." in name else ""


def summarize_file(filename: str) -> str:
    return f"{_SUMMARY_BY_EXT.get(file_extension(filename), 'File')}: {filename}"


def validate(question: QuestionData, response: LearnerResponse, deps: GradingDeps) -> None:
    if not response.files:
        raise invalid("expectedFileResponse", response.language)


def extract(response: LearnerResponse, deps: GradingDeps) -> List[Dict[str, Any]]:
    return [dict(f) for f in (response.files or [])]


def _preprocess(files: List[Dict[str, Any]], deps: GradingDeps) -> List[Dict[str, Any]]:
    out = []
    for f in files:
        item = dict(f)
        item["content_summary"] = summarize_file(item.get("filename", ""))

        # files pushed from a repository arrive as a link with no inline content
        github_url = item.get("github_url") or item.get("githubUrl")
        if github_url and not item.get("content"):
            fetched = deps.fetcher.fetch(github_url)
            item["content"] = fetched.body
            item["is_functional"] = fetched.is_functional
            if not fetched.is_functional:
                logger.info("file content fetch failed: %s", github_url)
        out.append(item)
    return out


def grade(question: QuestionData, files: List[Dict[str, Any]], context: GradingContext, deps: GradingDeps) -> GradedResponse:
    processed = _preprocess(files, deps)
    verdict = deps.oracle.grade_file(
        evaluation_model(question, context, processed),
        context.assignment_id,
        context.language,
    )

    file_types: List[str] = []
    for f in files:
        ext = file_extension(f.get("filename", ""))
        if ext not in file_types:
            file_types.append(ext)

    return from_verdict(
        verdict,
        question,
        file_count=len(files),
        file_types=file_types,
        grading_rationale=verdict.grading_rationale,
    )


FILE_STRATEGY = GradingStrategy(name="file", validate=validate, extract=extract, grade=grade)
