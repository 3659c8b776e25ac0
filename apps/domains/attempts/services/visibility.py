# PATH: apps/domains/attempts/services/visibility.py
"""
Learner-facing stripping of grading data.

Every choice list leaving the service (the displayed one and every
language of the translations map) is reduced to {id, choice}.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from apps.domains.attempts.dto import ChoiceData, ScoringData, parse_choices


def _as_choice_data(choices: Any) -> List[ChoiceData]:
    if isinstance(choices, list) and all(isinstance(c, ChoiceData) for c in choices):
        return list(choices)
    return parse_choices(choices)


def sanitize_choices(choices: Any) -> List[Dict[str, Any]]:
    return [{"id": c.id, "choice": c.choice} for c in _as_choice_data(choices)]


def sanitize_translations(translations: Dict[str, Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    out: Dict[str, Dict[str, Any]] = {}
    for lang, content in (translations or {}).items():
        raw_choices = content.get("translated_choices")
        out[lang] = {
            "translated_text": content.get("translated_text"),
            "translated_choices": sanitize_choices(raw_choices) if raw_choices else None,
        }
    return out


def visible_scoring(scoring: Optional[ScoringData]) -> Optional[Dict[str, Any]]:
    if scoring is None:
        return None
    data = scoring.to_dict()
    if not scoring.show_rubrics_to_learner:
        data.pop("rubrics", None)
    return data


def remove_sensitive_data(question: Dict[str, Any]) -> Dict[str, Any]:
    """Strip grading fields from a question dict built for a learner."""
    out = dict(question)
    out.pop("answer", None)
    out.pop("randomized_choices", None)
    out["choices"] = sanitize_choices(out.get("choices"))
    if "translations" in out:
        out["translations"] = sanitize_translations(out["translations"])

    scoring = out.get("scoring")
    if isinstance(scoring, dict):
        out["scoring"] = visible_scoring(ScoringData.from_raw(scoring))
    return out
