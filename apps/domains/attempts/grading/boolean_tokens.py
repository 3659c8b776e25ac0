# PATH: apps/domains/attempts/grading/boolean_tokens.py
"""
Language -> {token: bool} table for textual true/false answers.

Built once at import and exposed read-only. "1" / "0" are accepted in
every language.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

_RAW: Dict[str, Dict[str, bool]] = {
    "en": {"true": True, "false": False, "t": True, "f": False, "yes": True, "no": False, "y": True, "n": False},
    "id": {"benar": True, "salah": False},
    "de": {"wahr": True, "falsch": False, "ja": True, "nein": False},
    "es": {"verdadero": True, "falso": False, "sí": True, "si": True, "no": False},
    "fr": {"vrai": True, "faux": False, "oui": True, "non": False},
    "it": {"vero": True, "falso": False, "sì": True, "si": True, "no": False},
    "hu": {"igaz": True, "hamis": False, "igen": True, "nem": False},
    "nl": {"waar": True, "onwaar": False, "ja": True, "nee": False},
    "pl": {"prawda": True, "fałsz": False, "tak": True, "nie": False},
    "pt": {"verdadeiro": True, "falso": False, "sim": True, "não": False, "nao": False},
    "sv": {"sant": True, "falskt": False, "ja": True, "nej": False},
    "tr": {"doğru": True, "yanlış": False, "evet": True, "hayır": False},
    "el": {"αληθές": True, "ψευδές": False, "ναί": True, "όχι": False},
    "kk": {"рас": True, "жалған": False},
    "ru": {"правда": True, "ложь": False, "да": True, "нет": False},
    "uk": {"правда": True, "брехня": False, "так": True, "ні": False},
    "ar": {"صحيح": True, "خطأ": False, "نعم": True, "لا": False},
    "hi": {"सही": True, "गलत": False, "हां": True, "नहीं": False},
    "th": {"จริง": True, "เท็จ": False, "ใช่": True, "ไม่": False},
    "ko": {"참": True, "거짓": False, "예": True, "아니요": False},
    "zh-CN": {"真": True, "假": False, "是": True, "否": False},
    "zh-TW": {"真": True, "假": False, "是": True, "否": False},
    "ja": {"正しい": True, "間違い": False, "はい": True, "いいえ": False},
}


def _build(raw: Dict[str, Dict[str, bool]]) -> Mapping[str, Mapping[str, bool]]:
    table = {}
    for lang, tokens in raw.items():
        merged = dict(tokens)
        merged["1"] = True
        merged["0"] = False
        table[lang] = MappingProxyType(merged)
    return MappingProxyType(table)


BOOLEAN_TOKENS: Mapping[str, Mapping[str, bool]] = _build(_RAW)


def _lookup_language(table: Mapping[str, Mapping[str, bool]], language: Optional[str]) -> Mapping[str, bool]:
    lang = (language or "en").strip()
    if lang in table:
        return table[lang]
    # "zh-cn" / "de-AT" style codes
    for key in table:
        if key.lower() == lang.lower():
            return table[key]
    base = lang.lower().split("-")[0]
    if base in table:
        return table[base]
    for key in table:
        if key.lower().split("-")[0] == base:
            return table[key]
    return table["en"]


def parse_boolean_token(
    value: Any,
    language: Optional[str] = "en",
    table: Mapping[str, Mapping[str, bool]] = BOOLEAN_TOKENS,
) -> Optional[bool]:
    """Localized token -> bool; None when the token is not recognized."""
    if isinstance(value, bool):
        return value
    if value is None:
        return None
    normalized = str(value).strip().lower()
    return _lookup_language(table, language).get(normalized)
