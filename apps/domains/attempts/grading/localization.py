# PATH: apps/domains/attempts/grading/localization.py
"""
Grading message catalog.

get_localized_string(key, language, placeholders)
- unknown language -> English
- unknown key      -> the key itself
- "{name}" placeholders are substituted
"""
from __future__ import annotations

import re
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

_EN: Dict[str, str] = {
    "noResponse": "You did not provide a response to this question.",
    # true / false
    "expectedTrueFalse": "Expected a true/false response, but did not receive one.",
    "invalidTrueFalse": "Invalid true/false response.",
    "correctTF": "Correct! Your answer is right.",
    "incorrectTF": "Incorrect. The correct answer is {correctAnswer}.",
    "true": "True",
    "false": "False",
    # choices
    "correctSelection": "**Correct selection:** {learnerChoice} (+{points} points)",
    "incorrectSelection": "**Incorrect selection:** {learnerChoice} (-{points} points)",
    "invalidSelection": "**Invalid selection:** {learnerChoice}",
    "noOptionSelected": "**You didn't select any option.**",
    "correctOptions": "The correct option(s) were: **{correctOptions}**.",
    "allCorrectSelected": "**You selected all correct options!**",
    "tooManyChoicesSelected": "Too many options selected. You may select at most {max}.",
    "unsupportedChoiceType": "Unsupported choice question type: {type}",
    # text
    "expectedTextResponse": "Expected a text response, but did not receive one.",
    "exceededMaxWords": "Your response exceeds the maximum of {maxWords} words ({currentWords} words).",
    "exceededMaxChars": "Your response exceeds the maximum of {maxChars} characters ({currentChars} characters).",
    # file / url / presentation
    "expectedFileResponse": "Expected a file upload, but did not receive one.",
    "expectedUrlResponse": "Expected a URL response, but did not receive one.",
    "invalidUrl": "The URL provided is not valid: {url}",
    "unableToFetchUrl": "We could not retrieve any content from {url}.",
    "expectedPresentationResponse": "Expected a presentation response, but did not receive one.",
    "unsupportedPresentationType": "Unsupported presentation response type: {type}",
    "expectedLinkOrFile": "Expected a file-based or URL-based response, but did not receive one.",
}

_AR: Dict[str, str] = {
    "noResponse": "لم تقدم إجابة على هذا السؤال.",
    "expectedTrueFalse": "كان من المتوقع الحصول على إجابة صحيحة/خاطئة، ولكن لم يتم الحصول عليها.",
    "invalidTrueFalse": "إجابة صحيحة/خاطئة غير صالحة.",
    "correctTF": "صحيح! إجابتك صحيحة.",
    "incorrectTF": "خطأ. الإجابة الصحيحة هي {correctAnswer}.",
    "true": "صحيح",
    "false": "خطأ",
    "correctSelection": "**الاختيار الصحيح:** {learnerChoice} (+{points} نقطة)",
    "incorrectSelection": "**الاختيار غير الصحيح:** {learnerChoice} (-{points} نقطة)",
    "invalidSelection": "**الاختيار غير صالح:** {learnerChoice}",
    "noOptionSelected": "**لم تختر أي خيار.**",
    "correctOptions": "الخيارات الصحيحة هي: **{correctOptions}**.",
    "allCorrectSelected": "**لقد اخترت جميع الخيارات الصحيحة!**",
}

_ID: Dict[str, str] = {
    "noResponse": "Anda tidak memberikan jawaban untuk pertanyaan ini.",
    "expectedTrueFalse": "Diharapkan jawaban benar/salah, tetapi tidak diterima.",
    "invalidTrueFalse": "Jawaban benar/salah tidak valid.",
    "correctTF": "Benar! Jawaban Anda benar.",
    "incorrectTF": "Salah. Jawaban yang benar adalah {correctAnswer}.",
    "true": "Benar",
    "false": "Salah",
    "correctSelection": "**Pilihan benar:** {learnerChoice} (+{points} poin)",
    "incorrectSelection": "**Pilihan salah:** {learnerChoice} (-{points} poin)",
    "invalidSelection": "**Pilihan tidak valid:** {learnerChoice}",
    "noOptionSelected": "**Anda tidak memilih opsi apa pun.**",
    "correctOptions": "Opsi yang benar adalah: **{correctOptions}**.",
    "allCorrectSelected": "**Anda memilih semua opsi yang benar!**",
}

_DE: Dict[str, str] = {
    "noResponse": "Sie haben keine Antwort auf diese Frage gegeben.",
    "expectedTrueFalse": "Eine Ja/Nein-Antwort wurde erwartet, aber nicht erhalten.",
    "invalidTrueFalse": "Ungültige Ja/Nein-Antwort.",
    "correctTF": "Richtig! Ihre Antwort ist korrekt.",
    "incorrectTF": "Falsch. Die richtige Antwort ist {correctAnswer}.",
    "true": "Wahr",
    "false": "Falsch",
    "correctSelection": "**Richtige Auswahl:** {learnerChoice} (+{points} Punkte)",
    "incorrectSelection": "**Falsche Auswahl:** {learnerChoice} (-{points} Punkte)",
    "invalidSelection": "**Ungültige Auswahl:** {learnerChoice}",
    "noOptionSelected": "**Sie haben keine Option ausgewählt.**",
    "correctOptions": "Die richtige(n) Option(en) waren: **{correctOptions}**.",
    "allCorrectSelected": "**Sie haben alle richtigen Optionen ausgewählt!**",
}

_ES: Dict[str, str] = {
    "noResponse": "No proporcionaste una respuesta a esta pregunta.",
    "expectedTrueFalse": "Se esperaba una respuesta verdadero/falso, pero no se recibió.",
    "invalidTrueFalse": "Respuesta verdadero/falso inválida.",
    "correctTF": "¡Correcto! Tu respuesta es correcta.",
    "incorrectTF": "Incorrecto. La respuesta correcta es {correctAnswer}.",
    "true": "Verdadero",
    "false": "Falso",
    "correctSelection": "**Selección correcta:** {learnerChoice} (+{points} puntos)",
    "incorrectSelection": "**Selección incorrecta:** {learnerChoice} (-{points} puntos)",
    "invalidSelection": "**Selección inválida:** {learnerChoice}",
    "noOptionSelected": "**No seleccionaste ninguna opción.**",
    "correctOptions": "La(s) opción(es) correcta(s) eran: **{correctOptions}**.",
    "allCorrectSelected": "**¡Seleccionaste todas las opciones correctas!**",
}

_FR: Dict[str, str] = {
    "noResponse": "Vous n'avez pas répondu à cette question.",
    "expectedTrueFalse": "Une réponse vrai/faux était attendue, mais non reçue.",
    "invalidTrueFalse": "Réponse vrai/faux invalide.",
    "correctTF": "Correct ! Votre réponse est juste.",
    "incorrectTF": "Incorrect. La bonne réponse est {correctAnswer}.",
    "true": "Vrai",
    "false": "Faux",
    "correctSelection": "**Sélection correcte:** {learnerChoice} (+{points} points)",
    "incorrectSelection": "**Sélection incorrecte:** {learnerChoice} (-{points} points)",
    "invalidSelection": "**Sélection invalide:** {learnerChoice}",
    "noOptionSelected": "**Vous n'avez sélectionné aucune option.**",
    "correctOptions": "Les options correctes étaient: **{correctOptions}**.",
    "allCorrectSelected": "**Vous avez sélectionné toutes les options correctes !**",
}

MESSAGES: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        "en": MappingProxyType(_EN),
        "ar": MappingProxyType(_AR),
        "id": MappingProxyType(_ID),
        "de": MappingProxyType(_DE),
        "es": MappingProxyType(_ES),
        "fr": MappingProxyType(_FR),
    }
)

_PUNCTUATION = re.compile(r"[!,.،؛؟]")
_TEMPLATE_VAR = re.compile(r"\$\{(.*?)\}")


def normalize_language(language: Optional[str]) -> str:
    """'en-US' -> 'en'; empty -> 'en'."""
    if not language:
        return "en"
    return str(language).strip().lower().split("-")[0] or "en"


def get_localized_string(
    key: str,
    language: Optional[str] = None,
    placeholders: Optional[Dict[str, Any]] = None,
) -> str:
    lang_dict = MESSAGES.get(normalize_language(language)) or MESSAGES["en"]
    text = lang_dict.get(key) or MESSAGES["en"].get(key) or key

    for name, value in (placeholders or {}).items():
        text = text.replace("{" + name + "}", str(value))
    return text


def normalize_text(text: Any) -> str:
    """trim + lowercase + strip punctuation that differs across translations."""
    return _PUNCTUATION.sub("", str(text or "").strip().lower())


def format_feedback(template: str, data: Dict[str, Any]) -> str:
    """Author feedback templates use ${var} placeholders."""
    def _sub(m):
        v = data.get(m.group(1))
        return "" if v is None else str(v)

    return _TEMPLATE_VAR.sub(_sub, template)


def format_points(points: float) -> str:
    """2.0 -> '2', 2.5 -> '2.5'."""
    p = float(points or 0)
    return str(int(p)) if p.is_integer() else str(p)
