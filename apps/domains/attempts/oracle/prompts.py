# apps/domains/attempts/oracle/prompts.py
from __future__ import annotations

SYSTEM_PROMPT = (
    "You are an expert educator grading learner responses. "
    "Always answer with a single JSON object."
)

RESPONSE_TYPE_INSTRUCTIONS = {
    "CODE": "Judge correctness, readability and structure of the code.",
    "ESSAY": "Judge argument quality, structure and use of evidence.",
    "REPORT": "Judge completeness, accuracy and clarity of the report.",
    "LIVE_RECORDING": "Judge delivery, clarity of speech and body language using the provided reports.",
    "PRESENTATION": "Judge slide content together with the recorded narration.",
}

KIND_INTRO = {
    "text": "Evaluate the learner's written response.",
    "file": "Evaluate the learner's uploaded file(s). Each file carries its filename and content.",
    "url": "Evaluate the content retrieved from the URL the learner submitted. "
           "If the URL was not functional, award zero points and say so.",
    "presentation": "Evaluate the learner's live recording (transcript, speech and body-language reports).",
    "video_presentation": "Evaluate the learner's video presentation (slides plus narration).",
}

GRADING_TEMPLATE = """
{intro}

QUESTION:
{question}

ASSIGNMENT INSTRUCTIONS:
{assignment_instructions}

PREVIOUS QUESTIONS AND ANSWERS:
{previous_questions_and_answers}

LEARNER RESPONSE:
{learner_response}

RESPONSE TYPE SPECIFIC INSTRUCTIONS:
{response_specific_instruction}

SCORING INFORMATION:
Total Points Available: {total_points}
Scoring Type: {scoring_type}
Scoring Criteria: {scoring_criteria}

GRADING INSTRUCTIONS:
1. Evaluate the response against the scoring criteria.
2. Award points based on how well the response meets the criteria, never above the total.
3. Explain the points awarded and give guidance for improvement.
4. Write the feedback in this language: {language}

Respond with JSON: {{"points": <number>, "feedback": "<string>", "gradingRationale": "<string>"}}
""".strip()
