from __future__ import annotations
from typing import Optional, Tuple

from langcoach.core.config import DEFAULT_LANGUAGE

# target language -> (language being learned, learner's native language)
LANGUAGE_NAMES = {
    "en": ("English", "French"),
    "fr": ("French", "English"),
    "es": ("Spanish", "English"),
}


def language_pair(target_language: Optional[str]) -> Tuple[str, str]:
    return LANGUAGE_NAMES.get(target_language or "", LANGUAGE_NAMES[DEFAULT_LANGUAGE])


def analyzer_instructions(target_language: Optional[str] = DEFAULT_LANGUAGE) -> str:
    learning, native = language_pair(target_language)
    return (
        f"You are an expert {learning} language instructor analyzing text from a "
        f"{native} speaker learning {learning}.\n\n"
        f"Your task is to identify errors and areas for improvement in their {learning} "
        "text, returning a JSON array of corrections.\n\n"
        "Focus on:\n"
        "1. Grammar errors (verb tenses, subject-verb agreement, articles, etc.)\n"
        "2. Vocabulary issues (incorrect word choice, unnatural phrasing)\n"
        "3. Style improvements (more natural/idiomatic expressions)\n\n"
        "Prioritize:\n"
        "- Major errors over minor ones\n"
        "- Common mistakes over rare edge cases\n"
        "- Focus on 2-5 most important corrections\n\n"
        "For each correction, provide:\n"
        '- type: "grammar" | "vocabulary" | "style"\n'
        '- severity: "error" | "warning" | "suggestion"\n'
        "- original: the problematic text, copied exactly\n"
        "- suggestion: the corrected version\n"
        "- explanation: why this is better (in simple, friendly language, explain "
        f"in {native})\n"
        "- startIndex: character position where the issue starts\n"
        "- endIndex: character position where the issue ends (exclusive)\n\n"
        "Return ONLY valid JSON array of corrections, no other text.\n\n"
        "Example format:\n"
        "[\n"
        "  {\n"
        '    "type": "grammar",\n'
        '    "severity": "error",\n'
        '    "original": "incorrect phrase",\n'
        '    "suggestion": "corrected phrase",\n'
        '    "explanation": "Brief explanation of why this is better",\n'
        '    "startIndex": 0,\n'
        '    "endIndex": 16\n'
        "  }\n"
        "]"
    )


def feedback_prompt(
    text: str,
    target_language: Optional[str] = DEFAULT_LANGUAGE,
    user_level: str = "intermediate",
    context: Optional[str] = None,
) -> str:
    """Full analysis prompt sent to the model for one piece of learner text."""
    lines = [
        analyzer_instructions(target_language),
        "",
        f"User level: {user_level}",
    ]
    if context:
        lines.append(f"Context: {context}")
    lines += [
        "",
        "Text to analyze:",
        f'"{text}"',
        "",
        "Return ONLY a valid JSON array of corrections. "
        "If there are no corrections needed, return an empty array [].",
    ]
    return "\n".join(lines)
