from __future__ import annotations
import json
import logging
from typing import Any, List, Optional, Tuple

from pydantic import ValidationError

from langcoach.core import config
from langcoach.models.feedback import Correction, FeedbackResult
from langcoach.services import llm
from langcoach.services.errors import InvalidInput
from langcoach.services.prompts import feedback_prompt
from langcoach.utils.storage import MessageStore

log = logging.getLogger("feedback")

FEEDBACK_PART_TYPE = "language-feedback"

# replies are often wrapped in code fences or prose
_DECODER = json.JSONDecoder()


def validate_text(text: Optional[str]) -> None:
    if not text or not text.strip():
        raise InvalidInput("No text provided for analysis")
    if len(text) > config.MAX_TEXT_CHARS:
        raise InvalidInput(f"Text too long. Maximum {config.MAX_TEXT_CHARS} characters.")


def _first_array(raw: str) -> Optional[list]:
    """First embedded JSON array that is empty or holds objects."""
    start = raw.find("[")
    while start != -1:
        try:
            data, _ = _DECODER.raw_decode(raw, start)
        except ValueError:
            data = None
        if isinstance(data, list) and (not data or any(isinstance(d, dict) for d in data)):
            return data
        start = raw.find("[", start + 1)
    return None


def _extract_array(raw: str) -> Optional[list]:
    try:
        data = json.loads(raw)
    except ValueError:
        data = _first_array(raw or "")
    return data if isinstance(data, list) else None


def _normalize_item(item: dict) -> dict:
    data = {k: v for k, v in item.items() if k != "id"}
    for key in ("type", "kind", "severity"):
        if isinstance(data.get(key), str):
            data[key] = data[key].strip().lower()
    return data


def _occurrences(text: str, needle: str) -> List[int]:
    found = []
    i = text.find(needle)
    while i != -1:
        found.append(i)
        i = text.find(needle, i + 1)
    return found


def _locate(text: str, c: Correction) -> Optional[Tuple[int, int]]:
    """
    Offsets whose slice equals c.original. Models are unreliable at counting
    characters, so a mismatched range is moved to the nearest occurrence.
    """
    if c.end_index <= len(text) and text[c.start_index:c.end_index] == c.original:
        return c.start_index, c.end_index
    if not c.original:
        return None
    hits = _occurrences(text, c.original)
    if not hits:
        return None
    start = min(hits, key=lambda p: abs(p - c.start_index))
    return start, start + len(c.original)


def parse_corrections(raw: str, text: str) -> List[Correction]:
    """
    Turn a raw model reply into validated corrections for `text`.
    Never raises: anything unusable is logged and dropped.
    """
    items = _extract_array(raw)
    if items is None:
        log.warning("Failed to parse feedback JSON: %.200r", raw)
        return []

    corrections: List[Correction] = []
    for pos, item in enumerate(items):
        if not isinstance(item, dict):
            log.warning("Dropping correction %d: not an object", pos)
            continue
        try:
            c = Correction.model_validate(_normalize_item(item))
        except ValidationError as e:
            log.warning("Dropping correction %d: %d validation error(s)", pos, e.error_count())
            continue
        span = _locate(text, c)
        if span is None:
            log.warning("Dropping correction %d: %r not found in text", pos, c.original)
            continue
        c.start_index, c.end_index = span
        corrections.append(c)
    return corrections


def count_by_severity(corrections: List[Correction]) -> dict:
    counts = {severity: 0 for severity in config.SEVERITY_PENALTY}
    for c in corrections:
        counts[c.severity] += 1
    return counts


def score_corrections(corrections: List[Correction]) -> int:
    # 100 minus 10 per error, 5 per warning, 2 per suggestion, clamped
    counts = count_by_severity(corrections)
    penalty = sum(config.SEVERITY_PENALTY[s] * n for s, n in counts.items())
    return max(0, min(100, 100 - penalty))


def summarize(corrections: List[Correction]) -> str:
    counts = count_by_severity(corrections)
    errors = counts["error"]
    if errors:
        return f"Found {errors} grammar error{'s' if errors > 1 else ''} to fix."
    if counts["warning"]:
        return "Good! A few improvements suggested."
    if counts["suggestion"]:
        return "Excellent! Just some minor style suggestions."
    return "Great job!"


def analyze(
    text: str,
    target_language: Optional[str] = config.DEFAULT_LANGUAGE,
    user_level: Optional[str] = config.DEFAULT_USER_LEVEL,
    context: Optional[str] = None,
) -> FeedbackResult:
    """
    Critique one piece of learner text.

    Raises InvalidInput for empty or over-long text and GenerationUnavailable
    when the model server fails. A reply that is not a JSON array is treated
    as "no corrections" rather than an error.
    """
    validate_text(text)
    prompt = feedback_prompt(
        text,
        target_language=target_language,
        user_level=user_level or config.DEFAULT_USER_LEVEL,
        context=context,
    )
    raw = llm.generate_text(
        prompt,
        temperature=config.FEEDBACK_TEMPERATURE,
        max_tokens=config.FEEDBACK_MAX_TOKENS,
    )
    corrections = parse_corrections(raw, text)
    log.info("Analyzed %d chars: %d correction(s)", len(text), len(corrections))
    return FeedbackResult(
        original=text,
        corrections=corrections,
        overall_score=score_corrections(corrections),
        summary=summarize(corrections),
    )


def attach_feedback(
    message_id: str,
    result: FeedbackResult,
    store: Optional[MessageStore] = None,
) -> bool:
    """Best-effort: append `result` to a stored message's parts. Never raises."""
    store = store or MessageStore()
    part: dict[str, Any] = {"type": FEEDBACK_PART_TYPE, "data": result.model_dump(by_alias=True)}
    try:
        message = store.get(message_id)
        if message is None:
            log.warning("Cannot attach feedback: message %s not found", message_id)
            return False
        store.replace_parts(message_id, [*message.parts, part])
    except Exception:
        log.exception("Failed to attach feedback to message %s", message_id)
        return False
    return True
