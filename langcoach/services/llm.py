# langcoach/services/llm.py
import logging
from typing import List

from openai import OpenAI, OpenAIError

from langcoach.core import config
from langcoach.services.errors import GenerationUnavailable

log = logging.getLogger("llm")

_client = None


def client() -> OpenAI:
    """Lazily built client for Ollama's OpenAI-compatible endpoint."""
    global _client
    if _client is None:
        _client = OpenAI(
            base_url=config.OLLAMA_BASE_URL.rstrip("/") + "/v1",
            api_key=config.OLLAMA_API_KEY,
            timeout=config.LLM_TIMEOUT,
            max_retries=0,  # one outbound call per analysis
        )
    return _client


def _chat(messages: list, temperature: float, max_tokens: int) -> str:
    """Single call to Chat Completions."""
    log.info(
        "LLM chat call model=%s, messages=%d, temperature=%.2f, max_tokens=%d",
        config.OLLAMA_MODEL, len(messages), temperature, max_tokens,
    )
    resp = client().chat.completions.create(
        model=config.OLLAMA_MODEL,
        messages=messages,
        temperature=temperature,
        max_tokens=max_tokens,
    )
    if not resp.choices:
        log.warning("LLM reply had no choices")
        return ""
    return resp.choices[0].message.content or ""


def generate_text(
    prompt: str,
    temperature: float = config.FEEDBACK_TEMPERATURE,
    max_tokens: int = config.FEEDBACK_MAX_TOKENS,
) -> str:
    """
    Send one user prompt and return the raw completion text.
    Any transport or API failure is raised as GenerationUnavailable.
    """
    try:
        return _chat([{"role": "user", "content": prompt}], temperature, max_tokens)
    except OpenAIError as e:
        log.warning("LLM call failed: %s", e)
        raise GenerationUnavailable(f"Model server error: {e}") from e


def list_models() -> List[str]:
    try:
        return [m.id for m in client().models.list()]
    except OpenAIError as e:
        log.warning("Could not list models from %s: %s", config.OLLAMA_BASE_URL, e)
        return []


def check_health() -> bool:
    try:
        client().models.list()
        return True
    except OpenAIError as e:
        log.warning("Model server health check failed: %s", e)
        return False
