import os

MAX_BODY_BYTES = 1 * 1024 * 1024  # JSON bodies only, 1 MB is plenty
DATA_DIR = os.getenv("DATA_DIR", "data")

# Model server (Ollama exposes an OpenAI-compatible API under /v1)
OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
OLLAMA_MODEL = os.getenv("OLLAMA_MODEL", "llama3.1:8b")
OLLAMA_API_KEY = os.getenv("OLLAMA_API_KEY", "ollama")  # ignored by Ollama, required by the SDK
LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT", "60"))

# Feedback analyzer configuration
MAX_TEXT_CHARS = 5000
FEEDBACK_TEMPERATURE = 0.3  # low, output must be machine-parseable
FEEDBACK_MAX_TOKENS = 1500
DEFAULT_LANGUAGE = "en"
DEFAULT_USER_LEVEL = "intermediate"

SEVERITY_PENALTY = {
    "error": 10,
    "warning": 5,
    "suggestion": 2,
}

SUPPORTED_LANGUAGES = {
    "en": {"name": "English", "flag": "🇬🇧", "voice_lang": "en-US"},
    "fr": {"name": "Français", "flag": "🇫🇷", "voice_lang": "fr-FR"},
    "es": {"name": "Español", "flag": "🇪🇸", "voice_lang": "es-ES"},
}
