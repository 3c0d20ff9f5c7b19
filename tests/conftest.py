# tests/conftest.py
from __future__ import annotations
import json
import shutil
import tempfile
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from langcoach.main import app
from langcoach.core import config
from langcoach.services import llm

# --------------------------------------------------------------------
# Temporary DATA_DIR so tests don't pollute the real data dir
# --------------------------------------------------------------------
@pytest.fixture(scope="session")
def tmp_data_dir() -> Generator[str, None, None]:
    d = tempfile.mkdtemp(prefix="test-data-")
    yield d
    shutil.rmtree(d, ignore_errors=True)

@pytest.fixture(autouse=True, scope="session")
def patch_data_dir(tmp_data_dir):
    config.DATA_DIR = tmp_data_dir

# --------------------------------------------------------------------
# FastAPI test client available as fixture `client`
# --------------------------------------------------------------------
@pytest.fixture(scope="session")
def client() -> TestClient:
    return TestClient(app)

# --------------------------------------------------------------------
# Sample learner text and a model reply for it
# --------------------------------------------------------------------
SAMPLE_TEXT = "I go to school yesterday."

@pytest.fixture
def sample_text() -> str:
    return SAMPLE_TEXT

@pytest.fixture
def go_went() -> dict:
    return {
        "type": "grammar",
        "severity": "error",
        "original": "go",
        "suggestion": "went",
        "explanation": "Use the past tense with 'yesterday'.",
        "startIndex": 2,
        "endIndex": 4,
    }

# --------------------------------------------------------------------
# Stub model server: no Ollama needed during tests
# --------------------------------------------------------------------
class FakeModel:
    def __init__(self):
        self.reply = "[]"
        self.error: Exception | None = None
        self.calls: list[dict] = []

    def returns(self, reply):
        self.reply = reply if isinstance(reply, str) else json.dumps(reply)

    def fails_with(self, error: Exception):
        self.error = error

    def __call__(self, messages: list, temperature: float, max_tokens: int) -> str:
        self.calls.append({"messages": messages, "temperature": temperature, "max_tokens": max_tokens})
        if self.error is not None:
            raise self.error
        return self.reply

    @property
    def last_prompt(self) -> str:
        return self.calls[-1]["messages"][-1]["content"]

@pytest.fixture(autouse=True)
def fake_model(monkeypatch) -> FakeModel:
    fake = FakeModel()
    monkeypatch.setattr(llm, "_chat", fake)
    return fake
