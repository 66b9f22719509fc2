# tests/conftest.py
import os
import sys

import pytest

# Ensure repository root is on PYTHONPATH for tests
repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

# Placeholder secret so the settings validator stays quiet during tests
os.environ.setdefault("BOOK_ANTHROPIC_API", "test-key")
os.environ.setdefault("ENABLE_RICH_LOGGING", "false")


@pytest.fixture
def long_chapter_text() -> str:
    """Roughly 27,000 characters of 300 distinct words."""
    return " ".join(f"word{i:03d}" + "x" * 82 for i in range(300))


@pytest.fixture
def fake_llm(monkeypatch):
    """Replace the provider call with a recorder returning canned replies."""
    from core.llm_interface import llm_service

    class FakeLLM:
        def __init__(self) -> None:
            self.calls: list[dict] = []
            self.reply = "Here is some help."
            self.usage: dict | None = {"input_tokens": 12, "output_tokens": 7}

        async def __call__(self, model_name, prompt=None, **kwargs):
            self.calls.append({"model_name": model_name, "prompt": prompt, **kwargs})
            return self.reply, self.usage

    fake = FakeLLM()
    monkeypatch.setattr(llm_service, "async_call_llm", fake)
    return fake
