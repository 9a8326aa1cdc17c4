"""Unit test isolation: no real credentials, fresh settings and router"""

import pytest

from linguaroute.core.config import get_settings
from linguaroute.services.llm.router import reset_llm_router

CREDENTIAL_ENV_VARS = (
    "CLAUDE_API_KEY",
    "ANTHROPIC_API_KEY",
    "OPENAI_API_KEY",
    "QWEN_API_KEY",
    "DASHSCOPE_API_KEY",
    "GEMINI_API_KEY",
    "CLAUDE_MODEL",
    "OPENAI_MODEL",
    "QWEN_MODEL",
    "LLM_DEFAULT_PROVIDER",
)


@pytest.fixture(autouse=True)
def isolated_llm_env(monkeypatch, tmp_path):
    """Strip provider credentials and reset cached settings around each test"""
    for name in CREDENTIAL_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("CONFIG_PATH", str(tmp_path / "missing.yaml"))
    # Keep a developer's .env out of the picture
    monkeypatch.chdir(tmp_path)

    reset_llm_router()
    yield
    reset_llm_router()
    get_settings.cache_clear()
