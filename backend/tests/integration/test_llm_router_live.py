"""End-to-end tests against live provider endpoints

Skipped unless the matching API key is set in the environment.
"""

import os

import pytest

from linguaroute.models.llm import TaskType
from linguaroute.services.llm import LLMRouter


pytestmark = pytest.mark.integration

TUTOR_PROMPT = [
    {"role": "system", "content": "You are a concise Japanese teacher. Answer in one line."},
    {"role": "user", "content": "How do I say 'good morning'?"},
]


def _has_key(*names: str) -> bool:
    return any(os.getenv(name) for name in names)


@pytest.fixture
def router() -> LLMRouter:
    return LLMRouter()


class TestLiveProviders:
    """Test real chat and stream calls"""

    @pytest.mark.asyncio
    @pytest.mark.skipif(
        not _has_key("CLAUDE_API_KEY", "ANTHROPIC_API_KEY"),
        reason="Claude API key not configured"
    )
    async def test_claude_chat(self, router):
        response = await router.chat(TUTOR_PROMPT, {"taskType": TaskType.CONVERSATION, "maxTokens": 64})

        assert response.provider == "claude"
        assert response.content
        assert response.usage.output_tokens > 0

    @pytest.mark.asyncio
    @pytest.mark.skipif(not _has_key("OPENAI_API_KEY"), reason="OpenAI API key not configured")
    async def test_openai_stream(self, router):
        chunks = [
            chunk async for chunk in router.stream(
                TUTOR_PROMPT,
                {"taskType": TaskType.EXERCISE_GENERATION, "maxTokens": 64}
            )
        ]

        assert chunks[-1].done is True
        assert sum(1 for chunk in chunks if chunk.done) == 1
        assert "".join(chunk.content for chunk in chunks)

    @pytest.mark.asyncio
    @pytest.mark.skipif(
        not _has_key("QWEN_API_KEY", "DASHSCOPE_API_KEY"),
        reason="Qwen API key not configured"
    )
    async def test_qwen_grammar_correction(self, router):
        response = await router.chat(
            [{"role": "user", "content": "Correct this: 私は学生があります。"}],
            {"taskType": TaskType.GRAMMAR_CORRECTION, "maxTokens": 128}
        )

        assert response.provider == "qwen"
        assert response.content
