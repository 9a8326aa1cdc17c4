"""LLM services: provider abstraction and task-based routing

Usage::

    from linguaroute.core.telemetry import setup_telemetry
    from linguaroute.services.llm import get_llm_router

    setup_telemetry()  # no-op unless TELEMETRY_ENABLED
    router = get_llm_router()
    response = await router.chat(
        [{"role": "system", "content": "You are a Japanese teacher..."},
         {"role": "user", "content": "How do I say hello?"}],
        {"task_type": "grammar_correction"},
    )

    async for chunk in router.stream(messages):
        print(chunk.content, end="")
"""

from .exceptions import (
    LLMError,
    NoProviderConfiguredError,
    ProviderNotConfiguredError,
    StreamTransportError,
    UpstreamAPIError,
)
from .providers import (
    BaseModelProvider,
    ClaudeProvider,
    LLMProvider,
    OpenAIProvider,
    QwenProvider,
    create_claude_provider,
    create_openai_provider,
    create_qwen_provider,
)
from .router import DEFAULT_ROUTING_CONFIG, LLMRouter, get_llm_router, reset_llm_router

__all__ = [
    "LLMError",
    "NoProviderConfiguredError",
    "ProviderNotConfiguredError",
    "StreamTransportError",
    "UpstreamAPIError",
    "BaseModelProvider",
    "LLMProvider",
    "ClaudeProvider",
    "OpenAIProvider",
    "QwenProvider",
    "create_claude_provider",
    "create_openai_provider",
    "create_qwen_provider",
    "LLMRouter",
    "DEFAULT_ROUTING_CONFIG",
    "get_llm_router",
    "reset_llm_router",
]
