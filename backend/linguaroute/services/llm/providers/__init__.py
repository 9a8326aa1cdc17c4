"""LLM provider architecture"""

from .base_provider import BaseModelProvider, LLMProvider
from .provider_registry import ModelProviderRegistry
from .provider_decorators import initialize_providers, register_provider
from .implementations.anthropic_providers import ClaudeProvider, create_claude_provider
from .implementations.openai_providers import OpenAIProvider, create_openai_provider
from .implementations.qwen_providers import QwenProvider, create_qwen_provider

__all__ = [
    'BaseModelProvider',
    'LLMProvider',
    'ModelProviderRegistry',
    'initialize_providers',
    'register_provider',
    'ClaudeProvider',
    'OpenAIProvider',
    'QwenProvider',
    'create_claude_provider',
    'create_openai_provider',
    'create_qwen_provider',
]
