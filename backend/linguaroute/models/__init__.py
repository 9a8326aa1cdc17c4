"""Data models"""

from .llm import (
    LLMOptions,
    LLMResponse,
    Message,
    ProviderName,
    RoutingConfig,
    StreamChunk,
    TaskType,
    TokenUsage,
    merge_routing_config,
)

__all__ = [
    "LLMOptions",
    "LLMResponse",
    "Message",
    "ProviderName",
    "RoutingConfig",
    "StreamChunk",
    "TaskType",
    "TokenUsage",
    "merge_routing_config",
]
