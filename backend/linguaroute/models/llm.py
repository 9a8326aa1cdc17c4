"""Data models shared by LLM providers and the task router"""

from enum import Enum
from typing import Any, Dict, List, Literal, Mapping, Optional, Sequence, Union
from pydantic import BaseModel, ConfigDict, Field


class TaskType(str, Enum):
    """Categories of conversational intent used for provider routing"""
    CONVERSATION = "conversation"
    GRAMMAR_CORRECTION = "grammar_correction"
    CULTURAL_EXPLANATION = "cultural_explanation"
    VOCABULARY = "vocabulary"
    EXERCISE_GENERATION = "exercise_generation"
    TRANSLATION = "translation"


class ProviderName(str, Enum):
    """Known provider name tags"""
    CLAUDE = "claude"
    OPENAI = "openai"
    QWEN = "qwen"
    GEMINI = "gemini"  # Reserved, no built-in implementation


class Message(BaseModel):
    """One role-tagged entry of a transcript"""
    role: Literal["system", "user", "assistant"] = Field(..., description="Message author role")
    content: str = Field(..., description="Message text")


class LLMOptions(BaseModel):
    """Per-call options accepted by providers and the router"""
    model_config = ConfigDict(populate_by_name=True)

    temperature: Optional[float] = Field(None, ge=0.0, le=1.0, description="Sampling temperature")
    max_tokens: int = Field(4096, gt=0, alias="maxTokens", description="Max response tokens")
    task_type: Optional[TaskType] = Field(None, alias="taskType", description="Routing hint")
    stream: bool = Field(False, description="Informational; stream() is what enables streaming")


class TokenUsage(BaseModel):
    """Token accounting for one completion"""
    input_tokens: int = Field(0, ge=0)
    output_tokens: int = Field(0, ge=0)
    total_tokens: int = Field(0, ge=0)


class LLMResponse(BaseModel):
    """Normalized chat completion result"""
    content: str = Field(..., description="Generated text")
    usage: Optional[TokenUsage] = Field(None, description="Token counts, zero-filled when omitted upstream")
    model: str = Field(..., description="Model identifier that produced the content")
    provider: str = Field(..., description="Name of the provider that produced the content")


class StreamChunk(BaseModel):
    """Incremental piece of a streamed completion"""
    content: str = Field("", description="Text fragment, always empty on the terminal chunk")
    done: bool = Field(False, description="True only on the single terminal chunk")


class RoutingConfig(BaseModel):
    """Task to provider routing table"""
    default: str = Field(..., description="Provider used when no task route applies")
    tasks: Dict[str, str] = Field(default_factory=dict, description="Task type to provider name")


MessageInput = Union[Message, Mapping[str, Any]]
OptionsInput = Union[LLMOptions, Mapping[str, Any], None]
RoutingInput = Union[RoutingConfig, Mapping[str, Any], None]


def coerce_messages(messages: Sequence[MessageInput]) -> List[Message]:
    """Accept Message models or plain role/content dicts, preserving order"""
    return [m if isinstance(m, Message) else Message.model_validate(m) for m in messages]


def coerce_options(options: OptionsInput) -> LLMOptions:
    if options is None:
        return LLMOptions()
    if isinstance(options, LLMOptions):
        return options
    return LLMOptions.model_validate(dict(options))


def merge_routing_config(base: RoutingConfig, partial: RoutingInput) -> RoutingConfig:
    """Merge a partial routing config into ``base``

    ``default`` is replaced wholesale when given. ``tasks`` is merged key by
    key: task types absent from ``partial`` keep their previous provider.
    """
    if partial is None:
        return base.model_copy(deep=True)

    if isinstance(partial, RoutingConfig):
        new_default: Optional[str] = partial.default
        new_tasks: Mapping[str, Any] = partial.tasks
    else:
        new_default = partial.get("default")
        new_tasks = partial.get("tasks") or {}

    tasks = dict(base.tasks)
    for task, provider in new_tasks.items():
        tasks[_task_key(task)] = _provider_key(provider)

    return RoutingConfig(
        default=_provider_key(new_default) if new_default else base.default,
        tasks=tasks,
    )


def _task_key(task: Union[TaskType, str]) -> str:
    return task.value if isinstance(task, TaskType) else str(task)


def _provider_key(provider: Union[ProviderName, str]) -> str:
    return provider.value if isinstance(provider, ProviderName) else str(provider)
