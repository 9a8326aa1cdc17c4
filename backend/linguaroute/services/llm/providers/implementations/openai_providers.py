"""OpenAI (GPT) model provider

General conversation and cost-effective generation (gpt-4o-mini).
"""

from typing import Any, Dict, List, Optional

from .....core.config import get_settings
from .....models.llm import LLMOptions, LLMResponse, Message, StreamChunk
from ..base_provider import BaseModelProvider
from ..provider_decorators import register_provider

OPENAI_API_URL = "https://api.openai.com/v1/chat/completions"


@register_provider("openai")
class OpenAIProvider(BaseModelProvider):
    """OpenAI Chat Completions API

    Also serves as base class for OpenAI-compatible endpoints. The system
    message stays inline as the first transcript entry.
    """

    display_name = "OpenAI"
    API_URL = OPENAI_API_URL
    DEFAULT_MODEL = "gpt-4o"
    SUPPORTED_MODELS = (
        "gpt-4o",
        "gpt-4o-mini",
        "gpt-4-turbo",
        "gpt-4",
    )

    def _build_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
        }

    def _build_payload(
        self,
        messages: List[Message],
        options: LLMOptions,
        stream: bool
    ) -> Dict[str, Any]:
        system, conversation = self.split_system_message(messages)
        ordered = ([system] if system is not None else []) + conversation

        payload = self._base_payload(options, stream)
        payload["messages"] = [
            {"role": m.role, "content": m.content} for m in ordered
        ]
        return payload

    def _parse_response(self, data: Dict[str, Any]) -> LLMResponse:
        choices = data.get("choices") or []
        message = (choices[0].get("message") if choices else None) or {}
        usage = data.get("usage") or {}

        return LLMResponse(
            content=message.get("content") or "",
            usage=self.build_usage(
                usage.get("prompt_tokens"),
                usage.get("completion_tokens"),
                usage.get("total_tokens"),
            ),
            model=self.model,
            provider=self.name,
        )

    def _parse_stream_event(self, event: Dict[str, Any]) -> Optional[StreamChunk]:
        choices = event.get("choices") or []
        if not choices:
            return None
        delta = choices[0].get("delta") or {}
        content = delta.get("content") or ""
        if not content:
            return None
        return StreamChunk(content=content, done=False)


def create_openai_provider(
    api_key: Optional[str] = None,
    model: Optional[str] = None
) -> Optional[OpenAIProvider]:
    """Build an OpenAI provider from an explicit key or configured settings

    Returns None when no key is available.
    """
    llm_settings = get_settings().llm
    key = api_key or llm_settings.openai_api_key
    if not key:
        return None
    return OpenAIProvider(
        api_key=key,
        model=model or llm_settings.openai_model,
        timeout=llm_settings.request_timeout_seconds,
    )
