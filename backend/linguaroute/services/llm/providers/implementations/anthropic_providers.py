"""Anthropic (Claude) model provider

Best for teaching explanations, cultural context and keeping a persona.
"""

from typing import Any, Dict, List, Optional

from .....core.config import get_settings
from .....models.llm import LLMOptions, LLMResponse, Message, StreamChunk
from ..base_provider import BaseModelProvider
from ..provider_decorators import register_provider

CLAUDE_API_URL = "https://api.anthropic.com/v1/messages"
CLAUDE_VERSION = "2023-06-01"


@register_provider("claude")
class ClaudeProvider(BaseModelProvider):
    """Claude Messages API

    The system prompt travels as the top-level ``system`` field, so it is
    pulled out of the transcript. Streamed text arrives in
    ``content_block_delta`` events.
    """

    display_name = "Claude"
    API_URL = CLAUDE_API_URL
    DEFAULT_MODEL = "claude-3-5-sonnet-20241022"
    SUPPORTED_MODELS = (
        "claude-sonnet-4-20250514",
        "claude-3-5-sonnet-20241022",
        "claude-3-5-haiku-20241022",
        "claude-3-opus-20240229",
    )

    def _build_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": self._api_key,
            "anthropic-version": CLAUDE_VERSION,
        }

    def _build_payload(
        self,
        messages: List[Message],
        options: LLMOptions,
        stream: bool
    ) -> Dict[str, Any]:
        system, conversation = self.split_system_message(messages)

        payload = self._base_payload(options, stream)
        if system is not None:
            payload["system"] = system.content
        payload["messages"] = [
            {"role": m.role, "content": m.content} for m in conversation
        ]
        return payload

    def _parse_response(self, data: Dict[str, Any]) -> LLMResponse:
        blocks = data.get("content") or []
        text = (blocks[0].get("text") if blocks else None) or ""
        usage = data.get("usage") or {}

        return LLMResponse(
            content=text,
            usage=self.build_usage(usage.get("input_tokens"), usage.get("output_tokens")),
            model=self.model,
            provider=self.name,
        )

    def _parse_stream_event(self, event: Dict[str, Any]) -> Optional[StreamChunk]:
        event_type = event.get("type")
        if event_type == "content_block_delta":
            delta = event.get("delta") or {}
            return StreamChunk(content=delta.get("text") or "", done=False)
        if event_type == "message_stop":
            return StreamChunk(content="", done=True)
        return None


def create_claude_provider(
    api_key: Optional[str] = None,
    model: Optional[str] = None
) -> Optional[ClaudeProvider]:
    """Build a Claude provider from an explicit key or configured settings

    Returns None when no key is available.
    """
    llm_settings = get_settings().llm
    key = api_key or llm_settings.claude_api_key
    if not key:
        return None
    return ClaudeProvider(
        api_key=key,
        model=model or llm_settings.claude_model,
        timeout=llm_settings.request_timeout_seconds,
    )
