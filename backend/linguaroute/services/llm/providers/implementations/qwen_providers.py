"""Qwen (Alibaba DashScope) model provider

Strongest on Japanese, Korean and Chinese. DashScope exposes an
OpenAI-compatible endpoint, so only the host, name and models differ.
"""

from typing import Optional

from .....core.config import get_settings
from ..provider_decorators import register_provider
from .openai_providers import OpenAIProvider

QWEN_API_URL = "https://dashscope.aliyuncs.com/compatible-mode/v1/chat/completions"


@register_provider("qwen")
class QwenProvider(OpenAIProvider):
    """Qwen through DashScope compatible mode"""

    display_name = "Qwen"
    API_URL = QWEN_API_URL
    DEFAULT_MODEL = "qwen-plus"
    SUPPORTED_MODELS = (
        "qwen-max",     # most capable
        "qwen-plus",    # balanced
        "qwen-turbo",   # fast and cheap
        "qwen-long",    # long context
    )


def create_qwen_provider(
    api_key: Optional[str] = None,
    model: Optional[str] = None
) -> Optional[QwenProvider]:
    """Build a Qwen provider from an explicit key or configured settings

    Returns None when no key is available.
    """
    llm_settings = get_settings().llm
    key = api_key or llm_settings.qwen_api_key
    if not key:
        return None
    return QwenProvider(
        api_key=key,
        model=model or llm_settings.qwen_model,
        timeout=llm_settings.request_timeout_seconds,
    )
