"""Task-based LLM router

Routes each call to the provider best suited to its task category, e.g.
cultural explanations to Claude, grammar corrections and translation to
Qwen, exercise generation to OpenAI. Unavailable choices degrade to the
default provider and then to any usable provider.
"""

from typing import AsyncIterator, Dict, List, Optional, Sequence, Union

from ...core.config import DEFAULT_TASK_ROUTES, LLMConfig, get_settings
from ...models.llm import (
    LLMOptions,
    LLMResponse,
    MessageInput,
    OptionsInput,
    RoutingConfig,
    RoutingInput,
    StreamChunk,
    TaskType,
    coerce_options,
    merge_routing_config,
)
from ..base_service import BaseService
from .exceptions import NoProviderConfiguredError
from .providers.base_provider import LLMProvider
from .providers.provider_decorators import initialize_providers
from .providers.provider_registry import ModelProviderRegistry


DEFAULT_ROUTING_CONFIG = RoutingConfig(default="claude", tasks=dict(DEFAULT_TASK_ROUTES))


class LLMRouter(BaseService):
    """Routes chat and stream calls to one provider per task type

    The router owns its provider registry and routing table. Providers are
    built at construction from whichever credentials are configured; more
    can be added later with ``add_provider``.
    """

    def __init__(
        self,
        config: RoutingInput = None,
        *,
        settings: Optional[LLMConfig] = None
    ):
        """Initialize the router

        Args:
            config: Partial routing config merged over the built-in table
            settings: LLM settings; defaults to the process settings
        """
        super().__init__("LLMRouter")
        self._settings = settings or get_settings().llm
        self._providers: Dict[str, LLMProvider] = {}

        built_in = RoutingConfig(
            default=self._settings.default_provider,
            tasks=dict(self._settings.task_routes),
        )
        self._config = merge_routing_config(built_in, config)

        self._initialize_providers()

    def _initialize_providers(self) -> None:
        """Build every known provider kind that has a credential"""
        initialize_providers()

        for provider_name in ModelProviderRegistry.get_available_providers():
            provider = ModelProviderRegistry.create_from_settings(provider_name, self._settings)
            if provider is not None:
                self._providers[provider_name] = provider

        self.logger.info(
            f"LLM router initialized with providers: {self.get_available_providers() or 'none'}"
        )

    def select_provider(self, task_type: Union[TaskType, str, None] = None) -> LLMProvider:
        """Resolve the provider that will serve a task

        Order: task route, then the default provider, then the first usable
        provider in registration order. A provider is usable when it is
        registered and reports itself configured.

        Raises:
            NoProviderConfiguredError: If no usable provider exists
        """
        task_key = task_type.value if isinstance(task_type, TaskType) else task_type
        if task_key and task_key in self._config.tasks:
            candidate = self._config.tasks[task_key]
        else:
            candidate = self._config.default

        provider = self._usable(candidate)
        if provider is not None:
            return provider

        provider = self._usable(self._config.default)
        if provider is not None:
            self.logger.warning(
                f"Provider '{candidate}' unavailable for task '{task_key}', "
                f"using default '{provider.name}'",
                extra={"task_type": task_key}
            )
            return provider

        for provider in self._providers.values():
            if provider.is_configured():
                self.logger.warning(
                    f"Providers '{candidate}' and '{self._config.default}' unavailable, "
                    f"using '{provider.name}'",
                    extra={"task_type": task_key}
                )
                return provider

        raise NoProviderConfiguredError()

    async def chat(
        self,
        messages: Sequence[MessageInput],
        options: OptionsInput = None
    ) -> LLMResponse:
        """Send a chat completion through the provider chosen for the task"""
        opts = self._resolve_options(options)
        provider = self.select_provider(opts.task_type)

        with self.traced_operation(
            "llm.chat",
            provider=provider.name,
            task_type=opts.task_type.value if opts.task_type else None
        ):
            return await provider.chat(messages, opts)

    async def stream(
        self,
        messages: Sequence[MessageInput],
        options: OptionsInput = None
    ) -> AsyncIterator[StreamChunk]:
        """Stream a chat completion through the provider chosen for the task

        Chunks are forwarded unchanged and in order, ending with the
        provider's terminal chunk.
        """
        opts = self._resolve_options(options)
        provider = self.select_provider(opts.task_type)

        chunks = provider.stream(messages, opts)
        try:
            async for chunk in chunks:
                yield chunk
                if chunk.done:
                    return
        finally:
            # Closing the provider generator releases its HTTP response
            aclose = getattr(chunks, "aclose", None)
            if aclose is not None:
                await aclose()

    def get_available_providers(self) -> List[str]:
        """Names of registered providers, in registration order"""
        return list(self._providers.keys())

    def has_provider(self, name: str) -> bool:
        return name in self._providers

    def add_provider(self, provider: LLMProvider) -> None:
        """Register a provider under its own name, replacing any existing one

        A provider no routing entry points at is reachable only after
        ``update_config`` routes a task (or the default) to it.
        """
        if not isinstance(provider, LLMProvider):
            raise TypeError(f"{provider!r} does not implement the LLM provider interface")

        self._providers[provider.name] = provider
        self.logger.info(f"Added provider: {provider.name}")

    def update_config(self, config: RoutingInput) -> None:
        """Merge a partial routing config into the current one"""
        self._config = merge_routing_config(self._config, config)
        self.logger.info(
            f"Routing updated: default={self._config.default}, tasks={self._config.tasks}"
        )

    def get_config(self) -> RoutingConfig:
        """Copy of the current routing config"""
        return self._config.model_copy(deep=True)

    def _resolve_options(self, options: OptionsInput) -> LLMOptions:
        opts = coerce_options(options)
        if "max_tokens" not in opts.model_fields_set:
            opts = opts.model_copy(update={"max_tokens": self._settings.default_max_tokens})
        return opts

    def _usable(self, name: str) -> Optional[LLMProvider]:
        provider = self._providers.get(name)
        if provider is not None and provider.is_configured():
            return provider
        return None


# Process-wide router: built on first access, replaced only by reset_llm_router()
_router_instance: Optional[LLMRouter] = None


def get_llm_router(config: RoutingInput = None) -> LLMRouter:
    """Get the shared LLM router, creating it on first access

    ``config`` only applies when this call creates the router.
    """
    global _router_instance
    if _router_instance is None:
        _router_instance = LLMRouter(config)
    return _router_instance


def reset_llm_router() -> None:
    """Drop the shared router so the next access re-reads credentials"""
    global _router_instance
    _router_instance = None
    get_settings.cache_clear()
