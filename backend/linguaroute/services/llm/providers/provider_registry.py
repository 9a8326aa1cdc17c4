"""Registry of provider kinds that the router can build from settings"""

from typing import Any, Dict, List, Optional, Type

from ....core.config import LLMConfig
from ....core.logger import CentralizedLogger
from .base_provider import BaseModelProvider


class ModelProviderRegistry:
    """Registry for managing model provider classes

    Maps a provider name (``claude``, ``openai``, ...) to the class that
    implements it. Registration order is preserved and is the order in
    which the router builds and falls back across providers.
    """

    _providers: Dict[str, Type[BaseModelProvider]] = {}
    _logger = CentralizedLogger("ModelProviderRegistry")

    @classmethod
    def register(cls, provider_name: str, provider_class: Type[BaseModelProvider]):
        """Register a provider class

        Args:
            provider_name: Unique identifier for the provider
            provider_class: Provider class to register
        """
        if not issubclass(provider_class, BaseModelProvider):
            raise ValueError(f"{provider_class} must inherit from BaseModelProvider")

        cls._providers[provider_name] = provider_class
        cls._logger.debug(f"Registered model provider: {provider_name}")

    @classmethod
    def get(cls, provider_name: str) -> Optional[Type[BaseModelProvider]]:
        return cls._providers.get(provider_name)

    @classmethod
    def create(
        cls,
        provider_name: str,
        api_key: Optional[str],
        model: Optional[str] = None,
        **kwargs: Any
    ) -> BaseModelProvider:
        """Instantiate a registered provider

        Raises:
            ValueError: If provider not found
        """
        provider_class = cls._providers.get(provider_name)
        if provider_class is None:
            available = ", ".join(cls._providers.keys())
            raise ValueError(
                f"Provider '{provider_name}' not found. "
                f"Available providers: {available}"
            )
        return provider_class(api_key=api_key, model=model, **kwargs)

    @classmethod
    def create_from_settings(
        cls,
        provider_name: str,
        settings: LLMConfig
    ) -> Optional[BaseModelProvider]:
        """Build a provider from configured credentials

        Returns:
            Provider instance, or None when no credential is configured
        """
        api_key = settings.api_key_for(provider_name)
        if not api_key:
            cls._logger.debug(f"No credential for provider: {provider_name}")
            return None

        return cls.create(
            provider_name,
            api_key=api_key,
            model=settings.default_model_for(provider_name),
            timeout=settings.request_timeout_seconds,
        )

    @classmethod
    def get_available_providers(cls) -> List[str]:
        """Get list of registered provider names"""
        return list(cls._providers.keys())

    @classmethod
    def get_provider_info(cls) -> Dict[str, Dict[str, Any]]:
        """Describe every registered provider kind"""
        return {
            name: {
                "display_name": provider_class.display_name,
                "endpoint": provider_class.API_URL,
                "default_model": provider_class.DEFAULT_MODEL,
                "supported_models": list(provider_class.SUPPORTED_MODELS),
            }
            for name, provider_class in cls._providers.items()
        }

    @classmethod
    def clear(cls):
        """Clear all registered providers (mainly for testing)"""
        cls._providers.clear()
        cls._logger.debug("Cleared all registered providers")
