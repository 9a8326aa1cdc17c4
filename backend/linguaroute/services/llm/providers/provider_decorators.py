"""Decorator-based registration for model providers"""

import importlib
from pathlib import Path
from typing import Any, Dict, List, Type

from ....core.logger import CentralizedLogger
from .base_provider import BaseModelProvider
from .provider_registry import ModelProviderRegistry


# Providers collected at import time, registered by initialize_providers()
_decorated_providers: Dict[str, Type[BaseModelProvider]] = {}

logger = CentralizedLogger("ProviderDecorators")


def register_provider(provider_name: str):
    """Decorator to register a model provider under ``provider_name``

    The name also becomes the class ``name`` attribute, which is the
    registry key the router uses.
    """
    def decorator(cls: Type[BaseModelProvider]) -> Type[BaseModelProvider]:
        _decorated_providers[provider_name] = cls
        cls.name = provider_name
        return cls

    return decorator


def auto_register_decorated_providers() -> int:
    """Register all decorated providers with the registry

    Returns:
        Number of providers registered
    """
    for provider_name, provider_class in _decorated_providers.items():
        ModelProviderRegistry.register(provider_name, provider_class)

    return len(_decorated_providers)


def scan_and_import_providers(
    package_path: str = "linguaroute.services.llm.providers.implementations"
) -> List[str]:
    """Import every ``*_providers.py`` module so its decorators run

    Modules are imported in file-name order so registration order is
    stable across platforms.
    """
    imported_modules = []
    base_path = Path(__file__).parent / "implementations"

    if not base_path.exists():
        return imported_modules

    for file_path in sorted(base_path.glob("*_providers.py")):
        full_module_path = f"{package_path}.{file_path.stem}"
        try:
            importlib.import_module(full_module_path)
            imported_modules.append(full_module_path)
        except ImportError as e:
            logger.warning(f"Could not import provider module {full_module_path}: {e}")

    return imported_modules


def initialize_providers() -> Dict[str, Any]:
    """Scan for provider modules and register every decorated provider

    Safe to call repeatedly; re-registration overwrites by name.

    Returns:
        Dictionary with initialization statistics
    """
    imported_modules = scan_and_import_providers()
    registered_count = auto_register_decorated_providers()

    return {
        "imported_modules": imported_modules,
        "imported_module_count": len(imported_modules),
        "registered_providers": registered_count,
        "total_providers": len(ModelProviderRegistry.get_available_providers()),
    }
