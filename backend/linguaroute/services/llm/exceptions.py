"""Errors raised by LLM providers and the task router"""

from typing import Optional


class LLMError(Exception):
    """Base exception for LLM provider and routing failures"""
    pass


class ProviderNotConfiguredError(LLMError):
    """Raised when a provider is used without a credential"""

    def __init__(self, provider: str, display_name: Optional[str] = None):
        self.provider = provider
        self.display_name = display_name or provider
        super().__init__(f"{self.display_name} API key not configured")


class UpstreamAPIError(LLMError):
    """Raised when a provider endpoint answers with a non-success status"""

    def __init__(
        self,
        provider: str,
        status_code: int,
        body: str,
        display_name: Optional[str] = None
    ):
        self.provider = provider
        self.status_code = status_code
        self.body = body
        self.display_name = display_name or provider
        super().__init__(f"{self.display_name} API error: {status_code} - {body}")


class NoProviderConfiguredError(LLMError):
    """Raised when the router has no usable provider"""

    def __init__(self, message: str = "No LLM providers configured. Please set at least one API key."):
        super().__init__(message)


class StreamTransportError(LLMError):
    """Raised when a streaming response body cannot be read"""

    def __init__(self, provider: str, display_name: Optional[str] = None):
        self.provider = provider
        self.display_name = display_name or provider
        super().__init__(f"{self.display_name} API error: No response body")
