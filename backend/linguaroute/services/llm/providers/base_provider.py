"""Base provider architecture for task-routed LLM backends"""

import json
import time
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import (
    Any,
    AsyncIterator,
    ClassVar,
    Dict,
    List,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    runtime_checkable,
)

import httpx

from ....core.logger import CentralizedLogger
from ....models.llm import (
    LLMOptions,
    LLMResponse,
    Message,
    MessageInput,
    OptionsInput,
    StreamChunk,
    TokenUsage,
    coerce_messages,
    coerce_options,
)
from ..exceptions import ProviderNotConfiguredError, StreamTransportError, UpstreamAPIError
from .sse import DONE_SENTINEL, iter_sse_data


@runtime_checkable
class LLMProvider(Protocol):
    """Capability set every routable provider exposes

    The router only relies on this protocol, so test doubles and custom
    backends do not need to inherit from ``BaseModelProvider``.
    """

    name: str

    def is_configured(self) -> bool:
        ...

    async def chat(
        self,
        messages: Sequence[MessageInput],
        options: OptionsInput = None
    ) -> LLMResponse:
        ...

    def stream(
        self,
        messages: Sequence[MessageInput],
        options: OptionsInput = None
    ) -> AsyncIterator[StreamChunk]:
        ...


class BaseModelProvider(ABC):
    """Abstract base class for HTTP chat-completion providers

    Subclasses describe their wire format: headers, request body, response
    envelope and stream delta shape. Request dispatch, error mapping and the
    incremental stream loop live here. Providers keep no conversation state
    between calls.
    """

    name: ClassVar[str]
    display_name: ClassVar[str]
    API_URL: ClassVar[str]
    DEFAULT_MODEL: ClassVar[str]
    SUPPORTED_MODELS: ClassVar[Tuple[str, ...]] = ()

    def __init__(
        self,
        api_key: Optional[str],
        model: Optional[str] = None,
        *,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = 120.0
    ):
        """Initialize the provider

        Args:
            api_key: Credential for the endpoint; empty means unconfigured
            model: Model identifier, defaults to ``DEFAULT_MODEL``
            base_url: Endpoint override, defaults to ``API_URL``
            http_client: Shared client; a short-lived one is opened per call otherwise
            timeout: Transport timeout used for per-call clients
        """
        self._api_key = api_key or ""
        self.model = model or self.DEFAULT_MODEL
        self.api_url = base_url or self.API_URL
        self._http_client = http_client
        self._timeout = timeout
        self.logger = CentralizedLogger(f"{self.display_name}Provider")

        if self.SUPPORTED_MODELS and self.model not in self.SUPPORTED_MODELS:
            self.logger.debug(f"Model {self.model} is not in the known {self.display_name} model list")

    def is_configured(self) -> bool:
        """True when a non-empty credential is held"""
        return bool(self._api_key)

    # Wire format, one implementation per provider

    @abstractmethod
    def _build_headers(self) -> Dict[str, str]:
        """Authentication and content headers for every request"""
        pass

    @abstractmethod
    def _build_payload(
        self,
        messages: List[Message],
        options: LLMOptions,
        stream: bool
    ) -> Dict[str, Any]:
        """Provider-specific JSON request body"""
        pass

    @abstractmethod
    def _parse_response(self, data: Dict[str, Any]) -> LLMResponse:
        """Normalize a non-streaming response envelope"""
        pass

    @abstractmethod
    def _parse_stream_event(self, event: Dict[str, Any]) -> Optional[StreamChunk]:
        """Normalize one streamed JSON event

        Returns None for events that carry no text.
        """
        pass

    # Shared request handling

    async def chat(
        self,
        messages: Sequence[MessageInput],
        options: OptionsInput = None
    ) -> LLMResponse:
        """Send a chat completion request and return the normalized response"""
        self._ensure_configured()
        transcript = coerce_messages(messages)
        opts = coerce_options(options)
        payload = self._build_payload(transcript, opts, stream=False)

        self._log_request(transcript, stream=False)
        start_time = time.perf_counter()

        async with self._client() as client:
            try:
                response = await client.post(self.api_url, headers=self._build_headers(), json=payload)
            except httpx.TransportError as e:
                self._log_transport_error(e, time.perf_counter() - start_time)
                raise

        elapsed = time.perf_counter() - start_time
        if not response.is_success:
            self._raise_upstream_error(response.status_code, response.text, elapsed)

        result = self._parse_response(response.json())
        usage = result.usage or TokenUsage()
        self.logger.info(
            f"{self.display_name} response: elapsed={elapsed:.2f}s, "
            f"tokens={usage.input_tokens}+{usage.output_tokens}",
            extra={"provider": self.name}
        )
        return result

    async def stream(
        self,
        messages: Sequence[MessageInput],
        options: OptionsInput = None
    ) -> AsyncIterator[StreamChunk]:
        """Stream a chat completion as incremental chunks

        Yields content chunks followed by exactly one terminal chunk. The
        underlying response is closed when the caller stops iterating.
        """
        self._ensure_configured()
        transcript = coerce_messages(messages)
        opts = coerce_options(options)
        payload = self._build_payload(transcript, opts, stream=True)

        self._log_request(transcript, stream=True)
        start_time = time.perf_counter()

        async with self._client() as client:
            try:
                async with client.stream(
                    "POST", self.api_url, headers=self._build_headers(), json=payload
                ) as response:
                    if not response.is_success:
                        body = await response.aread()
                        self._raise_upstream_error(
                            response.status_code,
                            body.decode("utf-8", errors="replace"),
                            time.perf_counter() - start_time
                        )

                    async for data in iter_sse_data(self._iter_body(response)):
                        if data == DONE_SENTINEL:
                            break

                        try:
                            event = json.loads(data)
                        except json.JSONDecodeError:
                            # Keep-alive and comment payloads are not JSON
                            self.logger.debug(f"Skipping malformed stream line from {self.display_name}")
                            continue

                        chunk = self._parse_stream_event(event) if isinstance(event, dict) else None
                        if chunk is None:
                            continue
                        if chunk.done:
                            break
                        yield chunk
            except httpx.TransportError as e:
                self._log_transport_error(e, time.perf_counter() - start_time)
                raise

        self.logger.info(
            f"{self.display_name} stream finished: elapsed={time.perf_counter() - start_time:.2f}s",
            extra={"provider": self.name}
        )
        yield StreamChunk(content="", done=True)

    # Helpers

    @staticmethod
    def split_system_message(messages: List[Message]) -> Tuple[Optional[Message], List[Message]]:
        """Separate the system message from the ordered remainder

        Only one system message is expected; the first one found wins
        wherever it sits in the transcript.
        """
        system = next((m for m in messages if m.role == "system"), None)
        rest = [m for m in messages if m.role != "system"]
        return system, rest

    @staticmethod
    def build_usage(
        input_tokens: Optional[int],
        output_tokens: Optional[int],
        total_tokens: Optional[int] = None
    ) -> TokenUsage:
        """Zero-fill missing counters and derive the total when absent"""
        input_tokens = input_tokens or 0
        output_tokens = output_tokens or 0
        return TokenUsage(
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            total_tokens=total_tokens or input_tokens + output_tokens,
        )

    def _base_payload(self, options: LLMOptions, stream: bool) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": self.model,
            "max_tokens": options.max_tokens,
        }
        if stream:
            payload["stream"] = True
        if options.temperature is not None:
            payload["temperature"] = options.temperature
        return payload

    def _ensure_configured(self) -> None:
        if not self.is_configured():
            raise ProviderNotConfiguredError(self.name, self.display_name)

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http_client is not None:
            yield self._http_client
        else:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                yield client

    async def _iter_body(self, response: httpx.Response) -> AsyncIterator[bytes]:
        try:
            async for chunk in response.aiter_bytes():
                yield chunk
        except httpx.StreamError as e:
            raise StreamTransportError(self.name, self.display_name) from e

    def _log_request(self, messages: List[Message], stream: bool) -> None:
        self.logger.info(
            f"{self.display_name} request: model={self.model}, "
            f"messages={len(messages)}, stream={stream}",
            extra={"provider": self.name}
        )

    def _log_transport_error(self, error: httpx.TransportError, elapsed: float) -> None:
        self.logger.error(
            f"{self.display_name} transport failure after {elapsed:.2f}s: "
            f"{type(error).__name__}: {error}",
            extra={"provider": self.name}
        )

    def _raise_upstream_error(self, status_code: int, body: str, elapsed: float) -> None:
        self.logger.error(
            f"{self.display_name} error: status={status_code}, "
            f"elapsed={elapsed:.2f}s, body={body[:500]}",
            extra={"provider": self.name}
        )
        raise UpstreamAPIError(self.name, status_code, body, self.display_name)
