"""HTTP transport for the chat endpoint."""

from __future__ import annotations

from types import TracebackType
from typing import Self
from urllib import parse as urllib_parse

import httpx
from loguru import logger

from fourleaf.core.payload import decode_body
from fourleaf.core.types import TransportResult
from fourleaf.errors import InvalidEndpointError

DEFAULT_CHAT_PATH = "/api/chat"
CLIENT_ID_HEADER = "X-Client-Id"
USER_AGENT = "fourleaf/0.1"


class ChatTransport:
    """POST user text to the chat endpoint and capture whatever comes back.

    Every HTTP status is returned as a ``TransportResult``; only network-level
    failures (connection, timeout, protocol) raise ``httpx`` exceptions.
    """

    def __init__(
        self,
        api_base: str,
        *,
        chat_path: str = DEFAULT_CHAT_PATH,
        timeout_seconds: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        base = _normalize_api_base(api_base)
        if base is None:
            raise InvalidEndpointError(f"invalid chat api base: {api_base!r}")
        self._endpoint = f"{base}/{chat_path.lstrip('/')}"
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout_seconds))

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def send(self, text: str, *, client_id: str, language: str) -> TransportResult:
        payload = {
            "text": text,
            "clientId": client_id,
            "language": language,
            "role": "user",
        }
        headers = {
            "Content-Type": "application/json",
            CLIENT_ID_HEADER: client_id,
            "User-Agent": USER_AGENT,
        }
        response = await self._client.post(self._endpoint, json=payload, headers=headers)
        raw = response.text
        logger.debug("transport.response status={} bytes={}", response.status_code, len(raw))
        return TransportResult(status_code=response.status_code, raw_body=raw, parsed=decode_body(raw))

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


def _normalize_api_base(raw_api_base: str) -> str | None:
    normalized = raw_api_base.strip().rstrip("/")
    if not normalized:
        return None

    parsed = urllib_parse.urlparse(normalized)
    if parsed.scheme in {"http", "https"} and parsed.netloc:
        return normalized
    return None
