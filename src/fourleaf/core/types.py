"""Shared core dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class Role(StrEnum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """One entry of the conversation log."""

    id: str
    role: Role
    text: str
    timestamp: int  # epoch milliseconds


@dataclass(frozen=True)
class PlainText:
    """Body decoded to a bare JSON string."""

    text: str


@dataclass(frozen=True)
class Structured:
    """Body decoded to a JSON object or array."""

    payload: dict[str, Any] | list[Any]


@dataclass(frozen=True)
class Unparseable:
    """Body that is not JSON at all."""

    raw: str


ParsedBody = PlainText | Structured | Unparseable


@dataclass(frozen=True)
class TransportResult:
    """Outcome of one POST to the chat endpoint."""

    status_code: int
    raw_body: str
    parsed: ParsedBody

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class Outcome(StrEnum):
    SUCCESS = "success"
    RETRYABLE_HTTP_ERROR = "retryable_http_error"
    FATAL_HTTP_ERROR = "fatal_http_error"
    EMPTY_PAYLOAD = "empty_payload"
    INCOMPLETE_MARKER = "incomplete_marker"


class RetryCategory(StrEnum):
    EMPTY_RESPONSE = "emptyResponse"
    INCOMPLETE_MARKERS = "incompleteMarkers"
    HTTP_ERROR = "httpError"


@dataclass(frozen=True)
class Classification:
    """Label assigned to one transport attempt."""

    outcome: Outcome
    status_code: int
    reply_text: str | None = None
    detail: str = ""


@dataclass
class RetryCounters:
    """Retries already made per category within one turn."""

    counts: dict[RetryCategory, int] = field(default_factory=lambda: dict.fromkeys(RetryCategory, 0))

    def __getitem__(self, category: RetryCategory) -> int:
        return self.counts.get(category, 0)

    def increment(self, category: RetryCategory) -> int:
        self.counts[category] = self[category] + 1
        return self.counts[category]

    @property
    def total(self) -> int:
        return sum(self.counts.values())
