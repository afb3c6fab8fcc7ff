from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import pytest

from fourleaf.core.orchestrator import Orchestrator
from fourleaf.core.payload import decode_body
from fourleaf.core.types import TransportResult
from fourleaf.session import ChatSession, ConversationLog


def _make_result(status: int, body: Any = None, *, raw: str | None = None) -> TransportResult:
    if raw is None:
        raw = "" if body is None else json.dumps(body, ensure_ascii=False)
    return TransportResult(status_code=status, raw_body=raw, parsed=decode_body(raw))


class ScriptedTransport:
    """Returns queued results (or raises queued exceptions) in order."""

    def __init__(self, *steps: TransportResult | Exception) -> None:
        self._steps = list(steps)
        self.calls: list[dict[str, str]] = []

    async def send(self, text: str, *, client_id: str, language: str) -> TransportResult:
        self.calls.append({"text": text, "client_id": client_id, "language": language})
        if not self._steps:
            raise AssertionError("unexpected transport call")
        step = self._steps.pop(0)
        if isinstance(step, Exception):
            raise step
        return step


class RecordingRenderer:
    def __init__(self) -> None:
        self.snapshots: list[int] = []

    def render(self, log: ConversationLog) -> None:
        self.snapshots.append(len(log))


class RecordingBusy:
    def __init__(self) -> None:
        self.states: list[bool] = []

    def set_busy(self, on: bool) -> None:
        self.states.append(on)


class RecordingInput:
    def __init__(self) -> None:
        self.cleared = 0

    def clear(self) -> None:
        self.cleared += 1


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def busy() -> RecordingBusy:
    return RecordingBusy()


@pytest.fixture
def input_surface() -> RecordingInput:
    return RecordingInput()


@pytest.fixture
def online() -> dict[str, bool]:
    return {"value": True}


@pytest.fixture
def session(renderer, busy, input_surface, online) -> ChatSession:
    return ChatSession(
        "client-1",
        renderer=renderer,
        busy_indicator=busy,
        input_surface=input_surface,
        offline_detector=lambda: online["value"],
    )


@pytest.fixture
def make_orchestrator(session: ChatSession) -> Callable[..., tuple[Orchestrator, ScriptedTransport]]:
    def _make(*steps: TransportResult | Exception) -> tuple[Orchestrator, ScriptedTransport]:
        transport = ScriptedTransport(*steps)
        orchestrator = Orchestrator(session, transport, language="繁體中文", retry_delay_seconds=0)
        return orchestrator, transport

    return _make


@pytest.fixture
def make_result() -> Callable[..., TransportResult]:
    return _make_result
