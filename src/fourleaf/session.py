"""Per-session conversation state."""

from __future__ import annotations

import inspect
import time
import uuid
from collections.abc import Awaitable, Callable, Iterator
from typing import Protocol

from loguru import logger

from fourleaf.core.types import Message, Role

# Returns True while the client has network access; may be sync or async.
OfflineDetector = Callable[[], bool | Awaitable[bool]]


class Renderer(Protocol):
    def render(self, log: ConversationLog) -> None: ...


class BusyIndicator(Protocol):
    def set_busy(self, on: bool) -> None: ...


class InputSurface(Protocol):
    def clear(self) -> None: ...


class _NullRenderer:
    def render(self, log: ConversationLog) -> None:
        return None


class _NullBusyIndicator:
    def set_busy(self, on: bool) -> None:
        return None


class _NullInputSurface:
    def clear(self) -> None:
        return None


def _always_online() -> bool:
    return True


class ConversationLog:
    """Append-only sequence of messages for one session."""

    def __init__(self) -> None:
        self._messages: list[Message] = []

    def append(self, message: Message) -> None:
        self._messages.append(message)

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def last(self) -> Message | None:
        return self._messages[-1] if self._messages else None

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(tuple(self._messages))


class ChatSession:
    """Context object owning the log, the client identifier and the busy flag."""

    def __init__(
        self,
        client_id: str,
        *,
        renderer: Renderer | None = None,
        busy_indicator: BusyIndicator | None = None,
        input_surface: InputSurface | None = None,
        offline_detector: OfflineDetector | None = None,
    ) -> None:
        self._client_id = client_id
        self._log = ConversationLog()
        self._busy = False
        self._renderer = renderer or _NullRenderer()
        self._busy_indicator = busy_indicator or _NullBusyIndicator()
        self._input_surface = input_surface or _NullInputSurface()
        self._offline_detector = offline_detector or _always_online

    @property
    def client_id(self) -> str:
        return self._client_id

    @property
    def log(self) -> ConversationLog:
        return self._log

    @property
    def busy(self) -> bool:
        return self._busy

    def append(self, role: Role, text: str) -> Message:
        """Append a new message and immediately request a render."""
        message = Message(
            id=uuid.uuid4().hex,
            role=role,
            text=text,
            timestamp=int(time.time() * 1000),
        )
        self._log.append(message)
        logger.debug("session.append role={} id={} chars={}", role, message.id, len(text))
        self._renderer.render(self._log)
        return message

    def welcome(self, text: str) -> Message | None:
        if not text.strip():
            return None
        return self.append(Role.ASSISTANT, text)

    def set_busy(self, on: bool) -> None:
        if self._busy == on:
            return
        self._busy = on
        self._busy_indicator.set_busy(on)

    def clear_input(self) -> None:
        self._input_surface.clear()

    async def is_online(self) -> bool:
        online = self._offline_detector()
        if inspect.isawaitable(online):
            online = await online
        return bool(online)
