"""Turn orchestration: send, classify, retry, reply."""

from __future__ import annotations

import asyncio
import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from loguru import logger

from fourleaf.core.classifier import CLIENT_ID_KEY, classify
from fourleaf.core.normalize import normalize_question
from fourleaf.core.retry import Decision, RetryPolicy, category_for
from fourleaf.core.types import Classification, Message, Outcome, RetryCategory, RetryCounters, Role, TransportResult
from fourleaf.logging_utils import bind_turn, unbind_turn

if TYPE_CHECKING:
    from fourleaf.session import ChatSession

RETRYING_NOTICE = "Network is unstable, retrying your request."
STILL_THINKING_NOTICE = "Still thinking, please wait."
GIVE_UP_NOTICE = "Sorry, the network is unstable. Please try again later."
OFFLINE_NOTICE = "You are currently offline. Please check your network connection and try again."

INTERIM_NOTICES: dict[RetryCategory, str] = {
    RetryCategory.HTTP_ERROR: RETRYING_NOTICE,
    RetryCategory.EMPTY_RESPONSE: RETRYING_NOTICE,
    RetryCategory.INCOMPLETE_MARKERS: STILL_THINKING_NOTICE,
}


class ChatClient(Protocol):
    async def send(self, text: str, *, client_id: str, language: str) -> TransportResult: ...


@dataclass
class Turn:
    """One user utterance on its way to a terminal reply."""

    text: str
    normalized: str
    counters: RetryCounters = field(default_factory=RetryCounters)
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])
    attempts: int = 0


class Orchestrator:
    """Drive one turn at a time against the chat endpoint."""

    def __init__(
        self,
        session: ChatSession,
        transport: ChatClient,
        *,
        language: str,
        policy: RetryPolicy | None = None,
        retry_delay_seconds: float = 1.0,
        client_id_key: str = CLIENT_ID_KEY,
    ) -> None:
        self._session = session
        self._transport = transport
        self._language = language
        self._policy = policy or RetryPolicy()
        self._retry_delay_seconds = retry_delay_seconds
        self._client_id_key = client_id_key
        self._active: Turn | None = None

    @property
    def session(self) -> ChatSession:
        return self._session

    @property
    def active_turn(self) -> Turn | None:
        return self._active

    async def submit(self, text: str) -> Message | None:
        """Run one turn and return its terminal message.

        Blank input and submissions made while another turn is in flight are
        ignored and return ``None``. Every other path ends by appending exactly
        one terminal assistant message; failures never propagate.
        """
        content = (text or "").strip()
        if not content:
            return None
        # The busy flag drops during the retry delay, so the in-flight turn is checked too.
        if self._session.busy or self._active is not None:
            logger.warning("turn.rejected reason=busy")
            return None

        turn = Turn(text=content, normalized=normalize_question(content))
        self._active = turn
        token = bind_turn(turn.id)
        try:
            logger.info("turn.start chars={}", len(content))
            self._session.append(Role.USER, turn.text)
            self._session.clear_input()
            return await self._run(turn)
        finally:
            self._session.set_busy(False)
            self._active = None
            unbind_turn(token)

    async def _run(self, turn: Turn) -> Message:
        while True:
            self._session.set_busy(True)
            turn.attempts += 1
            logger.info("turn.attempt attempt={}", turn.attempts)
            try:
                result = await self._transport.send(
                    turn.normalized,
                    client_id=self._session.client_id,
                    language=self._language,
                )
            except Exception as exc:
                # Transport adapters raise non-uniform exceptions; end the turn with a readable message.
                self._session.set_busy(False)
                return await self._transport_failure(exc)

            classification = classify(result, client_id_key=self._client_id_key)
            decision = self._policy.decide(classification.outcome, turn.counters)
            logger.info(
                "turn.classified status={} outcome={} decision={}",
                classification.status_code,
                classification.outcome,
                decision,
            )
            self._session.set_busy(False)

            if decision is Decision.ACCEPT:
                return self._session.append(Role.ASSISTANT, classification.reply_text or "")
            if decision is Decision.GIVE_UP:
                logger.warning("turn.give_up outcome={} attempts={}", classification.outcome, turn.attempts)
                return self._session.append(Role.ASSISTANT, _terminal_notice(classification))

            category = category_for(classification.outcome)
            notice = INTERIM_NOTICES[category]
            logger.info("turn.retry category={} delay={}", category, self._retry_delay_seconds)
            self._session.append(Role.ASSISTANT, notice)
            await asyncio.sleep(self._retry_delay_seconds)

    async def _transport_failure(self, exc: Exception) -> Message:
        if not await self._session.is_online():
            logger.warning("turn.offline error={}", exc)
            return self._session.append(Role.ASSISTANT, OFFLINE_NOTICE)
        logger.warning("turn.transport_error type={} error={}", type(exc).__name__, exc)
        return self._session.append(Role.ASSISTANT, _describe_exception(exc))


def _terminal_notice(classification: Classification) -> str:
    if classification.outcome is Outcome.FATAL_HTTP_ERROR:
        head = f"Request failed (HTTP {classification.status_code})"
        return f"{head}: {classification.detail}" if classification.detail else head
    return GIVE_UP_NOTICE


def _describe_exception(exc: Exception) -> str:
    description = str(exc).strip()
    return description or type(exc).__name__
