"""CLI main module for fourleaf."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional

import typer
from loguru import logger
from rich.console import Console

from fourleaf.cli.render import PromptInput, StatusIndicator, TerminalRenderer
from fourleaf.client_id import ClientIdStore
from fourleaf.config import Settings, load_settings
from fourleaf.core.orchestrator import Orchestrator
from fourleaf.errors import ConfigurationError
from fourleaf.logging_utils import configure_logging
from fourleaf.network import NetworkProbe
from fourleaf.session import ChatSession, InputSurface
from fourleaf.transport import ChatTransport

QUIT_COMMANDS = frozenset({"quit", "exit", "q"})

app = typer.Typer(
    name="fourleaf",
    help="Chat with the fourleaf assistant backend.",
    add_completion=False,
    rich_markup_mode="rich",
)


@dataclass
class ChatApp:
    """Everything one terminal session needs."""

    settings: Settings
    session: ChatSession
    orchestrator: Orchestrator
    transport: ChatTransport
    renderer: TerminalRenderer


def build_transport(settings: Settings) -> ChatTransport:
    return ChatTransport(
        settings.api_base,
        chat_path=settings.chat_path,
        timeout_seconds=settings.request_timeout_seconds,
    )


def build_chat_app(
    settings: Settings,
    console: Console,
    *,
    input_surface: InputSurface | None = None,
    echo_user: bool = True,
) -> ChatApp:
    client_id = ClientIdStore(settings.client_id_path).load_or_create()
    renderer = TerminalRenderer(console, echo_user=echo_user)
    session = ChatSession(
        client_id,
        renderer=renderer,
        busy_indicator=StatusIndicator(console),
        input_surface=input_surface,
        offline_detector=NetworkProbe(settings.probe_hosts, timeout_seconds=settings.probe_timeout_seconds),
    )
    transport = build_transport(settings)
    orchestrator = Orchestrator(
        session,
        transport,
        language=settings.language,
        retry_delay_seconds=settings.retry_delay_seconds,
    )
    return ChatApp(settings, session, orchestrator, transport, renderer)


async def _close(chat_app: ChatApp) -> None:
    await chat_app.transport.aclose()


async def _run_chat(chat_app: ChatApp, prompt: PromptInput) -> None:
    chat_app.session.welcome(chat_app.settings.welcome_text)
    try:
        while True:
            try:
                user_input = await prompt.read()
            except (KeyboardInterrupt, EOFError):
                chat_app.renderer.info("\nGoodbye!")
                break
            if user_input.strip().lower() in QUIT_COMMANDS:
                chat_app.renderer.info("Goodbye!")
                break
            await chat_app.orchestrator.submit(user_input)
    finally:
        await _close(chat_app)


async def _run_ask(chat_app: ChatApp, text: str) -> None:
    try:
        await chat_app.orchestrator.submit(text)
    finally:
        await _close(chat_app)


def _setup(
    api_base: Optional[str],
    console: Console,
    *,
    input_surface: InputSurface | None = None,
    echo_user: bool = True,
) -> ChatApp:
    settings = load_settings(api_base=api_base)
    configure_logging(profile="chat", level=settings.log_level)
    try:
        return build_chat_app(settings, console, input_surface=input_surface, echo_user=echo_user)
    except ConfigurationError as exc:
        TerminalRenderer(console).error(str(exc))
        logger.debug("cli.startup_error type={}", type(exc).__name__)
        raise typer.Exit(1) from exc


@app.command()
def chat(
    api_base: Optional[str] = typer.Option(None, "--api-base", help="Override the chat backend base URL."),
) -> None:
    """Start an interactive chat."""
    console = Console()
    prompt = PromptInput()
    # The prompt line already shows what the user typed.
    chat_app = _setup(api_base, console, input_surface=prompt, echo_user=False)
    chat_app.renderer.usage_info(chat_app.transport.endpoint, chat_app.session.client_id)
    asyncio.run(_run_chat(chat_app, prompt))


@app.command()
def ask(
    text: str,
    api_base: Optional[str] = typer.Option(None, "--api-base", help="Override the chat backend base URL."),
) -> None:
    """Send one question and print the reply."""
    console = Console()
    if not text.strip():
        TerminalRenderer(console).error("nothing to send")
        raise typer.Exit(1)
    chat_app = _setup(api_base, console)
    asyncio.run(_run_ask(chat_app, text))


if __name__ == "__main__":
    app()
