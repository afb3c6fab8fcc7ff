"""Terminal collaborators for the chat session."""

from __future__ import annotations

from prompt_toolkit import PromptSession
from prompt_toolkit.patch_stdout import patch_stdout
from rich.console import Console
from rich.markdown import Markdown
from rich.status import Status
from rich.text import Text

from fourleaf.core.types import Message, Role
from fourleaf.session import ConversationLog


class TerminalRenderer:
    """Print conversation log entries that have not been shown yet."""

    def __init__(self, console: Console | None = None, *, echo_user: bool = True) -> None:
        self.console: Console = console or Console()
        self.echo_user = echo_user
        self._shown = 0

    def render(self, log: ConversationLog) -> None:
        messages = log.messages
        for message in messages[self._shown :]:
            self._print_message(message)
        self._shown = len(messages)

    def info(self, message: str) -> None:
        self.console.print(message)

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]Error:[/bold red] {message}")

    def usage_info(self, endpoint: str, client_id: str) -> None:
        self.console.print(f"[bold]Endpoint:[/bold] [cyan]{endpoint}[/cyan]")
        self.console.print(f"[bold]Client:[/bold] [magenta]{client_id}[/magenta]")
        self.console.print("[dim]Type 'quit' to leave.[/dim]")

    def _print_message(self, message: Message) -> None:
        if message.role is Role.USER:
            if self.echo_user:
                self.console.print(Text.assemble(("You: ", "bold cyan"), message.text))
            return
        self.console.print("[bold yellow]Bot:[/bold yellow]")
        self.console.print(Markdown(message.text))


class StatusIndicator:
    """Spinner shown while a request is in flight."""

    def __init__(self, console: Console, text: str = "thinking...") -> None:
        self._status = Status(text, console=console, spinner="dots")

    def set_busy(self, on: bool) -> None:
        if on:
            self._status.start()
        else:
            self._status.stop()


class PromptInput:
    """prompt_toolkit input line."""

    def __init__(self) -> None:
        self._prompt_session: PromptSession[str] = PromptSession()

    async def read(self) -> str:
        with patch_stdout(raw=True):
            return await self._prompt_session.prompt_async("> ")

    def clear(self) -> None:
        self._prompt_session.default_buffer.reset()
