"""Terminal front end for fourleaf."""

from .app import app
from .render import PromptInput, StatusIndicator, TerminalRenderer

__all__ = [
    "PromptInput",
    "StatusIndicator",
    "TerminalRenderer",
    "app",
]
