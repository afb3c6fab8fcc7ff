"""fourleaf - resilient chat client."""

from .core import Orchestrator
from .session import ChatSession, ConversationLog
from .transport import ChatTransport

__version__ = "0.1.0"

__all__ = ["ChatSession", "ChatTransport", "ConversationLog", "Orchestrator"]
