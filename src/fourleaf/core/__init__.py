"""Core turn engine for fourleaf."""

from .classifier import classify
from .normalize import normalize_question
from .orchestrator import Orchestrator, Turn
from .retry import Decision, RetryPolicy
from .types import Classification, Message, Outcome, RetryCategory, RetryCounters, Role, TransportResult

__all__ = [
    "Classification",
    "Decision",
    "Message",
    "Orchestrator",
    "Outcome",
    "RetryCategory",
    "RetryCounters",
    "RetryPolicy",
    "Role",
    "TransportResult",
    "Turn",
    "classify",
    "normalize_question",
]
