"""Bounded per-category retry policy."""

from __future__ import annotations

from enum import StrEnum

from fourleaf.core.types import Outcome, RetryCategory, RetryCounters

OUTCOME_CATEGORIES: dict[Outcome, RetryCategory] = {
    Outcome.EMPTY_PAYLOAD: RetryCategory.EMPTY_RESPONSE,
    Outcome.INCOMPLETE_MARKER: RetryCategory.INCOMPLETE_MARKERS,
    Outcome.RETRYABLE_HTTP_ERROR: RetryCategory.HTTP_ERROR,
}


class Decision(StrEnum):
    ACCEPT = "accept"
    RETRY = "retry"
    GIVE_UP = "give_up"


class RetryPolicy:
    """Allow each failure category at most one retry per turn."""

    max_retries_per_category = 1

    def decide(self, outcome: Outcome, counters: RetryCounters) -> Decision:
        if outcome is Outcome.SUCCESS:
            return Decision.ACCEPT
        category = OUTCOME_CATEGORIES.get(outcome)
        if category is None:
            return Decision.GIVE_UP
        if counters[category] >= self.max_retries_per_category:
            return Decision.GIVE_UP
        counters.increment(category)
        return Decision.RETRY


def category_for(outcome: Outcome) -> RetryCategory | None:
    return OUTCOME_CATEGORIES.get(outcome)
