"""Repeat policy for search broadcasts.

UDA 1.0 says to send discovery messages more than once. UDA 1.1 recommends
a few hundred milliseconds between them.
"""

from dataclasses import dataclass

from ..errors import ConfigurationError


@dataclass(frozen=True)
class SearchPolicy:
    """How many times to send a search and how long to wait in between."""
    repeat_count: int = 5
    interval_ms: int = 500
    trailing_wait: bool = True  # also wait after the final round

    def __post_init__(self):
        if isinstance(self.repeat_count, bool) or not isinstance(self.repeat_count, int) or self.repeat_count < 1:
            raise ConfigurationError(f"repeat_count must be at least 1, got {self.repeat_count!r}")
        if isinstance(self.interval_ms, bool) or not isinstance(self.interval_ms, int) or self.interval_ms < 0:
            raise ConfigurationError(f"interval_ms must be a non-negative integer, got {self.interval_ms!r}")

    @property
    def interval_seconds(self) -> float:
        """Wait between rounds in seconds."""
        return self.interval_ms / 1000.0


def default_search_policy() -> SearchPolicy:
    """Create default search policy.

    5 rounds, 500ms apart, including a wait after the last round.
    """
    return SearchPolicy()


def single_search_policy() -> SearchPolicy:
    """Create a single-round policy (send once, don't wait)."""
    return SearchPolicy(repeat_count=1, interval_ms=0, trailing_wait=False)
