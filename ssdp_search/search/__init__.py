"""Search module - repeat policy and broadcast scheduling."""

from .policy import SearchPolicy, default_search_policy, single_search_policy
from .scheduler import SearchOutcome, SearchState, SendingSearch

__all__ = [
    "SearchPolicy",
    "default_search_policy",
    "single_search_policy",
    "SearchOutcome",
    "SearchState",
    "SendingSearch",
]
