"""Search broadcast scheduler.

Sends one M-SEARCH request several times, both through the router's
point-to-point send and as a multicast broadcast, waiting between rounds:
1. Build the request and apply the optional transform
2. Encode the broadcast frame once
3. For each round: send, broadcast, wait (cancellable)
"""

import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from ..errors import ConfigurationError
from ..message.headers import MXHeader, STAllHeader, UPNP_MULTICAST_PORT, UpnpHeader
from ..message.request import OutgoingSearchRequest, UpnpMessage, build_search_request
from ..transport.frame_encoder import encode_frame
from ..transport.router import Router
from .policy import SearchPolicy, default_search_policy

logger = logging.getLogger(__name__)

PrepareRequest = Callable[[OutgoingSearchRequest], UpnpMessage]


class SearchState(str, Enum):
    """Lifecycle of a single search invocation."""
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass
class SearchOutcome:
    """Result of a search invocation."""
    state: SearchState
    rounds_completed: int = 0
    error: Optional[Exception] = None
    duration_ms: int = 0

    @property
    def completed(self) -> bool:
        return self.state == SearchState.COMPLETED

    @property
    def cancelled(self) -> bool:
        return self.state == SearchState.CANCELLED

    @property
    def failed(self) -> bool:
        return self.state == SearchState.FAILED


class SendingSearch:
    """Sends a search request repeatedly using the supplied search target.

    Each instance is one invocation: it builds its own message, frame and
    cancellation token, and shares only the router with other searches.
    """

    def __init__(
        self,
        router: Router,
        search_target: Optional[UpnpHeader] = None,
        mx_seconds: int = MXHeader.DEFAULT_VALUE,
        policy: Optional[SearchPolicy] = None,
        prepare_request: Optional[PrepareRequest] = None,
    ):
        """Initialize and prepare the search.

        Args:
            router: Router used for send and broadcast.
            search_target: ST header variant. Default: ssdp:all.
            mx_seconds: Maximum response delay in seconds. Default: 3.
            policy: Repeat policy. Default: 5 rounds, 500ms apart.
            prepare_request: Optional callable(message) -> message applied
                once before encoding, e.g. to add headers.

        Raises:
            ConfigurationError: If the target, MX value or transform result is invalid.
            EncodingError: If the message can't be encoded as US-ASCII.
            UnsupportedOperationError: If the transform returns a message with
                an unknown operation.
        """
        self.router = router
        self.search_target = search_target if search_target is not None else STAllHeader()
        self.mx_seconds = mx_seconds
        self.policy = policy or default_search_policy()

        message = build_search_request(self.search_target, mx_seconds)
        if prepare_request is not None:
            message = prepare_request(message)
            if not isinstance(message, UpnpMessage):
                raise ConfigurationError(
                    f"prepare_request must return a message, got {type(message).__name__}"
                )

        self._message = message
        self._frame = encode_frame(message)
        self._cancel_event = threading.Event()
        self._outcome = SearchOutcome(state=SearchState.IDLE)

    @property
    def message(self) -> UpnpMessage:
        """The message sent on every round."""
        return self._message

    @property
    def frame(self) -> bytes:
        """The encoded broadcast frame reused on every round."""
        return self._frame

    @property
    def state(self) -> SearchState:
        return self._outcome.state

    @property
    def outcome(self) -> SearchOutcome:
        return self._outcome

    def cancel(self) -> None:
        """Stop the search started with this instance's own token."""
        self._cancel_event.set()

    def execute(self, cancel: Optional[threading.Event] = None) -> SearchOutcome:
        """Run all rounds of the search.

        Args:
            cancel: Cancellation token. Default: this instance's own token,
                set through cancel().

        Returns:
            SearchOutcome, either COMPLETED or CANCELLED.

        Raises:
            RuntimeError: If this search was already executed.
            RouterError: If the router fails; remaining rounds are skipped
                and the outcome is FAILED.
        """
        if self._outcome.state != SearchState.IDLE:
            raise RuntimeError(f"Search already executed (state: {self._outcome.state.value})")

        cancel = cancel if cancel is not None else self._cancel_event
        outcome = self._outcome
        outcome.state = SearchState.RUNNING
        start_time = time.time()

        logger.debug(
            "Executing search for target: %s with MX seconds: %d",
            self.search_target, self.mx_seconds,
        )

        try:
            outcome.state = self._run_rounds(cancel, outcome)
        except Exception as e:
            outcome.state = SearchState.FAILED
            outcome.error = e
            logger.warning(
                "Search for %s failed after %d rounds: %s",
                self.search_target, outcome.rounds_completed, e,
            )
            raise
        finally:
            outcome.duration_ms = int((time.time() - start_time) * 1000)

        if outcome.cancelled:
            logger.info("Search for %s cancelled after %d rounds", self.search_target, outcome.rounds_completed)

        return outcome

    def _run_rounds(self, cancel: threading.Event, outcome: SearchOutcome) -> SearchState:
        repeat_count = self.policy.repeat_count

        for i in range(repeat_count):
            if cancel.is_set():
                return SearchState.CANCELLED

            self.router.send(self._message)
            self.router.broadcast(self._frame, UPNP_MULTICAST_PORT)
            outcome.rounds_completed += 1

            if i == repeat_count - 1 and not self.policy.trailing_wait:
                break

            logger.debug("Sleeping %d milliseconds", self.policy.interval_ms)
            if cancel.wait(self.policy.interval_seconds):
                return SearchState.CANCELLED

        return SearchState.COMPLETED

    def start(self, executor: Optional[ThreadPoolExecutor] = None) -> Future:
        """Run execute() on a worker thread.

        Args:
            executor: Executor to submit to. Default: a dedicated single-thread
                executor that shuts down once the search ends.

        Returns:
            Future resolving to the SearchOutcome, or raising the router error.
        """
        if executor is not None:
            return executor.submit(self.execute)

        own_executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="ssdp-search")
        future = own_executor.submit(self.execute)
        own_executor.shutdown(wait=False)
        return future
