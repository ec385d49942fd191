"""Search Coordinator — asyncio shell around the pure search state machine.

Invariants:
    - Single owner of the result set; listeners only read SearchState snapshots
    - At most one debounce timer pending; StartTimer replaces, CancelTimer drops it
    - Every IssueFetch becomes exactly one fetcher call in its own task
    - Fetch tasks are never cancelled by later input; each settlement is dispatched
      back through transition() (last-resolved-wins unless stale discard is on)
    - Fetch failures are converted to a FetchFailed event here and never raised
      into the rendering consumer

Design Decisions:
    - Scheduler injected: asyncio call_later in production, a virtual clock in tests
    - Listener exceptions logged and swallowed: a broken view must not break search
    - Every fetch is logged as filtered or unfiltered (diagnostic hook point)
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

from advocate_directory.config import Settings
from advocate_directory.core.domain_types import DEFAULT_DEBOUNCE_MS
from advocate_directory.core.errors import AdvocateFetchError
from advocate_directory.core.repository_protocols import AdvocateFetcher
from advocate_directory.core.search_state import (
    CancelTimer, ClearRequested, Effect, Event, FetchFailed, FetchRequest,
    FetchSucceeded, IssueFetch, Keystroke, Mounted, RetryRequested,
    SearchState, StartTimer, TimerElapsed, transition,
)
from advocate_directory.infrastructure.advocate_client import AdvocateClient

logger = logging.getLogger(__name__)

StateListener = Callable[[SearchState], None]


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Schedules a callback after `delay` seconds."""
    def call_later(
        self, delay: float, callback: Callable[[], None],
    ) -> TimerHandle: ...


class AsyncioScheduler:
    """Schedules on the running event loop."""

    def call_later(
        self, delay: float, callback: Callable[[], None],
    ) -> TimerHandle:
        return asyncio.get_running_loop().call_later(delay, callback)


class SearchCoordinator:
    """Turns keystrokes into debounced fetches and publishes the result set."""

    def __init__(
        self,
        fetcher: AdvocateFetcher,
        scheduler: Scheduler | None = None,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        discard_stale_responses: bool = False,
    ):
        self._fetcher = fetcher
        self._scheduler = scheduler or AsyncioScheduler()
        self._state = SearchState(
            debounce_ms=debounce_ms,
            discard_stale_responses=discard_stale_responses,
        )
        self._timer: TimerHandle | None = None
        self._tasks: set[asyncio.Task] = set()
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> SearchState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ─── User-facing actions ──────────────────────────────────────

    def mount(self) -> None:
        self.dispatch(Mounted())

    def on_input(self, text: str) -> None:
        self.dispatch(Keystroke(text))

    def clear(self) -> None:
        self.dispatch(ClearRequested())

    def retry(self) -> None:
        self.dispatch(RetryRequested())

    # ─── Event loop plumbing ──────────────────────────────────────

    def dispatch(self, event: Event) -> None:
        self._state, effects = transition(self._state, event)
        for effect in effects:
            self._run_effect(effect)
        self._notify()

    def _run_effect(self, effect: Effect) -> None:
        match effect:
            case StartTimer(generation=generation, delay_ms=delay_ms):
                self._cancel_timer()
                self._timer = self._scheduler.call_later(
                    delay_ms / 1000,
                    lambda: self._on_timer(generation),
                )
            case CancelTimer():
                self._cancel_timer()
            case IssueFetch(request=request):
                self._start_fetch(request)

    def _on_timer(self, generation: int) -> None:
        self._timer = None
        self.dispatch(TimerElapsed(generation))

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _start_fetch(self, request: FetchRequest) -> None:
        logger.info(
            f"Fetching advocates ({'filtered' if request.query else 'unfiltered'})",
            extra={
                "search": request.query,
                "sequence": request.sequence,
                "fetch_kind": request.kind.value,
            },
        )
        task = asyncio.get_running_loop().create_task(self._fetch(request))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _fetch(self, request: FetchRequest) -> None:
        try:
            advocates = await self._fetcher.fetch_advocates(request.query)
        except AdvocateFetchError as e:
            logger.error(
                f"Error fetching advocates: {e.message}",
                extra={
                    "search": request.query,
                    "sequence": request.sequence,
                    "status_code": e.status_code,
                    "error_code": e.code,
                },
            )
            self.dispatch(FetchFailed(request))
            return
        except Exception as e:
            logger.error(
                f"Unexpected error fetching advocates: {e}",
                exc_info=True,
                extra={"search": request.query, "sequence": request.sequence},
            )
            self.dispatch(FetchFailed(request))
            return
        self.dispatch(FetchSucceeded(request, tuple(advocates)))

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception as e:
                logger.error(f"Search listener failed: {e}", exc_info=True)

    # ─── Lifecycle ────────────────────────────────────────────────

    async def wait_for_pending(self) -> None:
        """Wait until every issued fetch has settled."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def aclose(self) -> None:
        """Drop the pending timer, let in-flight fetches finish, close the fetcher."""
        self._cancel_timer()
        await self.wait_for_pending()
        close = getattr(self._fetcher, "aclose", None)
        if close is not None:
            await close()


def create_search_coordinator(
    settings: Settings, scheduler: Scheduler | None = None,
) -> SearchCoordinator:
    """Build a coordinator talking HTTP to the configured query endpoint."""
    client = AdvocateClient(
        settings.api_base_url, timeout_seconds=settings.client_timeout_seconds,
    )
    return SearchCoordinator(
        client,
        scheduler=scheduler,
        debounce_ms=settings.search_debounce_ms,
        discard_stale_responses=settings.discard_stale_responses,
    )
