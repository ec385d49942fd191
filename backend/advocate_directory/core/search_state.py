"""Search State — pure transition function for the consumer-side search lifecycle.

Invariants:
    - Pure: transition(state, event) -> (state, effects); no IO, no timers, no async
    - Raw query follows every keystroke; effective query changes only when the
      current debounce generation elapses
    - A fetch is issued only when the effective query actually changes, on mount,
      on explicit clear, or on retry
    - ClearRequested bypasses the debounce: cancels the timer and fetches all at once
    - Every settled fetch overwrites the result set (last-resolved-wins), unless
      discard_stale_responses is set
    - Failure clears the result set; partial data is never merged

Design Decisions:
    - Timer identity via generation counter: a late TimerElapsed for a superseded
      generation is ignored even if the shell could not cancel it in time
    - Phase is derived from state, not stored — no way for it to drift
    - discard_stale_responses defaults to False: observed behavior is that slower,
      older responses win; the sequence guard is opt-in
"""

from dataclasses import dataclass, replace

from advocate_directory.core.domain_types import (
    AdvocateRecord, DEFAULT_DEBOUNCE_MS, FETCH_FAILED_MESSAGE, FetchKind, SearchPhase,
)
from advocate_directory.core.matcher import normalize_query


@dataclass(frozen=True)
class FetchRequest:
    """One request to the query endpoint. query None means unfiltered."""
    query: str | None
    sequence: int

    @property
    def kind(self) -> FetchKind:
        return FetchKind.SEARCH if self.query else FetchKind.LOAD


# ─── Events ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class Mounted:
    """Consumer is ready; triggers the initial unfiltered load."""


@dataclass(frozen=True)
class Keystroke:
    text: str


@dataclass(frozen=True)
class TimerElapsed:
    generation: int


@dataclass(frozen=True)
class ClearRequested:
    pass


@dataclass(frozen=True)
class RetryRequested:
    pass


@dataclass(frozen=True)
class FetchSucceeded:
    request: FetchRequest
    advocates: tuple[AdvocateRecord, ...]


@dataclass(frozen=True)
class FetchFailed:
    request: FetchRequest
    message: str = FETCH_FAILED_MESSAGE


Event = (
    Mounted | Keystroke | TimerElapsed | ClearRequested
    | RetryRequested | FetchSucceeded | FetchFailed
)


# ─── Effects ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class StartTimer:
    """Start the debounce timer, replacing any pending one."""
    generation: int
    delay_ms: int


@dataclass(frozen=True)
class CancelTimer:
    pass


@dataclass(frozen=True)
class IssueFetch:
    request: FetchRequest


Effect = StartTimer | CancelTimer | IssueFetch


# ─── State ───────────────────────────────────────────────────────

@dataclass(frozen=True)
class SearchState:
    """Everything the rendering consumer reads, plus lifecycle bookkeeping."""

    query: str = ""
    effective_query: str = ""
    advocates: tuple[AdvocateRecord, ...] = ()
    error: str | None = None

    mounted: bool = False
    timer_generation: int = 0
    timer_pending: bool = False
    next_sequence: int = 1
    in_flight: tuple[FetchRequest, ...] = ()
    failed_request: FetchRequest | None = None
    last_applied_sequence: int = 0

    debounce_ms: int = DEFAULT_DEBOUNCE_MS
    discard_stale_responses: bool = False

    @property
    def phase(self) -> SearchPhase:
        if self.timer_pending:
            return SearchPhase.DEBOUNCING
        if self.in_flight:
            return SearchPhase.FETCHING
        if self.error is not None:
            return SearchPhase.ERRORED
        return SearchPhase.IDLE

    @property
    def is_loading(self) -> bool:
        return any(r.kind is FetchKind.LOAD for r in self.in_flight)

    @property
    def is_searching(self) -> bool:
        return any(r.kind is FetchKind.SEARCH for r in self.in_flight)

    @property
    def result_count(self) -> int:
        return len(self.advocates)


Transition = tuple[SearchState, tuple[Effect, ...]]


def transition(state: SearchState, event: Event) -> Transition:
    """Apply one event. Unknown events are a programming error."""
    match event:
        case Mounted():
            return _on_mounted(state)
        case Keystroke(text=text):
            return _on_keystroke(state, text)
        case TimerElapsed(generation=generation):
            return _on_timer_elapsed(state, generation)
        case ClearRequested():
            return _on_clear(state)
        case RetryRequested():
            return _on_retry(state)
        case FetchSucceeded() | FetchFailed():
            return _on_settled(state, event)
    raise TypeError(f"Unsupported search event: {event!r}")


def _issue(state: SearchState, query: str | None) -> Transition:
    """Issue one fetch. Blank queries become unfiltered requests."""
    request = FetchRequest(query=query or None, sequence=state.next_sequence)
    new_state = replace(
        state,
        next_sequence=state.next_sequence + 1,
        in_flight=state.in_flight + (request,),
        error=None,
        failed_request=None,
    )
    return new_state, (IssueFetch(request),)


def _on_mounted(state: SearchState) -> Transition:
    if state.mounted:
        return state, ()
    return _issue(replace(state, mounted=True), None)


def _on_keystroke(state: SearchState, text: str) -> Transition:
    generation = state.timer_generation + 1
    new_state = replace(
        state, query=text, timer_generation=generation, timer_pending=True,
    )
    return new_state, (StartTimer(generation, state.debounce_ms),)


def _on_timer_elapsed(state: SearchState, generation: int) -> Transition:
    if not state.timer_pending or generation != state.timer_generation:
        return state, ()
    effective = normalize_query(state.query)
    new_state = replace(state, timer_pending=False)
    if effective == state.effective_query:
        return new_state, ()
    return _issue(replace(new_state, effective_query=effective), effective)


def _on_clear(state: SearchState) -> Transition:
    cleared = replace(
        state,
        query="",
        effective_query="",
        timer_generation=state.timer_generation + 1,
        timer_pending=False,
    )
    new_state, effects = _issue(cleared, None)
    return new_state, (CancelTimer(),) + effects


def _on_retry(state: SearchState) -> Transition:
    if state.error is None or state.failed_request is None:
        return state, ()
    return _issue(state, state.failed_request.query)


def _on_settled(
    state: SearchState, event: FetchSucceeded | FetchFailed,
) -> Transition:
    request = event.request
    remaining = tuple(r for r in state.in_flight if r.sequence != request.sequence)
    new_state = replace(state, in_flight=remaining)

    if (
        state.discard_stale_responses
        and request.sequence < state.last_applied_sequence
    ):
        return new_state, ()

    new_state = replace(
        new_state,
        last_applied_sequence=max(state.last_applied_sequence, request.sequence),
    )
    if isinstance(event, FetchSucceeded):
        return replace(
            new_state, advocates=event.advocates, error=None, failed_request=None,
        ), ()
    return replace(
        new_state, advocates=(), error=event.message, failed_request=request,
    ), ()
