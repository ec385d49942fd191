"""Search State tests — pure transition function of the search lifecycle.

Tests cover:
    - Mount issues one unfiltered load, only once
    - Keystrokes update the raw query and restart the debounce generation
    - Only the latest generation's elapse issues a fetch
    - Rapid "a", "an", "anx" collapse into one fetch of "anx"
    - Backspacing to empty still debounces before fetching all
    - Unchanged effective query does not refetch
    - Clear cancels the timer and fetches all immediately
    - Loading vs searching flags
    - Failure clears results and exposes an error; retry re-issues the same query
    - Last-resolved-wins; opt-in stale discard
    - Derived phase

Design Decisions:
    - No clock, no loop: events in, (state, effects) out
"""

import pytest

from advocate_directory.core.domain_types import FETCH_FAILED_MESSAGE, SearchPhase
from advocate_directory.core.search_state import (
    CancelTimer, ClearRequested, FetchFailed, FetchSucceeded, IssueFetch,
    Keystroke, Mounted, RetryRequested, SearchState, StartTimer, TimerElapsed,
    transition,
)
from tests.records import make_record


def _run(state, *events):
    """Apply events in order, collecting every effect."""
    effects = []
    for event in events:
        state, new_effects = transition(state, event)
        effects.extend(new_effects)
    return state, effects


def _fetches(effects):
    return [e.request for e in effects if isinstance(e, IssueFetch)]


def _mounted_and_loaded(records=()):
    state, effects = _run(SearchState(), Mounted())
    request = _fetches(effects)[0]
    state, _ = transition(state, FetchSucceeded(request, tuple(records)))
    return state


def test_mount_issues_unfiltered_load():
    state, effects = transition(SearchState(), Mounted())
    (request,) = _fetches(effects)
    assert request.query is None
    assert state.is_loading
    assert not state.is_searching
    assert state.phase is SearchPhase.FETCHING


def test_second_mount_is_ignored():
    state, _ = transition(SearchState(), Mounted())
    _, effects = transition(state, Mounted())
    assert effects == ()


def test_keystroke_updates_raw_query_and_starts_timer():
    state, effects = transition(SearchState(), Keystroke("a"))
    assert state.query == "a"
    assert state.effective_query == ""
    assert effects == (StartTimer(generation=1, delay_ms=300),)
    assert state.phase is SearchPhase.DEBOUNCING


def test_debounce_delay_is_configurable():
    _, effects = transition(SearchState(debounce_ms=50), Keystroke("a"))
    assert effects == (StartTimer(generation=1, delay_ms=50),)


def test_rapid_keystrokes_issue_one_fetch_with_last_query():
    state = _mounted_and_loaded()
    state, effects = _run(
        state,
        Keystroke("a"), Keystroke("an"), Keystroke("anx"),
        TimerElapsed(1), TimerElapsed(2), TimerElapsed(3),
    )
    fetches = _fetches(effects)
    assert [r.query for r in fetches] == ["anx"]
    assert state.effective_query == "anx"
    assert state.is_searching


def test_superseded_timer_generation_is_ignored():
    state, _ = _run(SearchState(), Keystroke("a"), Keystroke("an"))
    new_state, effects = transition(state, TimerElapsed(1))
    assert effects == ()
    assert new_state == state


def test_effective_query_is_stripped():
    state = _mounted_and_loaded()
    state, effects = _run(state, Keystroke("  anx "), TimerElapsed(1))
    assert [r.query for r in _fetches(effects)] == ["anx"]


def test_backspace_to_empty_debounces_then_fetches_all():
    state = _mounted_and_loaded()
    state, effects = _run(state, Keystroke("a"), TimerElapsed(1))
    state, _ = transition(state, FetchSucceeded(_fetches(effects)[0], ()))

    state, effects = transition(state, Keystroke(""))
    assert _fetches(effects) == []
    assert state.phase is SearchPhase.DEBOUNCING

    state, effects = transition(state, TimerElapsed(2))
    (request,) = _fetches(effects)
    assert request.query is None
    assert state.is_loading


def test_unchanged_effective_query_does_not_refetch():
    state = _mounted_and_loaded()
    state, effects = _run(state, Keystroke("x"), Keystroke(""), TimerElapsed(2))
    assert _fetches(effects) == []
    assert state.phase is SearchPhase.IDLE


def test_whitespace_only_input_counts_as_blank():
    state = _mounted_and_loaded()
    state, effects = _run(state, Keystroke("   "), TimerElapsed(1))
    assert _fetches(effects) == []
    assert state.query == "   "


def test_clear_cancels_timer_and_fetches_all_immediately():
    state = _mounted_and_loaded()
    state, _ = transition(state, Keystroke("anx"))
    state, effects = transition(state, ClearRequested())

    assert effects[0] == CancelTimer()
    (request,) = _fetches(effects)
    assert request.query is None
    assert state.query == ""
    assert state.effective_query == ""
    assert not state.timer_pending

    # a timer that fired anyway after the clear is stale
    after, late = transition(state, TimerElapsed(1))
    assert late == ()
    assert after == state


def test_clear_fetches_even_when_already_unfiltered():
    state = _mounted_and_loaded()
    _, effects = transition(state, ClearRequested())
    assert [r.query for r in _fetches(effects)] == [None]


def test_success_replaces_result_set():
    jane = make_record()
    state = _mounted_and_loaded([make_record(id=2), make_record(id=3)])
    state, effects = _run(state, Keystroke("anx"), TimerElapsed(1))
    state, _ = transition(state, FetchSucceeded(_fetches(effects)[0], (jane,)))
    assert state.advocates == (jane,)
    assert state.result_count == 1
    assert state.phase is SearchPhase.IDLE


def test_failure_clears_results_and_sets_error():
    state = _mounted_and_loaded([make_record()])
    state, effects = _run(state, Keystroke("anx"), TimerElapsed(1))
    state, _ = transition(state, FetchFailed(_fetches(effects)[0]))
    assert state.error == FETCH_FAILED_MESSAGE
    assert state.advocates == ()
    assert state.phase is SearchPhase.ERRORED


def test_retry_reissues_failed_query_and_success_clears_error():
    jane = make_record()
    state = _mounted_and_loaded()
    state, effects = _run(state, Keystroke("anx"), TimerElapsed(1))
    failed = _fetches(effects)[0]
    state, _ = transition(state, FetchFailed(failed))

    state, effects = transition(state, RetryRequested())
    (retry,) = _fetches(effects)
    assert retry.query == failed.query
    assert retry.sequence > failed.sequence
    assert state.error is None
    assert state.phase is SearchPhase.FETCHING

    state, _ = transition(state, FetchSucceeded(retry, (jane,)))
    assert state.advocates == (jane,)
    assert state.error is None
    assert state.phase is SearchPhase.IDLE


def test_retry_without_error_does_nothing():
    state = _mounted_and_loaded()
    new_state, effects = transition(state, RetryRequested())
    assert effects == ()
    assert new_state == state


def test_retry_of_failed_initial_load_is_unfiltered():
    state, effects = transition(SearchState(), Mounted())
    state, _ = transition(state, FetchFailed(_fetches(effects)[0]))
    _, effects = transition(state, RetryRequested())
    assert [r.query for r in _fetches(effects)] == [None]


def test_last_resolved_wins_by_default():
    older_result = (make_record(id=7),)
    newer_result = (make_record(id=1),)
    state = _mounted_and_loaded()
    state, effects = _run(
        state, Keystroke("a"), TimerElapsed(1), Keystroke("anx"), TimerElapsed(2),
    )
    older, newer = _fetches(effects)
    assert state.is_searching

    state, _ = transition(state, FetchSucceeded(newer, newer_result))
    assert state.advocates == newer_result
    state, _ = transition(state, FetchSucceeded(older, older_result))
    assert state.advocates == older_result
    assert state.in_flight == ()


def test_stale_response_discarded_when_enabled():
    newer_result = (make_record(id=1),)
    state, effects = _run(
        SearchState(discard_stale_responses=True),
        Keystroke("a"), TimerElapsed(1), Keystroke("anx"), TimerElapsed(2),
    )
    older, newer = _fetches(effects)
    state, _ = transition(state, FetchSucceeded(newer, newer_result))
    state, _ = transition(state, FetchFailed(older))
    assert state.advocates == newer_result
    assert state.error is None
    assert state.in_flight == ()


@pytest.mark.parametrize("first,second", [("load", "search"), ("search", "load")])
def test_loading_and_searching_flags_are_independent(first, second):
    state, effects = transition(SearchState(), Mounted())
    load = _fetches(effects)[0]
    state, effects = _run(state, Keystroke("anx"), TimerElapsed(1))
    search = _fetches(effects)[0]
    assert state.is_loading and state.is_searching

    settle = {"load": load, "search": search}
    state, _ = transition(state, FetchSucceeded(settle[first], ()))
    assert state.is_loading == (first != "load")
    assert state.is_searching == (first != "search")
    state, _ = transition(state, FetchSucceeded(settle[second], ()))
    assert not state.is_loading and not state.is_searching


def test_unknown_event_raises():
    with pytest.raises(TypeError):
        transition(SearchState(), object())
