from datetime import datetime, timedelta

import pytest

from strategia.services.activity import ActivityEvent
from strategia.services.auth_store import AuthEvent, AuthState, AuthStore
from strategia.services.monitor_registry import MonitorRegistry
from strategia.services.navigation import Navigator
from strategia.services.session_monitor import MonitorState
from strategia.services.workspace import WorkspaceStore
from strategia.tests.helpers import ManualScheduler, RecordingNotifier

IDLE_MS = 1_800_000


class StoreBackend:
    """Revoca la sesión limpiando el ``AuthStore``, como el backend real."""

    def __init__(self, store: AuthStore) -> None:
        self.store = store
        self.calls = []

    def sign_out(self, session_token, reason):
        self.calls.append((session_token, reason))
        self.store.clear_session(session_token)


def make_state(token: str = "tok-1", user_id: int = 1) -> AuthState:
    return AuthState(
        session_token=token,
        session_id=10,
        user_id=user_id,
        email="ana@example.com",
        full_name="Ana Torres",
        expires_at=datetime.utcnow() + timedelta(days=1),
    )


@pytest.fixture
def store():
    return AuthStore()


@pytest.fixture
def clock():
    return ManualScheduler()


@pytest.fixture
def backend(store):
    return StoreBackend(store)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def navigator():
    return Navigator()


@pytest.fixture
def registry(store, backend, notifier, navigator, clock):
    return MonitorRegistry(
        auth_store=store,
        backend=backend,
        notifier=notifier,
        navigator=navigator,
        scheduler=clock,
        idle_timeout_ms=IDLE_MS,
        auth_route="/auth",
    )


@pytest.mark.parametrize("event", [AuthEvent.SIGNED_IN, AuthEvent.INITIAL_SESSION])
def test_session_start_events_start_monitor(registry, store, clock, event):
    store.set_session(make_state(), event)

    assert registry.state_of("tok-1") == MonitorState.ACTIVE
    assert len(clock.pending) == 1
    assert registry.active_count() == 1


def test_repeated_session_event_does_not_duplicate_timer(registry, store, clock):
    store.set_session(make_state(), AuthEvent.INITIAL_SESSION)
    store.set_session(make_state(), AuthEvent.INITIAL_SESSION)

    assert len(clock.pending) == 1
    assert registry.activity_source("tok-1").listener_count() == len(ActivityEvent)


def test_signed_out_stops_and_drops_monitor(registry, store, clock):
    store.set_session(make_state())
    source = registry.activity_source("tok-1")

    store.clear_session("tok-1")

    assert registry.get("tok-1") is None
    assert registry.state_of("tok-1") == MonitorState.UNAUTHENTICATED
    assert clock.pending == []
    assert source.listener_count() == 0


def test_dispatch_resets_only_matching_session(registry, store, clock, backend):
    store.set_session(make_state("tok-1", 1))
    store.set_session(make_state("tok-2", 2))

    clock.advance(IDLE_MS - 10)
    assert registry.dispatch("tok-1", [ActivityEvent.KEY_PRESS]) == 1
    clock.advance(10)

    assert [token for token, _ in backend.calls] == ["tok-2"]
    assert registry.state_of("tok-1") == MonitorState.ACTIVE
    assert registry.get("tok-2") is None


def test_dispatch_for_unknown_session_is_ignored(registry):
    assert registry.dispatch("missing", [ActivityEvent.SCROLL]) == 0


def test_idle_expiry_through_registry(registry, store, clock, backend, notifier, navigator):
    store.set_session(make_state())

    clock.advance(IDLE_MS)

    assert len(backend.calls) == 1
    assert store.get("tok-1") is None
    assert registry.get("tok-1") is None
    assert navigator.pending("tok-1") == "/auth"
    assert notifier.titles() == ["Session expired"]


def test_sign_out_of_expired_session(registry, store, clock, backend, notifier, navigator):
    state = make_state()
    store.set_session(state)
    clock.advance(IDLE_MS)

    registry.sign_out(state)

    assert notifier.titles() == ["Session expired", "Signed out"]
    assert len(backend.calls) == 2
    assert registry.get("tok-1") is None


def test_shutdown_cancels_every_timer(registry, store, clock):
    store.set_session(make_state("tok-1", 1))
    store.set_session(make_state("tok-2", 2))

    tokens = registry.shutdown()

    assert sorted(tokens) == ["tok-1", "tok-2"]
    assert clock.pending == []


def test_workspace_discarded_on_sign_out(store):
    workspaces = WorkspaceStore(store)
    store.set_session(make_state())
    workspaces.get("tok-1").add_alternative("Partner with universities")
    assert len(workspaces) == 1

    store.clear_session("tok-1")

    assert len(workspaces) == 0
    assert workspaces.get("tok-1").alternatives == []
