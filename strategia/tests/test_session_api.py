from fastapi.testclient import TestClient

from strategia.core.config import settings
from strategia.main import app
from strategia.models.auth_session import AuthSession, RevokeReason
from strategia.tests.helpers import API

IDLE_MS = settings.SESSION_IDLE_TIMEOUT_MS


def _token(client) -> str:
    return client.cookies.get(settings.SESSION_COOKIE_NAME)


def test_activity_is_dispatched_to_monitor(auth_client, scheduler):
    response = auth_client.post(
        f"{API}/session/activity",
        json={"events": ["keypress", "mousedown", "mousemove"]},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["accepted"] == 2
    assert data["ignored"] == 1
    assert data["monitor_state"] == "active"
    assert len(scheduler.pending) == 1


def test_activity_requires_events(auth_client):
    response = auth_client.post(f"{API}/session/activity", json={"events": []})
    assert response.status_code == 422


def test_monitor_status(auth_client):
    data = auth_client.get(f"{API}/session/status").json()["data"]
    assert data["monitor_state"] == "active"
    assert data["timer_pending"] is True
    assert data["listeners"] == 4


def test_idle_session_is_signed_out(auth_client, scheduler, services, db):
    token = _token(auth_client)

    scheduler.advance(IDLE_MS)

    record = db.query(AuthSession).filter(AuthSession.token == token).one()
    assert record.revoked is True
    assert record.revoke_reason == RevokeReason.IDLE_TIMEOUT
    assert services.monitors.get(token) is None

    page = auth_client.get("/", follow_redirects=False)
    assert page.status_code == 303
    assert page.headers["location"] == "/auth"

    toasts = auth_client.get(f"{API}/notifications/session").json()["data"]
    expired = [n for n in toasts if n["title"] == "Session expired"]
    assert len(expired) == 1
    assert expired[0]["variant"] == "destructive"


def test_pending_redirect_is_reported_to_api_clients(auth_client, scheduler):
    scheduler.advance(IDLE_MS)

    response = auth_client.post(f"{API}/session/activity", json={"events": ["keypress"]})

    assert response.status_code == 401
    assert response.json()["redirect"] == "/auth"


def test_activity_defers_expiry(auth_client, scheduler, db):
    token = _token(auth_client)

    scheduler.advance(1_700_000)
    auth_client.post(f"{API}/session/activity", json={"events": ["keypress"]})
    scheduler.advance(100_000)

    assert auth_client.get(f"{API}/session/status").status_code == 200

    scheduler.advance(1_700_000)
    record = db.query(AuthSession).filter(AuthSession.token == token).one()
    assert record.revoke_reason == RevokeReason.IDLE_TIMEOUT


def test_expiry_before_sign_in_again(auth_client, scheduler, credentials):
    scheduler.advance(IDLE_MS)

    response = auth_client.post(
        f"{API}/auth/sign-in",
        json={"email": credentials["email"], "password": credentials["password"]},
    )

    assert response.status_code == 200
    body = auth_client.get(f"{API}/auth/session").json()
    assert body["authenticated"] is True
    assert body["monitor_state"] == "active"


def test_expiry_notice_stays_with_expired_session(auth_client, credentials, scheduler):
    phone = TestClient(app)
    phone.post(
        f"{API}/auth/sign-in",
        json={"email": credentials["email"], "password": credentials["password"]},
    )

    scheduler.advance(1_700_000)
    phone.post(f"{API}/session/activity", json={"events": ["keypress"]})
    scheduler.advance(100_000)

    phone_titles = [n["title"] for n in phone.get(f"{API}/notifications/").json()["data"]]
    laptop_titles = [n["title"] for n in auth_client.get(f"{API}/notifications/session").json()["data"]]

    assert "Session expired" not in phone_titles
    assert "Session expired" in laptop_titles


def test_stale_redirects_are_dropped(client, credentials, services, scheduler):
    ticks = [0.0]
    services.navigator.clock = lambda: ticks[0]
    client.post(f"{API}/auth/sign-up", json=credentials)
    login = {"email": credentials["email"], "password": credentials["password"]}
    for _ in range(5):
        client.post(f"{API}/auth/sign-in", json=login)

    scheduler.advance(IDLE_MS)
    assert len(services.navigator) == 5

    ticks[0] = services.navigator.ttl_seconds
    client.post(f"{API}/auth/sign-in", json=login)
    scheduler.advance(IDLE_MS)

    assert len(services.navigator) == 1
