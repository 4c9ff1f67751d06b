from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from strategia.core.config import settings
from strategia.models.user import AuthProvider, User
from strategia.tests.helpers import API

provider_calls = []


def google_handler(request: httpx.Request) -> httpx.Response:
    provider_calls.append(request.url.path)
    if str(request.url).startswith(settings.GOOGLE_TOKEN_URL):
        if b"code=bad-code" in request.content:
            return httpx.Response(400, json={"error": "invalid_grant"})
        if b"code=html-code" in request.content:
            return httpx.Response(200, text="<html><body>Service unavailable</body></html>")
        return httpx.Response(200, json={"access_token": "provider-token", "token_type": "Bearer"})
    if str(request.url).startswith(settings.GOOGLE_USERINFO_URL):
        assert request.headers["Authorization"] == "Bearer provider-token"
        return httpx.Response(
            200,
            json={
                "email": "lucia@example.com",
                "name": "Lucía Gómez",
                "picture": "https://example.com/lucia.png",
            },
        )
    return httpx.Response(404)


@pytest.fixture
def oauth_transport():
    provider_calls.clear()
    return httpx.MockTransport(google_handler)


def _authorize_state(client) -> str:
    response = client.get(f"{API}/auth/oauth/google", follow_redirects=False)
    assert response.status_code == 307
    query = parse_qs(urlparse(response.headers["location"]).query)
    assert query["prompt"] == ["consent"]
    assert query["response_type"] == ["code"]
    return query["state"][0]


def test_oauth_sign_in_creates_user_and_session(client, db, services):
    state = _authorize_state(client)

    response = client.get(
        f"{API}/auth/oauth/google/callback",
        params={"code": "good-code", "state": state},
        follow_redirects=False,
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/"
    assert client.cookies.get(settings.SESSION_COOKIE_NAME)

    user = db.query(User).filter(User.email == "lucia@example.com").one()
    assert user.auth_provider == AuthProvider.GOOGLE
    assert user.full_name == "Lucía Gómez"
    assert services.monitors.active_count() == 1

    session = client.get(f"{API}/auth/session").json()
    assert session["authenticated"] is True


def test_oauth_rejects_forged_state(client):
    response = client.get(
        f"{API}/auth/oauth/google/callback",
        params={"code": "good-code", "state": "forged"},
        follow_redirects=False,
    )

    assert response.status_code == 502
    assert response.json()["error"] == "Invalid OAuth state"
    assert provider_calls == []


def test_oauth_provider_error(client):
    state = _authorize_state(client)

    response = client.get(
        f"{API}/auth/oauth/google/callback",
        params={"code": "bad-code", "state": state},
        follow_redirects=False,
    )

    assert response.status_code == 502
    assert response.json()["error"] == "Error signing in with Google"


def test_unsupported_provider(client):
    response = client.get(f"{API}/auth/oauth/github", follow_redirects=False)
    assert response.status_code == 502


def test_oauth_provider_returns_non_json(client):
    state = _authorize_state(client)

    response = client.get(
        f"{API}/auth/oauth/google/callback",
        params={"code": "html-code", "state": state},
        follow_redirects=False,
    )

    assert response.status_code == 502
    assert response.json()["error"] == "Error signing in with Google"
