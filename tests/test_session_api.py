# Tests for the session cookie helpers and router.

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI, Response
from fastapi.testclient import TestClient

from sessionsign.api import build_router
from sessionsign.config import Settings
from sessionsign.cookies import read_session_cookie, set_session_cookie
from sessionsign.security.session_cookies import SessionTokenCodec

SECRET = "your-signature-secret"
TS = 1_700_000_000
DAY = 86_400


@pytest.fixture
def settings():
    return Settings(signature_secret=SECRET, cookie_secure=False)


@pytest.fixture
def codec():
    return SessionTokenCodec.for_testing(SECRET, TS)


@pytest.fixture
def client(codec, settings):
    app = FastAPI()
    app.include_router(build_router(codec, settings), prefix="/api")
    return TestClient(app)


class TestCreateSession:
    def test_sets_http_only_cookie(self, client, settings):
        resp = client.post("/api/auth/session", json={"session_id": "abc"})
        assert resp.status_code == 200
        assert resp.json() == {"session_id": "abc", "timestep": 219}

        header = resp.headers["set-cookie"]
        assert header.startswith(f"{settings.cookie_name}=")
        assert "HttpOnly" in header
        assert "Max-Age=86400" in header
        assert "samesite=strict" in header.lower()

    def test_reports_truncated_id(self, client):
        resp = client.post("/api/auth/session", json={"session_id": "x" * 30})
        assert resp.json()["session_id"] == "x" * 20

    def test_empty_id_rejected(self, client):
        resp = client.post("/api/auth/session", json={"session_id": ""})
        assert resp.status_code == 422

    def test_response_and_cookie_share_timestep(self, settings):
        # The day rolls over between the first and second clock read.
        clock = MagicMock()
        clock.now.side_effect = [DAY - 1, DAY, DAY, DAY]
        app = FastAPI()
        app.include_router(build_router(SessionTokenCodec(SECRET, clock=clock), settings))
        client = TestClient(app)

        created = client.post("/auth/session", json={"session_id": "abc"})
        assert created.json()["timestep"] == 0
        assert client.get("/auth/session").json()["timestep"] == 0
        assert clock.now.call_count == 1

    def test_secure_flag_from_settings(self, codec):
        app = FastAPI()
        app.include_router(build_router(codec, Settings(signature_secret=SECRET)))
        resp = TestClient(app).post("/auth/session", json={"session_id": "abc"})
        assert "Secure" in resp.headers["set-cookie"]


class TestGetSession:
    def test_round_trip_via_cookie(self, client):
        client.post("/api/auth/session", json={"session_id": "your-session-id"})
        resp = client.get("/api/auth/session")
        assert resp.status_code == 200
        assert resp.json() == {"session_id": "your-session-id", "timestep": 219}

    def test_missing_cookie(self, client):
        resp = client.get("/api/auth/session")
        assert resp.status_code == 401

    def test_tampered_cookie(self, client, settings):
        client.cookies.set(settings.cookie_name, "0" * 64 + "-AWFiYw==")
        resp = client.get("/api/auth/session")
        assert resp.status_code == 401

    def test_stale_cookie_rejected(self, codec):
        settings = Settings(signature_secret=SECRET, cookie_secure=False, max_token_age_days=1)
        app = FastAPI()
        app.include_router(build_router(codec, settings))
        client = TestClient(app)

        client.post("/auth/session", json={"session_id": "abc"})
        codec.clock.set_custom_timestamp(TS + DAY)
        assert client.get("/auth/session").status_code == 200
        codec.clock.set_custom_timestamp(TS + 2 * DAY)
        assert client.get("/auth/session").status_code == 401

    def test_cookie_lifetime_is_not_a_freshness_check(self, codec):
        settings = Settings(signature_secret=SECRET, cookie_secure=False, cookie_max_age_days=1)
        app = FastAPI()
        app.include_router(build_router(codec, settings))
        client = TestClient(app)

        client.post("/auth/session", json={"session_id": "abc"})
        codec.clock.set_custom_timestamp(TS + 5 * DAY)
        assert client.get("/auth/session").status_code == 200


class TestLogout:
    def test_clears_cookie(self, client, settings):
        client.post("/api/auth/session", json={"session_id": "abc"})
        resp = client.post("/api/auth/logout")
        assert resp.status_code == 200
        assert resp.json() == {"ok": True}
        header = resp.headers["set-cookie"]
        assert header.startswith(f"{settings.cookie_name}=")
        assert "max-age=0" in header.lower()


class TestReadSessionCookie:
    def _request(self, cookies):
        req = MagicMock()
        req.cookies = cookies
        req.client = MagicMock()
        req.client.host = "10.0.0.1"
        return req

    def test_valid(self, codec, settings):
        signed = codec.create_signed_string_for_session("abc")
        payload = read_session_cookie(self._request({settings.cookie_name: signed}), codec, settings)
        assert payload is not None
        assert payload.session_id == "abc"

    def test_absent(self, codec, settings):
        assert read_session_cookie(self._request({}), codec, settings) is None

    def test_invalid(self, codec, settings):
        req = self._request({settings.cookie_name: "garbage"})
        assert read_session_cookie(req, codec, settings) is None


class TestSetSessionCookie:
    def test_returns_signed_value(self, codec, settings):
        response = Response()
        signed = set_session_cookie(response, "abc", codec, settings)
        payload = codec.verify_signed_string_for_session(signed)
        assert payload is not None
        assert payload.session_id == "abc"
        assert response.headers["set-cookie"].startswith(f"{settings.cookie_name}=")
