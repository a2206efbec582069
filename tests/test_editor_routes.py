from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

import app.api as api_module
from app import security
from app.routes import dashboard, editor
from conftest import make_profile, make_session
from core.profiles.models import Tier


def _stub_editor(monkeypatch, profile, saved):
    session = make_session(profile)
    monkeypatch.setattr(editor, "get_session_context", lambda request: (session, "tok"))
    monkeypatch.setattr(editor, "get_profile_by_id", lambda pid: profile if pid == profile.id else None)

    def fake_update(profile_id, user_id, edit):
        saved.append((profile_id, user_id, edit))
        return True

    monkeypatch.setattr(editor, "update_profile", fake_update)
    client = TestClient(api_module.app)
    client.cookies.set(security.CSRF_COOKIE_NAME, "csrf-ok")
    return client


def test_editor_requires_session(monkeypatch):
    monkeypatch.setattr(editor, "get_session_context", lambda request: (None, None))
    client = TestClient(api_module.app)

    resp = client.get("/dashboard/profile", follow_redirects=False)
    assert resp.status_code == 303
    assert resp.headers["location"] == "/login"


def test_editor_form_shows_tier_limits_and_sets_csrf_cookie(monkeypatch):
    profile = make_profile("me", tier=Tier.FREE, skills=("Rust",))
    client = _stub_editor(monkeypatch, profile, [])
    client.cookies.clear()

    resp = client.get("/dashboard/profile")
    assert resp.status_code == 200
    assert "1 of 1 skills" in resp.text
    assert "Upgrade to Pro to add portfolio links." in resp.text
    assert security.CSRF_COOKIE_NAME in resp.cookies


def test_save_rejects_bad_csrf(monkeypatch):
    saved = []
    client = _stub_editor(monkeypatch, make_profile("me"), saved)

    resp = client.post("/dashboard/profile", data={"csrf_token": "forged", "name": "Me"})
    assert resp.status_code == 403
    assert saved == []


def test_save_clamps_free_tier_input(monkeypatch):
    saved = []
    profile = make_profile("me", tier=Tier.FREE)
    client = _stub_editor(monkeypatch, profile, saved)

    resp = client.post(
        "/dashboard/profile",
        data={
            "csrf_token": "csrf-ok",
            "name": "Ada",
            "bio": "a" * 300,
            "availability": "open",
            "open_to": ["freelance", "equity"],
            "skills": "Rust\nGo",
            "portfolio_links": "https://ada.dev",
        },
    )

    assert resp.status_code == 200
    assert "Profile saved with changes" in resp.text
    assert len(saved) == 1
    profile_id, user_id, edit = saved[0]
    assert (profile_id, user_id) == ("me", "u-me")
    assert len(edit.bio) == 200
    assert edit.skills == ("Rust",)
    assert edit.portfolio_links == ()
    assert [t.value for t in edit.open_to] == ["freelance", "equity"]


def test_save_within_limits_redirects(monkeypatch):
    saved = []
    client = _stub_editor(monkeypatch, make_profile("me", tier=Tier.PRO), saved)

    resp = client.post(
        "/dashboard/profile",
        data={"csrf_token": "csrf-ok", "name": "Ada", "skills": "Rust, Go", "availability": "available"},
        follow_redirects=False,
    )
    assert resp.status_code == 303
    assert resp.headers["location"] == "/dashboard/profile?saved=1"
    assert saved[0][2].skills == ("Rust", "Go")


def test_save_rejects_unknown_availability(monkeypatch):
    saved = []
    client = _stub_editor(monkeypatch, make_profile("me"), saved)

    resp = client.post("/dashboard/profile", data={"csrf_token": "csrf-ok", "availability": "asleep"})
    assert resp.status_code == 400
    assert saved == []


def test_save_is_rate_limited(monkeypatch):
    saved = []
    client = _stub_editor(monkeypatch, make_profile("me", tier=Tier.PRO), saved)
    monkeypatch.setattr(editor, "EDIT_RATE_LIMIT", 2)

    for _ in range(2):
        assert client.post("/dashboard/profile", data={"csrf_token": "csrf-ok"}, follow_redirects=False).status_code == 303

    resp = client.post("/dashboard/profile", data={"csrf_token": "csrf-ok"})
    assert resp.status_code == 429
    assert 1 <= int(resp.headers["Retry-After"]) <= 61
    assert len(saved) == 2


def test_dashboard_shows_completeness_and_expiry(monkeypatch):
    now = datetime.now(timezone.utc)
    profile = make_profile("me", tier=Tier.FREE, last_active=now - timedelta(days=10), profile_views=42)
    monkeypatch.setattr(dashboard, "get_session_context", lambda request: (make_session(profile), "tok"))
    monkeypatch.setattr(dashboard, "get_profile_by_id", lambda pid: profile)
    client = TestClient(api_module.app)

    resp = client.get("/dashboard")
    assert resp.status_code == 200
    assert "Complete your profile" in resp.text
    assert "30%" in resp.text
    assert "expires in" in resp.text
    assert ">42<" in resp.text


def test_dashboard_flags_expired_free_listing(monkeypatch):
    now = datetime.now(timezone.utc)
    profile = make_profile("me", tier=Tier.FREE, last_active=now - timedelta(days=61))
    monkeypatch.setattr(dashboard, "get_session_context", lambda request: (make_session(profile), "tok"))
    monkeypatch.setattr(dashboard, "get_profile_by_id", lambda pid: profile)
    client = TestClient(api_module.app)

    resp = client.get("/dashboard")
    assert "has expired" in resp.text
