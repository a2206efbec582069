import pytest

from core.db import base
from core.db.profiles import profiles_store
from core.profiles.models import Availability, OpenTo, Tier
from core.tiers import ProfileEdit


class _FakeCursor:
    def __init__(self, rows=(), rowcount=1, fail=False):
        self.rows = list(rows)
        self.rowcount = rowcount
        self.fail = fail
        self.executed = []

    def execute(self, sql, params=None):
        if self.fail:
            raise RuntimeError("boom")
        self.executed.append((sql, params))

    def fetchall(self):
        return self.rows

    def fetchone(self):
        return self.rows[0] if self.rows else None


class _FakeConn:
    def __init__(self, cursor):
        self.cur = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self):
        return self.cur

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


def test_get_all_profiles_converts_rows(monkeypatch):
    rows = [
        {"id": 1, "name": "Ada", "tier": "premium", "skills": None},
        {"id": 2, "name": "Grace", "open_to": ["equity"]},
    ]
    conn = _FakeConn(_FakeCursor(rows))
    monkeypatch.setattr(profiles_store, "get_conn", lambda: conn)

    profiles = profiles_store.get_all_profiles()

    assert [p.name for p in profiles] == ["Ada", "Grace"]
    assert profiles[0].tier == Tier.PREMIUM
    assert profiles[0].skills == ()
    assert profiles[1].open_to == (OpenTo.EQUITY,)
    assert conn.closed


def test_get_profile_by_id_missing(monkeypatch):
    monkeypatch.setattr(profiles_store, "get_conn", lambda: _FakeConn(_FakeCursor([])))
    assert profiles_store.get_profile_by_id("nope") is None
    assert profiles_store.get_profile_by_id("") is None


def test_update_profile_sends_plain_values(monkeypatch):
    cursor = _FakeCursor(rowcount=1)
    conn = _FakeConn(cursor)
    monkeypatch.setattr(profiles_store, "get_conn", lambda: conn)
    edit = ProfileEdit(
        name="Ada",
        availability=Availability.OPEN,
        open_to=(OpenTo.ADVISING,),
        skills=("Rust",),
        portfolio_links=("https://ada.dev",),
    )

    assert profiles_store.update_profile("p1", "u1", edit) is True

    _sql, params = cursor.executed[0]
    assert params[0] == "Ada"
    assert params[4] == "open"
    assert params[5] == ["advising"]
    assert params[6] == ["Rust"]
    assert params[-2:] == ("p1", "u1")
    assert conn.committed and conn.closed


def test_update_profile_rolls_back_and_reraises(monkeypatch):
    conn = _FakeConn(_FakeCursor(fail=True))
    monkeypatch.setattr(profiles_store, "get_conn", lambda: conn)

    with pytest.raises(RuntimeError):
        profiles_store.update_profile("p1", "u1", ProfileEdit())
    assert conn.rolled_back and conn.closed


def test_database_url_is_validated(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    with pytest.raises(RuntimeError):
        base.resolve_database_url()
    with pytest.raises(RuntimeError):
        base.resolve_database_url("mysql://x")
    assert base.resolve_database_url("postgresql://u@h/db") == "postgresql://u@h/db"


def test_reads_close_the_connection_when_the_query_fails(monkeypatch):
    conns = []

    def failing_conn():
        conns.append(_FakeConn(_FakeCursor(fail=True)))
        return conns[-1]

    monkeypatch.setattr(profiles_store, "get_conn", failing_conn)

    with pytest.raises(RuntimeError):
        profiles_store.get_all_profiles()
    with pytest.raises(RuntimeError):
        profiles_store.get_profile_by_id("p1")
    with pytest.raises(RuntimeError):
        profiles_store.get_profile_for_user("u1")

    assert len(conns) == 3
    assert all(c.closed for c in conns)
