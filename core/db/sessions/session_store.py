"""
Session lookups (read-only).

Sessions are issued and revoked by the managed auth backend; this module only
resolves a cookie token to its account.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Optional

from core.db.base import get_conn
from core.profiles.models import parse_timestamp


def get_session(session_id: str, now: Optional[datetime] = None) -> Optional[Dict]:
    """
    Look up a session by id.
    - Returns None if it does not exist, has no usable expiry, or has expired.
    """
    if not session_id:
        return None

    conn = get_conn()
    try:
        cur = conn.cursor()
        cur.execute(
            """
            SELECT id, user_id, created_at, expires_at
            FROM sessions
            WHERE id = ?
            """,
            (session_id,),
        )
        row = cur.fetchone()
    finally:
        conn.close()

    if not row:
        return None

    expires_at = parse_timestamp(row.get("expires_at"))
    if expires_at is None:
        return None
    if expires_at < (now or datetime.now(timezone.utc)):
        return None

    return dict(row)


__all__ = ["get_session"]
