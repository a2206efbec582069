"""
Profile storage helpers (data-level only).

The `profiles` table belongs to the managed backend. Reads return Profile
snapshots; the only write is the owner's edit, already checked by the tier gate.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from core.db.base import get_conn
from core.profiles.models import Profile, profile_from_row
from core.tiers.policy import ProfileEdit

log = logging.getLogger("profiles_store")

_PROFILE_COLUMNS = """
    id, user_id, name, email, role, location, bio, avatar, availability,
    open_to, skills, contact_email, twitter, telegram, calendar_link,
    portfolio_links, tier, featured, profile_views, contact_clicks,
    created_at, last_active
"""


def get_all_profiles() -> List[Profile]:
    """Return every profile as a snapshot, newest first (directory sorts them itself)."""
    conn = get_conn()
    try:
        cur = conn.cursor()
        cur.execute(
            f"""
            SELECT {_PROFILE_COLUMNS}
            FROM profiles
            ORDER BY created_at DESC, id
            """
        )
        rows = cur.fetchall()
    finally:
        conn.close()
    return [profile_from_row(dict(r)) for r in rows]


def _fetch_one(where: str, value: str) -> Optional[Profile]:
    conn = get_conn()
    try:
        cur = conn.cursor()
        cur.execute(
            f"""
            SELECT {_PROFILE_COLUMNS}
            FROM profiles
            WHERE {where} = ?
            LIMIT 1
            """,
            (str(value),),
        )
        row = cur.fetchone()
    finally:
        conn.close()
    return profile_from_row(dict(row)) if row else None


def get_profile_by_id(profile_id: str) -> Optional[Profile]:
    if not profile_id:
        return None
    return _fetch_one("id::text", profile_id)


def get_profile_for_user(user_id: str) -> Optional[Profile]:
    """Return the profile owned by an account, if it has one."""
    if not user_id:
        return None
    return _fetch_one("user_id::text", user_id)


def update_profile(profile_id: str, user_id: str, edit: ProfileEdit) -> bool:
    """
    Save an owner's edit. The WHERE clause pins both the profile and its owner,
    so a stale or foreign id updates nothing. Returns True if a row changed.
    """
    conn = get_conn()
    cur = conn.cursor()
    try:
        cur.execute(
            """
            UPDATE profiles
            SET name = ?, role = ?, location = ?, bio = ?, availability = ?,
                open_to = ?, skills = ?, contact_email = ?, twitter = ?,
                telegram = ?, calendar_link = ?, portfolio_links = ?,
                last_active = now()
            WHERE id::text = ? AND user_id::text = ?
            """,
            (
                edit.name,
                edit.role,
                edit.location,
                edit.bio,
                edit.availability.value,
                [tag.value for tag in edit.open_to],
                list(edit.skills),
                edit.contact_email,
                edit.twitter,
                edit.telegram,
                edit.calendar_link,
                list(edit.portfolio_links),
                str(profile_id),
                str(user_id),
            ),
        )
        updated = cur.rowcount
        conn.commit()
    except Exception:
        conn.rollback()
        log.exception("Profile update failed", extra={"profile_id": profile_id})
        raise
    finally:
        conn.close()
    return updated > 0


__all__ = [
    "get_all_profiles",
    "get_profile_by_id",
    "get_profile_for_user",
    "update_profile",
]
