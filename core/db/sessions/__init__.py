"""
Session storage re-exports.
"""
from core.db.sessions.session_store import get_session

__all__ = ["get_session"]
