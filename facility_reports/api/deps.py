"""Shared API dependencies"""
from datetime import datetime
from typing import Optional

from fastapi import Depends, Header, HTTPException

from facility_reports.domain import clock
from facility_reports.domain.errors import PermissionDenied
from facility_reports.domain.identity import SessionRegistry, Viewer
from facility_reports.domain.report_store import ReportStore
from facility_reports.infrastructure.storage import SqlKeyValueStorage

# Lazy initialization - store loaded on first use
_store: Optional[ReportStore] = None
_sessions = SessionRegistry()


def get_report_store() -> ReportStore:
    global _store

    if _store is None:
        _store = ReportStore(SqlKeyValueStorage())
        _store.load()

    return _store


def get_sessions() -> SessionRegistry:
    return _sessions


def get_now() -> datetime:
    return clock.now()


def get_session_token(x_session_token: str = Header(..., description="Token returned by POST /sessions")) -> str:
    return x_session_token


def get_viewer(
    token: str = Depends(get_session_token),
    sessions: SessionRegistry = Depends(get_sessions),
) -> Viewer:
    """Resolve the capability established at login"""
    viewer = sessions.resolve(token)
    if viewer is None:
        raise HTTPException(status_code=401, detail="Unknown or expired session")
    return viewer


def require_admin(viewer: Viewer = Depends(get_viewer)) -> Viewer:
    try:
        viewer.require_admin()
    except PermissionDenied:
        raise HTTPException(status_code=403, detail="Administrator access required")
    return viewer
