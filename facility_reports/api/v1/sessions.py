"""Sessions API - login resolves the reporter/administrator capability once"""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from facility_reports.api.deps import get_report_store, get_session_token, get_sessions
from facility_reports.domain.errors import ValidationError
from facility_reports.domain.identity import SessionRegistry
from facility_reports.domain.report_store import ReportStore

router = APIRouter()


class LoginRequest(BaseModel):
    identifier: str  # student number, or "admin..." for administrators


class SessionRead(BaseModel):
    token: str
    user_id: str
    is_admin: bool


@router.post("/", response_model=SessionRead, status_code=201)
async def open_session(
    request: LoginRequest,
    sessions: SessionRegistry = Depends(get_sessions),
):
    """Log in with a free-text identifier"""
    try:
        token, viewer = sessions.open(request.identifier)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail={"message": str(e), "fields": e.fields})

    return SessionRead(token=token, user_id=viewer.user_id, is_admin=viewer.is_admin)


@router.delete("/", status_code=204)
async def close_session(
    token: str = Depends(get_session_token),
    sessions: SessionRegistry = Depends(get_sessions),
    store: ReportStore = Depends(get_report_store),
):
    """Log out"""
    if not sessions.close(token):
        raise HTTPException(status_code=401, detail="Unknown or expired session")
    store.clear_selection(token)
    return None
