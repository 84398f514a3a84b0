"""
Login and logout endpoints
"""

from fastapi import APIRouter, Depends

from .dependencies import (
    failure_to_http, get_banking_service, get_current_session,
    get_session_store, issue_token
)
from .schemas import LoginRequest
from ..logging_config import get_logger, log_action
from ..service import BankingService
from ..sessions import Session, SessionStore


router = APIRouter()
logger = get_logger("gtt_bank.api")


@router.post("/login")
def login(
    request: LoginRequest,
    service: BankingService = Depends(get_banking_service),
    sessions: SessionStore = Depends(get_session_store)
):
    """
    Authenticate an account and return a bearer token

    Declared without async so the password hash runs in the threadpool.
    """
    result = service.login(request.account_id, request.password)
    if not result.is_ok:
        raise failure_to_http(result)

    session = sessions.open(request.account_id)
    return {
        "access_token": issue_token(service, session),
        "token_type": "bearer",
        "session_id": session.id,
        "expires_at": session.expires_at.isoformat(),
        "message": "Login successful"
    }


@router.post("/logout")
async def logout(
    session: Session = Depends(get_current_session),
    sessions: SessionStore = Depends(get_session_store)
):
    """End the current session"""
    sessions.close(session.id)
    log_action(
        logger, "info", "Logged out",
        account_id=session.account_id, action="logout", resource="auth"
    )
    return {"message": "Logged out"}
