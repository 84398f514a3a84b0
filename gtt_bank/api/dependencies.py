"""
Shared request dependencies: the service owned by the app, session
tokens, and rendering of failed outcomes.
"""

from typing import Optional

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..results import ErrorKind, Failure
from ..service import BankingService
from ..sessions import Session, SessionStore


security = HTTPBearer(auto_error=False)

STATUS_BY_KIND = {
    ErrorKind.INVALID_AMOUNT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.AUTH_ERROR: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.PASSWORD_REQUIRED: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INSUFFICIENT_FUNDS: status.HTTP_409_CONFLICT,
    ErrorKind.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
}


def failure_to_http(failure: Failure) -> HTTPException:
    """Turn a failed outcome into the HTTP error shown to the user"""
    return HTTPException(status_code=STATUS_BY_KIND[failure.kind], detail=failure.message)


def get_banking_service(request: Request) -> BankingService:
    return request.app.state.banking_service


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def issue_token(service: BankingService, session: Session) -> str:
    config = service.config
    payload = {
        "sub": session.account_id,
        "sid": session.id,
        "iat": session.created_at,
        "exp": session.expires_at,
    }
    return jwt.encode(payload, config.jwt_secret, algorithm=config.jwt_algorithm)


def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    service: BankingService = Depends(get_banking_service),
    sessions: SessionStore = Depends(get_session_store)
) -> Session:
    """Resolve the bearer token to an open session"""
    if credentials is None:
        raise HTTPException(status_code=401, detail="Not logged in")

    config = service.config
    try:
        payload = jwt.decode(
            credentials.credentials, config.jwt_secret, algorithms=[config.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Session expired")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid token")

    session = sessions.get(payload.get("sid", ""))
    if session is None or session.account_id != payload.get("sub"):
        raise HTTPException(status_code=401, detail="Session is no longer active")
    return session
