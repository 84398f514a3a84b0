"""
Account endpoints
"""

from fastapi import APIRouter, HTTPException, Depends, status

from .dependencies import failure_to_http, get_banking_service, get_current_session
from .schemas import CreateAccountRequest
from ..service import BankingService
from ..sessions import Session


router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_account(
    request: CreateAccountRequest,
    service: BankingService = Depends(get_banking_service)
):
    """Open a new zero-balance account"""
    if not service.config.allow_account_creation:
        raise HTTPException(status_code=403, detail="Account creation is disabled")

    result = service.create_account(
        request.account_id,
        holder_name=request.holder_name,
        password=request.password
    )
    if not result.is_ok:
        raise failure_to_http(result)

    ledger = result.value
    return {
        "account_id": ledger.account_id,
        "balance": str(ledger.balance),
        "message": "Account created successfully"
    }


@router.get("/me")
async def get_account(
    session: Session = Depends(get_current_session),
    service: BankingService = Depends(get_banking_service)
):
    """Account information for the logged-in account"""
    result = service.account_info(session.account_id)
    if not result.is_ok:
        raise failure_to_http(result)

    info = result.value
    response = {
        "bank_name": service.config.bank_name,
        "account_number": info.masked_account_id,
        "message": f"Account Number (last 4 digits): {info.masked_account_id[-4:]}"
    }
    if info.holder_name is not None:
        response["holder_name"] = info.holder_name
    return response


@router.get("/me/balance")
async def get_balance(
    session: Session = Depends(get_current_session),
    service: BankingService = Depends(get_banking_service)
):
    """Current balance"""
    result = service.balance_of(session.account_id)
    if not result.is_ok:
        raise failure_to_http(result)

    return {
        "balance": str(result.value),
        "message": f"Current Balance: {service.format(result.value)}"
    }


@router.get("/me/history")
async def get_history(
    session: Session = Depends(get_current_session),
    service: BankingService = Depends(get_banking_service)
):
    """Transaction history, oldest first"""
    result = service.history_of(session.account_id)
    if not result.is_ok:
        raise failure_to_http(result)

    return {"history": list(result.value)}
