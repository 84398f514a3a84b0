"""
Deposit and withdrawal endpoints
"""

from fastapi import APIRouter, Depends

from .dependencies import failure_to_http, get_banking_service, get_current_session
from .schemas import AmountRequest
from ..service import BankingService
from ..sessions import Session


router = APIRouter()


@router.post("/deposit")
async def deposit(
    request: AmountRequest,
    session: Session = Depends(get_current_session),
    service: BankingService = Depends(get_banking_service)
):
    """Deposit into the logged-in account"""
    result = service.deposit(session.account_id, request.amount)
    if not result.is_ok:
        raise failure_to_http(result)

    receipt = result.value
    return {
        "amount": str(receipt.amount),
        "balance": str(receipt.balance),
        "message": receipt.description
    }


@router.post("/withdraw")
async def withdraw(
    request: AmountRequest,
    session: Session = Depends(get_current_session),
    service: BankingService = Depends(get_banking_service)
):
    """Withdraw from the logged-in account"""
    result = service.withdraw(session.account_id, request.amount)
    if not result.is_ok:
        raise failure_to_http(result)

    receipt = result.value
    return {
        "amount": str(receipt.amount),
        "balance": str(receipt.balance),
        "message": receipt.description
    }
