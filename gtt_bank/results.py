"""
Operation Outcomes

Routine failures (bad input, insufficient funds, unknown accounts) are
returned as tagged values rather than raised. Callers branch on `is_ok`
and read either `value` or `kind`/`message`.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar, Union


T = TypeVar("T")


class ErrorKind(Enum):
    """Failure taxonomy shared by the ledger, directory and service"""
    INVALID_AMOUNT = "invalid_amount"          # Non-positive or unparsable amount
    INSUFFICIENT_FUNDS = "insufficient_funds"  # Withdrawal exceeds balance
    NOT_FOUND = "not_found"                    # Unknown account identifier
    ALREADY_EXISTS = "already_exists"          # Duplicate account creation
    AUTH_ERROR = "auth_error"                  # Login mismatch
    PASSWORD_REQUIRED = "password_required"    # Creation without a password where one is needed


class BankingError(Exception):
    """Raised when a failed outcome is unwrapped"""
    
    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value"""
    value: T
    
    @property
    def is_ok(self) -> bool:
        return True
    
    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    """Failed outcome with its kind and a message fit for display"""
    kind: ErrorKind
    message: str
    
    @property
    def is_ok(self) -> bool:
        return False
    
    def unwrap(self) -> Any:
        raise BankingError(self.kind, self.message)


Result = Union[Ok[T], Failure]
