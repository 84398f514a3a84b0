"""
Ledger Module

One Ledger per account: a non-negative Decimal balance and an append-only
log of human-readable transaction descriptions. Balances change only
through deposit() and withdraw(), each of which validates before mutating.
"""

from decimal import Decimal
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union
import threading

from .amounts import exact_add, exact_subtract, format_amount, quantize_amount
from .results import Ok, Failure, ErrorKind, Result


class TransactionKind(Enum):
    """Kinds of balance mutation"""
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


@dataclass(frozen=True)
class Receipt:
    """Returned for every applied deposit or withdrawal"""
    account_id: str
    kind: TransactionKind
    amount: Decimal
    balance: Decimal      # Balance after the mutation
    description: str      # The history entry that was appended


class Ledger:
    """
    Balance and transaction history for a single account
    """

    def __init__(
        self,
        account_id: str,
        holder_name: Optional[str] = None,
        currency_symbol: str = "₹",
        precision: int = 2
    ):
        self._account_id = account_id
        self._holder_name = holder_name
        self._currency_symbol = currency_symbol
        self._precision = precision
        self._balance = Decimal('0')
        self._history = []
        self._lock = threading.Lock()

        self._history.append(
            f"Account created with balance: {self._format(self._balance)}"
        )

    @property
    def account_id(self) -> str:
        return self._account_id

    @property
    def holder_name(self) -> Optional[str]:
        return self._holder_name

    @property
    def balance(self) -> Decimal:
        """Current balance"""
        return self._balance

    @property
    def history(self) -> Tuple[str, ...]:
        """Snapshot of the transaction log, oldest first"""
        with self._lock:
            return tuple(self._history)

    def deposit(self, amount: Union[Decimal, int, str]) -> Result[Receipt]:
        """
        Add funds to the account

        The amount is rounded to the ledger precision first; anything that
        rounds to zero or below is rejected. There is no upper bound.

        Returns:
            Ok(Receipt) or Failure(INVALID_AMOUNT) for non-positive amounts
        """
        amount = self._coerce(amount)
        if amount is None or amount <= 0:
            return Failure(ErrorKind.INVALID_AMOUNT, "Deposit amount must be positive.")

        with self._lock:
            try:
                balance = exact_add(self._balance, amount)
            except ValueError:
                return Failure(ErrorKind.INVALID_AMOUNT, "Deposit amount is too large.")
            self._balance = balance
            description = f"Deposited {self._currency_symbol}: {self._format(amount, symbol=False)}"
            self._history.append(description)
            return Ok(Receipt(
                account_id=self._account_id,
                kind=TransactionKind.DEPOSIT,
                amount=amount,
                balance=self._balance,
                description=description
            ))

    def withdraw(self, amount: Union[Decimal, int, str]) -> Result[Receipt]:
        """
        Remove funds from the account

        Both checks run before anything changes; a rejected withdrawal
        leaves balance and history untouched.

        Returns:
            Ok(Receipt), Failure(INVALID_AMOUNT) or Failure(INSUFFICIENT_FUNDS)
        """
        amount = self._coerce(amount)
        if amount is None or amount <= 0:
            return Failure(ErrorKind.INVALID_AMOUNT, "Withdrawal amount must be positive.")

        with self._lock:
            if amount > self._balance:
                return Failure(
                    ErrorKind.INSUFFICIENT_FUNDS,
                    "Insufficient funds for this withdrawal."
                )
            try:
                balance = exact_subtract(self._balance, amount)
            except ValueError:
                return Failure(ErrorKind.INVALID_AMOUNT, "Withdrawal amount is out of range.")
            self._balance = balance
            description = f"Withdrew {self._currency_symbol}: {self._format(amount, symbol=False)}"
            self._history.append(description)
            return Ok(Receipt(
                account_id=self._account_id,
                kind=TransactionKind.WITHDRAWAL,
                amount=amount,
                balance=self._balance,
                description=description
            ))

    def _format(self, amount: Decimal, symbol: bool = True) -> str:
        return format_amount(
            amount, self._currency_symbol if symbol else "", self._precision
        )

    def _coerce(self, amount) -> Optional[Decimal]:
        """
        Convert to a Decimal rounded half-up to the ledger precision

        None for values that are not finite numbers. The rounded value is
        what gets applied and what the history entry shows.
        """
        if isinstance(amount, bool):
            return None
        if not isinstance(amount, Decimal):
            try:
                amount = Decimal(str(amount))
            except ArithmeticError:
                return None
        if not amount.is_finite():
            return None
        try:
            return quantize_amount(amount, self._precision)
        except ValueError:
            return None

    def __repr__(self) -> str:
        return f"Ledger(account_id={self._account_id!r}, balance={self._balance})"
