"""
Banking Service Module

The operations a front end drives: login, deposit, withdraw, balance and
history queries, account creation and account info. Amounts arrive as
free-form text and are parsed here. Every operation returns an Ok or a
Failure; nothing routine is raised.
"""

from decimal import Decimal
from dataclasses import dataclass
from typing import Optional, Tuple

from .amounts import parse_amount, format_amount
from .config import BankConfig, get_config
from .credentials import CredentialVerifier, SharedPasswordVerifier, HashedCredentialStore
from .directory import AccountDirectory
from .ledger import Ledger, Receipt
from .logging_config import get_logger, log_action, log_failure
from .results import Ok, Failure, ErrorKind, Result


LOGIN_FAILED_MESSAGE = "Invalid Account Number or Password"


@dataclass(frozen=True)
class AccountInfo:
    """What the account screen shows"""
    masked_account_id: str
    holder_name: Optional[str]


def mask_account_id(account_id: str, visible: int = 4) -> str:
    """Keep only the last `visible` characters, e.g. ****5678"""
    if len(account_id) <= visible:
        return account_id
    return "*" * (len(account_id) - visible) + account_id[-visible:]


class BankingService:
    """
    Resolves accounts through the directory and applies ledger operations
    """

    def __init__(
        self,
        directory: AccountDirectory,
        verifier: CredentialVerifier,
        config: Optional[BankConfig] = None
    ):
        self.directory = directory
        self.verifier = verifier
        self.config = config or get_config()
        self.logger = get_logger("gtt_bank.service")

    @classmethod
    def from_config(cls, config: Optional[BankConfig] = None) -> "BankingService":
        """Build a service with seeded accounts and the configured verifier"""
        config = config or get_config()
        directory = AccountDirectory(
            currency_symbol=config.currency_symbol,
            precision=config.amount_precision
        )

        if config.auth_mode == "hashed":
            verifier: CredentialVerifier = HashedCredentialStore()
        else:
            verifier = SharedPasswordVerifier(config.shared_password)

        service = cls(directory, verifier, config)
        for ledger in directory.seed(config.seed_accounts):
            verifier.enroll(ledger.account_id, config.shared_password)
            log_action(
                service.logger, "info", "Seed account created",
                account_id=ledger.account_id, action="seed_account",
                resource=f"account:{ledger.account_id}"
            )
        return service

    def format(self, amount: Decimal) -> str:
        return format_amount(amount, self.config.currency_symbol, self.config.amount_precision)

    # Authentication

    def login(self, account_id: str, password: str) -> Result[Ledger]:
        """
        Check credentials for an account

        Unknown accounts and wrong passwords produce the same AUTH_ERROR.
        """
        lookup = self.directory.lookup(account_id)
        if not lookup.is_ok or not self.verifier.verify(account_id, password):
            log_action(
                self.logger, "warning", "Login failed",
                action="login_failed", resource="auth",
                extra={"account_id": account_id,
                       "reason": "unknown_account" if not lookup.is_ok else "bad_password"}
            )
            return Failure(ErrorKind.AUTH_ERROR, LOGIN_FAILED_MESSAGE)

        log_action(
            self.logger, "info", "Login succeeded",
            account_id=account_id, action="login", resource="auth"
        )
        return lookup

    # Ledger operations

    def deposit(self, account_id: str, amount_text: str) -> Result[Receipt]:
        return self._apply(account_id, amount_text, "deposit")

    def withdraw(self, account_id: str, amount_text: str) -> Result[Receipt]:
        return self._apply(account_id, amount_text, "withdraw")

    def _apply(self, account_id: str, amount_text: str, operation: str) -> Result[Receipt]:
        lookup = self.directory.lookup(account_id)
        if not lookup.is_ok:
            return self._rejected(operation, account_id, lookup)

        try:
            amount = parse_amount(
                amount_text,
                precision=self.config.amount_precision,
                currency_symbol=self.config.currency_symbol
            )
        except ValueError:
            failure = Failure(ErrorKind.INVALID_AMOUNT, f"Invalid amount: {amount_text!r}")
            return self._rejected(operation, account_id, failure)

        ledger = lookup.value
        if operation == "deposit":
            result = ledger.deposit(amount)
        else:
            result = ledger.withdraw(amount)

        if not result.is_ok:
            return self._rejected(operation, account_id, result, amount)

        receipt = result.value
        log_action(
            self.logger, "info", f"{receipt.kind.value.capitalize()} applied",
            account_id=account_id, action=operation,
            resource=f"account:{account_id}",
            amount=receipt.amount, balance=receipt.balance
        )
        return result

    def _rejected(self, operation: str, account_id: str, failure: Failure,
                  amount: Optional[Decimal] = None) -> Failure:
        log_failure(
            self.logger, f"{operation.capitalize()} rejected", failure,
            account_id=account_id, action=f"{operation}_rejected",
            resource=f"account:{account_id}", amount=amount
        )
        return failure

    # Queries

    def balance_of(self, account_id: str) -> Result[Decimal]:
        lookup = self.directory.lookup(account_id)
        if not lookup.is_ok:
            return lookup
        return Ok(lookup.value.balance)

    def history_of(self, account_id: str) -> Result[Tuple[str, ...]]:
        lookup = self.directory.lookup(account_id)
        if not lookup.is_ok:
            return lookup
        return Ok(lookup.value.history)

    def account_info(self, account_id: str) -> Result[AccountInfo]:
        lookup = self.directory.lookup(account_id)
        if not lookup.is_ok:
            return lookup
        ledger = lookup.value
        return Ok(AccountInfo(
            masked_account_id=mask_account_id(ledger.account_id),
            holder_name=ledger.holder_name if self.config.show_holder_name else None
        ))

    # Account creation

    def create_account(
        self,
        account_id: str,
        holder_name: Optional[str] = None,
        password: Optional[str] = None
    ) -> Result[Ledger]:
        """
        Open a zero-balance account

        A password, when given, is enrolled with the credential verifier.
        Verifiers that keep per-account passwords need one, otherwise the
        account could never log in; it is refused before anything is created.
        """
        if self.verifier.requires_enrollment and not password:
            result = Failure(
                ErrorKind.PASSWORD_REQUIRED, "A password is required to open an account"
            )
        else:
            result = self.directory.create(account_id, holder_name)
        if not result.is_ok:
            log_failure(
                self.logger, "Account creation rejected", result,
                account_id=account_id, action="create_account_rejected",
                resource=f"account:{account_id}"
            )
            return result

        if password:
            self.verifier.enroll(account_id, password)

        log_action(
            self.logger, "info", "Account created",
            account_id=account_id, action="create_account",
            resource=f"account:{account_id}",
            extra={"holder_name": holder_name} if holder_name else None
        )
        return result
