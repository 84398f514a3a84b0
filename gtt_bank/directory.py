"""
Account Directory Module

Maps account identifiers to their Ledgers. Entries are added at startup
or through create(); nothing is ever removed during a session.
"""

from typing import Dict, Iterator, List, Optional
import threading

from .ledger import Ledger
from .results import Ok, Failure, ErrorKind, Result


class AccountDirectory:
    """
    Owned, in-memory store of account ledgers
    """

    def __init__(self, currency_symbol: str = "₹", precision: int = 2):
        self._ledgers: Dict[str, Ledger] = {}
        self._lock = threading.RLock()
        self.currency_symbol = currency_symbol
        self.precision = precision

    def lookup(self, account_id: str) -> Result[Ledger]:
        """Get the ledger for an account, or Failure(NOT_FOUND)"""
        ledger = self._ledgers.get(account_id)
        if ledger is None:
            return Failure(ErrorKind.NOT_FOUND, f"Account {account_id} not found")
        return Ok(ledger)

    def create(self, account_id: str, holder_name: Optional[str] = None) -> Result[Ledger]:
        """
        Insert a new zero-balance ledger

        Returns:
            Ok(Ledger) or Failure(ALREADY_EXISTS) if the identifier is taken
        """
        with self._lock:
            if account_id in self._ledgers:
                return Failure(
                    ErrorKind.ALREADY_EXISTS, f"Account {account_id} already exists"
                )
            ledger = Ledger(
                account_id,
                holder_name=holder_name,
                currency_symbol=self.currency_symbol,
                precision=self.precision
            )
            self._ledgers[account_id] = ledger
            return Ok(ledger)

    def seed(self, accounts: Dict[str, Optional[str]]) -> List[Ledger]:
        """Create startup accounts, skipping identifiers already present"""
        created = []
        for account_id, holder_name in accounts.items():
            result = self.create(account_id, holder_name)
            if result.is_ok:
                created.append(result.value)
        return created

    def account_ids(self) -> List[str]:
        """Identifiers in insertion order"""
        with self._lock:
            return list(self._ledgers)

    def __contains__(self, account_id: str) -> bool:
        return account_id in self._ledgers

    def __len__(self) -> int:
        return len(self._ledgers)

    def __iter__(self) -> Iterator[Ledger]:
        with self._lock:
            return iter(list(self._ledgers.values()))
