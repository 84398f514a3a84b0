"""
GTT Bank

An in-memory demo bank: one ledger per account with validated deposits
and withdrawals, an append-only transaction log, and an HTTP front end.
"""

__version__ = "1.0.0"
