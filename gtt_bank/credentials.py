"""
Credential Verification Module

Login checks go through a CredentialVerifier. The shared-password
verifier reproduces the demo behaviour of one password for every
account; HashedCredentialStore keeps salted scrypt hashes per account.
"""

from abc import ABC, abstractmethod
from typing import Dict, Tuple
import hashlib
import hmac
import secrets
import threading

from .logging_config import get_logger


class CredentialVerifier(ABC):
    """Abstract interface for login credential checks"""

    # True when an account cannot log in until a password is enrolled
    requires_enrollment = False

    @abstractmethod
    def verify(self, account_id: str, password: str) -> bool:
        """Check a password for an account"""
        pass

    @abstractmethod
    def enroll(self, account_id: str, password: str) -> None:
        """Register or replace the password for an account"""
        pass


class SharedPasswordVerifier(CredentialVerifier):
    """
    Every account accepts the same password.

    Not a security mechanism. Enrollment is ignored since there is
    nothing per-account to store.
    """

    def __init__(self, password: str):
        self._password = password
        get_logger("gtt_bank.credentials").warning(
            "Shared password authentication in use - not suitable for real accounts"
        )

    def verify(self, account_id: str, password: str) -> bool:
        return hmac.compare_digest(password.encode(), self._password.encode())

    def enroll(self, account_id: str, password: str) -> None:
        pass


class HashedCredentialStore(CredentialVerifier):
    """Per-account salted scrypt password hashes"""

    requires_enrollment = True

    def __init__(self):
        self._hashes: Dict[str, Tuple[str, str]] = {}  # account_id -> (salt, hash)
        self._lock = threading.Lock()

    def _generate_salt(self) -> str:
        """Generate random salt for password hashing"""
        return secrets.token_hex(16)

    def _hash_password(self, password: str, salt: str) -> str:
        return hashlib.scrypt(
            password.encode(),
            salt=salt.encode(),
            n=16384, r=8, p=1
        ).hex()

    def enroll(self, account_id: str, password: str) -> None:
        if not password:
            raise ValueError("Password must not be empty")
        salt = self._generate_salt()
        with self._lock:
            self._hashes[account_id] = (salt, self._hash_password(password, salt))

    def verify(self, account_id: str, password: str) -> bool:
        stored = self._hashes.get(account_id)
        if stored is None:
            return False
        salt, expected = stored
        return hmac.compare_digest(self._hash_password(password, salt), expected)

    def is_enrolled(self, account_id: str) -> bool:
        return account_id in self._hashes
