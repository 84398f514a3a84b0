"""
Tests for credential verification
"""

import pytest

from gtt_bank.credentials import (
    CredentialVerifier, HashedCredentialStore, SharedPasswordVerifier
)


class TestSharedPasswordVerifier:
    """Test the shared-password placeholder"""
    
    def test_any_account_with_shared_password(self):
        verifier = SharedPasswordVerifier("password")
        
        assert verifier.verify("12345678", "password")
        assert verifier.verify("anything", "password")
        assert not verifier.verify("12345678", "Password")
    
    def test_enroll_has_no_effect(self):
        verifier = SharedPasswordVerifier("password")
        verifier.enroll("12345678", "other")
        
        assert not verifier.verify("12345678", "other")
        assert verifier.verify("12345678", "password")


class TestHashedCredentialStore:
    """Test salted scrypt credentials"""
    
    def test_enroll_and_verify(self):
        store = HashedCredentialStore()
        store.enroll("A1", "correct horse")
        
        assert store.verify("A1", "correct horse")
        assert not store.verify("A1", "wrong")
        assert not store.verify("A2", "correct horse")
    
    def test_hashes_are_salted(self):
        """Same password for two accounts gives different stored hashes"""
        store = HashedCredentialStore()
        store.enroll("A1", "same")
        store.enroll("A2", "same")
        
        assert store._hashes["A1"] != store._hashes["A2"]
        assert "same" not in store._hashes["A1"]
    
    def test_re_enroll_replaces_password(self):
        store = HashedCredentialStore()
        store.enroll("A1", "old")
        store.enroll("A1", "new")
        
        assert store.verify("A1", "new")
        assert not store.verify("A1", "old")
    
    def test_empty_password_rejected(self):
        store = HashedCredentialStore()
        
        with pytest.raises(ValueError, match="must not be empty"):
            store.enroll("A1", "")
        assert not store.is_enrolled("A1")
    
    def test_is_credential_verifier(self):
        assert isinstance(HashedCredentialStore(), CredentialVerifier)
        
        with pytest.raises(TypeError):
            CredentialVerifier()
    
    def test_enrollment_requirement(self):
        assert HashedCredentialStore.requires_enrollment
        assert not SharedPasswordVerifier.requires_enrollment
