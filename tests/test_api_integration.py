"""
Integration tests for the GTT Bank API
Tests end-to-end flows using FastAPI TestClient
"""

from datetime import datetime, timedelta, timezone
import inspect

import jwt
import pytest
from fastapi.testclient import TestClient

from gtt_bank.api import create_app
from gtt_bank.config import BankConfig
from gtt_bank.service import BankingService


ACCOUNT = "12345678"


def make_client(**overrides) -> TestClient:
    settings = {"seed_accounts": {ACCOUNT: "Lakshmi"}, "jwt_secret": "test-secret"}
    settings.update(overrides)
    config = BankConfig(**settings)
    return TestClient(create_app(BankingService.from_config(config)))


@pytest.fixture
def client():
    """Test client over a fresh in-memory bank"""
    return make_client()


def login(client, account_id=ACCOUNT, password="password"):
    r = client.post("/auth/login", json={"account_id": account_id, "password": password})
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


@pytest.fixture
def auth(client):
    return login(client)


class TestHealthEndpoints:
    """Test basic health and root endpoints"""
    
    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "healthy"

    def test_root(self, client):
        r = client.get("/")
        assert r.status_code == 200
        data = r.json()
        assert data["name"] == "GTT Bank"
        assert "endpoints" in data


class TestAuthFlow:
    """Login and logout"""
    
    def test_login_success(self, client):
        r = client.post("/auth/login", json={"account_id": ACCOUNT, "password": "password"})
        assert r.status_code == 200
        data = r.json()
        assert data["token_type"] == "bearer"
        assert data["message"] == "Login successful"
        assert "access_token" in data

    def test_login_wrong_password(self, client):
        r = client.post("/auth/login", json={"account_id": ACCOUNT, "password": "wrong"})
        assert r.status_code == 401
        assert r.json()["detail"] == "Invalid Account Number or Password"

    def test_login_unknown_account(self, client):
        r = client.post("/auth/login", json={"account_id": "00000000", "password": "password"})
        assert r.status_code == 401
        assert r.json()["detail"] == "Invalid Account Number or Password"

    def test_requires_token(self, client):
        r = client.get("/accounts/me/balance")
        assert r.status_code == 401

    def test_garbage_token(self, client):
        r = client.get("/accounts/me/balance", headers={"Authorization": "Bearer not-a-jwt"})
        assert r.status_code == 401
        assert r.json()["detail"] == "Invalid token"

    def test_expired_token(self, client):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"sub": ACCOUNT, "sid": "x", "iat": now - timedelta(hours=2), "exp": now - timedelta(hours=1)},
            "test-secret", algorithm="HS256"
        )
        r = client.get("/accounts/me/balance", headers={"Authorization": f"Bearer {token}"})
        assert r.status_code == 401
        assert r.json()["detail"] == "Session expired"

    def test_token_for_unknown_session(self, client):
        """A validly signed token without an open session is rejected"""
        token = jwt.encode(
            {"sub": ACCOUNT, "sid": "never-opened",
             "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
            "test-secret", algorithm="HS256"
        )
        r = client.get("/accounts/me/balance", headers={"Authorization": f"Bearer {token}"})
        assert r.status_code == 401

    def test_login_handler_runs_off_event_loop(self):
        """Password hashing must not block the event loop"""
        from gtt_bank.api.auth import login as login_endpoint

        assert not inspect.iscoroutinefunction(login_endpoint)

    def test_logout_invalidates_token(self, client, auth):
        r = client.post("/auth/logout", headers=auth)
        assert r.status_code == 200
        assert r.json()["message"] == "Logged out"

        r = client.get("/accounts/me/balance", headers=auth)
        assert r.status_code == 401


class TestTransactionFlow:
    """Deposits, withdrawals, balance and history"""
    
    def test_full_session(self, client, auth):
        r = client.post("/transactions/deposit", json={"amount": "100"}, headers=auth)
        assert r.status_code == 200
        assert r.json()["message"] == "Deposited ₹: 100.00"
        assert r.json()["balance"] == "100.00"

        r = client.post("/transactions/deposit", json={"amount": "-5"}, headers=auth)
        assert r.status_code == 400
        assert r.json()["detail"] == "Deposit amount must be positive."

        r = client.post("/transactions/withdraw", json={"amount": "150"}, headers=auth)
        assert r.status_code == 409
        assert r.json()["detail"] == "Insufficient funds for this withdrawal."

        r = client.get("/accounts/me/balance", headers=auth)
        assert r.json() == {"balance": "100.00", "message": "Current Balance: ₹100.00"}

        r = client.post("/transactions/withdraw", json={"amount": "100"}, headers=auth)
        assert r.status_code == 200
        assert r.json()["message"] == "Withdrew ₹: 100.00"

        r = client.get("/accounts/me/history", headers=auth)
        assert r.json()["history"] == [
            "Account created with balance: ₹0.00",
            "Deposited ₹: 100.00",
            "Withdrew ₹: 100.00",
        ]

    def test_unparsable_amount(self, client, auth):
        r = client.post("/transactions/deposit", json={"amount": "lots"}, headers=auth)
        assert r.status_code == 400
        assert r.json()["detail"] == "Invalid amount: 'lots'"

    def test_missing_amount_field(self, client, auth):
        r = client.post("/transactions/withdraw", json={}, headers=auth)
        assert r.status_code == 422


class TestAccountFlow:
    """Account creation and account information"""
    
    def test_account_info(self, client, auth):
        r = client.get("/accounts/me", headers=auth)
        assert r.status_code == 200
        data = r.json()
        assert data["account_number"] == "****5678"
        assert data["holder_name"] == "Lakshmi"
        assert data["bank_name"] == "GTT Bank"
        assert data["message"] == "Account Number (last 4 digits): 5678"

    def test_holder_name_hidden(self):
        client = make_client(show_holder_name=False)
        r = client.get("/accounts/me", headers=login(client))
        assert "holder_name" not in r.json()

    def test_create_account_and_login(self, client):
        r = client.post("/accounts", json={"account_id": "A1", "holder_name": "Farhan"})
        assert r.status_code == 201
        assert r.json() == {
            "account_id": "A1",
            "balance": "0",
            "message": "Account created successfully"
        }

        headers = login(client, "A1")
        r = client.get("/accounts/me/history", headers=headers)
        assert len(r.json()["history"]) == 1

    def test_duplicate_account(self, client):
        assert client.post("/accounts", json={"account_id": "A1"}).status_code == 201
        r = client.post("/accounts", json={"account_id": "A1"})
        assert r.status_code == 409
        assert r.json()["detail"] == "Account A1 already exists"

    def test_creation_disabled(self):
        client = make_client(allow_account_creation=False)
        r = client.post("/accounts", json={"account_id": "A1"})
        assert r.status_code == 403

    def test_empty_account_id_rejected(self, client):
        r = client.post("/accounts", json={"account_id": ""})
        assert r.status_code == 422

    def test_hashed_mode_uses_enrolled_password(self):
        client = make_client(auth_mode="hashed", seed_accounts={})
        client.post("/accounts", json={"account_id": "A1", "password": "open-sesame"})

        r = client.post("/auth/login", json={"account_id": "A1", "password": "password"})
        assert r.status_code == 401
        login(client, "A1", "open-sesame")

    def test_hashed_mode_rejects_missing_password(self):
        client = make_client(auth_mode="hashed", seed_accounts={})
        r = client.post("/accounts", json={"account_id": "A1"})
        assert r.status_code == 400
        assert r.json()["detail"] == "A password is required to open an account"

        r = client.post("/accounts", json={"account_id": "A1", "password": "open-sesame"})
        assert r.status_code == 201

    def test_apps_do_not_share_state(self):
        """Each app owns its own bank"""
        first = make_client()
        second = make_client()
        first.post("/transactions/deposit", json={"amount": "10"}, headers=login(first))

        r = second.get("/accounts/me/balance", headers=login(second))
        assert r.json()["balance"] == "0"
