"""Shared fixtures for the network registry test suite."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import jwt
import pytest
from starlette.testclient import TestClient

from config import Settings
from db.repositories.memory import InMemoryNetworkRepository
from handlers.dependencies import get_network_repository
from main import create_app
from models.network import NetworkData

TEST_JWT_SECRET = "test-jwt-secret-key-for-e2e-testing-only-min-32-chars"
SIGNER = "0x742d35Cc6634C0532925a3b844Bc9e7595f1dEaD"


def make_token(
    secret: str = TEST_JWT_SECRET,
    expires_in: timedelta = timedelta(hours=1),
    **claims,
) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": "test-user-id",
        "email": "test@example.com",
        "role": "admin",
        "iat": now,
        "exp": now + expires_in,
    }
    payload.update(claims)
    # a claim overridden with None is left out of the token
    payload = {name: value for name, value in payload.items() if value is not None}
    return jwt.encode(payload, secret, algorithm="HS256")


def make_network_data(**overrides) -> NetworkData:
    values = {
        "chain_id": 1,
        "name": "Ethereum Mainnet",
        "rpc_url": "https://mainnet.infura.io/v3/test",
        "other_rpc_urls": [],
        "test_net": False,
        "block_explorer_url": "https://etherscan.io",
        "fee_multiplier": Decimal("1.0"),
        "gas_limit_multiplier": Decimal("1.2"),
        "default_signer_address": SIGNER,
    }
    values.update(overrides)
    return NetworkData(**values)


def make_request_body(**overrides) -> dict:
    body = {
        "chainId": 1,
        "name": "Ethereum Mainnet",
        "rpcUrl": "https://mainnet.infura.io/v3/test",
        "testNet": False,
        "blockExplorerUrl": "https://etherscan.io",
        "feeMultiplier": 1.0,
        "gasLimitMultiplier": 1.2,
        "defaultSignerAddress": SIGNER,
    }
    body.update(overrides)
    return body


@pytest.fixture
def network_data() -> NetworkData:
    return make_network_data()


@pytest.fixture
def repository() -> InMemoryNetworkRepository:
    return InMemoryNetworkRepository()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        DATABASE_URL="sqlite+aiosqlite:///:memory:",
        JWT_SECRET=TEST_JWT_SECRET,
        DB_CREATE_TABLES=True,
    )


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def client(test_settings):
    """Full stack: FastAPI app over an in-memory SQLite database."""
    with TestClient(create_app(test_settings)) as test_client:
        yield test_client


@pytest.fixture
def memory_client(test_settings, repository):
    """App whose repository is swapped for the in-memory one."""
    app = create_app(test_settings)
    app.dependency_overrides[get_network_repository] = lambda: repository
    return TestClient(app)
