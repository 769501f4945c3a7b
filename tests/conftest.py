"""
Pytest fixtures for the ACTA SDK tests.
"""
import time

import pytest

from acta_sdk.ledger._rate_limited_log import reset_rate_limits
from tests.test_helpers import (
    create_test_client, RecordingSigner, TEST_BASE_URL, CONFIG_BODY
)

API_KEY_VARS = ("ACTA_API_KEY", "ACTA_API_KEY_MAINNET", "ACTA_API_KEY_TESTNET")


# ─────────────────────────────────────────────────────────────────────────
#  FAST POLLING FOR TESTS
# ─────────────────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def sleeps(monkeypatch):
    """Make time.sleep instantaneous and record the requested delays"""
    recorded = []
    monkeypatch.setattr(time, "sleep", lambda seconds, *_a, **_kw: recorded.append(seconds))
    return recorded


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep developer API keys out of the tests"""
    for var in API_KEY_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.delenv("ACTA_TESTNET_RPC_URL", raising=False)
    monkeypatch.delenv("ACTA_MAINNET_RPC_URL", raising=False)


@pytest.fixture(autouse=True)
def _reset_log_limits():
    reset_rate_limits()
    yield
    reset_rate_limits()


@pytest.fixture
def client():
    """Testnet client with an explicit API key"""
    c = create_test_client()
    yield c
    c.close()


@pytest.fixture
def signer():
    return RecordingSigner()


@pytest.fixture
def mock_config(requests_mock):
    """Serve /config with a contract ID"""
    return requests_mock.get(f"{TEST_BASE_URL}/config", json=CONFIG_BODY)
