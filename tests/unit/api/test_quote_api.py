"""Tests for the quote API endpoints."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from stableswap import __version__
from stableswap.api.endpoints import _error_response
from stableswap.api.main import LOG_LEVEL, app
from stableswap.quoter import QuoteError, QuoteResult
from tests.helpers import AMOUNT_10K, BALANCE_1M, NOW, make_pool_payload


class TestHealthEndpoint:
    """Tests for /health."""

    def test_health_returns_ok(self):
        client = TestClient(app)
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": __version__}


class TestRequestSizeLimits:
    """Request body size limit."""

    def test_oversized_request_returns_413(self, client):
        response = client.post(
            "/quote/swap",
            json={"pool": make_pool_payload(), "amountIn": "1"},
            headers={"Content-Length": str(1024 * 1024)},
        )
        assert response.status_code == 413
        assert response.json()["detail"] == "Request too large"

    def test_malformed_content_length_returns_400(self, client):
        """A non-numeric Content-Length is a client error, not a crash."""
        response = client.post(
            "/quote/swap",
            json={"pool": make_pool_payload(), "amountIn": "1"},
            headers={"Content-Length": "abc"},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid Content-Length"


class TestLifespan:
    """Startup configuration."""

    def test_startup_configures_logging(self):
        """Logging is configured in the serving process, not only in run()."""
        with patch("stableswap.api.main.configure_logging") as mock_configure:
            with TestClient(app):
                pass
        mock_configure.assert_called_once_with(LOG_LEVEL)


class TestErrorResponse:
    """Tests for rendering failed quotes."""

    def test_renders_error_body(self):
        response = _error_response(QuoteResult.with_error(QuoteError.INVALID_FEE, "bad fee"))
        assert response.status_code == 422
        assert response.body == b'{"error":"invalid_fee","detail":"bad fee"}'

    def test_successful_result_raises(self):
        with pytest.raises(ValueError, match="successful quote"):
            _error_response(QuoteResult.ok(1))


class TestSwapEndpoint:
    """Tests for POST /quote/swap."""

    def test_swap_quote(self, client):
        response = client.post(
            "/quote/swap",
            json={"pool": make_pool_payload(), "amountIn": str(AMOUNT_10K), "slippageBps": 50},
        )
        assert response.status_code == 200
        data = response.json()
        amount_out = int(data["amountOut"])
        assert 9_900_000_000 < amount_out < AMOUNT_10K
        assert int(data["grossOut"]) == amount_out + int(data["fee"])
        assert int(data["minAmountOut"]) == amount_out - amount_out * 50 // 10_000
        assert data["amp"] == 1000
        assert 0 < data["priceImpact"] < 0.01

    def test_explicit_quote_time(self, client):
        pool = make_pool_payload(amp=100, target_amp=500, ramp_start=0, ramp_end=1000)
        response = client.post(
            "/quote/swap",
            json={"pool": pool, "amountIn": str(AMOUNT_10K), "now": 500},
        )
        assert response.json()["amp"] == 300

    def test_injected_clock(self, client):
        pool = make_pool_payload(amp=100, target_amp=500, ramp_start=NOW, ramp_end=NOW + 1000)
        response = client.post("/quote/swap", json={"pool": pool, "amountIn": str(AMOUNT_10K)})
        assert response.json()["amp"] == 100

    def test_below_minimum_returns_422(self, client):
        response = client.post("/quote/swap", json={"pool": make_pool_payload(), "amountIn": "1"})
        assert response.status_code == 422
        assert response.json()["error"] == "below_minimum"

    def test_math_overflow_returns_422(self, client):
        pool = make_pool_payload(balance0=2**63, balance1=2**63)
        response = client.post("/quote/swap", json={"pool": pool, "amountIn": str(AMOUNT_10K)})
        assert response.status_code == 422
        data = response.json()
        assert data["error"] == "math_overflow"
        assert data["detail"]

    def test_invalid_schema_returns_422(self, client):
        """Malformed bodies are rejected by validation before quoting."""
        response = client.post(
            "/quote/swap",
            json={"pool": make_pool_payload(), "amountIn": "-5"},
        )
        assert response.status_code == 422
        assert "detail" in response.json()

    def test_missing_pool_returns_422(self, client):
        response = client.post("/quote/swap", json={"amountIn": "1000000"})
        assert response.status_code == 422


class TestLiquidityEndpoints:
    """Tests for POST /quote/deposit and /quote/withdraw."""

    def test_deposit(self, client):
        response = client.post(
            "/quote/deposit",
            json={"pool": make_pool_payload(), "amount0": str(AMOUNT_10K), "amount1": str(AMOUNT_10K)},
        )
        assert response.status_code == 200
        assert response.json() == {"lpMinted": str(2 * AMOUNT_10K), "amp": 1000}

    def test_first_deposit_below_minimum(self, client):
        pool = make_pool_payload(balance0=0, balance1=0, lp_supply=0)
        response = client.post(
            "/quote/deposit", json={"pool": pool, "amount0": "1000", "amount1": "1000"}
        )
        assert response.status_code == 422
        assert response.json()["error"] == "below_minimum"

    def test_withdraw(self, client):
        response = client.post(
            "/quote/withdraw",
            json={"pool": make_pool_payload(), "lpAmount": str(BALANCE_1M)},
        )
        assert response.status_code == 200
        assert response.json() == {
            "amount0": str(BALANCE_1M // 2),
            "amount1": str(BALANCE_1M // 2),
        }

    def test_withdraw_exceeding_supply(self, client):
        response = client.post(
            "/quote/withdraw",
            json={"pool": make_pool_payload(), "lpAmount": str(2 * BALANCE_1M + 1)},
        )
        assert response.status_code == 422
        assert response.json()["error"] == "insufficient_liquidity"


class TestVirtualPriceEndpoint:
    """Tests for POST /quote/virtual-price."""

    def test_virtual_price(self, client):
        response = client.post("/quote/virtual-price", json={"pool": make_pool_payload()})
        assert response.status_code == 200
        assert response.json() == {"virtualPrice": str(10**18), "amp": 1000}

    def test_zero_supply(self, client):
        pool = make_pool_payload(lp_supply=0)
        response = client.post("/quote/virtual-price", json={"pool": pool})
        assert response.status_code == 422
        assert response.json()["error"] == "invalid_invariant"
