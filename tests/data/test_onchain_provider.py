"""Tests for OnChainDataProvider — TTL cache, mocked web3 flow, factory wiring."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from jumprate.data.constants import SCALE, USDC
from jumprate.data.contracts import CTOKEN_ADDRESSES
from jumprate.data.interfaces import MarketSnapshot, RateModelConfig, RateModelDataProvider
from jumprate.data.onchain_provider import OnChainDataProvider, _TTLCache
from jumprate.data.provider_factory import create_model, create_provider
from jumprate.data.static_params import StaticDataProvider
from jumprate.protocol.interest_rate import RateParameters

RATE_MODEL_OWNER = "0x6d903f6003cca6255D85CcA4D3B5E5146dC33925"


# ======================================================================
# 1. TTL cache tests
# ======================================================================


class TestTTLCache:
    def test_set_and_get(self):
        cache = _TTLCache(ttl=60.0)
        cache.set("key", "value")
        assert cache.get("key") == "value"

    def test_miss_returns_none(self):
        cache = _TTLCache(ttl=60.0)
        assert cache.get("missing") is None

    def test_expired_entry(self):
        cache = _TTLCache(ttl=-1.0)  # Already expired
        cache.set("key", "value")
        assert cache.get("key") is None

    def test_clear(self):
        cache = _TTLCache(ttl=60.0)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.clear()
        assert cache.get("a") is None
        assert cache.get("b") is None


# ======================================================================
# 2. Mock-based integration tests
# ======================================================================


def _mock_w3() -> MagicMock:
    mock_w3 = MagicMock()
    mock_w3.is_connected.return_value = True
    mock_w3.to_checksum_address = lambda addr: addr

    def _make_contract(address, abi):
        contract = MagicMock()
        contract.address = address
        return contract

    mock_w3.eth.contract = MagicMock(side_effect=_make_contract)
    return mock_w3


def _make_provider(**kwargs) -> OnChainDataProvider:
    """Create an OnChainDataProvider backed by a mocked Web3 instance."""
    with patch("web3.Web3") as mock_web3_cls:
        mock_web3_cls.return_value = _mock_w3()
        return OnChainDataProvider(rpc_url="http://localhost:8545", **kwargs)


def _rate_model_contract(
    base: int = 0,
    multiplier: int = 23_782_343_987,
    jump: int = 518_455_098_934,
    kink: int = 8 * 10**17,
    blocks: int = 2_102_400,
) -> MagicMock:
    contract = MagicMock()
    contract.functions.baseRatePerBlock.return_value.call.return_value = base
    contract.functions.multiplierPerBlock.return_value.call.return_value = multiplier
    contract.functions.jumpMultiplierPerBlock.return_value.call.return_value = jump
    contract.functions.kink.return_value.call.return_value = kink
    contract.functions.blocksPerYear.return_value.call.return_value = blocks
    contract.functions.owner.return_value.call.return_value = RATE_MODEL_OWNER
    return contract


def _set_snapshot(provider: OnChainDataProvider, market: str = USDC) -> MagicMock:
    ctoken = provider._ctokens[market]
    ctoken.functions.getCash.return_value.call.return_value = 120_000_000 * 10**6
    ctoken.functions.totalBorrows.return_value.call.return_value = 380_000_000 * 10**6
    ctoken.functions.totalReserves.return_value.call.return_value = 9_000_000 * 10**6
    ctoken.functions.reserveFactorMantissa.return_value.call.return_value = 75 * 10**15
    return ctoken


class TestOnChainProviderMocked:
    """Full flow with mocked Web3."""

    def test_is_rate_model_provider(self):
        provider = _make_provider()
        assert isinstance(provider, RateModelDataProvider)
        assert provider.list_markets() == list(CTOKEN_ADDRESSES)
        assert provider.is_connected is True

    def test_get_market_snapshot(self):
        provider = _make_provider()
        _set_snapshot(provider)

        snapshot = provider.get_market_snapshot(USDC)
        assert snapshot == MarketSnapshot(
            cash=120_000_000 * 10**6,
            borrows=380_000_000 * 10**6,
            reserves=9_000_000 * 10**6,
            reserve_factor=75 * 10**15,
        )

    def test_get_model_config(self):
        provider = _make_provider()
        provider._get_rate_model_contract = MagicMock(return_value=_rate_model_contract())

        config = provider.get_model_config(USDC)
        assert isinstance(config, RateModelConfig)
        assert config.params == RateParameters(0, 23_782_343_987, 518_455_098_934, 8 * 10**17)
        assert config.periods_per_year == 2_102_400
        assert config.owner == RATE_MODEL_OWNER

    def test_rate_model_contract_resolved_lazily(self):
        provider = _make_provider()
        model_addr = "0xD8EC56013EA119E7181d231E5048f90fBbe753c0"
        provider._ctokens[USDC].functions.interestRateModel.return_value.call.return_value = model_addr

        contract = provider._get_rate_model_contract(USDC)
        assert contract.address == model_addr
        assert provider._get_rate_model_contract(USDC) is contract
        assert provider._ctokens[USDC].functions.interestRateModel.return_value.call.call_count == 1

    def test_unknown_market(self):
        provider = _make_provider()
        with pytest.raises(ValueError, match="Unknown market"):
            provider.get_market_snapshot("XYZ")
        with pytest.raises(ValueError, match="Unknown market"):
            provider.get_model_config("XYZ")

    def test_snapshot_is_cached(self):
        provider = _make_provider()
        ctoken = _set_snapshot(provider)

        first = provider.get_market_snapshot(USDC)
        second = provider.get_market_snapshot(USDC)
        assert first == second
        assert ctoken.functions.getCash.return_value.call.call_count == 1

    def test_refresh_clears_cache(self):
        provider = _make_provider()
        ctoken = _set_snapshot(provider)

        provider.get_market_snapshot(USDC)
        provider.refresh()
        provider.get_market_snapshot(USDC)
        assert ctoken.functions.getCash.return_value.call.call_count == 2

    def test_rpc_failure_uses_fallback(self):
        fallback = StaticDataProvider()
        provider = _make_provider(fallback=fallback)
        ctoken = provider._ctokens[USDC]
        ctoken.functions.getCash.return_value.call.side_effect = ConnectionError("rpc down")

        snapshot = provider.get_market_snapshot(USDC)
        assert snapshot == fallback.get_market_snapshot(USDC)

    def test_rpc_failure_without_fallback(self):
        provider = _make_provider()
        failing = MagicMock()
        failing.functions.baseRatePerBlock.return_value.call.side_effect = ConnectionError("rpc down")
        provider._get_rate_model_contract = MagicMock(return_value=failing)

        with pytest.raises(RuntimeError, match="no fallback"):
            provider.get_model_config(USDC)

    def test_get_contract_rates(self):
        provider = _make_provider()
        contract = _rate_model_contract()
        contract.functions.getBorrowRate.return_value.call.return_value = 11_000_000_000
        contract.functions.getSupplyRate.return_value.call.return_value = 7_000_000_000
        provider._get_rate_model_contract = MagicMock(return_value=contract)

        snapshot = MarketSnapshot(cash=1, borrows=2, reserves=0, reserve_factor=SCALE // 10)
        borrow, supply = provider.get_contract_rates(USDC, snapshot)
        assert (borrow, supply) == (11_000_000_000, 7_000_000_000)
        contract.functions.getBorrowRate.assert_called_once_with(1, 2, 0)
        contract.functions.getSupplyRate.assert_called_once_with(1, 2, 0, SCALE // 10)

    def test_create_model_from_chain(self):
        provider = _make_provider()
        provider._get_rate_model_contract = MagicMock(return_value=_rate_model_contract())

        model = create_model(provider, USDC)
        assert model.owner == RATE_MODEL_OWNER
        assert model.multiplier_per_period == 23_782_343_987
        assert model.jump_multiplier_per_period == 518_455_098_934


# ======================================================================
# 3. Factory wiring
# ======================================================================


class TestCreateProviderOnChain:
    def test_creates_onchain_provider(self):
        with patch("web3.Web3") as mock_web3_cls:
            mock_web3_cls.return_value = _mock_w3()
            provider = create_provider(use_onchain=True, rpc_url="http://localhost:8545")
        assert isinstance(provider, OnChainDataProvider)

    def test_reads_rpc_url_from_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("ETH_RPC_URL", "http://localhost:8545")
        with patch("web3.Web3") as mock_web3_cls:
            mock_web3_cls.return_value = _mock_w3()
            provider = create_provider(use_onchain=True)
        assert isinstance(provider, OnChainDataProvider)

    def test_construction_failure_falls_back(self):
        with patch("web3.Web3", side_effect=RuntimeError("bad provider")):
            provider = create_provider(use_onchain=True, rpc_url="http://localhost:8545")
        assert isinstance(provider, StaticDataProvider)
