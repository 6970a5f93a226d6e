"""On-chain data provider reading deployed jump rate models via web3.py."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

from jumprate.data.contracts import CTOKEN_ABI, CTOKEN_ADDRESSES, JUMP_RATE_MODEL_ABI
from jumprate.data.interfaces import MarketSnapshot, RateModelConfig, RateModelDataProvider
from jumprate.protocol.interest_rate import RateParameters

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# TTL cache
# ---------------------------------------------------------------------------

class _TTLCache:
    """Simple dict-based cache with per-entry TTL expiry."""

    def __init__(self, ttl: float) -> None:
        self._ttl = ttl
        self._store: dict[str, tuple[float, Any]] = {}

    def get(self, key: str) -> Any | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        ts, value = entry
        if time.monotonic() - ts > self._ttl:
            del self._store[key]
            return None
        return value

    def set(self, key: str, value: Any) -> None:
        self._store[key] = (time.monotonic(), value)

    def clear(self) -> None:
        self._store.clear()


# ---------------------------------------------------------------------------
# OnChainDataProvider
# ---------------------------------------------------------------------------

class OnChainDataProvider(RateModelDataProvider):
    """Live provider for Compound v2 style markets via web3.py.

    Parameters
    ----------
    rpc_url : str
        Ethereum JSON-RPC endpoint URL.
    cache_ttl : float
        Seconds before a cached value expires (default 60).
    fallback : RateModelDataProvider | None
        Optional fallback provider used when an RPC call fails.
    """

    def __init__(
        self,
        rpc_url: str,
        cache_ttl: float = 60.0,
        fallback: RateModelDataProvider | None = None,
    ) -> None:
        from web3 import Web3

        self._w3 = Web3(Web3.HTTPProvider(rpc_url))
        self._cache = _TTLCache(cache_ttl)
        self._fallback = fallback

        # Pre-build cToken contract objects (no RPC calls here)
        self._ctokens = {
            market: self._w3.eth.contract(
                address=self._w3.to_checksum_address(address),
                abi=CTOKEN_ABI,
            )
            for market, address in CTOKEN_ADDRESSES.items()
        }

        # Lazily resolved per-market rate model contracts
        self._rate_models: dict[str, Any] = {}

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _ctoken(self, market: str) -> Any:
        contract = self._ctokens.get(market)
        if contract is None:
            raise ValueError(f"Unknown market: {market}")
        return contract

    def _get_rate_model_contract(self, market: str) -> Any:
        """Lazily fetch and cache the interest rate model contract for *market*."""
        if market in self._rate_models:
            return self._rate_models[market]

        addr = self._ctoken(market).functions.interestRateModel().call()
        contract = self._w3.eth.contract(
            address=self._w3.to_checksum_address(addr),
            abi=JUMP_RATE_MODEL_ABI,
        )
        self._rate_models[market] = contract
        return contract

    def _call_with_fallback(
        self,
        cache_key: str,
        fetcher: Callable[[], Any],
        fallback_method: Callable[..., Any] | None,
        *fallback_args: Any,
    ) -> Any:
        """Cache → RPC → fallback pipeline."""
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        try:
            value = fetcher()
            self._cache.set(cache_key, value)
            return value
        except Exception:
            logger.warning(
                "RPC call failed for key=%s, using fallback", cache_key, exc_info=True
            )

        if fallback_method is not None:
            return fallback_method(*fallback_args)

        raise RuntimeError(f"RPC call failed and no fallback available for {cache_key}")

    # ------------------------------------------------------------------
    # RateModelDataProvider interface
    # ------------------------------------------------------------------

    def get_model_config(self, market: str) -> RateModelConfig:
        self._ctoken(market)

        def _fetch() -> RateModelConfig:
            model = self._get_rate_model_contract(market)
            params = RateParameters(
                base_rate_per_period=model.functions.baseRatePerBlock().call(),
                multiplier_per_period=model.functions.multiplierPerBlock().call(),
                jump_multiplier_per_period=model.functions.jumpMultiplierPerBlock().call(),
                kink=model.functions.kink().call(),
            )
            return RateModelConfig(
                params=params,
                periods_per_year=model.functions.blocksPerYear().call(),
                owner=model.functions.owner().call(),
            )

        fb = self._fallback.get_model_config if self._fallback else None
        return self._call_with_fallback(f"model_config:{market}", _fetch, fb, market)

    def get_market_snapshot(self, market: str) -> MarketSnapshot:
        ctoken = self._ctoken(market)

        def _fetch() -> MarketSnapshot:
            return MarketSnapshot(
                cash=ctoken.functions.getCash().call(),
                borrows=ctoken.functions.totalBorrows().call(),
                reserves=ctoken.functions.totalReserves().call(),
                reserve_factor=ctoken.functions.reserveFactorMantissa().call(),
            )

        fb = self._fallback.get_market_snapshot if self._fallback else None
        return self._call_with_fallback(f"snapshot:{market}", _fetch, fb, market)

    def list_markets(self) -> list[str]:
        return list(CTOKEN_ADDRESSES)

    def get_contract_rates(self, market: str, snapshot: MarketSnapshot) -> tuple[int, int]:
        """Borrow and supply rate per block as reported by the deployed model.

        Used to cross-check a local model against the chain; never falls back.
        """
        model = self._get_rate_model_contract(market)
        borrow = model.functions.getBorrowRate(
            snapshot.cash, snapshot.borrows, snapshot.reserves
        ).call()
        supply = model.functions.getSupplyRate(
            snapshot.cash, snapshot.borrows, snapshot.reserves, snapshot.reserve_factor
        ).call()
        return borrow, supply

    # ------------------------------------------------------------------
    # Cache management
    # ------------------------------------------------------------------

    def refresh(self) -> None:
        """Invalidate all cached values, forcing fresh RPC calls."""
        self._cache.clear()
        self._rate_models.clear()

    @property
    def is_connected(self) -> bool:
        """Check if the Web3 provider is connected."""
        try:
            return self._w3.is_connected()
        except Exception:
            return False
