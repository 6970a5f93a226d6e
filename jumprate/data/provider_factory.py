"""Factory for creating data providers and the models they describe."""

from __future__ import annotations

import logging
import os

from jumprate.data.interfaces import RateModelDataProvider
from jumprate.data.static_params import StaticDataProvider
from jumprate.protocol.model import JumpRateModel

logger = logging.getLogger(__name__)


def create_provider(
    use_onchain: bool = False,
    rpc_url: str | None = None,
    cache_ttl: float = 60.0,
) -> RateModelDataProvider:
    """Create a data provider, selecting static or on-chain.

    Parameters
    ----------
    use_onchain : bool
        If True, attempt to create an ``OnChainDataProvider``.
    rpc_url : str | None
        Ethereum JSON-RPC URL.  Falls back to the ``ETH_RPC_URL``
        environment variable when not supplied.
    cache_ttl : float
        TTL in seconds for the on-chain cache (default 60).

    Returns
    -------
    RateModelDataProvider
        ``OnChainDataProvider`` when requested and reachable, otherwise
        ``StaticDataProvider``.
    """
    if not use_onchain:
        return StaticDataProvider()

    resolved_url = rpc_url or os.environ.get("ETH_RPC_URL")
    if not resolved_url:
        logger.warning("On-chain data requested but no RPC URL provided; using static data")
        return StaticDataProvider()

    from jumprate.data.onchain_provider import OnChainDataProvider

    try:
        return OnChainDataProvider(
            rpc_url=resolved_url,
            cache_ttl=cache_ttl,
            fallback=StaticDataProvider(),
        )
    except Exception:
        logger.warning("Failed to create OnChainDataProvider; using static data", exc_info=True)
        return StaticDataProvider()


def create_model(provider: RateModelDataProvider, market: str) -> JumpRateModel:
    """Build a local model mirroring *market*'s configured rate parameters."""
    config = provider.get_model_config(market)
    logger.info("Loaded %s rate model owned by %s", market, config.owner)
    return JumpRateModel.from_period_parameters(
        config.params,
        owner=config.owner,
        periods_per_year=config.periods_per_year,
    )
