"""Static data provider with representative jump rate markets."""

from jumprate.data.constants import BLOCKS_PER_YEAR, DAI, USDC, WBTC
from jumprate.data.interfaces import MarketSnapshot, RateModelConfig, RateModelDataProvider
from jumprate.protocol.fixed_point import to_scaled
from jumprate.protocol.interest_rate import convert_annual_parameters

# Compound governance timelock
GOVERNANCE_OWNER = "0x6d903f6003cca6255D85CcA4D3B5E5146dC33925"

# --- Annualized presets: (base, multiplier at kink, jump multiplier, kink) ---

_ANNUAL_PRESETS: dict[str, tuple[float, float, float, float]] = {
    USDC: (0.0, 0.04, 1.09, 0.80),
    DAI: (0.0, 0.04, 1.09, 0.80),
    WBTC: (0.02, 0.225, 1.00, 0.65),
}

_MODEL_CONFIGS: dict[str, RateModelConfig] = {
    market: RateModelConfig(
        params=convert_annual_parameters(
            to_scaled(base),
            to_scaled(multiplier),
            to_scaled(jump),
            to_scaled(kink),
            BLOCKS_PER_YEAR,
        ),
        periods_per_year=BLOCKS_PER_YEAR,
        owner=GOVERNANCE_OWNER,
    )
    for market, (base, multiplier, jump, kink) in _ANNUAL_PRESETS.items()
}

# Representative snapshots, in underlying base units
_MARKET_SNAPSHOTS: dict[str, MarketSnapshot] = {
    USDC: MarketSnapshot(
        cash=120_000_000 * 10**6,
        borrows=380_000_000 * 10**6,
        reserves=9_000_000 * 10**6,
        reserve_factor=to_scaled(0.075),
    ),
    DAI: MarketSnapshot(
        cash=150_000_000 * 10**18,
        borrows=290_000_000 * 10**18,
        reserves=12_000_000 * 10**18,
        reserve_factor=to_scaled(0.15),
    ),
    WBTC: MarketSnapshot(
        cash=4_200 * 10**8,
        borrows=310 * 10**8,
        reserves=25 * 10**8,
        reserve_factor=to_scaled(0.20),
    ),
}


class StaticDataProvider(RateModelDataProvider):
    """Data provider using hardcoded representative parameters."""

    def get_model_config(self, market: str) -> RateModelConfig:
        config = _MODEL_CONFIGS.get(market)
        if config is None:
            raise ValueError(f"Unknown market: {market}")
        return config

    def get_market_snapshot(self, market: str) -> MarketSnapshot:
        snapshot = _MARKET_SNAPSHOTS.get(market)
        if snapshot is None:
            raise ValueError(f"Unknown market: {market}")
        return snapshot

    def list_markets(self) -> list[str]:
        return list(_MODEL_CONFIGS)
