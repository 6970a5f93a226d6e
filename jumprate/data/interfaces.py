"""Abstract data provider interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from jumprate.protocol.interest_rate import RateParameters


@dataclass(frozen=True)
class MarketSnapshot:
    """Balances of a lending market at one point in time.

    Amounts are integers in the underlying token's base units; the reserve
    factor is a fraction scaled by 1e18.
    """

    cash: int
    borrows: int
    reserves: int
    reserve_factor: int = 0


@dataclass(frozen=True)
class RateModelConfig:
    """Configuration of a deployed (or preset) jump rate model."""

    params: RateParameters
    periods_per_year: int
    owner: str


class RateModelDataProvider(ABC):
    """Abstract interface for jump rate market data."""

    @abstractmethod
    def get_model_config(self, market: str) -> RateModelConfig:
        """Get the per-period rate parameters and owner of a market's model."""

    @abstractmethod
    def get_market_snapshot(self, market: str) -> MarketSnapshot:
        """Get current cash, borrows, reserves and reserve factor."""

    @abstractmethod
    def list_markets(self) -> list[str]:
        """Market symbols this provider can serve."""
