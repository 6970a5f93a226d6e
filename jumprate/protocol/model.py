"""Owned, governance-mutable jump rate model."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Iterable

import numpy as np
import pandas as pd

from jumprate.data.constants import BLOCKS_PER_YEAR, SCALE
from jumprate.data.interfaces import MarketSnapshot
from jumprate.protocol import fixed_point as fp
from jumprate.protocol import ownership as transfer
from jumprate.protocol.events import Listener, NewInterestParams, RateModelEvent
from jumprate.protocol.interest_rate import (
    MarketRates,
    RateParameters,
    borrow_rate_at,
    convert_annual_parameters,
    market_rates,
    supply_rate_at,
    utilization_rate,
    validate_period_parameters,
)
from jumprate.protocol.ownership import OwnershipState

logger = logging.getLogger(__name__)


class JumpRateModel:
    """Jump rate model with two-phase, owner-gated parameter updates.

    A single re-entrant lock guards the rate parameters and the ownership
    state as one unit.  Writers swap in a new frozen value under the lock;
    readers take one snapshot under the lock and compute outside it, so a rate
    is never derived from a mix of old and new parameters.

    Parameters
    ----------
    base_rate_per_year, multiplier_per_year, jump_multiplier_per_year : int
        Annualized rates scaled by 1e18.  ``multiplier_per_year`` is the rate
        reached at the kink.
    kink : int
        Utilization (scaled by 1e18) at which the jump multiplier takes over.
    owner : str
        Address allowed to update parameters and nominate a successor.
    periods_per_year : int
        Rate ticks per year in the execution environment.
    listeners : Iterable[Listener]
        Callbacks subscribed before the initial parameters are committed.
    """

    def __init__(
        self,
        base_rate_per_year: int,
        multiplier_per_year: int,
        jump_multiplier_per_year: int,
        kink: int,
        owner: str,
        periods_per_year: int = BLOCKS_PER_YEAR,
        listeners: Iterable[Listener] = (),
    ) -> None:
        self._init_state(owner, periods_per_year, listeners)
        params = convert_annual_parameters(
            base_rate_per_year,
            multiplier_per_year,
            jump_multiplier_per_year,
            kink,
            periods_per_year,
        )
        with self._lock:
            self._commit_parameters(params)

    @classmethod
    def from_period_parameters(
        cls,
        params: RateParameters,
        owner: str,
        periods_per_year: int = BLOCKS_PER_YEAR,
        listeners: Iterable[Listener] = (),
    ) -> "JumpRateModel":
        """Mirror a model whose per-period values are already known.

        Skips the annual conversion, so values read from a deployed contract
        are reproduced exactly instead of being rounded twice.
        """
        validate_period_parameters(params, periods_per_year)

        model = cls.__new__(cls)
        model._init_state(owner, periods_per_year, listeners)
        with model._lock:
            model._commit_parameters(params)
        return model

    def _init_state(
        self,
        owner: str,
        periods_per_year: int,
        listeners: Iterable[Listener],
    ) -> None:
        self._lock = threading.RLock()
        self._listeners: list[Listener] = list(listeners)
        self._periods_per_year = periods_per_year
        self._ownership = OwnershipState(owner=owner)

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener* for future events; returns an unsubscribe callable."""
        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    def _emit(self, events: list[RateModelEvent]) -> None:
        for event in events:
            for listener in list(self._listeners):
                try:
                    listener(event)
                except Exception:
                    logger.exception("Listener %r failed on %s", listener, type(event).__name__)

    def _commit_parameters(self, params: RateParameters) -> None:
        self._params = params
        logger.info(
            "Interest params committed: base=%d multiplier=%d jump=%d kink=%d",
            params.base_rate_per_period,
            params.multiplier_per_period,
            params.jump_multiplier_per_period,
            params.kink,
        )
        self._emit(
            [
                NewInterestParams(
                    base_rate_per_period=params.base_rate_per_period,
                    multiplier_per_period=params.multiplier_per_period,
                    jump_multiplier_per_period=params.jump_multiplier_per_period,
                    kink=params.kink,
                )
            ]
        )

    def _transition(
        self,
        transition: Callable[..., tuple[OwnershipState, list[RateModelEvent]]],
        *args: str,
    ) -> None:
        with self._lock:
            try:
                new_state, events = transition(self._ownership, *args)
            except Exception:
                logger.warning("%s rejected for caller=%s", transition.__name__, args[0])
                raise
            self._ownership = new_state
            if events:
                logger.info(
                    "%s: owner=%s pending_owner=%s",
                    transition.__name__,
                    new_state.owner,
                    new_state.pending_owner,
                )
            self._emit(events)

    # ------------------------------------------------------------------
    # Write surface
    # ------------------------------------------------------------------

    def update(
        self,
        caller: str,
        base_rate_per_year: int,
        multiplier_per_year: int,
        jump_multiplier_per_year: int,
        kink: int,
    ) -> RateParameters:
        """Replace the rate parameters from annualized inputs (owner only).

        Raises:
            Unauthorized: *caller* is not the owner.
            InvalidConfiguration: inputs outside the accepted domain.
        """
        with self._lock:
            try:
                transfer.require_owner(self._ownership, caller, "update")
                params = convert_annual_parameters(
                    base_rate_per_year,
                    multiplier_per_year,
                    jump_multiplier_per_year,
                    kink,
                    self._periods_per_year,
                )
            except Exception:
                logger.warning("update rejected for caller=%s", caller)
                raise
            self._commit_parameters(params)
            return params

    def set_pending_owner(self, caller: str, nominee: str) -> None:
        """Nominate *nominee* as the next owner (owner only)."""
        self._transition(transfer.set_pending_owner, caller, nominee)

    def cancel_pending_owner(self, caller: str) -> None:
        """Withdraw a pending nomination (owner only)."""
        self._transition(transfer.cancel_pending_owner, caller)

    def accept_ownership(self, caller: str) -> None:
        """Take over ownership (pending owner only)."""
        self._transition(transfer.accept_ownership, caller)

    # ------------------------------------------------------------------
    # Read surface
    # ------------------------------------------------------------------

    @property
    def parameters(self) -> RateParameters:
        with self._lock:
            return self._params

    @property
    def ownership(self) -> OwnershipState:
        with self._lock:
            return self._ownership

    @property
    def owner(self) -> str:
        return self.ownership.owner

    @property
    def pending_owner(self) -> str | None:
        return self.ownership.pending_owner

    @property
    def base_rate_per_period(self) -> int:
        return self.parameters.base_rate_per_period

    @property
    def multiplier_per_period(self) -> int:
        return self.parameters.multiplier_per_period

    @property
    def jump_multiplier_per_period(self) -> int:
        return self.parameters.jump_multiplier_per_period

    @property
    def kink(self) -> int:
        return self.parameters.kink

    @property
    def periods_per_year(self) -> int:
        return self._periods_per_year

    def utilization_rate(self, cash: int, borrows: int, reserves: int) -> int:
        return utilization_rate(cash, borrows, reserves)

    def borrow_rate(self, cash: int, borrows: int, reserves: int) -> int:
        """Per-period borrow rate, scaled by 1e18."""
        return self.rates(MarketSnapshot(cash, borrows, reserves)).borrow_rate

    def supply_rate(self, cash: int, borrows: int, reserves: int, reserve_factor: int) -> int:
        """Per-period supply rate, scaled by 1e18."""
        return self.rates(MarketSnapshot(cash, borrows, reserves, reserve_factor)).supply_rate

    def rates(self, snapshot: MarketSnapshot) -> MarketRates:
        """Utilization, borrow and supply rates for *snapshot*."""
        return market_rates(
            snapshot.cash,
            snapshot.borrows,
            snapshot.reserves,
            snapshot.reserve_factor,
            self.parameters,
        )

    def annualize(self, rate_per_period: int) -> int:
        """Simple (non-compounded) annual rate from a per-period rate."""
        return fp.mul(rate_per_period, self._periods_per_year)

    def rate_curve(self, n_points: int = 201, reserve_factor: int = 0) -> pd.DataFrame:
        """Generate the annualized rate curve over utilization in [0, 1].

        Returns:
            DataFrame with columns: utilization, borrow_rate, supply_rate
            (decimal fractions, e.g. 0.05 = 5% per year).
        """
        if n_points < 2:
            raise ValueError(f"n_points must be at least 2, got {n_points}")
        params = self.parameters
        utilizations = np.linspace(0, 1, n_points)
        borrow_rates = []
        supply_rates = []
        for i in range(n_points):
            scaled_u = SCALE * i // (n_points - 1)
            borrow = borrow_rate_at(scaled_u, params)
            supply = supply_rate_at(scaled_u, borrow, reserve_factor)
            borrow_rates.append(fp.from_scaled(self.annualize(borrow)))
            supply_rates.append(fp.from_scaled(self.annualize(supply)))

        return pd.DataFrame(
            {
                "utilization": utilizations,
                "borrow_rate": borrow_rates,
                "supply_rate": supply_rates,
            }
        )
