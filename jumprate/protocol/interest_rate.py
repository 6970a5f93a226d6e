"""Jump rate interest model (kinked curve) on 1e18 fixed-point integers.

Replicates Compound's JumpRateModelV2 arithmetic: utilization is
``borrows / (cash + borrows - reserves)``, the borrow rate grows linearly with
``multiplier_per_period`` up to the kink and with ``jump_multiplier_per_period``
beyond it, and suppliers receive the borrow rate net of the reserve factor,
weighted by utilization.

All functions here are pure.  The stateful, owner-gated engine lives in
:mod:`jumprate.protocol.model`.
"""

from __future__ import annotations

from dataclasses import dataclass

from jumprate.data.constants import SCALE
from jumprate.protocol import fixed_point as fp
from jumprate.protocol.errors import InvalidConfiguration


@dataclass(frozen=True)
class RateParameters:
    """Per-period parameters of the kinked curve, all scaled by 1e18."""

    base_rate_per_period: int
    multiplier_per_period: int
    jump_multiplier_per_period: int
    kink: int


@dataclass(frozen=True)
class MarketRates:
    """Rates for one market snapshot, computed from a single parameter set."""

    utilization: int
    borrow_rate: int
    supply_rate: int


def validate_annual_inputs(
    base_rate_per_year: int,
    multiplier_per_year: int,
    jump_multiplier_per_year: int,
    kink: int,
    periods_per_year: int,
) -> None:
    """Reject governance inputs the conversion cannot handle.

    Raises:
        InvalidConfiguration: a value is not a non-negative integer, the kink
            lies outside ``(0, SCALE]`` or ``periods_per_year`` is not positive.
    """
    named = {
        "base_rate_per_year": base_rate_per_year,
        "multiplier_per_year": multiplier_per_year,
        "jump_multiplier_per_year": jump_multiplier_per_year,
        "kink": kink,
        "periods_per_year": periods_per_year,
    }
    for name, value in named.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidConfiguration(f"{name} must be an integer, got {value!r}")
        if value < 0:
            raise InvalidConfiguration(f"{name} must be non-negative, got {value}")
    if periods_per_year == 0:
        raise InvalidConfiguration("periods_per_year must be positive")
    # The multiplier conversion divides by kink
    if kink == 0 or kink > SCALE:
        raise InvalidConfiguration(f"kink must lie in (0, {SCALE}], got {kink}")


def convert_annual_parameters(
    base_rate_per_year: int,
    multiplier_per_year: int,
    jump_multiplier_per_year: int,
    kink: int,
    periods_per_year: int,
) -> RateParameters:
    """Convert annualized governance inputs into per-period parameters.

    ``multiplier_per_year`` is the rate reached *at the kink*, so the stored
    slope is ``multiplier_per_year / (periods_per_year * kink)``.
    """
    validate_annual_inputs(
        base_rate_per_year,
        multiplier_per_year,
        jump_multiplier_per_year,
        kink,
        periods_per_year,
    )
    return RateParameters(
        base_rate_per_period=fp.div(base_rate_per_year, periods_per_year),
        multiplier_per_period=fp.div(
            fp.mul(multiplier_per_year, SCALE), fp.mul(periods_per_year, kink)
        ),
        jump_multiplier_per_period=fp.div(jump_multiplier_per_year, periods_per_year),
        kink=kink,
    )


def utilization_rate(cash: int, borrows: int, reserves: int) -> int:
    """Fraction of the pool lent out, scaled by 1e18.

    An idle market (``borrows == 0``) has zero utilization.  The result is not
    clamped and exceeds ``SCALE`` when reserves outweigh cash.

    Raises:
        ArithmeticFault: ``reserves > cash + borrows`` or the pool is empty.
    """
    fp.check_uint(cash, "cash")
    fp.check_uint(reserves, "reserves")
    if fp.check_uint(borrows, "borrows") == 0:
        return 0
    return fp.div_scaled(borrows, fp.sub(fp.add(cash, borrows), reserves))


def borrow_rate_at(utilization: int, params: RateParameters) -> int:
    """Per-period borrow rate for a given utilization."""
    if utilization <= params.kink:
        return fp.add(
            fp.mul_scaled(utilization, params.multiplier_per_period),
            params.base_rate_per_period,
        )
    normal_rate = fp.add(
        fp.mul_scaled(params.kink, params.multiplier_per_period),
        params.base_rate_per_period,
    )
    excess_utilization = fp.sub(utilization, params.kink)
    return fp.add(
        fp.mul_scaled(excess_utilization, params.jump_multiplier_per_period),
        normal_rate,
    )


def supply_rate_at(utilization: int, borrow_rate: int, reserve_factor: int) -> int:
    """Per-period supply rate from a borrow rate and its utilization.

    Raises:
        ArithmeticFault: ``reserve_factor > SCALE``.
    """
    one_minus_reserve_factor = fp.sub(SCALE, reserve_factor)
    rate_to_pool = fp.mul_scaled(borrow_rate, one_minus_reserve_factor)
    return fp.mul_scaled(utilization, rate_to_pool)


def borrow_rate(cash: int, borrows: int, reserves: int, params: RateParameters) -> int:
    """Per-period borrow rate for a market snapshot, scaled by 1e18."""
    return borrow_rate_at(utilization_rate(cash, borrows, reserves), params)


def supply_rate(
    cash: int,
    borrows: int,
    reserves: int,
    reserve_factor: int,
    params: RateParameters,
) -> int:
    """Per-period supply rate for a market snapshot, scaled by 1e18."""
    return market_rates(cash, borrows, reserves, reserve_factor, params).supply_rate


def market_rates(
    cash: int,
    borrows: int,
    reserves: int,
    reserve_factor: int,
    params: RateParameters,
) -> MarketRates:
    """Utilization, borrow and supply rates from one parameter set."""
    # Fail on a bad reserve factor before doing any other work
    fp.sub(SCALE, reserve_factor)
    utilization = utilization_rate(cash, borrows, reserves)
    borrow = borrow_rate_at(utilization, params)
    return MarketRates(
        utilization=utilization,
        borrow_rate=borrow,
        supply_rate=supply_rate_at(utilization, borrow, reserve_factor),
    )


def validate_period_parameters(params: RateParameters, periods_per_year: int) -> None:
    """Check per-period values read back from an existing model.

    Raises:
        InvalidConfiguration: a value is not a non-negative integer, the kink
            lies outside ``(0, SCALE]`` or ``periods_per_year`` is not positive.
    """
    for name in ("base_rate_per_period", "multiplier_per_period", "jump_multiplier_per_period", "kink"):
        value = getattr(params, name)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise InvalidConfiguration(f"{name} must be a non-negative integer, got {value!r}")
    if isinstance(periods_per_year, bool) or not isinstance(periods_per_year, int) or periods_per_year <= 0:
        raise InvalidConfiguration(f"periods_per_year must be a positive integer, got {periods_per_year!r}")
    if params.kink == 0 or params.kink > SCALE:
        raise InvalidConfiguration(f"kink must lie in (0, {SCALE}], got {params.kink}")
