"""Notifications emitted by the rate model after a committed change."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Union


@dataclass(frozen=True)
class NewInterestParams:
    """Rate parameters were replaced."""

    base_rate_per_period: int
    multiplier_per_period: int
    jump_multiplier_per_period: int
    kink: int


@dataclass(frozen=True)
class NewPendingOwner:
    """The pending owner changed (``None`` means no transfer pending)."""

    old_pending_owner: str | None
    new_pending_owner: str | None


@dataclass(frozen=True)
class NewOwner:
    """Ownership moved to a new address."""

    old_owner: str
    new_owner: str


RateModelEvent = Union[NewInterestParams, NewPendingOwner, NewOwner]
Listener = Callable[[RateModelEvent], None]
