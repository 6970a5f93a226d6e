"""Exceptions raised by the jump rate model."""

from __future__ import annotations


class RateModelError(Exception):
    """Base class for every rate model failure."""


class Unauthorized(RateModelError, PermissionError):
    """Caller does not hold the role the operation requires."""

    def __init__(self, action: str, caller: str, required: str | None) -> None:
        self.action = action
        self.caller = caller
        self.required = required
        super().__init__(f"{action}: caller {caller!r} is not {required!r}")


class ArithmeticFault(RateModelError, ArithmeticError):
    """Checked fixed-point operation underflowed, overflowed or divided by zero."""


class InvalidConfiguration(RateModelError, ValueError):
    """Governance input outside the model's accepted domain."""
